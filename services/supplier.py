"""
Supplier Price Service

Matches ingredients against a supplier-product catalog, picks the
cheapest candidate per canonical unit and attaches it to recipe lines
as their cost source.
"""

import logging
import math
from datetime import datetime, timezone

from .matching import names_overlap, normalize_ingredient_name

logger = logging.getLogger(__name__)


def _sort_value(value):
    """Numbers sort as-is; None, NaN and infinities sort last."""
    if value is None:
        return math.inf
    try:
        value = float(value)
    except (TypeError, ValueError):
        return math.inf
    return value if math.isfinite(value) else math.inf


def find_candidates(ingredient, catalog):
    """
    Supplier products that can stand in for an ingredient.

    A global ingredient id is authoritative: when the ingredient has one,
    only products sharing it qualify. Otherwise products qualify when
    their name contains, or is contained by, the ingredient name.
    """
    if ingredient is None:
        return []
    if ingredient.global_ingredient_id:
        return [p for p in catalog if p.global_ingredient_id == ingredient.global_ingredient_id]
    return [p for p in catalog if names_overlap(p.name, ingredient.name)]


def _matches_hint(product, hint):
    for value in (product.supplier_name, product.name, product.brand):
        if value and names_overlap(value, hint):
            return True
    return False


def pick_best(candidates, supplier_name_hint=None):
    """
    Choose the best-priced candidate.

    A supplier hint narrows the set to products whose supplier name, name
    or brand overlaps it; if nothing survives the filter, the unfiltered
    set is used. Candidates are ranked by unit cost, then nominal price.
    Returns None for an empty candidate set.
    """
    if not candidates:
        return None

    pool = list(candidates)
    hint = normalize_ingredient_name(supplier_name_hint)
    if hint:
        filtered = [p for p in pool if _matches_hint(p, hint)]
        if filtered:
            pool = filtered
        else:
            logger.debug("Supplier hint %r matched no candidates, ignoring it", supplier_name_hint)

    pool.sort(key=lambda p: (_sort_value(p.unit_cost), _sort_value(p.price)))
    return pool[0]


def auto_fill_cost(line, ingredient, catalog, now=None):
    """
    Attach the best supplier product to a recipe line, in place.

    On a match sets supplier_product_id, unit_cost_cached, currency and
    last_priced_at. On no match clears all four so no stale price
    survives. Returns the selected product or None.
    """
    selected = pick_best(find_candidates(ingredient, catalog), line.supplier_name)
    if selected is None:
        line.supplier_product_id = None
        line.unit_cost_cached = None
        line.currency = None
        line.last_priced_at = None
        return None

    line.supplier_product_id = selected.id
    line.unit_cost_cached = selected.unit_cost
    line.currency = selected.currency
    line.last_priced_at = now or datetime.now(timezone.utc)
    return selected


def price_lines(lines, inventory, catalog, now=None):
    """Run auto_fill_cost over every line whose ingredient is in inventory."""
    by_id = {ing.id: ing for ing in inventory}
    now = now or datetime.now(timezone.utc)
    priced = 0
    for line in lines:
        ingredient = by_id.get(line.ingredient_id)
        if ingredient is None:
            continue
        if auto_fill_cost(line, ingredient, catalog, now=now) is not None:
            priced += 1
    logger.debug("Priced %d of %d recipe line(s) from supplier catalog", priced, len(lines))
    return lines

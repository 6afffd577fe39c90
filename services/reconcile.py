"""
Ingredient Reconciliation Service

Turns a list of loosely specified parsed ingredients into concrete
recipe lines against an inventory: match, optionally create, convert
units, normalize by yield, deduplicate and price.
"""

import logging

from constants import MAX_COST_PER_UNIT
from .conversion import DEFAULT_RULES, convert_unit, standardize_canonical_unit
from .entities import RecipeLine, ResolveOptions, ResolveResult
from .exceptions import StoreError
from .matching import find_ingredient_match, normalize_ingredient_name
from .supplier import price_lines

logger = logging.getLogger(__name__)


class CreationLedger:
    """
    Ingredients created during one reconciliation batch, keyed by
    normalized name. Guarantees at most one creation call per name per
    batch; spelling variants still create separate rows.
    """

    def __init__(self):
        self._created = {}

    def __contains__(self, name):
        return normalize_ingredient_name(name) in self._created

    def __len__(self):
        return len(self._created)

    def get(self, name):
        return self._created.get(normalize_ingredient_name(name))

    def record(self, ingredient):
        self._created[normalize_ingredient_name(ingredient.name)] = ingredient

    @property
    def ingredients(self):
        return list(self._created.values())


def _create_ingredient(entry, store, options, ledger):
    """Create an inventory ingredient for an unmatched entry, or None on failure."""
    existing = ledger.get(entry.name)
    if existing is not None:
        return existing

    cost = entry.cost_per_unit if entry.cost_per_unit and entry.cost_per_unit > 0 else 0.0
    fields = {
        'name': entry.name,
        'unit': entry.unit,
        'cost_per_unit': min(cost, MAX_COST_PER_UNIT),
        'restaurant_id': options.restaurant_id,
    }
    try:
        ingredient = store.create(fields)
    except StoreError as e:
        logger.warning("Could not create ingredient %r: %s", entry.name, e)
        return None

    ledger.record(ingredient)
    logger.info("Created ingredient %r (%s) during reconciliation", ingredient.name, ingredient.unit)
    return ingredient


def _backfill_cost(ingredient, entry, store):
    """
    Fill a zero cost_per_unit from an extraction-reported cost.

    Only applies when the reported cost is in the ingredient's own unit.
    Failures are logged and never affect the reconciliation result.
    """
    if store is None or (ingredient.cost_per_unit or 0) > 0:
        return ingredient
    if not entry.cost_per_unit or entry.cost_per_unit <= 0:
        return ingredient
    if standardize_canonical_unit(entry.unit) != standardize_canonical_unit(ingredient.unit):
        logger.debug("Skipping cost backfill for %r: reported in %s, stocked in %s",
                     ingredient.name, entry.unit, ingredient.unit)
        return ingredient

    try:
        updated = store.update(ingredient.id, {'cost_per_unit': entry.cost_per_unit})
    except StoreError as e:
        logger.warning("Cost backfill failed for ingredient %s: %s", ingredient.id, e)
        return ingredient
    return updated or ingredient


def apply_yield(line, recipe_yield):
    """Scale a whole-recipe line down to one serving when yield > 1."""
    if not recipe_yield or recipe_yield <= 1:
        return line
    line.quantity = line.quantity / recipe_yield
    if line.piece_count is not None:
        line.piece_count = line.piece_count / recipe_yield
    return line


def dedupe_lines(lines):
    """
    Merge lines sharing an ingredient_id, keeping first-seen order.

    Quantities add up. Piece counts add up when both sides have one;
    otherwise whichever side has a piece count keeps it.
    """
    merged = {}
    for line in lines:
        current = merged.get(line.ingredient_id)
        if current is None:
            merged[line.ingredient_id] = line.copy()
            continue
        current.quantity += line.quantity
        if current.piece_count is not None and line.piece_count is not None:
            current.piece_count += line.piece_count
        elif current.piece_count is None:
            current.piece_count = line.piece_count
    return list(merged.values())


def resolve_recipe(parsed, inventory, catalog=None, options=None, store=None,
                   ledger=None, rules=DEFAULT_RULES):
    """
    Resolve parsed ingredients into recipe lines.

    Args:
        parsed: ParsedIngredient entries (untrusted)
        inventory: Existing ingredients for the restaurant
        catalog: Supplier products used to price the resolved lines
        options: ResolveOptions (auto_create, recipe_yield, auto_price)
        store: Ingredient store used for creation and cost backfill
        ledger: CreationLedger shared across calls for the same batch
        rules: ConversionRules for unit conversion

    Returns:
        ResolveResult(recipe_lines, unmatched_names, created_ingredients)
    """
    options = options or ResolveOptions()
    ledger = ledger if ledger is not None else CreationLedger()
    created_before = len(ledger)
    working = list(inventory) + [ing for ing in ledger.ingredients if ing not in inventory]

    if options.auto_create and store is None:
        raise ValueError('auto_create requires an ingredient store')

    lines = []
    unmatched = []
    created = []

    for entry in parsed:
        if not entry.name or not entry.name.strip():
            continue

        ingredient, match_type = find_ingredient_match(entry.name, working)

        if ingredient is None:
            if not options.auto_create:
                logger.debug("No inventory match for %r", entry.name)
                unmatched.append(entry.name)
                continue
            ingredient = _create_ingredient(entry, store, options, ledger)
            if ingredient is None:
                unmatched.append(entry.name)
                continue
            working.append(ingredient)
            created.append(ingredient)
        else:
            logger.debug("Matched %r to %r (%s)", entry.name, ingredient.name, match_type)
            updated = _backfill_cost(ingredient, entry, store)
            if updated is not ingredient:
                working = [updated if ing is ingredient else ing for ing in working]
                ingredient = updated

        converted = convert_unit(entry.quantity, entry.unit, ingredient.unit, ingredient.name, rules)
        piece_count = converted.piece_count if converted.piece_count is not None else entry.piece_count
        line = RecipeLine(
            ingredient_id=ingredient.id,
            quantity=converted.quantity,
            piece_count=piece_count,
        )
        lines.append(apply_yield(line, options.recipe_yield))

    lines = dedupe_lines(lines)

    if catalog is not None and options.auto_price:
        price_lines(lines, working, catalog)

    logger.info("Resolved %d line(s), %d unmatched, %d created",
                len(lines), len(unmatched), len(ledger) - created_before)
    return ResolveResult(recipe_lines=lines, unmatched_names=unmatched, created_ingredients=created)

"""
Cost Calculation Service

Functions for calculating recipe line costs, recipe totals and margins.

Each line is costed from the first source available:
1. unit_cost_cached on the line (a supplier price captured earlier)
2. the live unit cost of the line's supplier product
3. the ingredient's own cost_per_unit

quantity is already in the ingredient's canonical unit, so every source
is a plain multiplication.
"""

import re

from constants import (
    MARGIN_BANDS, MARGIN_FLOOR_BAND, ZERO_COST_ALLOWED,
    COSTING_COMPLETE, COSTING_INCOMPLETE,
)
from .entities import CostSummary, LineCost

SOURCE_CACHED = 'cached'
SOURCE_SUPPLIER = 'supplier'
SOURCE_INVENTORY = 'inventory'
SOURCE_MISSING = 'missing'


def _index(items):
    return {item.id: item for item in items or []}


def line_cost(line, inventory, catalog=None):
    """
    Cost of one recipe line as a LineCost.

    An ingredient missing from inventory costs 0 with source 'missing';
    callers treat that as incomplete costing, not as a failure.
    """
    ingredients = inventory if isinstance(inventory, dict) else _index(inventory)
    quantity = line.quantity or 0.0

    ingredient = ingredients.get(line.ingredient_id)
    if ingredient is None:
        return LineCost(line.ingredient_id, quantity, 0.0, SOURCE_MISSING)

    if line.unit_cost_cached is not None and line.unit_cost_cached > 0:
        return LineCost(line.ingredient_id, quantity, line.unit_cost_cached * quantity, SOURCE_CACHED)

    if line.supplier_product_id:
        products = catalog if isinstance(catalog, dict) else _index(catalog)
        product = products.get(line.supplier_product_id)
        if product is not None and product.has_finite_unit_cost:
            return LineCost(line.ingredient_id, quantity, product.unit_cost * quantity, SOURCE_SUPPLIER)

    cost_per_unit = ingredient.cost_per_unit or 0.0
    return LineCost(line.ingredient_id, quantity, cost_per_unit * quantity, SOURCE_INVENTORY)


def valid_lines(lines):
    """Lines with an ingredient and a positive quantity; placeholders are dropped."""
    return [line for line in lines if not line.is_placeholder]


def recipe_cost(lines, inventory, catalog=None):
    """Total cost over valid lines."""
    ingredients = _index(inventory)
    products = _index(catalog)
    return sum(line_cost(line, ingredients, products).cost for line in valid_lines(lines))


def margin(price, cost):
    """Profit margin as a percentage of price; 0 when there is no price."""
    if not price or price <= 0:
        return 0.0
    return (price - cost) / price * 100


def margin_band(margin_percent, bands=None):
    """Classify a margin: excellent, good, warning or critical by default."""
    for lower, label in bands or MARGIN_BANDS:
        if margin_percent >= lower:
            return label
    return MARGIN_FLOOR_BAND


def is_zero_cost_allowed(ingredient_name, allowed=None):
    """True for ingredients that may cost nothing (e.g. water, not watermelon)."""
    name = (ingredient_name or '').strip()
    if not name:
        return False
    for word in allowed or ZERO_COST_ALLOWED:
        if re.search(rf'\b{re.escape(word)}\b', name, re.IGNORECASE):
            return True
    return False


def costing_status(lines, inventory, zero_cost_allowed=None):
    """
    COMPLETE when the recipe has valid lines and every referenced
    ingredient exists with a positive cost (or is allowed to be free).
    """
    usable = valid_lines(lines)
    if not usable:
        return COSTING_INCOMPLETE

    ingredients = _index(inventory)
    for line in usable:
        ingredient = ingredients.get(line.ingredient_id)
        if ingredient is None:
            return COSTING_INCOMPLETE
        if (ingredient.cost_per_unit or 0) <= 0 and not is_zero_cost_allowed(ingredient.name, zero_cost_allowed):
            return COSTING_INCOMPLETE
    return COSTING_COMPLETE


def compute_costs(lines, inventory, catalog=None, price=0.0, bands=None, zero_cost_allowed=None):
    """Per-line costs, total, profit and margin for a recipe at a selling price."""
    ingredients = _index(inventory)
    products = _index(catalog)

    per_line = [line_cost(line, ingredients, products) for line in valid_lines(lines)]
    total = sum(lc.cost for lc in per_line)
    price = price or 0.0
    margin_percent = margin(price, total)

    return CostSummary(
        per_line_cost=per_line,
        total_cost=total,
        profit=price - total,
        margin_percent=margin_percent,
        band=margin_band(margin_percent, bands),
        costing_status=costing_status(lines, inventory, zero_cost_allowed),
    )

"""
Unit Conversion Service

Converts recipe units (tsp, tbsp, cup, ml) into an ingredient's canonical
stock unit using fixed factors picked by ingredient-name keywords, and
infers a display label back from a stored (piece_count, quantity) pair.
"""

import logging
from dataclasses import dataclass

from constants import (
    RECIPE_UNIT_MAPPINGS, CANONICAL_UNIT_MAPPINGS, PIECE_UNITS, RECIPE_UNIT_LABELS,
    TSP_TO_KG, TSP_TO_KG_SALT, TBSP_TO_KG, ML_TO_L, TSP_TO_L, TBSP_TO_L, CUP_TO_KG_DRY,
    CONVERSION_PRECISION, SALT_KEYWORDS, DRY_GOODS_KEYWORDS, SPICE_KEYWORDS,
    CUP_KEYWORDS, PIECE_KEYWORDS, LIQUID_KEYWORDS, DRY_TO_GRAMS, LIQUID_TO_ML,
    VALID_CANONICAL_UNITS,
)
from .entities import ConversionResult, NormalizationPlanItem, UnitNormalization
from .parsing import float_to_fraction

logger = logging.getLogger(__name__)

RECIPE_LABELS = {'tsp', 'tbsp', 'cup', 'cups'}
KEYWORD_GROUPS = ('salt', 'dry_goods', 'spices', 'cup_items', 'piece_items', 'liquids')


@dataclass(frozen=True)
class ConversionRules:
    """Keyword lists that steer conversion and label inference."""
    salt: tuple = SALT_KEYWORDS
    dry_goods: tuple = DRY_GOODS_KEYWORDS
    spices: tuple = SPICE_KEYWORDS
    cup_items: tuple = CUP_KEYWORDS
    piece_items: tuple = PIECE_KEYWORDS
    liquids: tuple = LIQUID_KEYWORDS

    @classmethod
    def from_mapping(cls, overrides):
        """Build rules from a config mapping; unknown keys are ignored."""
        if not overrides:
            return cls()
        fields = {}
        for key in KEYWORD_GROUPS:
            if overrides.get(key) is not None:
                fields[key] = tuple(str(k).lower() for k in overrides[key])
        unknown = set(overrides) - set(KEYWORD_GROUPS)
        if unknown:
            logger.warning("Ignoring unknown conversion keyword groups: %s", sorted(unknown))
        return cls(**fields)

    @staticmethod
    def name_matches(name, keywords):
        name_lower = (name or '').lower()
        return any(keyword in name_lower for keyword in keywords)


DEFAULT_RULES = ConversionRules()


def standardize_recipe_unit(unit):
    """Map a recipe unit spelling to tsp/tbsp/cup/ml, or lowercase it if unknown."""
    unit_lower = (unit or '').strip().lower()
    return RECIPE_UNIT_MAPPINGS.get(unit_lower, unit_lower)


def standardize_canonical_unit(unit):
    """Map a stock unit spelling to kg/g/L/ml/piece, or return it stripped."""
    unit_clean = (unit or '').strip()
    return CANONICAL_UNIT_MAPPINGS.get(unit_clean.lower(), unit_clean)


def is_stock_unit(unit):
    """True for units inventory may be stocked in (mass, volume or a piece count)."""
    return (standardize_canonical_unit(unit) in VALID_CANONICAL_UNITS
            or (unit or '').strip().lower() in PIECE_UNITS)


def _converted(quantity, factor, recipe_unit):
    return ConversionResult(
        quantity=round(quantity * factor, CONVERSION_PRECISION),
        piece_count=quantity,
        recipe_unit=RECIPE_UNIT_LABELS[recipe_unit],
    )


def convert_unit(quantity, recipe_unit, canonical_unit, ingredient_name, rules=DEFAULT_RULES):
    """
    Convert a recipe quantity into the ingredient's canonical unit.

    Returns a ConversionResult. When a rule applies, piece_count keeps the
    original recipe-unit amount for display and recipe_unit echoes the
    recipe unit label. Unknown combinations pass the quantity through
    unchanged with piece_count None; this is never an error.
    """
    quantity = float(quantity or 0)
    passthrough = ConversionResult(quantity=quantity, piece_count=None, recipe_unit=None)

    if (recipe_unit or '').strip().lower() == (canonical_unit or '').strip().lower():
        return passthrough

    source = standardize_recipe_unit(recipe_unit)
    target = standardize_canonical_unit(canonical_unit)

    if target == 'kg':
        if source == 'tsp':
            factor = TSP_TO_KG_SALT if rules.name_matches(ingredient_name, rules.salt) else TSP_TO_KG
            return _converted(quantity, factor, 'tsp')
        if source == 'tbsp':
            return _converted(quantity, TBSP_TO_KG, 'tbsp')

    if target == 'L':
        if source == 'ml':
            return _converted(quantity, ML_TO_L, 'ml')
        if source == 'tsp':
            return _converted(quantity, TSP_TO_L, 'tsp')
        if source == 'tbsp':
            return _converted(quantity, TBSP_TO_L, 'tbsp')

    if target == 'kg' and source == 'cup' and rules.name_matches(ingredient_name, rules.dry_goods):
        return _converted(quantity, CUP_TO_KG_DRY, 'cup')

    logger.debug("No conversion rule for %s -> %s (%s), passing through",
                 recipe_unit, canonical_unit, ingredient_name)
    return passthrough


def compute_unit_normalization(unit, ingredient_name, rules=DEFAULT_RULES):
    """
    How to restate a stock unit that is not g, kg, ml, L or piece.

    Liquids (by name keyword) move to ml, everything else to g. Returns
    None when the unit is already a valid stock unit or is not recognised.
    """
    if is_stock_unit(unit):
        return None

    key = (unit or '').strip().lower()
    if rules.name_matches(ingredient_name, rules.liquids):
        per_unit, target = LIQUID_TO_ML.get(key), 'ml'
    else:
        per_unit, target = DRY_TO_GRAMS.get(key), 'g'
    if not per_unit:
        return None
    return UnitNormalization(target_unit=target, quantity_factor=per_unit, cost_factor=1 / per_unit)


def plan_unit_normalization(ingredients, rules=DEFAULT_RULES):
    """
    Plan items for every ingredient stocked in a non-standard unit.

    Items that cannot be converted automatically keep new_unit None so
    the caller can list them for manual repair.
    """
    plan = []
    for ingredient in ingredients:
        if is_stock_unit(ingredient.unit):
            continue
        cost = ingredient.cost_per_unit or 0.0
        change = compute_unit_normalization(ingredient.unit, ingredient.name, rules)
        if change is None:
            logger.debug("No automatic unit normalization for %r (%s)", ingredient.name, ingredient.unit)
            plan.append(NormalizationPlanItem(ingredient.id, ingredient.name, ingredient.unit,
                                              None, cost, cost))
            continue
        plan.append(NormalizationPlanItem(
            ingredient_id=ingredient.id,
            name=ingredient.name,
            old_unit=ingredient.unit,
            new_unit=change.target_unit,
            old_cost_per_unit=cost,
            new_cost_per_unit=round(cost * change.cost_factor, 2),
            quantity_factor=change.quantity_factor,
        ))
    return plan


def label_for(ingredient, piece_count, quantity, rules=DEFAULT_RULES):
    """
    Best-effort display label for a stored piece_count.

    Reconstructs tsp/tbsp/cup/ml from the ratio of piece_count to
    quantity using the same factors as convert_unit, within tolerance
    bands. Lossy by nature: it is not an exact inverse of conversion.
    """
    if ingredient is None:
        return 'item'

    name = ingredient.name or ''
    unit = standardize_canonical_unit(ingredient.unit)

    if piece_count is not None and quantity is not None:
        if (unit == 'kg' and rules.name_matches(name, rules.spices)
                and 0 < quantity < 0.1):
            ratio = piece_count / quantity
            if ratio > 100:
                return 'tsp'
            if ratio > 30:
                return 'tbsp'

        if (unit == 'kg' and rules.name_matches(name, rules.dry_goods)
                and 0 < piece_count <= 2):
            if abs(quantity - piece_count * CUP_TO_KG_DRY) < 0.05:
                return 'cup'

        if unit == 'L' and piece_count > 10:
            if abs(quantity - piece_count * ML_TO_L) < 0.001:
                return 'ml'

    if piece_count is not None and float(piece_count).is_integer() and 0 < piece_count <= 10:
        if rules.name_matches(name, rules.cup_items):
            return 'cup'
        if rules.name_matches(name, rules.piece_items) or (ingredient.unit or '').lower() in PIECE_UNITS:
            return 'piece'

    return 'item'


def format_count_label(label, count=None):
    """Pluralize a count label unless count is exactly one."""
    if not label:
        return ''
    if count == 1 or label.endswith('s'):
        return label
    return f"{label}s"


def describe_quantity(line, ingredient, rules=DEFAULT_RULES):
    """Human-readable quantity for a recipe line, e.g. '2 tbsp (0.0300 kg)'."""
    unit = ingredient.unit if ingredient else ''
    if line.piece_count is None:
        return f"{line.quantity:g} {unit}".strip()

    label = label_for(ingredient, line.piece_count, line.quantity, rules)
    count_label = format_count_label(label, line.piece_count)
    count = float_to_fraction(line.piece_count)
    if label in RECIPE_LABELS:
        return f"{count} {count_label} ({line.quantity:.4f} {unit})".rstrip()
    return f"{count} {count_label} ({line.quantity:g} {unit})".rstrip()

"""
Services Package

Business logic for recipe costing: unit conversion, supplier pricing,
cost calculation and ingredient reconciliation.
"""

from .entities import (
    Ingredient,
    SupplierProduct,
    RecipeLine,
    ParsedIngredient,
    ConversionResult,
    ResolveOptions,
    ResolveResult,
    LineCost,
    CostSummary,
    UnitNormalization,
    NormalizationPlanItem,
)

from .exceptions import (
    CostingError,
    ValidationError,
    DuplicateIngredientError,
    StoreError,
    CatalogError,
)

from .parsing import (
    float_to_fraction,
    normalize_fractions,
    parse_quantity,
    parse_ingredients,
    parse_extraction_payload,
)

from .conversion import (
    ConversionRules,
    DEFAULT_RULES,
    convert_unit,
    label_for,
    format_count_label,
    describe_quantity,
    compute_unit_normalization,
    plan_unit_normalization,
)

from .matching import (
    normalize_ingredient_name,
    find_ingredient_match,
)

from .supplier import (
    find_candidates,
    pick_best,
    auto_fill_cost,
    price_lines,
)

from .cost import (
    line_cost,
    recipe_cost,
    margin,
    margin_band,
    costing_status,
    compute_costs,
)

from .reconcile import (
    CreationLedger,
    apply_yield,
    dedupe_lines,
    resolve_recipe,
)

from .validation import (
    find_duplicate_ingredients,
    validate_recipe_lines,
)

__all__ = [
    # Entities
    'Ingredient',
    'SupplierProduct',
    'RecipeLine',
    'ParsedIngredient',
    'ConversionResult',
    'ResolveOptions',
    'ResolveResult',
    'LineCost',
    'CostSummary',
    'UnitNormalization',
    'NormalizationPlanItem',
    # Errors
    'CostingError',
    'ValidationError',
    'DuplicateIngredientError',
    'StoreError',
    'CatalogError',
    # Parsing
    'float_to_fraction',
    'normalize_fractions',
    'parse_quantity',
    'parse_ingredients',
    'parse_extraction_payload',
    # Conversion
    'ConversionRules',
    'DEFAULT_RULES',
    'convert_unit',
    'label_for',
    'format_count_label',
    'describe_quantity',
    'compute_unit_normalization',
    'plan_unit_normalization',
    # Matching
    'normalize_ingredient_name',
    'find_ingredient_match',
    # Supplier
    'find_candidates',
    'pick_best',
    'auto_fill_cost',
    'price_lines',
    # Cost
    'line_cost',
    'recipe_cost',
    'margin',
    'margin_band',
    'costing_status',
    'compute_costs',
    # Reconciliation
    'CreationLedger',
    'apply_yield',
    'dedupe_lines',
    'resolve_recipe',
    # Validation
    'find_duplicate_ingredients',
    'validate_recipe_lines',
]

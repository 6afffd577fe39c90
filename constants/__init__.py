"""
Constants Package

Unit tables, keyword lists and validation whitelists.
"""

from .units import (
    RECIPE_UNIT_MAPPINGS,
    CANONICAL_UNIT_MAPPINGS,
    PIECE_UNITS,
    TSP_TO_KG,
    TSP_TO_KG_SALT,
    TBSP_TO_KG,
    ML_TO_L,
    TSP_TO_L,
    TBSP_TO_L,
    CUP_TO_KG_DRY,
    RECIPE_UNIT_LABELS,
    CONVERSION_PRECISION,
    COMMON_FRACTIONS,
    UNICODE_FRACTIONS,
    DRY_TO_GRAMS,
    LIQUID_TO_ML,
)

from .ingredients import (
    SALT_KEYWORDS,
    DRY_GOODS_KEYWORDS,
    SPICE_KEYWORDS,
    CUP_KEYWORDS,
    PIECE_KEYWORDS,
    ZERO_COST_ALLOWED,
    LIQUID_KEYWORDS,
)

from .validation import (
    VALID_CANONICAL_UNITS,
    COSTING_COMPLETE,
    COSTING_INCOMPLETE,
    MARGIN_BANDS,
    MARGIN_FLOOR_BAND,
    MAX_LENGTHS,
    MAX_COST_PER_UNIT,
    MAX_QUANTITY,
)

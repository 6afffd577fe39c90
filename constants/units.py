"""
Unit Constants and Conversion Tables

Contains recipe unit aliases, canonical stock unit aliases and the
fixed conversion factors used to turn recipe units into stock units.
"""

# Recipe unit mappings (lowercase input -> standard recipe unit)
RECIPE_UNIT_MAPPINGS = {
    'tsp': 'tsp', 'teaspoon': 'tsp', 'teaspoons': 'tsp', 'ts': 'tsp',
    'tbsp': 'tbsp', 'tablespoon': 'tbsp', 'tablespoons': 'tbsp', 'tbs': 'tbsp', 'tb': 'tbsp',
    'cup': 'cup', 'cups': 'cup', 'c': 'cup',
    'ml': 'ml', 'milliliter': 'ml', 'milliliters': 'ml', 'millilitre': 'ml', 'millilitres': 'ml',
}

# Canonical stock unit mappings (lowercase input -> stock unit)
CANONICAL_UNIT_MAPPINGS = {
    'kg': 'kg', 'kilogram': 'kg', 'kilograms': 'kg', 'kilo': 'kg',
    'g': 'g', 'gram': 'g', 'grams': 'g',
    'l': 'L', 'liter': 'L', 'liters': 'L', 'litre': 'L', 'litres': 'L',
    'ml': 'ml', 'milliliter': 'ml', 'milliliters': 'ml', 'millilitre': 'ml', 'millilitres': 'ml',
    'piece': 'piece', 'pieces': 'piece', 'pcs': 'piece', 'pc': 'piece',
}

# Units counted in whole pieces rather than mass or volume
PIECE_UNITS = {'piece', 'pieces', 'pcs', 'pc', 'item', 'items', 'ea'}

# Fixed factors: (recipe unit, stock unit) -> multiplier
TSP_TO_KG = 0.005
TSP_TO_KG_SALT = 0.006      # salt is slightly denser
TBSP_TO_KG = 0.015
ML_TO_L = 0.001
TSP_TO_L = 0.005
TBSP_TO_L = 0.015
CUP_TO_KG_DRY = 0.2         # 1 cup rice/lentils ~ 200g

# Display label echoed back for a converted recipe unit
RECIPE_UNIT_LABELS = {
    'tsp': 'tsp',
    'tbsp': 'tbsp',
    'ml': 'ml',
    'cup': 'cups',
}

# Decimal places kept on converted quantities
CONVERSION_PRECISION = 6

# Common fractions for display (using precise values)
COMMON_FRACTIONS = {
    0.125: '1/8', 0.25: '1/4', 1/3: '1/3', 0.375: '3/8',
    0.5: '1/2', 0.625: '5/8', 2/3: '2/3', 0.75: '3/4', 0.875: '7/8'
}

# Unicode fraction characters mapping
UNICODE_FRACTIONS = {
    '\u00bd': 0.5,    # ½
    '\u2153': 1/3,    # ⅓
    '\u2154': 2/3,    # ⅔
    '\u00bc': 0.25,   # ¼
    '\u00be': 0.75,   # ¾
    '\u2155': 0.2,    # ⅕
    '\u2156': 0.4,    # ⅖
    '\u2157': 0.6,    # ⅗
    '\u2158': 0.8,    # ⅘
    '\u2159': 1/6,    # ⅙
    '\u215a': 5/6,    # ⅚
    '\u215b': 0.125,  # ⅛
    '\u215c': 0.375,  # ⅜
    '\u215d': 0.625,  # ⅝
    '\u215e': 0.875,  # ⅞
}

# Inventory unit normalization: legacy/recipe unit -> grams (dry goods)
DRY_TO_GRAMS = {
    'tsp': 5, 'teaspoon': 5, 'teaspoons': 5,
    'tbsp': 15, 'tablespoon': 15, 'tablespoons': 15,
    'cup': 120, 'cups': 120,    # conservative, flour density
    'oz': 28.35, 'ounce': 28.35, 'ounces': 28.35,
    'lb': 453.6, 'lbs': 453.6, 'pound': 453.6, 'pounds': 453.6,
}

# Inventory unit normalization: legacy/recipe unit -> millilitres (liquids)
LIQUID_TO_ML = {
    'tsp': 5, 'teaspoon': 5, 'teaspoons': 5,
    'tbsp': 15, 'tablespoon': 15, 'tablespoons': 15,
    'cup': 240, 'cups': 240,
    'fl oz': 29.57, 'floz': 29.57, 'oz': 29.57, 'ounce': 29.57, 'ounces': 29.57,
    'pt': 473.2, 'pint': 473.2, 'pints': 473.2,
    'qt': 946.4, 'quart': 946.4, 'quarts': 946.4,
}

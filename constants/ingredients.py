"""
Ingredient Constants

Default keyword lists that drive unit conversion, display-label
inference and costing completeness. These are defaults only: the app
config can replace any list through CONVERSION_KEYWORDS.
"""

# Salt is denser than other spices when measured by the teaspoon
SALT_KEYWORDS = ('salt',)

# Dry goods measured by the cup but stocked by weight
DRY_GOODS_KEYWORDS = ('rice', 'lentil', 'bean', 'bulgur', 'wheat', 'flour', 'chickpea')

# Spices measured by the teaspoon/tablespoon but stocked by weight
SPICE_KEYWORDS = (
    'turmeric', 'cumin', 'cinnamon', 'cardamom', 'black pepper', 'salt',
    'paprika', 'coriander', 'sumac', "za'atar", 'pepper',
)

# Whole-count items shown as cups when the count is small
CUP_KEYWORDS = ('lentil', 'rice', 'bean', 'dal', 'chickpea', 'bulgur', 'grain', 'flour')

# Whole-count items shown as pieces
PIECE_KEYWORDS = (
    'onion', 'tomato', 'pepper', 'egg', 'carrot', 'potato',
    'cucumber', 'slice', 'pita',
)

# Ingredients that may legitimately cost nothing (word-boundary match)
ZERO_COST_ALLOWED = ('water',)

# Names that mark an ingredient as liquid when normalizing stock units
LIQUID_KEYWORDS = (
    'water', 'oil', 'milk', 'juice', 'vinegar', 'cream', 'broth', 'stock',
    'sauce', 'extract', 'syrup', 'wine', 'beer', 'cider', 'liquor', 'spirit',
    'soup', 'dressing', 'marinade', 'glaze', 'gravy', 'yogurt', 'ketchup',
    'soy', 'worcestershire', 'honey', 'molasses', 'maple',
)

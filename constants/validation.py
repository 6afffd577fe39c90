"""
Validation Constants

Contains whitelist values for validating user input to ensure data
integrity before anything reaches the ingredient store.
"""

# Valid canonical stock units (whitelist)
VALID_CANONICAL_UNITS = {'kg', 'g', 'L', 'ml', 'piece'}

# Costing status values stored on menu items
COSTING_COMPLETE = 'COMPLETE'
COSTING_INCOMPLETE = 'INCOMPLETE'

# Margin bands (lower bound percent -> label), checked highest first
MARGIN_BANDS = (
    (60, 'excellent'),
    (40, 'good'),
    (20, 'warning'),
)
MARGIN_FLOOR_BAND = 'critical'

# Maximum field lengths
MAX_LENGTHS = {
    'ingredient_name': 200,
    'unit': 20,
    'supplier_name': 200,
    'menu_item_name': 200,
}

# Upper bound on money and quantity fields accepted from clients
MAX_COST_PER_UNIT = 1e9
MAX_QUANTITY = 1e6

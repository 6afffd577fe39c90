# Utility modules for the costing app
from .sanitizer import sanitize_text, sanitize_ingredient_name, sanitize_unit

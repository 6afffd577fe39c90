"""
Costing Exceptions

Errors raised by the costing services. Expected "no result" outcomes
(no supplier match, no inventory match, no conversion rule) are plain
return values and never appear here.
"""


class CostingError(Exception):
    """Base class for costing service errors."""
    pass


class ValidationError(CostingError):
    """Raised when recipe data fails pre-save validation."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field


class DuplicateIngredientError(ValidationError):
    """Raised when a recipe lists the same ingredient more than once."""

    def __init__(self, ingredient_ids, names=None):
        self.ingredient_ids = list(ingredient_ids)
        self.names = list(names or [])
        label = ', '.join(self.names or [str(i) for i in self.ingredient_ids])
        super().__init__(f'Ingredient listed more than once: {label}', field='ingredients')


class StoreError(CostingError):
    """Raised when the ingredient store fails to create or update a row."""
    pass


class CatalogError(CostingError):
    """Raised when the supplier catalog cannot be fetched."""
    pass

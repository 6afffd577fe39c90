"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .ingredient import Ingredient
from .supplier import Supplier, RestaurantSupplierLink, SupplierProduct, SupplierProductPrice
from .menu import MenuItem, MenuItemIngredient

__all__ = [
    'db',
    'Ingredient',
    'Supplier',
    'RestaurantSupplierLink',
    'SupplierProduct',
    'SupplierProductPrice',
    'MenuItem',
    'MenuItemIngredient',
]

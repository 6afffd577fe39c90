"""
Ingredient Model

Inventory ingredients, one row per restaurant and name. cost_per_unit is
money per ONE canonical unit (kg, L, piece ...).
"""

from services.entities import Ingredient as IngredientEntity
from .base import db


class Ingredient(db.Model):
    """Inventory ingredient stocked and costed in its canonical unit."""
    id = db.Column(db.Integer, primary_key=True)
    restaurant_id = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False, index=True)

    # Canonical stock unit (kg, g, L, ml, piece)
    unit = db.Column(db.String(20), nullable=False, default='kg')

    # Cost per ONE canonical unit
    cost_per_unit = db.Column(db.Float, nullable=False, default=0.0)

    # Cross-supplier key linking interchangeable supplier products
    global_ingredient_id = db.Column(db.String(64), nullable=True, index=True)

    stock_quantity = db.Column(db.Float, default=0.0)
    min_stock_level = db.Column(db.Float, default=0.0)

    def to_entity(self):
        return IngredientEntity(
            id=self.id,
            name=self.name,
            unit=self.unit,
            cost_per_unit=self.cost_per_unit or 0.0,
            global_ingredient_id=self.global_ingredient_id,
        )

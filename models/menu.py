"""
Menu Models

Contains the MenuItem and MenuItemIngredient models. MenuItemIngredient
rows are persisted recipe lines: quantity is in the ingredient's
canonical unit and piece_count is display-only.
"""

from services.entities import RecipeLine
from .base import db


class MenuItem(db.Model):
    """Menu item with selling price, recipe lines and costing status."""
    id = db.Column(db.Integer, primary_key=True)
    restaurant_id = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Float, nullable=False, default=0.0)
    costing_status = db.Column(db.String(20), nullable=False, default='INCOMPLETE')
    ingredients = db.relationship('MenuItemIngredient', backref='menu_item', lazy=True,
                                  cascade='all, delete-orphan', order_by='MenuItemIngredient.position')


class MenuItemIngredient(db.Model):
    """One recipe line of a menu item."""
    __table_args__ = (
        db.UniqueConstraint('menu_item_id', 'ingredient_id', name='uq_menu_item_ingredient'),
    )

    id = db.Column(db.Integer, primary_key=True)
    menu_item_id = db.Column(db.Integer, db.ForeignKey('menu_item.id', ondelete='CASCADE'), nullable=False, index=True)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id', ondelete='CASCADE'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    quantity = db.Column(db.Float, nullable=False)
    piece_count = db.Column(db.Float, nullable=True)
    supplier_name = db.Column(db.String(200), nullable=True)
    supplier_product_id = db.Column(db.String(64), nullable=True)
    unit_cost_cached = db.Column(db.Float, nullable=True)
    currency = db.Column(db.String(3), nullable=True)
    last_priced_at = db.Column(db.DateTime, nullable=True)
    ingredient = db.relationship('Ingredient')

    @classmethod
    def from_line(cls, line, position=0):
        return cls(
            ingredient_id=line.ingredient_id,
            position=position,
            quantity=line.quantity,
            piece_count=line.piece_count,
            supplier_name=line.supplier_name,
            supplier_product_id=line.supplier_product_id,
            unit_cost_cached=line.unit_cost_cached,
            currency=line.currency,
            last_priced_at=line.last_priced_at.replace(tzinfo=None) if line.last_priced_at else None,
        )

    def to_line(self):
        return RecipeLine(
            ingredient_id=self.ingredient_id,
            quantity=self.quantity,
            piece_count=self.piece_count,
            supplier_name=self.supplier_name,
            supplier_product_id=self.supplier_product_id,
            unit_cost_cached=self.unit_cost_cached,
            currency=self.currency,
            last_priced_at=self.last_priced_at,
        )

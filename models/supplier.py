"""
Supplier Models

Local copy of the supplier catalog: suppliers, their products and the
dated prices of each product.
"""

from datetime import datetime, timezone

from services.entities import SupplierProduct as SupplierProductEntity
from .base import db


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Supplier(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)


class RestaurantSupplierLink(db.Model):
    """Suppliers a restaurant buys from."""
    id = db.Column(db.Integer, primary_key=True)
    restaurant_id = db.Column(db.Integer, nullable=False, index=True)
    supplier_id = db.Column(db.Integer, db.ForeignKey('supplier.id', ondelete='CASCADE'), nullable=False)
    supplier = db.relationship('Supplier')


class SupplierProduct(db.Model):
    """A product as sold by one supplier, in packs of pack_size pack_unit."""
    id = db.Column(db.Integer, primary_key=True)
    supplier_id = db.Column(db.Integer, db.ForeignKey('supplier.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(50), nullable=True)
    brand = db.Column(db.String(100), nullable=True)
    pack_size = db.Column(db.Float, nullable=False, default=1.0)
    pack_unit = db.Column(db.String(20), nullable=False, default='kg')
    global_ingredient_id = db.Column(db.String(64), nullable=True, index=True)
    is_active = db.Column(db.Boolean, default=True)
    supplier = db.relationship('Supplier')
    prices = db.relationship('SupplierProductPrice', backref='product', lazy=True,
                             cascade='all, delete-orphan',
                             order_by='SupplierProductPrice.effective_from.desc()')

    def active_price(self, at=None):
        """Most recent price in effect at the given time, or None."""
        at = at or _utcnow()
        for price in self.prices:
            if price.effective_from <= at and (price.effective_to is None or price.effective_to >= at):
                return price
        return None

    def to_entity(self, at=None, default_currency='IQD'):
        price = self.active_price(at)
        amount = price.price if price else None
        return SupplierProductEntity(
            id=str(self.id),
            name=self.name,
            supplier_id=str(self.supplier_id),
            supplier_name=self.supplier.name if self.supplier else '',
            pack_size=self.pack_size,
            pack_unit=self.pack_unit,
            price=amount,
            currency=price.currency if price else default_currency,
            unit_cost=SupplierProductEntity.derive_unit_cost(amount, self.pack_size),
            global_ingredient_id=self.global_ingredient_id,
            category=self.category,
            brand=self.brand,
        )


class SupplierProductPrice(db.Model):
    """Price of a product over a period; effective_to None means open-ended."""
    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('supplier_product.id', ondelete='CASCADE'), nullable=False, index=True)
    price = db.Column(db.Float, nullable=False)
    currency = db.Column(db.String(3), nullable=False, default='IQD')
    effective_from = db.Column(db.DateTime, nullable=False, default=_utcnow)
    effective_to = db.Column(db.DateTime, nullable=True)

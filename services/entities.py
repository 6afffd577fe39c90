"""
Costing Entities

Transient value objects passed between the costing services. Database
rows are converted into these before any costing work happens, so the
services never touch a session.
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional


@dataclass
class Ingredient:
    """Inventory ingredient; cost_per_unit is money per canonical unit."""
    id: int
    name: str
    unit: str
    cost_per_unit: float = 0.0
    global_ingredient_id: Optional[str] = None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'unit': self.unit,
            'costPerUnit': self.cost_per_unit,
            'globalIngredientId': self.global_ingredient_id,
        }


@dataclass(frozen=True)
class SupplierProduct:
    """Read-only supplier catalog entry."""
    id: str
    name: str
    supplier_id: Optional[str] = None
    supplier_name: str = ''
    pack_size: float = 0.0
    pack_unit: str = ''
    price: Optional[float] = None
    currency: str = 'IQD'
    unit_cost: Optional[float] = None
    global_ingredient_id: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None

    @staticmethod
    def derive_unit_cost(price, pack_size):
        """Price per canonical unit, or None when it cannot be derived."""
        if price is None or not pack_size or pack_size <= 0:
            return None
        return price / pack_size

    @property
    def has_finite_unit_cost(self):
        return self.unit_cost is not None and math.isfinite(self.unit_cost)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'supplierId': self.supplier_id,
            'supplierName': self.supplier_name,
            'packSize': self.pack_size,
            'packUnit': self.pack_unit,
            'price': self.price,
            'currency': self.currency,
            'unitCost': self.unit_cost,
            'globalIngredientId': self.global_ingredient_id,
            'category': self.category,
            'brand': self.brand,
        }


@dataclass
class RecipeLine:
    """
    One ingredient line of a recipe.

    quantity is always in the referenced ingredient's canonical unit.
    piece_count is the recipe-unit amount kept for display only.
    """
    ingredient_id: Optional[int]
    quantity: float
    piece_count: Optional[float] = None
    supplier_name: Optional[str] = None
    supplier_product_id: Optional[str] = None
    unit_cost_cached: Optional[float] = None
    currency: Optional[str] = None
    last_priced_at: Optional[datetime] = None

    @property
    def is_placeholder(self):
        return not self.ingredient_id or not self.quantity or self.quantity <= 0

    def copy(self, **changes):
        return replace(self, **changes)

    def to_dict(self):
        return {
            'ingredientId': self.ingredient_id,
            'quantity': self.quantity,
            'pieceCount': self.piece_count,
            'supplierName': self.supplier_name,
            'supplierProductId': self.supplier_product_id,
            'unitCostCached': self.unit_cost_cached,
            'currency': self.currency,
            'lastPricedAt': self.last_priced_at.isoformat() if self.last_priced_at else None,
        }


@dataclass(frozen=True)
class ParsedIngredient:
    """Untrusted ingredient entry from free-text or AI extraction."""
    name: str
    quantity: float
    unit: str
    piece_count: Optional[float] = None
    cost_per_unit: Optional[float] = None


@dataclass(frozen=True)
class ConversionResult:
    quantity: float
    piece_count: Optional[float]
    recipe_unit: Optional[str]

    def to_dict(self):
        return {
            'quantity': self.quantity,
            'pieceCount': self.piece_count,
            'recipeUnit': self.recipe_unit,
        }


@dataclass
class ResolveOptions:
    auto_create: bool = False
    recipe_yield: Optional[float] = None
    auto_price: bool = True
    restaurant_id: Optional[int] = None


@dataclass
class ResolveResult:
    recipe_lines: List[RecipeLine] = field(default_factory=list)
    unmatched_names: List[str] = field(default_factory=list)
    created_ingredients: List[Ingredient] = field(default_factory=list)

    def to_dict(self):
        return {
            'recipeLines': [line.to_dict() for line in self.recipe_lines],
            'unmatchedNames': list(self.unmatched_names),
            'createdIngredients': [ing.to_dict() for ing in self.created_ingredients],
        }


@dataclass(frozen=True)
class LineCost:
    ingredient_id: Optional[int]
    quantity: float
    cost: float
    source: str  # 'cached', 'supplier', 'inventory' or 'missing'

    def to_dict(self):
        return {
            'ingredientId': self.ingredient_id,
            'quantity': self.quantity,
            'cost': self.cost,
            'source': self.source,
        }


@dataclass
class CostSummary:
    per_line_cost: List[LineCost]
    total_cost: float
    profit: float
    margin_percent: float
    band: str
    costing_status: str

    def to_dict(self):
        return {
            'perLineCost': [lc.to_dict() for lc in self.per_line_cost],
            'totalCost': self.total_cost,
            'profit': self.profit,
            'marginPercent': self.margin_percent,
            'band': self.band,
            'costingStatus': self.costing_status,
        }


@dataclass(frozen=True)
class UnitNormalization:
    """newQuantity = quantity * quantity_factor; newCost = cost * cost_factor."""
    target_unit: str
    quantity_factor: float
    cost_factor: float


@dataclass(frozen=True)
class NormalizationPlanItem:
    ingredient_id: int
    name: str
    old_unit: str
    new_unit: Optional[str]
    old_cost_per_unit: float
    new_cost_per_unit: float
    quantity_factor: Optional[float] = None

    @property
    def can_convert(self):
        return self.new_unit is not None

    def to_dict(self):
        return {
            'id': self.ingredient_id,
            'name': self.name,
            'oldUnit': self.old_unit,
            'newUnit': self.new_unit,
            'oldCostPerUnit': self.old_cost_per_unit,
            'newCostPerUnit': self.new_cost_per_unit,
            'canConvert': self.can_convert,
        }

"""
Ingredient Store and Supplier Catalog Adapters

The costing services talk to inventory and supplier data only through
these small interfaces:

- ingredient store: list(restaurant_id), create(fields), update(id, partial)
- supplier catalog: list(restaurant_id) -> read-only snapshot

Database-backed adapters receive the db handle and model classes from the
caller, so this module never imports the models package.
"""

import itertools
import logging
import math

import requests
from requests.adapters import HTTPAdapter
from sqlalchemy.exc import SQLAlchemyError
from urllib3.util.retry import Retry

from .entities import Ingredient, SupplierProduct
from .exceptions import CatalogError, StoreError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {'name', 'unit', 'cost_per_unit', 'global_ingredient_id'}


class InMemoryIngredientStore:
    """Ingredient store held in a dict; used by tests and offline tools."""

    def __init__(self, ingredients=None):
        self._data = {}
        self._ids = itertools.count(1)
        for ing in ingredients or []:
            self._data[ing.id] = ing
        if self._data:
            self._ids = itertools.count(max(self._data) + 1)

    def list(self, restaurant_id=None):
        return list(self._data.values())

    def create(self, fields):
        ingredient = Ingredient(
            id=next(self._ids),
            name=fields['name'],
            unit=fields.get('unit') or 'kg',
            cost_per_unit=fields.get('cost_per_unit') or 0.0,
            global_ingredient_id=fields.get('global_ingredient_id'),
        )
        self._data[ingredient.id] = ingredient
        return ingredient

    def update(self, ingredient_id, partial):
        ingredient = self._data.get(ingredient_id)
        if ingredient is None:
            raise StoreError(f'Ingredient {ingredient_id} not found')
        for key, value in partial.items():
            if key in UPDATABLE_FIELDS:
                setattr(ingredient, key, value)
        return ingredient


class SqlIngredientStore:
    """Ingredient store backed by the Flask-SQLAlchemy Ingredient model."""

    def __init__(self, db, model, restaurant_id):
        self.db = db
        self.model = model
        self.restaurant_id = restaurant_id

    def _query(self):
        return self.model.query.filter_by(restaurant_id=self.restaurant_id)

    def list(self, restaurant_id=None):
        try:
            rows = self._query().order_by(self.model.name).all()
        except SQLAlchemyError as e:
            raise StoreError('Failed to list ingredients') from e
        return [row.to_entity() for row in rows]

    def _row_by_name(self, name):
        return self._query().filter(self.db.func.lower(self.model.name) == name.strip().lower()).first()

    def find_by_name(self, name):
        try:
            row = self._row_by_name(name)
        except SQLAlchemyError as e:
            raise StoreError(f'Failed to look up ingredient {name!r}') from e
        return row.to_entity() if row else None

    def create(self, fields):
        """Create an ingredient; an existing row with the same name is returned instead."""
        return self.get_or_create(fields)[0]

    def get_or_create(self, fields):
        """Return (ingredient, created) for a case-insensitive name."""
        name = fields['name'].strip()
        try:
            existing = self._row_by_name(name)
            if existing is not None:
                return existing.to_entity(), False

            row = self.model(
                restaurant_id=fields.get('restaurant_id') or self.restaurant_id,
                name=name,
                unit=fields.get('unit') or 'kg',
                cost_per_unit=fields.get('cost_per_unit') or 0.0,
                global_ingredient_id=fields.get('global_ingredient_id'),
                stock_quantity=fields.get('stock_quantity') or 0.0,
                min_stock_level=fields.get('min_stock_level') or 0.0,
            )
            self.db.session.add(row)
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StoreError(f'Failed to create ingredient {name!r}') from e
        return row.to_entity(), True

    def update(self, ingredient_id, partial):
        try:
            row = self._query().filter_by(id=ingredient_id).first()
            if row is None:
                raise StoreError(f'Ingredient {ingredient_id} not found')
            for key, value in partial.items():
                if key in UPDATABLE_FIELDS:
                    setattr(row, key, value)
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StoreError(f'Failed to update ingredient {ingredient_id}') from e
        return row.to_entity()


class StaticSupplierCatalog:
    """Fixed in-memory catalog snapshot."""

    def __init__(self, products=None):
        self.products = list(products or [])

    def list(self, restaurant_id=None):
        return list(self.products)


class SqlSupplierCatalog:
    """Active products of the suppliers linked to a restaurant, at current prices."""

    def __init__(self, product_model, link_model, default_currency='IQD'):
        self.product_model = product_model
        self.link_model = link_model
        self.default_currency = default_currency

    def list(self, restaurant_id):
        links = self.link_model.query.filter_by(restaurant_id=restaurant_id).all()
        supplier_ids = [link.supplier_id for link in links]
        if not supplier_ids:
            return []

        rows = (self.product_model.query
                .filter(self.product_model.supplier_id.in_(supplier_ids),
                        self.product_model.is_active.is_(True))
                .order_by(self.product_model.name)
                .all())
        return [row.to_entity(default_currency=self.default_currency) for row in rows]


def _finite_number(value):
    """float(value), or None for missing, unparseable or non-finite values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def product_from_payload(item, default_currency='IQD'):
    """Build a SupplierProduct from a catalog JSON object (camelCase keys)."""
    price = _finite_number(item.get('price'))
    pack_size = _finite_number(item.get('packSize')) or 0.0
    unit_cost = _finite_number(item.get('unitCost'))
    if unit_cost is None:
        unit_cost = SupplierProduct.derive_unit_cost(price, pack_size)
    return SupplierProduct(
        id=str(item['id']),
        name=item.get('name') or '',
        supplier_id=str(item['supplierId']) if item.get('supplierId') is not None else None,
        supplier_name=item.get('supplierName') or '',
        pack_size=pack_size,
        pack_unit=item.get('packUnit') or '',
        price=price,
        currency=item.get('currency') or default_currency,
        unit_cost=unit_cost,
        global_ingredient_id=item.get('globalIngredientId'),
        category=item.get('category'),
        brand=item.get('brand'),
    )


class HttpSupplierCatalog:
    """
    Live supplier catalog fetched over HTTP.

    Catalog reads are idempotent, so failed GETs are retried a bounded
    number of times before CatalogError is raised.
    """

    def __init__(self, base_url, timeout=10, retries=2, default_currency='IQD', session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.default_currency = default_currency
        self.session = session or requests.Session()
        retry = Retry(total=retries, backoff_factor=0.3,
                      status_forcelist=(500, 502, 503, 504), allowed_methods=('GET',))
        self.session.mount('http://', HTTPAdapter(max_retries=retry))
        self.session.mount('https://', HTTPAdapter(max_retries=retry))

    def list(self, restaurant_id):
        url = f"{self.base_url}/restaurants/{restaurant_id}/supplier-products"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.warning("Supplier catalog fetch failed for restaurant %s: %s", restaurant_id, e)
            raise CatalogError(f'Supplier catalog unavailable: {e}') from e
        except ValueError as e:
            raise CatalogError('Supplier catalog returned invalid JSON') from e

        if not isinstance(payload, list):
            raise CatalogError('Supplier catalog response must be a list')

        products = []
        for item in payload:
            if not isinstance(item, dict) or item.get('id') is None:
                logger.debug("Skipping malformed catalog entry: %r", item)
                continue
            products.append(product_from_payload(item, self.default_currency))
        return products

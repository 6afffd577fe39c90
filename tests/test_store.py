"""Tests for the ingredient store and supplier catalog adapters."""

import pytest
import requests
from sqlalchemy.exc import OperationalError

from models import Ingredient as IngredientModel
from models import RestaurantSupplierLink, Supplier, SupplierProduct, SupplierProductPrice
from services import CatalogError, Ingredient, ParsedIngredient, ResolveOptions, StoreError, resolve_recipe
from services.store import (
    HttpSupplierCatalog, InMemoryIngredientStore, SqlIngredientStore, SqlSupplierCatalog,
    StaticSupplierCatalog,
)


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} error')

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def _catalog_with(monkeypatch, response):
    session = requests.Session()
    calls = []

    def fake_get(url, timeout=None):
        calls.append(url)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(session, 'get', fake_get)
    return HttpSupplierCatalog('https://catalog.example.com/api/', session=session), calls


class TestInMemoryIngredientStore:

    def test_create_assigns_ids_after_existing(self):
        store = InMemoryIngredientStore([Ingredient(id=7, name='Onion', unit='kg')])
        created = store.create({'name': 'Garlic', 'unit': 'kg'})
        assert created.id == 8
        assert len(store.list()) == 2

    def test_update_missing_raises(self):
        with pytest.raises(StoreError):
            InMemoryIngredientStore().update(1, {'cost_per_unit': 5})

    def test_update_ignores_unknown_fields(self):
        store = InMemoryIngredientStore([Ingredient(id=1, name='Onion', unit='kg')])
        updated = store.update(1, {'cost_per_unit': 900, 'id': 55})
        assert updated.id == 1
        assert updated.cost_per_unit == 900


class TestSqlIngredientStore:

    def test_create_returns_existing_on_name_clash(self, db):
        store = SqlIngredientStore(db, IngredientModel, restaurant_id=1)
        first = store.create({'name': 'Parmesan', 'unit': 'kg', 'cost_per_unit': 0})
        second = store.create({'name': 'PARMESAN ', 'unit': 'g'})

        assert second.id == first.id
        assert second.unit == 'kg'
        assert len(store.list()) == 1

    def test_restaurants_are_isolated(self, db):
        SqlIngredientStore(db, IngredientModel, restaurant_id=1).create({'name': 'Rice', 'unit': 'kg'})
        assert SqlIngredientStore(db, IngredientModel, restaurant_id=2).list() == []

    def test_update(self, db):
        store = SqlIngredientStore(db, IngredientModel, restaurant_id=1)
        created = store.create({'name': 'Rice', 'unit': 'kg'})
        updated = store.update(created.id, {'cost_per_unit': 2500})
        assert updated.cost_per_unit == 2500

    def test_update_missing_raises(self, db):
        with pytest.raises(StoreError):
            SqlIngredientStore(db, IngredientModel, restaurant_id=1).update(404, {'cost_per_unit': 1})


class TestSqlSupplierCatalog:

    def test_lists_linked_active_products_at_current_price(self, db):
        linked = Supplier(name='Baghdad Foods')
        other = Supplier(name='Elsewhere')
        db.session.add_all([linked, other])
        db.session.flush()
        db.session.add(RestaurantSupplierLink(restaurant_id=1, supplier_id=linked.id))

        cheese = SupplierProduct(supplier_id=linked.id, name='Parmesan Cheese', pack_size=2, pack_unit='kg')
        cheese.prices.append(SupplierProductPrice(price=24000, currency='IQD'))
        retired = SupplierProduct(supplier_id=linked.id, name='Old Cheese', pack_size=1, is_active=False)
        unlinked = SupplierProduct(supplier_id=other.id, name='Cheddar', pack_size=1)
        db.session.add_all([cheese, retired, unlinked])
        db.session.commit()

        products = SqlSupplierCatalog(SupplierProduct, RestaurantSupplierLink).list(1)

        assert [p.name for p in products] == ['Parmesan Cheese']
        assert products[0].supplier_name == 'Baghdad Foods'
        assert products[0].unit_cost == pytest.approx(12000)

    def test_product_without_price_has_no_unit_cost(self, db):
        supplier = Supplier(name='Baghdad Foods')
        db.session.add(supplier)
        db.session.flush()
        db.session.add(RestaurantSupplierLink(restaurant_id=1, supplier_id=supplier.id))
        db.session.add(SupplierProduct(supplier_id=supplier.id, name='Sumac', pack_size=1))
        db.session.commit()

        [product] = SqlSupplierCatalog(SupplierProduct, RestaurantSupplierLink).list(1)
        assert product.price is None
        assert product.unit_cost is None
        assert product.currency == 'IQD'

    def test_no_linked_suppliers(self, db):
        assert SqlSupplierCatalog(SupplierProduct, RestaurantSupplierLink).list(1) == []


class TestHttpSupplierCatalog:

    def test_parses_products(self, monkeypatch):
        payload = [
            {'id': 1, 'name': 'Parmesan Cheese', 'supplierName': 'Baghdad Foods',
             'packSize': 2, 'packUnit': 'kg', 'price': 24000},
            {'id': 'sp-9', 'name': 'Saffron', 'packSize': 0, 'price': 5000, 'currency': 'USD'},
            {'name': 'no id'},
            'garbage',
        ]
        catalog, calls = _catalog_with(monkeypatch, FakeResponse(payload))

        products = catalog.list(3)

        assert calls == ['https://catalog.example.com/api/restaurants/3/supplier-products']
        assert [p.id for p in products] == ['1', 'sp-9']
        assert products[0].unit_cost == pytest.approx(12000)
        assert products[0].currency == 'IQD'
        assert products[1].unit_cost is None
        assert products[1].currency == 'USD'

    def test_numeric_strings_and_garbage_numbers(self, monkeypatch):
        payload = [
            {'id': 1, 'name': 'Parmesan', 'price': '24000', 'packSize': '2'},
            {'id': 2, 'name': 'Parmesan Wedge', 'price': 'n/a', 'packSize': '1'},
            {'id': 3, 'name': 'Parmesan Shavings', 'price': '10', 'packSize': 'x', 'unitCost': 'Infinity'},
            {'id': 4, 'name': 'Parmesan Block', 'unitCost': '500'},
        ]
        catalog, _ = _catalog_with(monkeypatch, FakeResponse(payload))

        products = catalog.list(1)

        assert products[0].price == 24000
        assert products[0].unit_cost == pytest.approx(12000)
        assert products[1].price is None
        assert products[1].unit_cost is None
        assert products[2].pack_size == 0
        assert products[2].unit_cost is None
        assert products[3].unit_cost == 500

    def test_network_error(self, monkeypatch):
        catalog, _ = _catalog_with(monkeypatch, requests.ConnectionError('refused'))
        with pytest.raises(CatalogError):
            catalog.list(1)

    def test_http_error(self, monkeypatch):
        catalog, _ = _catalog_with(monkeypatch, FakeResponse([], status_code=503))
        with pytest.raises(CatalogError):
            catalog.list(1)

    def test_invalid_json(self, monkeypatch):
        catalog, _ = _catalog_with(monkeypatch, FakeResponse(ValueError('bad json')))
        with pytest.raises(CatalogError):
            catalog.list(1)

    def test_non_list_payload(self, monkeypatch):
        catalog, _ = _catalog_with(monkeypatch, FakeResponse({'products': []}))
        with pytest.raises(CatalogError):
            catalog.list(1)


def test_static_catalog_returns_a_copy(catalog):
    static = StaticSupplierCatalog(catalog)
    listed = static.list(1)
    listed.clear()
    assert len(static.list(1)) == 3


def _locked(*args, **kwargs):
    raise OperationalError('SELECT', {}, Exception('database is locked'))


class TestSqlStoreFailures:

    def test_lookup_failure_on_create_raises_store_error(self, db, monkeypatch):
        store = SqlIngredientStore(db, IngredientModel, restaurant_id=1)
        monkeypatch.setattr(store, '_query', _locked)
        with pytest.raises(StoreError):
            store.create({'name': 'Sumac', 'unit': 'kg'})

    def test_lookup_failure_on_update_raises_store_error(self, db, monkeypatch):
        store = SqlIngredientStore(db, IngredientModel, restaurant_id=1)
        created = store.create({'name': 'Sumac', 'unit': 'kg'})
        monkeypatch.setattr(store, '_query', _locked)
        with pytest.raises(StoreError):
            store.update(created.id, {'cost_per_unit': 8000})

    def test_reconciliation_reports_unmatched_when_database_fails(self, db, monkeypatch):
        store = SqlIngredientStore(db, IngredientModel, restaurant_id=1)
        monkeypatch.setattr(store, '_query', _locked)
        parsed = [ParsedIngredient(name='Sumac', quantity=0.01, unit='kg')]

        result = resolve_recipe(parsed, [], options=ResolveOptions(auto_create=True), store=store)

        assert result.unmatched_names == ['Sumac']
        assert result.recipe_lines == []

    def test_backfill_survives_database_failure(self, db, monkeypatch):
        store = SqlIngredientStore(db, IngredientModel, restaurant_id=1)
        parmesan = store.create({'name': 'Parmesan', 'unit': 'kg'})
        monkeypatch.setattr(store, '_query', _locked)
        parsed = [ParsedIngredient(name='Parmesan', quantity=0.1, unit='kg', cost_per_unit=11000)]

        result = resolve_recipe(parsed, [parmesan], store=store)

        assert result.recipe_lines[0].ingredient_id == parmesan.id

    def test_get_or_create_reports_creation(self, db):
        store = SqlIngredientStore(db, IngredientModel, restaurant_id=1)
        _, created = store.get_or_create({'name': 'Sumac', 'unit': 'kg'})
        _, created_again = store.get_or_create({'name': 'sumac', 'unit': 'kg'})
        assert created is True
        assert created_again is False

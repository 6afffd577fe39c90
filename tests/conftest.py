import pytest

from app import create_app
from models import db as _db
from services import Ingredient, SupplierProduct


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def inventory():
    return [
        Ingredient(id=1, name='Parmesan', unit='kg', cost_per_unit=0.0),
        Ingredient(id=2, name='Basmati Rice', unit='kg', cost_per_unit=2500.0),
        Ingredient(id=3, name='Olive Oil', unit='L', cost_per_unit=9000.0),
        Ingredient(id=4, name='Onion', unit='kg', cost_per_unit=1000.0),
        Ingredient(id=5, name='Sea Salt', unit='kg', cost_per_unit=500.0),
        Ingredient(id=6, name='Water', unit='L', cost_per_unit=0.0),
    ]


@pytest.fixture
def catalog():
    return [
        SupplierProduct(id='sp-1', name='Parmesan Cheese', supplier_name='Baghdad Foods',
                        pack_size=2, pack_unit='kg', price=24000,
                        unit_cost=SupplierProduct.derive_unit_cost(24000, 2)),
        SupplierProduct(id='sp-2', name='Parmesan Wedge', supplier_name='Erbil Wholesale',
                        pack_size=1, pack_unit='kg', price=15000,
                        unit_cost=SupplierProduct.derive_unit_cost(15000, 1)),
        SupplierProduct(id='sp-3', name='Olive Oil Extra Virgin', supplier_name='Baghdad Foods',
                        pack_size=5, pack_unit='L', price=40000,
                        unit_cost=SupplierProduct.derive_unit_cost(40000, 5)),
    ]

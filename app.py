import logging
import math

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine

from config import configure_logging, get_config
from constants import VALID_CANONICAL_UNITS, COSTING_COMPLETE, MAX_COST_PER_UNIT, MAX_QUANTITY, MAX_LENGTHS
from models import db, Ingredient, MenuItem, MenuItemIngredient, RestaurantSupplierLink, SupplierProduct
from services import (
    CatalogError, ConversionRules, RecipeLine, ResolveOptions, StoreError, ValidationError,
    compute_costs, convert_unit, costing_status, describe_quantity,
    parse_extraction_payload, parse_quantity, plan_unit_normalization, resolve_recipe,
    validate_recipe_lines,
)
from services.conversion import standardize_canonical_unit
from services.parsing import parse_recipe_yield
from services.reconcile import CreationLedger
from services.store import HttpSupplierCatalog, SqlIngredientStore, SqlSupplierCatalog
from utils.sanitizer import sanitize_ingredient_name, sanitize_text

logger = logging.getLogger(__name__)

migrate = Migrate()
api = Blueprint('api', __name__, url_prefix='/api')


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(value) if value is not None and value != '' else default
        if result is None:
            return None
        if not math.isfinite(result):
            return default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


# ============================================
# REQUEST HELPERS
# ============================================

def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def _restaurant_id(data=None):
    value = request.args.get('restaurant_id')
    if value is None and isinstance(data, dict):
        value = data.get('restaurantId')
    try:
        return int(value) if value is not None else current_app.config['DEFAULT_RESTAURANT_ID']
    except (TypeError, ValueError):
        raise ValidationError('restaurantId must be an integer', field='restaurantId')


def _ingredient_store(restaurant_id):
    return SqlIngredientStore(db, Ingredient, restaurant_id)


def _catalog():
    return current_app.extensions['supplier_catalog']


def _rules():
    return current_app.extensions['conversion_rules']


def _line_from_payload(item):
    """Build a RecipeLine from a client JSON object."""
    if not isinstance(item, dict):
        raise ValidationError('Each recipe line must be an object', field='lines')
    ingredient_id = item.get('ingredientId')
    if ingredient_id in ('', None):
        ingredient_id = None
    else:
        try:
            ingredient_id = int(ingredient_id)
        except (TypeError, ValueError):
            raise ValidationError(f'Invalid ingredientId: {ingredient_id!r}', field='ingredientId')

    supplier_product_id = item.get('supplierProductId')
    return RecipeLine(
        ingredient_id=ingredient_id,
        quantity=safe_float(item.get('quantity'), default=0.0, min_val=0.0, max_val=MAX_QUANTITY),
        piece_count=safe_float(item.get('pieceCount'), default=None, min_val=0.0, max_val=MAX_QUANTITY),
        supplier_name=sanitize_text(item.get('supplierName'), MAX_LENGTHS['supplier_name']) or None,
        supplier_product_id=str(supplier_product_id) if supplier_product_id not in (None, '') else None,
        unit_cost_cached=safe_float(item.get('unitCostCached'), default=None, min_val=0.0, max_val=MAX_COST_PER_UNIT),
        currency=item.get('currency') or None,
    )


def _lines_from_payload(data):
    raw = data.get('lines', data.get('ingredients'))
    if not isinstance(raw, list):
        raise ValidationError('lines must be a list', field='lines')
    return [_line_from_payload(item) for item in raw]


def _validated_unit(value):
    unit = standardize_canonical_unit(value)
    if unit not in VALID_CANONICAL_UNITS:
        raise ValidationError(f'Invalid unit: {value}', field='unit')
    return unit


# ============================================
# ROUTES - INGREDIENTS
# ============================================

@api.route('/ingredients', methods=['GET'])
def ingredients_list():
    store = _ingredient_store(_restaurant_id())
    return jsonify([ing.to_dict() for ing in store.list()])


@api.route('/ingredients', methods=['POST'])
def ingredient_add():
    data = _payload()
    name = sanitize_ingredient_name(data.get('name'))
    if not name or not data.get('unit'):
        raise ValidationError('Name and unit are required')

    store = _ingredient_store(_restaurant_id(data))
    ingredient, created = store.get_or_create({
        'name': name,
        'unit': _validated_unit(data['unit']),
        'cost_per_unit': safe_float(data.get('costPerUnit'), default=0.0, min_val=0.0, max_val=MAX_COST_PER_UNIT),
        'global_ingredient_id': data.get('globalIngredientId') or None,
        'stock_quantity': safe_float(data.get('stockQuantity'), default=0.0, min_val=0.0),
        'min_stock_level': safe_float(data.get('minStockLevel'), default=0.0, min_val=0.0),
    })
    return jsonify(ingredient.to_dict()), 201 if created else 200


@api.route('/ingredients/<int:id>', methods=['PATCH'])
def ingredient_edit(id):
    data = _payload()
    partial = {}
    if 'name' in data:
        name = sanitize_ingredient_name(data['name'])
        if not name:
            raise ValidationError('Ingredient name is required', field='name')
        partial['name'] = name
    if 'unit' in data:
        partial['unit'] = _validated_unit(data['unit'])
    if 'costPerUnit' in data:
        partial['cost_per_unit'] = safe_float(data['costPerUnit'], default=0.0, min_val=0.0, max_val=MAX_COST_PER_UNIT)
    if 'globalIngredientId' in data:
        partial['global_ingredient_id'] = data['globalIngredientId'] or None

    ingredient = _ingredient_store(_restaurant_id(data)).update(id, partial)
    return jsonify(ingredient.to_dict())


@api.route('/ingredients/normalize-units', methods=['POST'])
def ingredients_normalize_units():
    """
    Restate ingredients stocked in recipe or imperial units in g or ml.

    Body: {'confirm': true} applies the plan; otherwise only the plan is
    returned. Saved recipe lines are rescaled to the new unit.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    store = _ingredient_store(_restaurant_id(data))
    plan = plan_unit_normalization(store.list(), _rules())

    applied = 0
    if data.get('confirm') is True:
        for item in plan:
            if not item.can_convert:
                continue
            for row in MenuItemIngredient.query.filter_by(ingredient_id=item.ingredient_id):
                row.quantity = row.quantity * item.quantity_factor
                if row.unit_cost_cached:
                    row.unit_cost_cached = row.unit_cost_cached / item.quantity_factor
            store.update(item.ingredient_id, {'unit': item.new_unit, 'cost_per_unit': item.new_cost_per_unit})
            applied += 1
        logger.info("Normalized units of %d of %d ingredient(s)", applied, len(plan))

    return jsonify({'plan': [item.to_dict() for item in plan], 'applied': applied})


# ============================================
# ROUTES - SUPPLIER CATALOG
# ============================================

@api.route('/supplier-products', methods=['GET'])
def supplier_products_list():
    products = _catalog().list(_restaurant_id())
    return jsonify([p.to_dict() for p in products])


# ============================================
# ROUTES - UNITS
# ============================================

@api.route('/units/convert', methods=['POST'])
def units_convert():
    data = _payload()
    result = convert_unit(
        parse_quantity(data.get('quantity'), default=0.0),
        data.get('fromUnit', ''),
        data.get('toUnit', ''),
        data.get('ingredientName', ''),
        _rules(),
    )
    return jsonify(result.to_dict())


# ============================================
# ROUTES - RECIPES
# ============================================

@api.route('/recipes/resolve', methods=['POST'])
def recipes_resolve():
    """
    Reconcile extraction output against inventory.

    Body: either {'text': '<raw extraction output>'} or
    {'ingredients': [...], 'recipeYield': 4}, plus optional autoCreate / autoPrice.
    """
    data = _payload()
    restaurant_id = _restaurant_id(data)

    if 'text' in data:
        try:
            parsed, recipe_yield = parse_extraction_payload(data['text'])
        except ValueError as e:
            raise ValidationError(f'Could not parse extraction output: {e}', field='text')
    else:
        parsed, recipe_yield = parse_extraction_payload(data)

    if 'text' in data and data.get('recipeYield') is not None:
        recipe_yield = parse_recipe_yield(data['recipeYield'])

    store = _ingredient_store(restaurant_id)
    auto_price = bool(data.get('autoPrice', True))
    catalog = _catalog().list(restaurant_id) if auto_price else None
    options = ResolveOptions(
        auto_create=bool(data.get('autoCreate', False)),
        recipe_yield=recipe_yield,
        auto_price=auto_price,
        restaurant_id=restaurant_id,
    )
    result = resolve_recipe(parsed, store.list(), catalog, options,
                            store=store, ledger=CreationLedger(), rules=_rules())
    body = result.to_dict()
    body['recipeYield'] = recipe_yield
    return jsonify(body)


@api.route('/recipes/costs', methods=['POST'])
def recipes_costs():
    data = _payload()
    restaurant_id = _restaurant_id(data)
    lines = _lines_from_payload(data)
    inventory = _ingredient_store(restaurant_id).list()
    catalog = _catalog().list(restaurant_id)
    price = safe_float(data.get('price'), default=0.0, min_val=0.0)

    summary = compute_costs(lines, inventory, catalog, price,
                            bands=current_app.config['MARGIN_BANDS'],
                            zero_cost_allowed=current_app.config['ZERO_COST_ALLOWED'])
    body = summary.to_dict()
    by_id = {ing.id: ing for ing in inventory}
    body['display'] = [describe_quantity(line, by_id.get(line.ingredient_id), _rules())
                       for line in lines if not line.is_placeholder]
    return jsonify(body)


# ============================================
# ROUTES - MENU ITEMS
# ============================================

def _menu_item(id, restaurant_id):
    return MenuItem.query.filter_by(id=id, restaurant_id=restaurant_id).first()


def _menu_item_body(item, inventory, catalog):
    lines = [row.to_line() for row in item.ingredients]
    summary = compute_costs(lines, inventory, catalog, item.price,
                            bands=current_app.config['MARGIN_BANDS'],
                            zero_cost_allowed=current_app.config['ZERO_COST_ALLOWED'])
    return {
        'id': item.id,
        'name': item.name,
        'price': item.price,
        'costingStatus': item.costing_status,
        'lines': [line.to_dict() for line in lines],
        'costs': summary.to_dict(),
    }


@api.route('/menu', methods=['POST'])
def menu_add():
    data = _payload()
    name = sanitize_text(data.get('name'), MAX_LENGTHS['menu_item_name'])
    if not name:
        raise ValidationError('Menu item name is required', field='name')
    item = MenuItem(
        restaurant_id=_restaurant_id(data),
        name=name,
        price=safe_float(data.get('price'), default=0.0, min_val=0.0),
    )
    db.session.add(item)
    db.session.commit()
    return jsonify({'id': item.id, 'name': item.name, 'price': item.price,
                    'costingStatus': item.costing_status}), 201


@api.route('/menu/<int:id>', methods=['GET'])
def menu_view(id):
    restaurant_id = _restaurant_id()
    item = _menu_item(id, restaurant_id)
    if item is None:
        return jsonify({'error': 'Menu item not found'}), 404
    inventory = _ingredient_store(restaurant_id).list()
    return jsonify(_menu_item_body(item, inventory, _catalog().list(restaurant_id)))


@api.route('/menu/<int:id>/ingredients', methods=['PUT'])
def menu_ingredients_save(id):
    """Replace a menu item's recipe; duplicates are rejected, not merged."""
    data = _payload()
    restaurant_id = _restaurant_id(data)
    item = _menu_item(id, restaurant_id)
    if item is None:
        return jsonify({'error': 'Menu item not found'}), 404

    inventory = _ingredient_store(restaurant_id).list()
    lines = validate_recipe_lines(_lines_from_payload(data), inventory)

    # Flush the removals first so re-saved ingredients don't trip the unique constraint
    item.ingredients.clear()
    db.session.flush()
    item.ingredients.extend(MenuItemIngredient.from_line(line, position)
                            for position, line in enumerate(lines))
    item.costing_status = costing_status(lines, inventory, current_app.config['ZERO_COST_ALLOWED'])
    db.session.commit()
    logger.info("Saved %d recipe line(s) for menu item %s (%s)", len(lines), item.id, item.costing_status)

    return jsonify(_menu_item_body(item, inventory, _catalog().list(restaurant_id)))


@api.route('/menu/<int:id>/recalculate-costing', methods=['POST'])
def menu_recalculate_costing(id):
    restaurant_id = _restaurant_id(request.get_json(silent=True))
    item = _menu_item(id, restaurant_id)
    if item is None:
        return jsonify({'error': 'Menu item not found'}), 404

    inventory = _ingredient_store(restaurant_id).list()
    lines = [row.to_line() for row in item.ingredients]
    item.costing_status = costing_status(lines, inventory, current_app.config['ZERO_COST_ALLOWED'])
    db.session.commit()

    has_recipe = any(not line.is_placeholder for line in lines)
    return jsonify({
        'costingStatus': item.costing_status,
        'hasRecipe': has_recipe,
        'hasCosting': has_recipe and item.costing_status == COSTING_COMPLETE,
    })


# ============================================
# ERROR HANDLERS
# ============================================

@api.errorhandler(ValidationError)
def handle_validation_error(e):
    body = {'error': e.message}
    if e.field:
        body['field'] = e.field
    duplicates = getattr(e, 'ingredient_ids', None)
    if duplicates:
        body['duplicateIngredientIds'] = duplicates
    return jsonify(body), 400


@api.errorhandler(CatalogError)
def handle_catalog_error(e):
    return jsonify({'error': str(e)}), 502


@api.errorhandler(StoreError)
def handle_store_error(e):
    logger.warning("Ingredient store error: %s", e)
    status = 404 if 'not found' in str(e) else 500
    return jsonify({'error': str(e)}), status


# ============================================
# APPLICATION FACTORY
# ============================================

def create_app(env=None):
    app = Flask(__name__)
    app.config.from_object(get_config(env))
    configure_logging(app.config['LOG_LEVEL'])

    db.init_app(app)
    migrate.init_app(app, db)

    app.extensions['conversion_rules'] = ConversionRules.from_mapping(app.config['CONVERSION_KEYWORDS'])
    if app.config['SUPPLIER_CATALOG_URL']:
        app.extensions['supplier_catalog'] = HttpSupplierCatalog(
            app.config['SUPPLIER_CATALOG_URL'],
            timeout=app.config['SUPPLIER_CATALOG_TIMEOUT'],
            retries=app.config['SUPPLIER_CATALOG_RETRIES'],
            default_currency=app.config['DEFAULT_CURRENCY'],
        )
    else:
        app.extensions['supplier_catalog'] = SqlSupplierCatalog(
            SupplierProduct, RestaurantSupplierLink, app.config['DEFAULT_CURRENCY'])

    app.register_blueprint(api)
    return app


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(app):
    with app.app_context():
        # Enable SQLite foreign key enforcement
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()


if __name__ == '__main__':
    app = create_app()
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)

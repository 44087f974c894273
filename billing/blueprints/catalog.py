"""Catalog blueprint: products, categories, stock levels and movements."""
from flask import Blueprint, request, jsonify, current_app
from billing.database import get_session
from billing.exceptions import InvalidRequestError
from billing.services import catalog_service, inventory_service

catalog_bp = Blueprint('catalog', __name__, url_prefix='/api')


@catalog_bp.route('/products', methods=['GET'])
def list_products():
    """Active products with their stock status."""
    db_session = get_session()
    category_id = request.args.get('category_id', type=int)
    products = catalog_service.list_products(db_session, category_id=category_id)
    return jsonify([p.to_dict() for p in products])


@catalog_bp.route('/products/search', methods=['GET'])
def search_products():
    """Search active products by name fragment or exact barcode."""
    db_session = get_session()
    products = catalog_service.search_products(db_session, request.args.get('q', ''))
    return jsonify([p.to_dict() for p in products])


@catalog_bp.route('/products/<int:product_id>/stock', methods=['PUT'])
def update_stock(product_id: int):
    """
    Set a product's stock level.

    Body: {stock_quantity: int >= 0, employee_id?, notes?}
    The change is audited as an ADJUST inventory movement.
    """
    db_session = get_session()
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidRequestError('Request body must be a JSON object')

    product = catalog_service.set_stock(
        db_session,
        product_id,
        payload.get('stock_quantity'),
        employee_id=payload.get('employee_id'),
        notes=payload.get('notes')
    )

    current_app.logger.info(f"Stock updated for product {product_id}: {product.stock_quantity}")
    return jsonify({
        'success': True,
        'message': 'Stock updated successfully',
        'product': product.to_dict()
    })


@catalog_bp.route('/products/<int:product_id>/movements', methods=['GET'])
def product_movements(product_id: int):
    """Inventory movements for a product, most recent first."""
    db_session = get_session()
    catalog_service.get_product(db_session, product_id)
    limit = request.args.get('limit', 50, type=int)
    movements = inventory_service.list_movements(db_session, product_id=product_id, limit=limit)
    return jsonify([m.to_dict() for m in movements])


@catalog_bp.route('/categories', methods=['GET'])
def list_categories():
    db_session = get_session()
    return jsonify([c.to_dict() for c in catalog_service.list_categories(db_session)])


@catalog_bp.route('/customers', methods=['GET'])
def list_customers():
    db_session = get_session()
    return jsonify([c.to_dict() for c in catalog_service.list_customers(db_session)])


@catalog_bp.route('/inventory/low-stock', methods=['GET'])
def low_stock():
    """Products at or below their minimum stock level."""
    db_session = get_session()
    products = catalog_service.get_low_stock_products(db_session)
    return jsonify([p.to_dict() for p in products])

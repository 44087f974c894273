"""Sales blueprint: checkout (bill creation) and order lookup."""
from flask import Blueprint, request, jsonify, current_app
from billing.database import get_session
from billing.exceptions import BillingError, InvalidRequestError
from billing.services import order_ledger_service
from billing.services.checkout_service import CheckoutRequest, CheckoutSettings, checkout
from billing.blueprints.metrics import observe_checkout
import time

sales_bp = Blueprint('sales', __name__, url_prefix='/api')


def _receipt(order) -> dict:
    return {
        'bill': order.to_dict(),
        'items': [line.to_dict() for line in order.lines],
    }


@sales_bp.route('/bills', methods=['POST'])
@sales_bp.route('/orders', methods=['POST'])
def create_bill():
    """
    Checkout: convert a cart into a committed order.

    Body: {customer_id?, employee_id, payment_method, discount?,
           items: [{product_id, quantity}]}
    """
    db_session = get_session()
    started_at = time.time()

    try:
        payload = request.get_json(silent=True)
        checkout_request = CheckoutRequest.from_payload(payload)
        settings = CheckoutSettings.from_config(current_app.config)

        order = checkout(db_session, checkout_request, settings)

    except BillingError as e:
        observe_checkout(e.error, started_at)
        raise
    except Exception:
        observe_checkout('InternalError', started_at)
        raise

    observe_checkout('completed', started_at, units=sum(line.quantity for line in order.lines))
    current_app.logger.info(
        f"Bill {order.order_number} created: final_amount={order.final_amount} "
        f"employee={order.employee_id} lines={len(order.lines)}"
    )

    body = _receipt(order)
    body['message'] = 'Bill created successfully'
    return jsonify(body), 201


@sales_bp.route('/orders', methods=['GET'])
def list_orders():
    """Most recent completed orders."""
    db_session = get_session()

    limit = request.args.get('limit', type=int) or current_app.config.get('RECENT_ORDERS_LIMIT', 10)
    if limit <= 0 or limit > 500:
        raise InvalidRequestError('limit must be between 1 and 500')

    orders = order_ledger_service.list_orders(db_session, limit=limit)
    return jsonify([order.to_dict() for order in orders])


@sales_bp.route('/orders/<int:order_id>', methods=['GET'])
def order_detail(order_id: int):
    """Order header with its lines."""
    db_session = get_session()
    order = order_ledger_service.get_order(db_session, order_id)
    return jsonify(_receipt(order))

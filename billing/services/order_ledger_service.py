"""
Order ledger: order headers, order lines and their derived totals.

Writes here only flush; the checkout engine owns commit and rollback.
"""
import logging
import secrets
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import joinedload, selectinload

from billing.exceptions import NotFoundError
from billing.models import Order, OrderLine, OrderStatus, PaymentMethod
from billing.services.pricing import OrderTotals, line_subtotal, totals_from_lines
from billing.utils.number_utils import to_db_id
from billing.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


def generate_order_number(prefix: str = 'ORD') -> str:
    """
    Human-legible order number: PREFIX-<UTC timestamp to the microsecond>-<random hex>.

    The random suffix keeps numbers unique when two checkouts land in the
    same microsecond; the unique constraint on orders.order_number is the
    final guard.
    """
    return f"{prefix}-{utc_now():%Y%m%d%H%M%S%f}-{secrets.token_hex(3).upper()}"


def create_order(
    session,
    order_number: str,
    employee_id: int,
    payment_method: PaymentMethod,
    totals_strategy: str,
    customer_id: int = None,
    totals: Optional[OrderTotals] = None
) -> Order:
    """
    Insert an order header.

    When totals is None the header starts with zero placeholders, to be
    filled in by recompute_totals().
    """
    zero = Decimal('0.00')
    order = Order(
        order_number=order_number,
        customer_id=customer_id,
        employee_id=employee_id,
        payment_method=payment_method,
        status=OrderStatus.COMPLETED,
        totals_strategy=totals_strategy,
        total_amount=totals.total_amount if totals else zero,
        discount_amount=totals.discount_amount if totals else zero,
        tax_amount=totals.tax_amount if totals else zero,
        final_amount=totals.final_amount if totals else zero,
        order_date=utc_now()
    )
    session.add(order)
    session.flush()
    return order


def add_line(session, order: Order, product_id: int, quantity: int, unit_price: Decimal) -> OrderLine:
    """Insert an order line; its subtotal is quantity x unit_price rounded to cents."""
    line = OrderLine(
        order_id=order.id,
        product_id=product_id,
        quantity=quantity,
        unit_price=unit_price,
        subtotal=line_subtotal(unit_price, quantity)
    )
    session.add(line)
    session.flush()
    return line


def recompute_totals(session, order_id: int, tax_rate) -> OrderTotals:
    """
    Re-derive an order's totals from its persisted lines.

    total = sum(line.subtotal); tax = total * tax_rate; final = total + tax.
    There is no discount term. The result depends only on the lines currently
    stored, so calling this any number of times yields the same header.
    """
    session.flush()

    order = session.query(Order).filter(Order.id == order_id).one_or_none()
    if order is None:
        raise NotFoundError(f'Order {order_id} not found')

    subtotals = [
        row.subtotal for row in
        session.query(OrderLine.subtotal).filter(OrderLine.order_id == order_id).all()
    ]
    totals = totals_from_lines(subtotals, tax_rate)

    order.total_amount = totals.total_amount
    order.discount_amount = totals.discount_amount
    order.tax_amount = totals.tax_amount
    order.final_amount = totals.final_amount
    session.flush()

    return totals


def get_order(session, order_id) -> Order:
    """
    Load an order with its lines, customer and employee, straight from the
    database (populate_existing overrides any stale identity-map state).

    Raises:
        NotFoundError: If the order does not exist
    """
    if to_db_id(order_id) is None:
        raise NotFoundError(f'Order {order_id} not found', payload={'order_id': order_id})

    order = (
        session.query(Order)
        .options(
            selectinload(Order.lines).joinedload(OrderLine.product),
            joinedload(Order.customer),
            joinedload(Order.employee)
        )
        .filter(Order.id == order_id)
        .populate_existing()
        .one_or_none()
    )
    if order is None:
        raise NotFoundError(f'Order {order_id} not found', payload={'order_id': order_id})
    return order


def get_order_by_number(session, order_number: str) -> Order:
    order = session.query(Order.id).filter(Order.order_number == order_number).first()
    if order is None:
        raise NotFoundError(f'Order {order_number} not found', payload={'order_number': order_number})
    return get_order(session, order.id)


def list_orders(session, limit: int = 10, status: OrderStatus = OrderStatus.COMPLETED) -> List[Order]:
    """Most recent orders first."""
    return (
        session.query(Order)
        .options(joinedload(Order.customer), joinedload(Order.employee))
        .filter(Order.status == status)
        .order_by(Order.order_date.desc(), Order.id.desc())
        .limit(limit)
        .all()
    )

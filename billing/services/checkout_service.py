"""
Checkout engine with transactional logic.

Turns a cart into a persisted order, order lines, stock decrements and
inventory movements as a single unit of work: either everything commits and
the persisted receipt is returned, or the session is rolled back and a
BillingError is raised.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from billing.exceptions import (
    BillingError, InsufficientStockError, InvalidRequestError,
    ProductNotFoundError, TransactionFailure
)
from billing.models import Customer, MovementDirection, Order, PaymentMethod, normalize_payment_method
from billing.services import catalog_service, employee_service, inventory_service, order_ledger_service
from billing.services.pricing import ZERO, compute_totals, line_subtotal, parse_discount, to_money
from billing.utils.number_utils import to_db_id, to_positive_int

logger = logging.getLogger(__name__)

DISCOUNT_AWARE = 'discount-aware'
TRIGGER_EQUIVALENT = 'trigger-equivalent'
STRATEGIES = (DISCOUNT_AWARE, TRIGGER_EQUIVALENT)


@dataclass(frozen=True)
class CheckoutSettings:
    """Per-deployment checkout configuration."""
    tax_rate: Decimal
    strategy: str = DISCOUNT_AWARE
    order_number_prefix: str = 'ORD'

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown checkout strategy: {self.strategy}. Must be one of: {', '.join(STRATEGIES)}")

    @classmethod
    def from_config(cls, config) -> 'CheckoutSettings':
        return cls(
            tax_rate=Decimal(str(config['TAX_RATE'])),
            strategy=config.get('CHECKOUT_STRATEGY', DISCOUNT_AWARE),
            order_number_prefix=config.get('ORDER_NUMBER_PREFIX', 'ORD')
        )


@dataclass
class CartLine:
    """A requested cart line. Never persisted; any client price is ignored."""
    product_id: Any
    quantity: Any


@dataclass
class CheckoutRequest:
    employee_id: Optional[int]
    items: List[CartLine]
    customer_id: Optional[int] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    discount: Decimal = ZERO

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'CheckoutRequest':
        """
        Build a request from a decoded JSON body.

        Raises:
            InvalidRequestError: If employee_id or items are missing, or a
                field has the wrong shape
        """
        if not isinstance(payload, dict):
            raise InvalidRequestError('Request body must be a JSON object')

        employee_id = _parse_id(payload.get('employee_id'), 'employee_id')
        items = payload.get('items')
        if employee_id is None or not isinstance(items, list) or not items:
            raise InvalidRequestError('Missing required bill information (employee_id, items).')

        lines = []
        for item in items:
            if not isinstance(item, dict):
                raise InvalidRequestError('Each item must be an object with product_id and quantity')
            lines.append(CartLine(product_id=item.get('product_id'), quantity=item.get('quantity')))

        try:
            payment_method = normalize_payment_method(payload.get('payment_method'))
        except ValueError as e:
            raise InvalidRequestError(str(e))

        return cls(
            employee_id=employee_id,
            items=lines,
            customer_id=_parse_id(payload.get('customer_id'), 'customer_id'),
            payment_method=payment_method,
            discount=parse_discount(payload.get('discount'))
        )


@dataclass
class _StagedLine:
    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal = field(init=False)

    def __post_init__(self):
        self.subtotal = line_subtotal(self.unit_price, self.quantity)


def coerce_quantity(value) -> Optional[int]:
    """
    Coerce a requested quantity to a positive integer.

    Numeric strings are accepted and fractional values are truncated
    ('3' -> 3, 2.7 -> 2). Returns None for anything non-numeric,
    non-positive or beyond the INTEGER column range; such lines are skipped
    rather than rejected.
    """
    return to_positive_int(value)


def checkout(session, request: CheckoutRequest, settings: CheckoutSettings) -> Order:
    """
    Confirm a cart as a single atomic transaction.

    Args:
        session: Database session; its transaction scopes every write
        request: Parsed checkout request
        settings: Tax rate, totals strategy and order number prefix

    Returns:
        The committed Order, re-read from the ledger with its lines loaded

    Raises:
        InvalidRequestError: Missing employee/items, unknown employee or
            customer, or no line with a valid quantity
        ProductNotFoundError: A cart line names an unknown or inactive product
        InsufficientStockError: A line asks for more than is in stock
        TransactionFailure: The store rejected a write; nothing was committed
    """
    if not request.employee_id or not request.items:
        raise InvalidRequestError('Missing required bill information (employee_id, items).')

    try:
        customer_id = _resolve_customer_id(session, request.customer_id)
        employee_service.require_active_employee(session, request.employee_id)

        # 1. Lock and validate every line before writing anything
        staged = _stage_lines(session, request.items)
        if not staged:
            raise InvalidRequestError('No items with a valid quantity in the cart')

        # 2. Order header
        order_number = order_ledger_service.generate_order_number(settings.order_number_prefix)
        if settings.strategy == DISCOUNT_AWARE:
            subtotal = sum((line.subtotal for line in staged), ZERO)
            totals = compute_totals(subtotal, settings.tax_rate, request.discount)
        else:
            if request.discount > 0:
                logger.info(f"Discount {request.discount} ignored by {TRIGGER_EQUIVALENT} strategy")
            totals = None

        order = order_ledger_service.create_order(
            session,
            order_number=order_number,
            employee_id=request.employee_id,
            payment_method=request.payment_method,
            totals_strategy=settings.strategy,
            customer_id=customer_id,
            totals=totals
        )

        # 3. Lines, stock decrements and audit entries
        for line in staged:
            order_ledger_service.add_line(session, order, line.product_id, line.quantity, line.unit_price)
            if settings.strategy == TRIGGER_EQUIVALENT:
                order_ledger_service.recompute_totals(session, order.id, settings.tax_rate)

            catalog_service.decrement_stock(session, line.product_id, line.quantity)
            inventory_service.record(
                session,
                product_id=line.product_id,
                direction=MovementDirection.OUT,
                quantity=line.quantity,
                employee_id=request.employee_id,
                notes=f'Sale via Order {order_number}'
            )

        session.commit()
        logger.info(f"Order {order_number} committed with {len(staged)} line(s)")

    except BillingError as e:
        session.rollback()
        logger.warning(f"Checkout rolled back ({e.error}): {e.message}")
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Checkout rolled back after database error: {e}")
        raise TransactionFailure(f'Failed to create bill: {e.__class__.__name__}')
    except Exception:
        session.rollback()
        logger.exception("Checkout rolled back after unexpected error")
        raise

    return order_ledger_service.get_order(session, order.id)


# =====================================================
# PRIVATE HELPERS
# =====================================================

def _parse_id(value, field_name: str) -> Optional[int]:
    if value is None or value == '':
        return None
    parsed = to_db_id(value)
    if parsed is None:
        raise InvalidRequestError(f'Invalid {field_name}', payload={field_name: value})
    return parsed


def _resolve_customer_id(session, customer_id: Optional[int]) -> Optional[int]:
    """Validate the requested customer, falling back to the walk-in customer."""
    if customer_id is None:
        default_customer = catalog_service.get_default_customer(session)
        return default_customer.id if default_customer else None

    if session.query(Customer.id).filter(Customer.id == customer_id).first() is None:
        raise InvalidRequestError(f'Customer with ID {customer_id} not found.', payload={'customer_id': customer_id})
    return customer_id


def _stage_lines(session, items: List[CartLine]) -> List[_StagedLine]:
    """
    Validate cart lines in input order against locked product rows.

    Requests for the same product on several lines are checked
    cumulatively, so the reported availability is what is left after the
    earlier lines.
    """
    products = catalog_service.lock_products(session, [item.product_id for item in items])
    staged = []
    reserved: Dict[int, int] = {}

    for item in items:
        product = products.get(catalog_service.normalize_product_id(item.product_id))
        if product is None:
            raise ProductNotFoundError(item.product_id)

        quantity = coerce_quantity(item.quantity)
        if quantity is None:
            logger.debug(f"Skipping cart line for product {product.id}: invalid quantity {item.quantity!r}")
            continue

        available = product.stock_quantity - reserved.get(product.id, 0)
        if quantity > available:
            raise InsufficientStockError(product.id, available, quantity, product_name=product.name)

        reserved[product.id] = reserved.get(product.id, 0) + quantity
        staged.append(_StagedLine(product_id=product.id, quantity=quantity, unit_price=to_money(product.price)))

    return staged

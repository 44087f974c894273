"""
Inventory audit log: append-only record of stock movements.
"""
import logging
from typing import List

from billing.exceptions import InvalidRequestError
from billing.models import InventoryMovement, MovementDirection

logger = logging.getLogger(__name__)


def record(
    session,
    product_id: int,
    direction: MovementDirection,
    quantity: int,
    employee_id: int = None,
    notes: str = None
) -> InventoryMovement:
    """
    Append a stock movement to the audit log.

    Args:
        session: Database session
        product_id: Product whose stock moved
        direction: MovementDirection (IN, OUT or ADJUST)
        quantity: Units moved, always positive
        employee_id: Operator responsible for the movement
        notes: Free text, e.g. the order number for checkout movements

    Note: Caller is responsible for committing the session.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidRequestError('Movement quantity must be a positive integer')

    if not isinstance(direction, MovementDirection):
        direction = MovementDirection(direction)

    movement = InventoryMovement(
        product_id=product_id,
        direction=direction,
        quantity=quantity,
        employee_id=employee_id,
        notes=notes
    )
    session.add(movement)

    logger.debug(f"Inventory movement {direction.value} x{quantity} for product {product_id}")
    return movement


def list_movements(session, product_id: int = None, limit: int = 50) -> List[InventoryMovement]:
    """Most recent movements first, optionally for a single product."""
    query = session.query(InventoryMovement)
    if product_id is not None:
        query = query.filter(InventoryMovement.product_id == product_id)
    return query.order_by(InventoryMovement.id.desc()).limit(limit).all()

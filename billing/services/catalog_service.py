"""
Catalog service: product lookup, row locking and stock mutation.

Every function takes the caller's session and joins its transaction. Only
set_stock() commits, because it is a complete unit of work on its own.
"""
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import or_, update
from sqlalchemy.orm import joinedload

from billing.exceptions import InsufficientStockError, InvalidRequestError, ProductNotFoundError
from billing.models import Category, Customer, Product, MovementDirection
from billing.services import employee_service, inventory_service
from billing.utils.number_utils import INTEGER_MAX, to_db_id

logger = logging.getLogger(__name__)


def normalize_product_id(product_id) -> Optional[int]:
    """Return product_id as an int, or None when it cannot name a product row."""
    return to_db_id(product_id)


def get_product(session, product_id, lock: bool = False) -> Product:
    """
    Get an active product by id.

    Args:
        session: Database session
        product_id: Product id (int or numeric string)
        lock: Take a row lock (SELECT ... FOR UPDATE) held until the
            enclosing transaction ends

    Raises:
        ProductNotFoundError: If the product does not exist or is inactive
    """
    pid = normalize_product_id(product_id)
    if pid is None:
        raise ProductNotFoundError(product_id)

    query = session.query(Product).filter(Product.id == pid, Product.active == True)
    if lock:
        query = query.with_for_update().populate_existing()

    product = query.one_or_none()
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


def lock_products(session, product_ids: Iterable) -> Dict[int, Product]:
    """
    Lock the active product rows for the given ids FOR UPDATE.

    Rows are locked in ascending id order so that two carts listing the same
    products in different orders cannot deadlock. Ids that are missing,
    inactive or not numeric are simply absent from the result.
    """
    ids = sorted({pid for pid in (normalize_product_id(p) for p in product_ids) if pid is not None})
    if not ids:
        return {}

    products = (
        session.query(Product)
        .filter(Product.id.in_(ids), Product.active == True)
        .order_by(Product.id)
        .with_for_update()
        .populate_existing()
        .all()
    )
    return {p.id: p for p in products}


def decrement_stock(session, product_id: int, quantity: int) -> None:
    """
    Decrement stock with a conditional UPDATE.

    The WHERE clause re-checks availability at write time, so stock can never
    go below zero even if a concurrent checkout committed after our read.

    Raises:
        ProductNotFoundError: If the product row vanished
        InsufficientStockError: If fewer than quantity units remain
    """
    result = session.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock_quantity >= quantity)
        .values(stock_quantity=Product.stock_quantity - quantity)
        .execution_options(synchronize_session='evaluate')
    )

    if result.rowcount == 1:
        return

    available = session.query(Product.stock_quantity).filter(Product.id == product_id).scalar()
    if available is None:
        raise ProductNotFoundError(product_id)

    logger.warning(
        f"Stock race on product {product_id}: requested {quantity}, available {available}"
    )
    raise InsufficientStockError(product_id, available, quantity)


def set_stock(session, product_id, new_quantity, employee_id: int = None, notes: str = None) -> Product:
    """
    Manually set a product's stock level and audit the change as ADJUST.

    Raises:
        InvalidRequestError: If new_quantity is not an integer in
            0..INTEGER_MAX, or employee_id names no active employee
        ProductNotFoundError: If the product does not exist
    """
    if isinstance(new_quantity, bool) or not isinstance(new_quantity, int):
        raise InvalidRequestError('Invalid stock quantity', payload={'stock_quantity': new_quantity})
    if new_quantity < 0 or new_quantity > INTEGER_MAX:
        raise InvalidRequestError('Invalid stock quantity', payload={'stock_quantity': new_quantity})

    try:
        employee_id = employee_service.resolve_optional_employee(session, employee_id)
        product = get_product(session, product_id, lock=True)
        previous = product.stock_quantity
        delta = new_quantity - previous

        if delta != 0:
            product.stock_quantity = new_quantity
            inventory_service.record(
                session,
                product_id=product.id,
                direction=MovementDirection.ADJUST,
                quantity=abs(delta),
                employee_id=employee_id,
                notes=notes or f'Manual stock adjustment: {previous} -> {new_quantity}'
            )

        session.commit()
        logger.info(f"Stock for product {product.id} set from {previous} to {new_quantity}")
        return product

    except Exception:
        session.rollback()
        raise


def list_products(session, category_id=None) -> List[Product]:
    """Active products ordered by name, optionally filtered by category."""
    query = session.query(Product).options(joinedload(Product.category)).filter(Product.active == True)
    if category_id is not None:
        query = query.filter(Product.category_id == category_id)
    return query.order_by(Product.name).all()


def search_products(session, q: str) -> List[Product]:
    """Active products whose name contains q or whose barcode equals q."""
    q = (q or '').strip()
    if not q:
        raise InvalidRequestError('Search query parameter "q" is required')

    return (
        session.query(Product)
        .options(joinedload(Product.category))
        .filter(
            Product.active == True,
            or_(Product.name.ilike(f'%{q}%'), Product.barcode == q)
        )
        .order_by(Product.name)
        .all()
    )


def get_low_stock_products(session) -> List[Product]:
    """Active products at or below their minimum stock level, emptiest first."""
    return (
        session.query(Product)
        .options(joinedload(Product.category))
        .filter(
            Product.active == True,
            Product.stock_quantity <= Product.min_stock_level
        )
        .order_by(Product.stock_quantity.asc(), Product.name)
        .all()
    )


def list_categories(session) -> List[Category]:
    return session.query(Category).order_by(Category.name).all()


def list_customers(session) -> List[Customer]:
    return session.query(Customer).order_by(Customer.id).all()


def get_default_customer(session) -> Optional[Customer]:
    """The walk-in customer, if one has been seeded."""
    return (
        session.query(Customer)
        .filter(Customer.is_default == True)
        .order_by(Customer.id)
        .first()
    )

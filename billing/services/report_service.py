"""
Reporting service.
Provides aggregated sales figures for the summary and dashboard endpoints.
"""
from decimal import Decimal
from sqlalchemy import func

from billing.exceptions import InvalidRequestError
from billing.models import Order, OrderStatus, Product
from billing.services.pricing import to_money
from billing.utils.time_utils import period_start, utc_now

PERIODS = ('today', 'week', 'month')


def _money_str(value) -> str:
    return str(to_money(Decimal(str(value or 0))))


def get_sales_summary(session, period: str = 'today', now=None) -> dict:
    """
    Aggregate completed orders since the start of a period.

    Args:
        session: SQLAlchemy session
        period: 'today', 'week' (rolling 7 days) or 'month' (rolling 30 days)
        now: Reference time, defaults to the current UTC time

    Returns:
        dict with keys:
            - total_orders: int
            - total_sales: str (2 decimals)
            - average_order_value: str (2 decimals)
            - total_tax: str (2 decimals)
    """
    if period not in PERIODS:
        raise InvalidRequestError(f'Invalid period: {period}. Must be one of: {", ".join(PERIODS)}')

    start = period_start(period, now or utc_now())

    row = session.query(
        func.count(Order.id).label('total_orders'),
        func.coalesce(func.sum(Order.final_amount), 0).label('total_sales'),
        func.coalesce(func.sum(Order.tax_amount), 0).label('total_tax')
    ).filter(
        Order.status == OrderStatus.COMPLETED,
        Order.order_date >= start
    ).first()

    total_orders = int(row.total_orders or 0)
    total_sales = to_money(Decimal(str(row.total_sales or 0)))
    average = total_sales / total_orders if total_orders else Decimal('0')

    return {
        'period': period,
        'total_orders': total_orders,
        'total_sales': _money_str(total_sales),
        'average_order_value': _money_str(average),
        'total_tax': _money_str(row.total_tax),
    }


def get_dashboard_stats(session, now=None) -> dict:
    """Today's sales and order count, active product count and low-stock count."""
    today = get_sales_summary(session, 'today', now=now)

    total_products = session.query(func.count(Product.id)).filter(
        Product.active == True
    ).scalar() or 0

    low_stock_count = session.query(func.count(Product.id)).filter(
        Product.active == True,
        Product.stock_quantity <= Product.min_stock_level
    ).scalar() or 0

    return {
        'today_sales': today['total_sales'],
        'today_orders': today['total_orders'],
        'total_products': total_products,
        'low_stock_count': low_stock_count,
    }

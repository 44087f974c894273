"""
Unit tests for sales reporting.
"""

import pytest
from datetime import timedelta
from decimal import Decimal

from billing.exceptions import InvalidRequestError
from billing.models import Order, OrderStatus, PaymentMethod
from billing.services.checkout_service import CartLine, CheckoutRequest, checkout
from billing.services.report_service import get_dashboard_stats, get_sales_summary
from billing.utils.time_utils import utc_now


@pytest.fixture
def two_sales(session, settings, cashier, milk, bread):
    for items in ([(milk.id, 2), (bread.id, 1)], [(bread.id, 1)]):
        checkout(session, CheckoutRequest(
            employee_id=cashier.id,
            items=[CartLine(pid, qty) for pid, qty in items]
        ), settings)


def add_old_order(session, employee, days_ago, final_amount='10.00'):
    session.add(Order(
        order_number=f'ORD-OLD-{days_ago}',
        employee_id=employee.id,
        payment_method=PaymentMethod.CASH,
        totals_strategy='discount-aware',
        total_amount=Decimal(final_amount),
        final_amount=Decimal(final_amount),
        order_date=utc_now() - timedelta(days=days_ago)
    ))
    session.commit()


class TestSalesSummary:

    def test_empty(self, session):
        assert get_sales_summary(session) == {
            'period': 'today',
            'total_orders': 0,
            'total_sales': '0.00',
            'average_order_value': '0.00',
            'total_tax': '0.00',
        }

    def test_today(self, session, two_sales):
        summary = get_sales_summary(session, 'today')

        # 14.01 + 3.23 (2.99 + 0.24 tax)
        assert summary['total_orders'] == 2
        assert summary['total_sales'] == '17.24'
        assert summary['average_order_value'] == '8.62'
        assert summary['total_tax'] == '1.28'

    def test_rolling_windows(self, session, cashier, two_sales):
        add_old_order(session, cashier, days_ago=10)
        add_old_order(session, cashier, days_ago=45)

        assert get_sales_summary(session, 'week')['total_orders'] == 2
        assert get_sales_summary(session, 'month')['total_orders'] == 3
        assert get_sales_summary(session, 'month')['total_sales'] == '27.24'

    def test_cancelled_orders_excluded(self, session, two_sales):
        session.query(Order).first().status = OrderStatus.CANCELLED
        session.commit()

        assert get_sales_summary(session)['total_orders'] == 1

    def test_invalid_period(self, session):
        with pytest.raises(InvalidRequestError):
            get_sales_summary(session, 'year')


class TestDashboardStats:

    def test_stats(self, session, two_sales, bread):
        bread.stock_quantity = 2
        session.commit()

        stats = get_dashboard_stats(session)
        assert stats == {
            'today_sales': '17.24',
            'today_orders': 2,
            'total_products': 2,
            'low_stock_count': 1,
        }

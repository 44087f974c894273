"""
Dashboard blueprint.
Sales summary and headline statistics for the back office.
"""
from flask import Blueprint, request, jsonify
from billing.database import get_session
from billing.services.report_service import get_sales_summary, get_dashboard_stats

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api')


@dashboard_bp.route('/sales/summary', methods=['GET'])
def sales_summary():
    """Completed-order totals for ?period=today|week|month (default today)."""
    db_session = get_session()
    period = request.args.get('period', 'today')
    return jsonify(get_sales_summary(db_session, period))


@dashboard_bp.route('/dashboard/stats', methods=['GET'])
def stats():
    """
    Dashboard headline numbers:
    - Today's sales and order count
    - Active products
    - Products low on stock
    """
    db_session = get_session()
    return jsonify(get_dashboard_stats(db_session))

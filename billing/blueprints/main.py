"""Main blueprint: liveness and database health."""
from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from billing.database import get_session, ping

main_bp = Blueprint('main', __name__, url_prefix='/api')


@main_bp.route('/health')
def health():
    """
    Report whether the API can reach its database.

    Returns:
        200: {'status': 'ok', 'database': 'connected', ...}
        503: Database unreachable
    """
    try:
        connected = ping(get_session())
    except SQLAlchemyError as e:
        current_app.logger.error(f"Health check failed: {e}")
        connected = False

    if not connected:
        return jsonify({
            'status': 'unhealthy',
            'database': 'disconnected',
            'message': 'Failed to connect to database'
        }), 503

    return jsonify({
        'status': 'ok',
        'database': 'connected',
        'checkout_strategy': current_app.config.get('CHECKOUT_STRATEGY'),
        'message': 'API is running'
    })

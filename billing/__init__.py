"""Flask application factory."""
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from billing.database import init_db
import logging
import os


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Fail fast on a misconfigured checkout strategy or tax rate
    from billing.services.checkout_service import CheckoutSettings
    CheckoutSettings.from_config(app.config)

    log_level = app.config.get('LOG_LEVEL', 'INFO')
    app.logger.setLevel(log_level)
    logging.getLogger('billing').setLevel(log_level)

    # Initialize Sentry for error tracking in production
    sentry_dsn = app.config.get('SENTRY_DSN') or os.getenv('SENTRY_DSN')
    if sentry_dsn and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            environment=app.config.get('ENV', 'production'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Setup Prometheus metrics instrumentation
    from billing.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Production: Enable ProxyFix for HTTPS behind Nginx reverse proxy
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=0)

    # Initialize database
    init_db(app)

    # Error Handlers
    from billing.exceptions import BillingError

    @app.errorhandler(BillingError)
    def handle_billing_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"{error.error} [{error.status_code}]: {error.message}")
        else:
            app.logger.warning(f"{error.error} [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'status': 'error', 'error': 'NotFound', 'message': 'Route not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'status': 'error', 'error': 'MethodNotAllowed', 'message': 'Method not allowed'}), 405

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'status': 'error', 'error': error.name, 'message': error.description}), error.code

        app.logger.exception(f"Unhandled Exception: {error}")
        return jsonify({'status': 'error', 'error': 'InternalError', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from billing.blueprints.main import main_bp
    from billing.blueprints.catalog import catalog_bp
    from billing.blueprints.sales import sales_bp
    from billing.blueprints.dashboard import dashboard_bp
    from billing.blueprints.metrics import metrics_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(sales_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(metrics_bp)

    # Register CLI commands
    from billing.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(
        f"Billing app ready: strategy={app.config.get('CHECKOUT_STRATEGY')} "
        f"tax_rate={app.config.get('TAX_RATE')}"
    )

    return app

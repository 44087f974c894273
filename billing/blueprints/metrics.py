"""
Prometheus metrics blueprint.

Exposes /metrics with request metrics and checkout counters.
Restrict it to the internal network or the monitoring system.
"""
from flask import Blueprint, Response, request, g
from prometheus_client import Counter, Histogram, Gauge, generate_latest, CollectorRegistry, CONTENT_TYPE_LATEST
from prometheus_client import multiprocess, REGISTRY
import time
import os

metrics_bp = Blueprint('metrics', __name__)

# Gunicorn workers share metrics through PROMETHEUS_MULTIPROC_DIR
MULTIPROCESS_MODE = os.environ.get('PROMETHEUS_MULTIPROC_DIR') is not None
_registry = None if MULTIPROCESS_MODE else REGISTRY

SKIPPED_ENDPOINTS = {'metrics.metrics', 'static'}

http_requests_total = Counter(
    'billing_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'http_status'],
    registry=_registry
)

http_request_duration_seconds = Histogram(
    'billing_http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint'],
    registry=_registry,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)
)

http_requests_in_flight = Gauge(
    'billing_http_requests_in_flight',
    'Requests currently being processed',
    registry=_registry
)

# outcome is 'completed' or the error kind (InsufficientStock, ProductNotFound, ...)
checkout_total = Counter(
    'billing_checkout_total',
    'Checkout attempts by outcome',
    ['outcome'],
    registry=_registry
)

checkout_duration_seconds = Histogram(
    'billing_checkout_duration_seconds',
    'Time spent inside the checkout transaction',
    ['outcome'],
    registry=_registry,
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)
)

units_sold_total = Counter(
    'billing_units_sold_total',
    'Product units sold through committed checkouts',
    registry=_registry
)


def observe_checkout(outcome: str, started_at: float, units: int = 0):
    """Record one checkout attempt."""
    checkout_total.labels(outcome=outcome).inc()
    checkout_duration_seconds.labels(outcome=outcome).observe(time.time() - started_at)
    if units:
        units_sold_total.inc(units)


def setup_metrics_instrumentation(app):
    """Register request hooks that feed the HTTP metrics."""

    @app.before_request
    def start_request_timer():
        g._metrics_started_at = time.time()
        http_requests_in_flight.inc()

    @app.after_request
    def record_request_metrics(response):
        started_at = g.pop('_metrics_started_at', None)
        if started_at is None:
            return response

        http_requests_in_flight.dec()
        endpoint = request.endpoint or 'unknown'
        if endpoint in SKIPPED_ENDPOINTS:
            return response

        try:
            http_request_duration_seconds.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(time.time() - started_at)
            http_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                http_status=response.status_code
            ).inc()
        except Exception as e:
            app.logger.warning(f"Failed to record metrics: {e}")

        return response


@metrics_bp.route('/metrics')
def metrics():
    """Prometheus scrape endpoint."""
    if MULTIPROCESS_MODE:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        data = generate_latest(registry)
    else:
        data = generate_latest(REGISTRY)

    return Response(data, mimetype=CONTENT_TYPE_LATEST)

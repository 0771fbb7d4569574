"""Prometheus metric definitions for the payment order service."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


orders_created_total = Counter("orders_created_total", "Orders issued by the gateway", ["service", "currency"])
order_failures_total = Counter("order_failures_total", "Rejected or failed order requests", ["service", "outcome"])
gateway_latency_seconds = Histogram(
    "gateway_latency_seconds",
    "Latency of outbound gateway calls",
    ["service", "operation"],
)
payment_verifications_total = Counter(
    "payment_verifications_total",
    "Payment verification attempts by outcome",
    ["service", "outcome"],
)
duplicate_verifications_total = Counter(
    "duplicate_verifications_total",
    "Verifications for payment ids already processed",
    ["service"],
)
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")

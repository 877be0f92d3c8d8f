"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
license_keys_issued_total = Counter(
    "license_keys_issued_total",
    "Total license keys issued to users",
    ["key_type"],
)

license_key_validations_total = Counter(
    "license_key_validations_total",
    "Total offline license key validations",
    ["result"],
)

# Payment metrics
payment_webhooks_total = Counter(
    "payment_webhooks_total",
    "Total payment webhook deliveries",
    ["event_type", "outcome"],
)

checkouts_created_total = Counter(
    "checkouts_created_total",
    "Total checkout sessions created",
    ["license_type"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)

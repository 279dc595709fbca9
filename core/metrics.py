"""
Prometheus metrics for the licensing portal.

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

# License request lifecycle
license_requests_created_total = Counter(
    "license_requests_created_total",
    "Total license requests created",
    ["initial_status"],
)

license_request_decisions_total = Counter(
    "license_request_decisions_total",
    "Total admin decisions on license requests",
    ["action"],
)

# Payments
payments_submitted_total = Counter(
    "payments_submitted_total",
    "Total payments submitted",
    ["currency"],
)

payment_decisions_total = Counter(
    "payment_decisions_total",
    "Total admin decisions on payments",
    ["action", "issued_license"],
)

# Licenses
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["source"],
)

licenses_expired_total = Counter(
    "licenses_expired_total",
    "Total licenses marked expired by the expiration sweep",
)

license_key_collisions_total = Counter(
    "license_key_collisions_total",
    "License key collisions resolved by regeneration",
)

account_validations_total = Counter(
    "account_validations_total",
    "Total MT5 account validations",
    ["result"],
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_name"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_name"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)

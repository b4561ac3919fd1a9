"""
Prometheus metrics for the entitlement service.

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
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["status"],
)

license_transitions_total = Counter(
    "license_transitions_total",
    "Total license state transitions",
    ["transition"],
)

license_alerts_total = Counter(
    "license_alerts_total",
    "Expiration alerts by outcome",
    ["outcome"],
)

# Billing metrics
invoices_created_total = Counter(
    "invoices_created_total",
    "Total invoices created",
)

transactions_recorded_total = Counter(
    "transactions_recorded_total",
    "Total transactions recorded",
    ["status"],
)

# Dashboard metrics
dashboard_stat_failures_total = Counter(
    "dashboard_stat_failures_total",
    "Dashboard statistics that failed and fell back to zero",
    ["stat"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)

"""Prometheus metrics for query latency, query failures and sign-in outcomes"""

from prometheus_client import Counter, Histogram

# Query gateway metrics
query_duration_histogram = Histogram(
    "invoice_gateway_query_duration_seconds",
    "Query gateway operation latency",
    ["operation"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

query_failure_counter = Counter(
    "invoice_gateway_query_failures_total",
    "Query gateway operations that raised DataAccessError",
    ["operation"],
)

# Credential verifier metrics
authorize_counter = Counter(
    "invoice_gateway_authorize_total",
    "Credential checks by outcome",
    ["outcome"],  # granted | rejected
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_authorization(granted: bool) -> None:
    """Count a credential check outcome"""
    authorize_counter.labels(outcome="granted" if granted else "rejected").inc()

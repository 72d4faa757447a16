from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        # Try to create it
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "motionbridge_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "motionbridge_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

TASKS_CREATED_TOTAL = get_or_create_metric(
    "motionbridge_tasks_created_total",
    "Motion task creation outcomes",
    Counter,
    labelnames=["status"],
)

WEBHOOK_FORWARDS_TOTAL = get_or_create_metric(
    "motionbridge_webhook_forwards_total",
    "Replies forwarded to Motion webhooks",
    Counter,
    labelnames=["status"],
)

"""Prometheus metrics instrumentation for the friends state core.

Metrics exported:
- friends_operations_total: Counter of mutation operations by name and outcome
- friends_store_latency_seconds: Histogram of durable store call time
- friends_collection_size: Gauge of in-memory collection sizes
- friends_load_failures_total: Counter of swallowed initialization failures

Usage:
    from friendship.services.metrics import operations_total

    operations_total.labels(operation='block_user', status='success').inc()
"""

from prometheus_client import Histogram, Counter, Gauge

# Mutation outcomes
operations_total = Counter(
    'friends_operations_total',
    'Total friends state mutations',
    labelnames=['operation', 'status']  # status: success, error
)

# Durable store latency
store_latency = Histogram(
    'friends_store_latency_seconds',
    'Time spent in durable store calls',
    labelnames=['operation']  # operation: get, set
)

# Collection sizes after each change
collection_size = Gauge(
    'friends_collection_size',
    'Number of records in each in-memory collection',
    labelnames=['collection']  # collection: friends, requests, blocked
)

# Initialization failures that fell back to seed data
load_failures = Counter(
    'friends_load_failures_total',
    'Number of times loading persisted data failed'
)

"""
Prometheus metrics for the reservation path and the spot cache.
Served at /metrics.
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

booking_decisions = Counter(
    'booking_decisions_total',
    'Reservation requests by outcome',
    ['outcome']  # approved, invalid_range, date_conflict, storage_conflict
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Time spent holding the reservation guard',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

booking_read_timeouts = Counter(
    'booking_read_timeouts_total',
    'Existing-booking reads that exceeded the configured timeout'
)

reservation_lock_waits = Counter(
    'reservation_lock_waits_total',
    'Redis reservation lock acquisitions',
    ['result']  # acquired, timeout, fail_open
)

cache_operations = Counter(
    'cache_operations_total',
    'Spot list cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)

redis_circuit_breaker_open = Gauge(
    'redis_circuit_breaker_open',
    'Redis circuit breaker state (1=open, 0=closed)'
)


def metrics_endpoint() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_decision(outcome: str):
    booking_decisions.labels(outcome=outcome).inc()


def record_lock_wait(result: str):
    reservation_lock_waits.labels(result=result).inc()


def record_cache_operation(operation: str, hit: bool):
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()

"""Health classification from success rate and dead-letter queue depth."""

from webhook_health.models.health import HealthStatus

HEALTHY_MIN_RATE = 99.0
DEGRADED_MIN_RATE = 90.0


def classify(success_rate: float | None, dlq_count: int | None) -> HealthStatus:
    """Map (success rate %, DLQ count) to a HealthStatus.

    Any event parked in the DLQ caps the result at DEGRADED, even at 100%.
    None and NaN rates compare false against both floors: UNHEALTHY.
    """
    if success_rate is None:
        return HealthStatus.UNHEALTHY
    if success_rate >= HEALTHY_MIN_RATE and dlq_count == 0:
        return HealthStatus.HEALTHY
    if success_rate >= DEGRADED_MIN_RATE:
        return HealthStatus.DEGRADED
    return HealthStatus.UNHEALTHY

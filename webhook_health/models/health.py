"""Health snapshot models for the EventDock /v1/health response."""

from dataclasses import dataclass, field
from enum import StrEnum


class HealthStatus(StrEnum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class EndpointStat:
    name: str | None = None
    provider: str | None = None
    status: str | None = None  # "active" or anything else
    success_rate: float | None = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"


@dataclass(frozen=True)
class HealthPeriod:
    start: str | None = None  # ISO timestamp
    end: str | None = None


@dataclass(frozen=True)
class HealthSnapshot:
    """Delivery statistics over the reporting window (24h).

    Every field is optional: the payload comes from an external API and is
    not trusted to be complete.
    """

    total_events: int | None = None
    delivered_events: int | None = None
    failed_events: int | None = None
    pending_events: int | None = None
    dlq_count: int | None = None
    success_rate: float | None = None
    endpoints_count: int | None = None
    endpoints: tuple[EndpointStat, ...] = ()
    period: HealthPeriod = field(default_factory=HealthPeriod)

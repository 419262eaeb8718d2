"""Parse the /v1/health JSON body into a HealthSnapshot."""

import logging

from webhook_health.models.health import EndpointStat, HealthPeriod, HealthSnapshot

logger = logging.getLogger(__name__)

_COUNT_FIELDS = (
    "total_events",
    "delivered_events",
    "failed_events",
    "pending_events",
    "dlq_count",
    "endpoints_count",
)


def parse_snapshot(raw: dict) -> HealthSnapshot:
    """Build a HealthSnapshot from a decoded response object.

    Unusable field values become None rather than raising; the renderer
    decides how to display them.
    """
    counts = {name: _as_int(raw.get(name)) for name in _COUNT_FIELDS}

    endpoints: list[EndpointStat] = []
    raw_endpoints = raw.get("endpoints")
    if isinstance(raw_endpoints, list):
        for ep in raw_endpoints:
            if isinstance(ep, dict):
                endpoints.append(_parse_endpoint(ep))
            else:
                logger.debug("Skipping non-object endpoint entry: %r", ep)

    return HealthSnapshot(
        success_rate=_as_float(raw.get("success_rate")),
        endpoints=tuple(endpoints),
        period=_parse_period(raw.get("period")),
        **counts,
    )


def _parse_endpoint(ep: dict) -> EndpointStat:
    return EndpointStat(
        name=_as_str(ep.get("name")),
        provider=_as_str(ep.get("provider")),
        status=_as_str(ep.get("status")),
        success_rate=_as_float(ep.get("success_rate")),
    )


def _parse_period(raw) -> HealthPeriod:
    if not isinstance(raw, dict):
        return HealthPeriod()
    return HealthPeriod(start=_as_str(raw.get("start")), end=_as_str(raw.get("end")))


def _as_int(value) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _as_float(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_str(value) -> str | None:
    if value is None:
        return None
    return str(value)

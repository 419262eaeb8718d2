"""Output formatters for health snapshots."""

import json
import math

from webhook_health.models.health import EndpointStat, HealthSnapshot, HealthStatus
from webhook_health.reporting.classifier import classify

REPORT_TITLE = "EventDock Webhook Health Report"
SUMMARY_HEADING = "EventDock Webhook Health"
ATTRIBUTION = (
    "*Powered by [EventDock](https://eventdock.app) - "
    "Reliable Webhook Infrastructure*"
)
NOT_AVAILABLE = "N/A"

_MARKDOWN_MARKERS = {
    HealthStatus.HEALTHY: ":white_check_mark:",
    HealthStatus.DEGRADED: ":warning:",
    HealthStatus.UNHEALTHY: ":x:",
}
_UNICODE_MARKERS = {
    HealthStatus.HEALTHY: "✅",
    HealthStatus.DEGRADED: "⚠️",
    HealthStatus.UNHEALTHY: "❌",
}

OUTPUT_KEYS = (
    "status",
    "success-rate",
    "total-events",
    "delivered-events",
    "failed-events",
    "dlq-count",
    "endpoints-checked",
    "report",
)


def status_marker(status: str) -> str:
    """Markdown emoji shortcode for a status; ':question:' for anything unknown."""
    return _MARKDOWN_MARKERS.get(status, ":question:")


def status_glyph(status: str) -> str:
    return _UNICODE_MARKERS.get(status, "❓")


def format_count(value: int | None) -> str:
    """Thousands-grouped integer, 0 when missing. Locale independent."""
    return f"{value or 0:,}"


def format_rate(value: float | None) -> str:
    """Two-decimal percentage value without the % sign, N/A when missing."""
    if value is None or math.isnan(value):
        return NOT_AVAILABLE
    return f"{value:.2f}"


def format_percent(value: float | None) -> str:
    rate = format_rate(value)
    return rate if rate == NOT_AVAILABLE else f"{rate}%"


def _cell(value: str | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return str(value).replace("|", "\\|").replace("\n", " ")


def _endpoint_row(ep: EndpointStat) -> str:
    marker = ":green_circle:" if ep.is_active else ":yellow_circle:"
    return (
        f"| {_cell(ep.name)} | {_cell(ep.provider)} | "
        f"{marker} {_cell(ep.status)} | {format_percent(ep.success_rate)} |"
    )


def render_report(s: HealthSnapshot) -> str:
    """Markdown report used for the PR comment and the `report` output.

    The heading doubles as the marker that identifies a previous comment,
    so it must keep containing REPORT_TITLE.
    """
    status = classify(s.success_rate, s.dlq_count)
    lines = [
        f"## {status_marker(status)} {REPORT_TITLE}",
        "",
        f"**Status:** {status.upper()}",
        "",
        "### Last 24 Hours",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Total Events | {format_count(s.total_events)} |",
        f"| Delivered | {format_count(s.delivered_events)} |",
        f"| Failed | {format_count(s.failed_events)} |",
        f"| Success Rate | {format_percent(s.success_rate)} |",
        f"| In DLQ | {format_count(s.dlq_count)} |",
        f"| Endpoints | {format_count(s.endpoints_count)} |",
        "",
    ]
    if s.endpoints:
        lines += [
            "### Endpoints",
            "",
            "| Name | Provider | Status | Success Rate |",
            "|------|----------|--------|-------------|",
        ]
        lines += [_endpoint_row(ep) for ep in s.endpoints]
        lines.append("")
    lines += ["---", ATTRIBUTION]
    return "\n".join(lines) + "\n"


def format_report_text(s: HealthSnapshot) -> str:
    """Plain text report for terminal output."""
    status = classify(s.success_rate, s.dlq_count)
    rule = "=" * 50
    lines = [
        rule,
        f"{status_glyph(status)} Status: {status.upper()}",
        rule,
        "",
        "Last 24 Hours:",
        f"  Total Events:    {format_count(s.total_events)}",
        f"  Delivered:       {format_count(s.delivered_events)}",
        f"  Failed:          {format_count(s.failed_events)}",
        f"  Pending:         {format_count(s.pending_events)}",
        f"  Success Rate:    {format_percent(s.success_rate)}",
        f"  In DLQ:          {format_count(s.dlq_count)}",
        f"  Endpoints:       {format_count(s.endpoints_count)}",
    ]
    if s.endpoints:
        lines += ["", "Endpoints:"]
        for ep in s.endpoints:
            dot = "🟢" if ep.is_active else "🟡"
            lines.append(
                f"  {dot} {ep.name or NOT_AVAILABLE} ({ep.provider or NOT_AVAILABLE}): "
                f"{format_percent(ep.success_rate)} success"
            )
    lines += [
        "",
        "Period:",
        f"  From: {s.period.start or NOT_AVAILABLE}",
        f"  To:   {s.period.end or NOT_AVAILABLE}",
    ]
    return "\n".join(lines)


def build_outputs(s: HealthSnapshot, report: str | None = None) -> dict[str, str]:
    """Step outputs in their fixed order. `report` is included when given."""
    status = classify(s.success_rate, s.dlq_count)
    outputs = {
        "status": status.value,
        "success-rate": format_rate(s.success_rate),
        "total-events": str(s.total_events or 0),
        "delivered-events": str(s.delivered_events or 0),
        "failed-events": str(s.failed_events or 0),
        "dlq-count": str(s.dlq_count or 0),
        "endpoints-checked": str(s.endpoints_count or 0),
    }
    if report is not None:
        outputs["report"] = report
    return outputs


def format_outputs_json(s: HealthSnapshot) -> str:
    """JSON view of the step outputs for programmatic consumption."""
    return json.dumps(build_outputs(s), indent=2)


def summary_rows(s: HealthSnapshot) -> list[list[str]]:
    """Header plus metric rows for the job summary table."""
    status = classify(s.success_rate, s.dlq_count)
    return [
        ["Metric", "Value"],
        ["Status", status.upper()],
        ["Success Rate", format_percent(s.success_rate)],
        ["Total Events (24h)", str(s.total_events or 0)],
        ["Delivered", str(s.delivered_events or 0)],
        ["Failed", str(s.failed_events or 0)],
        ["In DLQ", str(s.dlq_count or 0)],
        ["Endpoints", str(s.endpoints_count or 0)],
    ]

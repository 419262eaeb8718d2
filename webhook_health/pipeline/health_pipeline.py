"""Health check pipeline: fetch, classify, report, publish, gate."""

import logging

from webhook_health.actions.runtime import ActionsRuntime, SummaryUnavailable
from webhook_health.config.loader import check_comment_token
from webhook_health.config.schema import ActionConfig
from webhook_health.errors import HealthCheckError, PublishError
from webhook_health.ingest.eventdock_client import EventDockClient
from webhook_health.models.health import HealthSnapshot
from webhook_health.models.reporting import HealthCheckResult
from webhook_health.publish.pr_comment import PullRequestContext, publish
from webhook_health.publish.upsert import CommentStore
from webhook_health.reporting.classifier import classify
from webhook_health.reporting.formatters import (
    SUMMARY_HEADING,
    build_outputs,
    format_rate,
    render_report,
    summary_rows,
)

logger = logging.getLogger(__name__)


def threshold_breached(success_rate: float | None, threshold: float) -> bool:
    """True when the rate is below the threshold; a missing rate counts as below."""
    if success_rate is None:
        return True
    return success_rate < threshold


class HealthCheckPipeline:
    def __init__(
        self,
        config: ActionConfig,
        runtime: ActionsRuntime,
        client: EventDockClient | None = None,
        pr_context: PullRequestContext | None = None,
        comment_store: CommentStore | None = None,
    ):
        self.config = config
        self.runtime = runtime
        self.client = client or EventDockClient(
            config.api_key.get_secret_value(),
            base_url=config.api_url,
            timeout=config.timeout_seconds,
        )
        self.pr_context = pr_context
        self.comment_store = comment_store

    async def run(self) -> HealthCheckResult:
        """Execute one health check and report it to the runner."""
        result = HealthCheckResult()
        logger.info("Checking webhook health at %s...", self.config.api_url)
        if self.config.endpoint_id:
            logger.info("Checking specific endpoint: %s", self.config.endpoint_id)

        # 1. FETCH
        try:
            check_comment_token(self.config)
            snapshot = await self.client.fetch_health(self.config.endpoint_id)
        except HealthCheckError as e:
            message = f"Action failed: {e}"
            self.runtime.set_failed(message)
            result.failed = True
            result.failure_message = message
            return result

        # 2. CLASSIFY
        status = classify(snapshot.success_rate, snapshot.dlq_count)
        result.snapshot = snapshot
        result.status = status
        logger.info("Status: %s", status)
        logger.info("Success Rate: %s%%", format_rate(snapshot.success_rate))
        logger.info("Total Events (24h): %s", snapshot.total_events)
        logger.info("DLQ Count: %s", snapshot.dlq_count)

        # 3. OUTPUTS + REPORT
        for key, value in build_outputs(snapshot).items():
            self.runtime.set_output(key, value)
        result.report = render_report(snapshot)
        self.runtime.set_output("report", result.report)
        result.outputs = dict(self.runtime.outputs)

        # 4. PUBLISH
        if self.config.post_comment:
            await self._publish(result)

        # 5. JOB SUMMARY
        self._write_summary(snapshot)

        # 6. GATE
        if self.config.fail_on_unhealthy and threshold_breached(
            snapshot.success_rate, self.config.fail_threshold
        ):
            message = (
                "Webhook health check failed: success rate "
                f"{format_rate(snapshot.success_rate)}% is below threshold "
                f"{self.config.fail_threshold:g}%"
            )
            self.runtime.set_failed(message)
            result.failed = True
            result.failure_message = message

        return result

    async def _publish(self, result: HealthCheckResult) -> None:
        try:
            result.comment = await publish(
                self.config.github_token.get_secret_value(),
                result.report,
                self.pr_context,
                store=self.comment_store,
            )
        except PublishError as e:
            self._warn(result, f"Failed to post PR comment: {e}")

    def _write_summary(self, snapshot: HealthSnapshot) -> None:
        try:
            self.runtime.write_summary(SUMMARY_HEADING, summary_rows(snapshot))
        except SummaryUnavailable:
            logger.debug("Job summary not available")
        except OSError as e:
            logger.debug("Job summary not written: %s", e)

    def _warn(self, result: HealthCheckResult, message: str) -> None:
        self.runtime.warning(message)
        result.warnings.append(message)

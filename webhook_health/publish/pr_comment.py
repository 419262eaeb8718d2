"""Publish the health report as a pull-request comment."""

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from webhook_health.models.reporting import CommentAction, CommentResult
from webhook_health.publish.github_client import GITHUB_API_URL, GitHubCommentStore
from webhook_health.publish.upsert import CommentStore, upsert_comment
from webhook_health.reporting.formatters import REPORT_TITLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullRequestContext:
    repository: str  # "owner/repo"
    pr_number: int
    api_url: str = GITHUB_API_URL

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "PullRequestContext | None":
        """Read the triggering event; None unless it concerns a pull request."""
        env = os.environ if environ is None else environ
        event_path = env.get("GITHUB_EVENT_PATH")
        repository = env.get("GITHUB_REPOSITORY")
        if not event_path or not repository:
            return None
        try:
            with open(event_path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.debug("Could not read event payload %s: %s", event_path, e)
            return None

        pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
        if not isinstance(pull_request, dict) or "number" not in pull_request:
            return None
        try:
            pr_number = int(pull_request["number"])
        except (TypeError, ValueError) as e:
            logger.debug("Unusable pull request number in %s: %s", event_path, e)
            return None
        return cls(
            repository=repository,
            pr_number=pr_number,
            api_url=env.get("GITHUB_API_URL") or GITHUB_API_URL,
        )


async def publish(
    token: str,
    report: str,
    context: PullRequestContext | None,
    store: CommentStore | None = None,
) -> CommentResult:
    """Create or update the report comment on the current pull request.

    Outside a pull request this is a no-op. Raises PublishError when the
    comment API fails.
    """
    if context is None:
        logger.info("Not a pull request, skipping comment")
        return CommentResult(CommentAction.SKIPPED)

    if store is None:
        store = GitHubCommentStore(
            token, context.repository, context.pr_number, api_url=context.api_url
        )
    result = await upsert_comment(store, REPORT_TITLE, report)
    return CommentResult(result.action, comment_id=result.comment_id, pr_number=context.pr_number)

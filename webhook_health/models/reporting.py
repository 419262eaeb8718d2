"""Run result and comment publishing models."""

from dataclasses import dataclass, field
from enum import StrEnum

from webhook_health.models.health import HealthSnapshot, HealthStatus


class CommentAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Comment:
    comment_id: int
    body: str


@dataclass(frozen=True)
class CommentResult:
    action: CommentAction
    comment_id: int | None = None
    pr_number: int | None = None


@dataclass
class HealthCheckResult:
    snapshot: HealthSnapshot | None = None
    status: HealthStatus | None = None
    report: str = ""
    outputs: dict[str, str] = field(default_factory=dict)
    comment: CommentResult | None = None
    failed: bool = False
    failure_message: str = ""
    warnings: list[str] = field(default_factory=list)

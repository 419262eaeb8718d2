"""Idempotent create-or-update of a single marked comment."""

import logging
from typing import Protocol

from webhook_health.models.reporting import Comment, CommentAction, CommentResult

logger = logging.getLogger(__name__)


class CommentStore(Protocol):
    """Where report comments live. GitHub in production, a list in tests."""

    async def find_existing(self, marker: str) -> Comment | None:
        """First comment, in creation order, whose body contains ``marker``."""
        ...

    async def create_or_update(self, existing: Comment | None, body: str) -> Comment:
        """Replace ``existing``'s body, or create a new comment when None."""
        ...


async def upsert_comment(store: CommentStore, marker: str, body: str) -> CommentResult:
    """Keep exactly one comment carrying ``marker``.

    Two runs racing between lookup and create can both create; accepted
    since each trigger runs the step once.
    """
    existing = await store.find_existing(marker)
    comment = await store.create_or_update(existing, body)
    if existing is not None:
        logger.info("Updated existing PR comment #%s", comment.comment_id)
        return CommentResult(CommentAction.UPDATED, comment_id=comment.comment_id)
    logger.info("Created new PR comment #%s", comment.comment_id)
    return CommentResult(CommentAction.CREATED, comment_id=comment.comment_id)

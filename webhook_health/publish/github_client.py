"""GitHub issue-comment API client backing the PR report comment."""

import logging

import httpx

from webhook_health.errors import MissingConfiguration, PublishError
from webhook_health.models.reporting import Comment

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
PAGE_SIZE = 100


class GitHubCommentStore:
    """Comments on one pull request, via the issues comments endpoints.

    Pull requests share the issue comment API, so ``pr_number`` is used as
    the issue number.
    """

    def __init__(
        self,
        token: str,
        repository: str,
        pr_number: int,
        api_url: str = GITHUB_API_URL,
        timeout: float = 30.0,
    ):
        if not token:
            raise MissingConfiguration("github-token is required to post PR comments")
        self.token = token
        self.repository = repository
        self.pr_number = pr_number
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    @property
    def comments_url(self) -> str:
        return f"{self.api_url}/repos/{self.repository}/issues/{self.pr_number}/comments"

    def comment_url(self, comment_id: int) -> str:
        return f"{self.api_url}/repos/{self.repository}/issues/comments/{comment_id}"

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        **kwargs,
    ) -> httpx.Response:
        try:
            resp = await client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.RequestError as e:
            logger.error("GitHub API request failed: %s %s -> %s", method, url, e)
            raise PublishError(f"GitHub request failed: {e}") from e
        if resp.status_code >= 400:
            body = resp.text
            logger.error("GitHub API %d: %s %s -> %s", resp.status_code, method, url, body)
            raise PublishError(f"GitHub API {resp.status_code}: {body}", resp.status_code)
        return resp

    async def list_comments(self) -> list[Comment]:
        """All comments on the pull request, oldest first, across every page."""
        comments: list[Comment] = []
        url: str | None = self.comments_url
        params: dict | None = {"per_page": PAGE_SIZE}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while url:
                resp = await self._request(client, "GET", url, params=params)
                comments.extend(_to_comment(item) for item in _json(resp))
                # the next link already carries per_page and page
                url = resp.links.get("next", {}).get("url")
                params = None
        return comments

    async def find_existing(self, marker: str) -> Comment | None:
        for comment in await self.list_comments():
            if marker in comment.body:
                return comment
        return None

    async def create_or_update(self, existing: Comment | None, body: str) -> Comment:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            if existing is not None:
                resp = await self._request(
                    client, "PATCH", self.comment_url(existing.comment_id), json={"body": body}
                )
            else:
                resp = await self._request(client, "POST", self.comments_url, json={"body": body})
        return _to_comment(_json(resp))


def _json(resp: httpx.Response):
    try:
        return resp.json()
    except ValueError as e:
        raise PublishError(f"Invalid JSON from GitHub API: {e}", resp.status_code) from e


def _to_comment(item) -> Comment:
    try:
        return Comment(comment_id=int(item["id"]), body=item.get("body") or "")
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise PublishError(f"Unexpected comment payload from GitHub API: {item!r}") from e

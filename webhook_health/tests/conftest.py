"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from webhook_health.actions.runtime import ActionsRuntime
from webhook_health.config.schema import ActionConfig
from webhook_health.models.reporting import Comment

API_URL = "https://test-eventdock.example.com"
HEALTH_URL = f"{API_URL}/v1/health"


def _make_payload(**overrides) -> dict:
    """Healthy two-endpoint /v1/health body; keyword args replace fields."""
    payload = {
        "total_events": 1000,
        "delivered_events": 995,
        "failed_events": 5,
        "pending_events": 0,
        "dlq_count": 0,
        "success_rate": 99.5,
        "endpoints_count": 2,
        "endpoints": [
            {"name": "Stripe", "provider": "stripe", "status": "active", "success_rate": 99.5},
            {"name": "Slack", "provider": "slack", "status": "active", "success_rate": 99.5},
        ],
        "period": {"start": "2024-01-01T00:00:00Z", "end": "2024-01-02T00:00:00Z"},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def healthy_payload() -> dict:
    return _make_payload()


@pytest.fixture
def make_payload():
    """Factory for /v1/health bodies with selected fields replaced."""
    return _make_payload


@pytest.fixture
def action_config() -> ActionConfig:
    return ActionConfig(api_key="test-key-123", api_url=API_URL)


@pytest.fixture
def runner_env(tmp_path: Path) -> dict[str, str]:
    """Environment of a GitHub runner with output and summary files."""
    output = tmp_path / "github_output"
    summary = tmp_path / "step_summary"
    output.touch()
    summary.touch()
    return {"GITHUB_OUTPUT": str(output), "GITHUB_STEP_SUMMARY": str(summary)}


@pytest.fixture
def runtime(runner_env: dict[str, str]) -> ActionsRuntime:
    return ActionsRuntime(environ=runner_env)


@pytest.fixture
def pr_event_env(tmp_path: Path) -> dict[str, str]:
    """Environment for a pull_request event on PR #42."""
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"pull_request": {"number": 42}}))
    return {
        "GITHUB_EVENT_PATH": str(event),
        "GITHUB_REPOSITORY": "acme/shop",
        "GITHUB_API_URL": "https://api.github.test",
    }


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api-key": "yaml-key",
        "api-url": API_URL,
        "fail-threshold": 95,
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


class InMemoryCommentStore:
    """CommentStore over a list, for upsert tests."""

    def __init__(self, bodies: list[str] | None = None):
        self.comments = [Comment(i + 1, body) for i, body in enumerate(bodies or [])]
        self.created = 0
        self.updated = 0

    async def find_existing(self, marker: str) -> Comment | None:
        return next((c for c in self.comments if marker in c.body), None)

    async def create_or_update(self, existing: Comment | None, body: str) -> Comment:
        if existing is None:
            comment = Comment(len(self.comments) + 1, body)
            self.comments.append(comment)
            self.created += 1
            return comment
        comment = Comment(existing.comment_id, body)
        self.comments = [comment if c.comment_id == existing.comment_id else c for c in self.comments]
        self.updated += 1
        return comment


@pytest.fixture
def make_comment_store():
    return InMemoryCommentStore


def _read_outputs(path: str) -> dict[str, str]:
    """Parse a GITHUB_OUTPUT file, including heredoc multi-line values."""
    outputs: dict[str, str] = {}
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    i = 0
    while i < len(lines):
        line = lines[i]
        if "<<" in line and "=" not in line.split("<<", 1)[0]:
            name, delimiter = line.split("<<", 1)
            value_lines = []
            i += 1
            while lines[i] != delimiter:
                value_lines.append(lines[i])
                i += 1
            outputs[name] = "\n".join(value_lines)
        else:
            name, value = line.split("=", 1)
            outputs[name] = value
        i += 1
    return outputs


@pytest.fixture
def read_outputs():
    return _read_outputs

"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, SecretStr

from webhook_health.config.defaults import (
    DEFAULT_API_URL,
    DEFAULT_FAIL_THRESHOLD,
    DEFAULT_TIMEOUT_SECONDS,
)


class ActionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: SecretStr
    endpoint_id: str | None = None
    api_url: str = Field(default=DEFAULT_API_URL, min_length=1)
    fail_on_unhealthy: bool = False
    fail_threshold: float = DEFAULT_FAIL_THRESHOLD
    post_comment: bool = False
    github_token: SecretStr | None = None
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0.0)

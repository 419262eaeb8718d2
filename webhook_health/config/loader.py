"""Config loading from action inputs or a local YAML file."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from webhook_health.actions.runtime import ActionsRuntime
from webhook_health.config.defaults import API_KEY_ENV, API_URL_ENV
from webhook_health.config.schema import ActionConfig
from webhook_health.errors import MissingConfiguration

# input name -> ActionConfig field
INPUT_FIELDS = {
    "api-key": "api_key",
    "endpoint-id": "endpoint_id",
    "api-url": "api_url",
    "fail-on-unhealthy": "fail_on_unhealthy",
    "fail-threshold": "fail_threshold",
    "post-comment": "post_comment",
    "github-token": "github_token",
    "timeout": "timeout_seconds",
}
BOOLEAN_INPUTS = {"fail-on-unhealthy", "post-comment"}


def parse_bool(value: str) -> bool:
    """Only the literal 'true' enables a flag."""
    return value.strip().lower() == "true"


def load_inputs(runtime: ActionsRuntime) -> ActionConfig:
    """Build config from the step's `with:` inputs (INPUT_* variables).

    Empty inputs fall back to schema defaults.
    """
    raw: dict[str, Any] = {"api_key": runtime.get_input("api-key", required=True)}
    for name, field_name in INPUT_FIELDS.items():
        if field_name in raw:
            continue
        value = runtime.get_input(name)
        if not value:
            continue
        raw[field_name] = parse_bool(value) if name in BOOLEAN_INPUTS else value
    config = ActionConfig(**raw)
    check_comment_token(config)
    return config


def check_comment_token(config: ActionConfig) -> None:
    """Posting comments needs a non-empty github-token."""
    token = config.github_token.get_secret_value() if config.github_token else ""
    if config.post_comment and not token:
        raise MissingConfiguration("github-token is required when post-comment is true")


def load_config(
    path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ActionConfig:
    """Load config for a local run.

    Precedence: overrides (CLI flags) > YAML file > EVENTDOCK_* environment.
    YAML keys may use either the input names (`api-key`) or field names.
    """
    env = os.environ if environ is None else environ
    raw: dict[str, Any] = {}

    if env.get(API_URL_ENV):
        raw["api_url"] = env[API_URL_ENV]
    if env.get(API_KEY_ENV):
        raw["api_key"] = env[API_KEY_ENV]

    if path is not None:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise MissingConfiguration(f"Config file {path} must contain a mapping of settings")
        for key, value in data.items():
            raw[INPUT_FIELDS.get(key, str(key).replace("-", "_"))] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value

    if not raw.get("api_key"):
        raise MissingConfiguration(
            f"api-key is required (use --api-key, the config file or {API_KEY_ENV})"
        )
    return ActionConfig(**raw)


def redacted_dump(config: ActionConfig) -> str:
    """JSON view of the config with secrets masked."""
    return config.model_dump_json(indent=2)

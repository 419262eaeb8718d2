"""CLI entry point for the webhook health check."""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from webhook_health.actions.runtime import ActionsRuntime
from webhook_health.config.loader import load_config, load_inputs, redacted_dump
from webhook_health.config.schema import ActionConfig
from webhook_health.errors import HealthCheckError
from webhook_health.ingest.eventdock_client import EventDockClient
from webhook_health.pipeline.health_pipeline import HealthCheckPipeline, threshold_breached
from webhook_health.publish.pr_comment import PullRequestContext
from webhook_health.reporting.formatters import (
    format_outputs_json,
    format_rate,
    format_report_text,
    render_report,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="webhook-health",
        description="EventDock webhook delivery health check",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # action
    sub.add_parser("action", help="Run as a GitHub Action step (reads INPUT_* env)")

    # check
    check_p = sub.add_parser("check", help="Check health and print the report")
    _add_local_options(check_p)
    check_p.add_argument(
        "--format",
        choices=["text", "markdown", "json"],
        default="text",
        help="Report format",
    )

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    show_p = config_sub.add_parser("show", help="Display resolved config (secrets masked)")
    _add_local_options(show_p)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "action":
        return _cmd_action()
    elif args.command == "check":
        return _cmd_check(args)
    elif args.command == "config":
        return _cmd_config(args)
    else:
        parser.print_help()
        return 1


def _add_local_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", help="Config YAML path")
    p.add_argument("--api-url", help="API base URL")
    p.add_argument("--api-key", help="API key (or EVENTDOCK_API_KEY)")
    p.add_argument("--endpoint-id", help="Restrict to one endpoint")
    p.add_argument("--fail-threshold", type=float, help="Success rate floor (%%)")
    p.add_argument(
        "--fail-on-unhealthy",
        action="store_true",
        default=None,
        help="Exit 1 when the success rate is below the threshold",
    )
    p.add_argument("--timeout", type=float, help="Request timeout in seconds")


def _local_config(args) -> ActionConfig:
    overrides = {
        "api_url": args.api_url,
        "api_key": args.api_key,
        "endpoint_id": args.endpoint_id,
        "fail_threshold": args.fail_threshold,
        "fail_on_unhealthy": args.fail_on_unhealthy,
        "timeout_seconds": args.timeout,
    }
    return load_config(args.config, overrides)


def _cmd_action() -> int:
    runtime = ActionsRuntime()
    try:
        config = load_inputs(runtime)
    except HealthCheckError as e:
        runtime.set_failed(f"Action failed: {e}")
        return runtime.exit_code
    except ValidationError as e:
        runtime.set_failed(f"Action failed: invalid input: {e}")
        return runtime.exit_code

    pipeline = HealthCheckPipeline(
        config, runtime, pr_context=PullRequestContext.from_environ()
    )
    asyncio.run(pipeline.run())
    return runtime.exit_code


def _cmd_check(args) -> int:
    try:
        config = _local_config(args)
    except (HealthCheckError, ValidationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    client = EventDockClient(
        config.api_key.get_secret_value(),
        base_url=config.api_url,
        timeout=config.timeout_seconds,
    )
    try:
        snapshot = asyncio.run(client.fetch_health(config.endpoint_id))
    except HealthCheckError as e:
        print(f"❌ Check failed: {e}", file=sys.stderr)
        return 1

    if args.format == "markdown":
        print(render_report(snapshot), end="")
    elif args.format == "json":
        print(format_outputs_json(snapshot))
    else:
        print(format_report_text(snapshot))

    if config.fail_on_unhealthy and threshold_breached(
        snapshot.success_rate, config.fail_threshold
    ):
        print(
            f"Success rate {format_rate(snapshot.success_rate)}% is below "
            f"threshold {config.fail_threshold:g}%",
            file=sys.stderr,
        )
        return 1
    return 0


def _cmd_config(args) -> int:
    if args.config_command != "show":
        print("Use: config show")
        return 1
    try:
        config = _local_config(args)
    except (HealthCheckError, ValidationError, OSError) as e:
        print(f"Error: {e}")
        return 1
    print(redacted_dump(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Tests for the GitHub Actions runtime adapter."""

import io

import pytest

from webhook_health.actions.runtime import ActionsRuntime, SummaryUnavailable
from webhook_health.errors import MissingConfiguration


class TestInputs:
    def test_get_input_trims(self):
        runtime = ActionsRuntime(environ={"INPUT_API-KEY": "  secret \n"})
        assert runtime.get_input("api-key") == "secret"

    def test_missing_optional_input(self):
        assert ActionsRuntime(environ={}).get_input("endpoint-id") == ""

    def test_missing_required_input(self):
        with pytest.raises(MissingConfiguration, match="api-key"):
            ActionsRuntime(environ={}).get_input("api-key", required=True)


class TestOutputs:
    def test_single_and_multiline(self, runner_env, read_outputs):
        runtime = ActionsRuntime(environ=runner_env)
        runtime.set_output("status", "healthy")
        runtime.set_output("total-events", 1000)
        runtime.set_output("report", "## Title\n\n| a | b |\n")

        outputs = read_outputs(runner_env["GITHUB_OUTPUT"])
        assert outputs["status"] == "healthy"
        assert outputs["total-events"] == "1000"
        assert outputs["report"] == "## Title\n\n| a | b |\n"
        assert runtime.outputs["total-events"] == "1000"

    def test_without_output_file(self):
        runtime = ActionsRuntime(environ={})
        runtime.set_output("status", "healthy")
        assert runtime.outputs == {"status": "healthy"}


class TestAnnotations:
    def test_warning_is_escaped(self):
        stream = io.StringIO()
        ActionsRuntime(environ={}, stream=stream).warning("50% down\nsecond line")
        assert stream.getvalue() == "::warning::50%25 down%0Asecond line\n"

    def test_set_failed(self):
        stream = io.StringIO()
        runtime = ActionsRuntime(environ={}, stream=stream)
        assert runtime.exit_code == 0

        runtime.set_failed("Action failed: boom")

        assert runtime.failed
        assert runtime.exit_code == 1
        assert runtime.failure_message == "Action failed: boom"
        assert "::error::Action failed: boom" in stream.getvalue()


class TestSummary:
    def test_write_summary(self, runner_env):
        runtime = ActionsRuntime(environ=runner_env)
        runtime.write_summary("Heading", [["Metric", "Value"], ["Status", "HEALTHY"]])

        with open(runner_env["GITHUB_STEP_SUMMARY"], encoding="utf-8") as f:
            text = f.read()
        assert text.startswith("# Heading\n")
        assert "| Metric | Value |" in text
        assert "|---|---|" in text
        assert "| Status | HEALTHY |" in text

    def test_unavailable(self):
        with pytest.raises(SummaryUnavailable):
            ActionsRuntime(environ={}).write_summary("Heading", [["a"]])

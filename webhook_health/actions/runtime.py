"""GitHub Actions runner plumbing: inputs, outputs, annotations, job summary."""

import logging
import os
import sys
import uuid
from collections.abc import Mapping
from typing import TextIO

from webhook_health.errors import MissingConfiguration

logger = logging.getLogger(__name__)


class SummaryUnavailable(Exception):
    """Raised when no job summary file is configured (local runs)."""


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsRuntime:
    """Talks to the runner through environment variables and files.

    Outputs go to the file named by GITHUB_OUTPUT and the job summary to
    GITHUB_STEP_SUMMARY. Annotations are workflow commands on ``stream``.
    Outside a runner (variables unset) outputs are only logged.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.stream = stream or sys.stdout
        self.outputs: dict[str, str] = {}
        self.failed = False
        self.failure_message = ""

    # --- Inputs ---

    def get_input(self, name: str, required: bool = False) -> str:
        key = f"INPUT_{name.replace(' ', '_').upper()}"
        value = self.environ.get(key, "").strip()
        if required and not value:
            raise MissingConfiguration(f"Input required and not supplied: {name}")
        return value

    # --- Outputs ---

    def set_output(self, name: str, value) -> None:
        text = str(value)
        self.outputs[name] = text
        path = self.environ.get("GITHUB_OUTPUT")
        if not path:
            logger.debug("output %s=%s", name, text if "\n" not in text else "<multiline>")
            return
        with open(path, "a", encoding="utf-8") as fh:
            if "\n" in text:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                fh.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
            else:
                fh.write(f"{name}={text}\n")

    # --- Annotations ---

    def _command(self, command: str, message: str) -> None:
        self.stream.write(f"::{command}::{_escape_data(message)}\n")
        self.stream.flush()

    def debug(self, message: str) -> None:
        self._command("debug", message)

    def warning(self, message: str) -> None:
        self._command("warning", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    def set_failed(self, message: str) -> None:
        """Mark the step failed; the CLI turns this into exit code 1."""
        self.failed = True
        self.failure_message = message
        self.error(message)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    # --- Job summary ---

    def write_summary(self, heading: str, rows: list[list[str]]) -> None:
        """Append a heading and a table (first row is the header) to the job summary."""
        path = self.environ.get("GITHUB_STEP_SUMMARY")
        if not path:
            raise SummaryUnavailable("GITHUB_STEP_SUMMARY is not set")
        header, *body = rows
        lines = [
            f"# {heading}",
            "",
            "| " + " | ".join(header) + " |",
            "|" + "|".join("---" for _ in header) + "|",
        ]
        lines += ["| " + " | ".join(row) + " |" for row in body]
        with open(path, "a", encoding="utf-8") as fh:
            fh.write("\n".join(lines) + "\n\n")

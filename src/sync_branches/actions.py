"""GitHub Actions runner I/O: workflow-command logging, secret masking, and outputs.

Workflow command reference:
https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions
"""

import logging
import sys
import uuid
from pathlib import Path

import click

_COMMANDS_BY_LEVEL = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_data(value: str) -> str:
    """Escape a workflow command message so newlines survive."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GitHubActionsFormatter(logging.Formatter):
    """Render log records as workflow commands so the runner annotates them.

    INFO records are printed as plain log lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _COMMANDS_BY_LEVEL.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def configure_logging(*, debug: bool) -> None:
    """Route sync_branches logs to stdout as workflow commands."""
    package_logger = logging.getLogger("sync_branches")
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(GitHubActionsFormatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.propagate = False


def mask_value(value: str) -> None:
    """Ask the runner to redact value from all subsequent log output."""
    if value:
        click.echo(f"::add-mask::{escape_data(value)}")


def set_output(name: str, value: str, *, output_path: str | None) -> bool:
    """Append a step output to the $GITHUB_OUTPUT file.

    Multi-line values use the heredoc delimiter syntax.

    Returns:
        True if written, False when no output file is configured
    """
    if output_path is None:
        return False

    if "\n" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        line = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        line = f"{name}={value}\n"

    with open(Path(output_path), "a", encoding="utf-8") as f:
        f.write(line)
    return True

"""GitHub Actions workflow commands and step outputs.

Outputs are appended to the file named by ``GITHUB_OUTPUT`` using the
multiline ``name<<delimiter`` form. Annotations and log groups are written
to stdout as ``::command::`` lines, only when running inside Actions.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TextIO

logger = logging.getLogger(__name__)


def is_github_actions(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get("GITHUB_ACTIONS", "").lower() == "true"


def to_command_value(value: Any) -> str:
    """Serialize an output value the way the Actions toolkit does.

    None -> "", str unchanged, bool -> "true"/"false", everything else JSON.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: Any = "", stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    out.write(f"::{command}::{_escape_data(to_command_value(message))}\n")
    out.flush()


def error(message: str, environ: Mapping[str, str] | None = None) -> None:
    """Emit an error annotation (logged locally)."""
    logger.error(message)
    if is_github_actions(environ):
        issue_command("error", message)


@contextmanager
def group(title: str, environ: Mapping[str, str] | None = None) -> Iterator[None]:
    """Wrap a block in a collapsible log group."""
    in_actions = is_github_actions(environ)
    if in_actions:
        issue_command("group", title)
    logger.debug("begin: %s", title)
    try:
        yield
    finally:
        if in_actions:
            issue_command("endgroup")
        logger.debug("end: %s", title)


def _prepare_key_value(name: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name:
        raise ValueError(f"Unexpected input: name should not contain the delimiter \"{delimiter}\"")
    if delimiter in value:
        raise ValueError(f"Unexpected input: value should not contain the delimiter \"{delimiter}\"")
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


class OutputWriter:
    """Records step outputs and forwards them to ``GITHUB_OUTPUT`` when set.

    ``values`` keeps every output in emission order, so a failed run still
    shows what was written before the failure.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        env = os.environ if environ is None else environ
        self.output_file = env.get("GITHUB_OUTPUT") or None
        self.values: dict[str, str] = {}

    def set(self, name: str, value: Any) -> None:
        text = to_command_value(value)
        self.values[name] = text
        logger.debug("output %s=%s", name, text)

        if self.output_file:
            with open(self.output_file, "a", encoding="utf-8") as f:
                f.write(_prepare_key_value(name, text))


def set_failed(message: str, environ: Mapping[str, str] | None = None) -> None:
    """Report the step failure message. The caller sets the exit status."""
    if is_github_actions(environ):
        issue_command("error", message)

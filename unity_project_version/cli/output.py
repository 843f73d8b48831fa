"""Output formatting utilities.

Supports three modes:
  - PRETTY: Rich-based colored output (TTY default)
  - PLAIN: No ANSI escapes (pipe default, and what Actions logs get)
  - JSON: Machine-readable JSON

Mode resolution priority:
  --json > --pretty/--no-pretty > UNITY_PROJECT_VERSION_JSON/UNITY_PROJECT_VERSION_NO_PRETTY/NO_COLOR > isatty()
"""

from __future__ import annotations

import enum
import json
import os
import re
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.text import Text

console = Console()
err_console = Console(stderr=True)
_quiet = False


# =============================================================================
# Output Mode
# =============================================================================


class OutputMode(enum.Enum):
    PRETTY = "pretty"
    PLAIN = "plain"
    JSON = "json"


@dataclass(frozen=True)
class OutputConfig:
    mode: OutputMode

    @property
    def is_json(self) -> bool:
        return self.mode is OutputMode.JSON

    @property
    def is_plain(self) -> bool:
        return self.mode is OutputMode.PLAIN

    @property
    def is_pretty(self) -> bool:
        return self.mode is OutputMode.PRETTY


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() not in ("", "0", "false")


def resolve_output_mode(
    json_flag: bool = False,
    pretty_flag: bool | None = None,
) -> OutputMode:
    """Determine output mode from flags, environment, and TTY detection.

    Priority: --json > --pretty/--no-pretty > env vars > isatty()
    """
    if json_flag:
        return OutputMode.JSON

    if pretty_flag is True:
        return OutputMode.PRETTY
    if pretty_flag is False:
        return OutputMode.PLAIN

    if _env_flag("UNITY_PROJECT_VERSION_JSON"):
        return OutputMode.JSON
    if _env_flag("UNITY_PROJECT_VERSION_NO_PRETTY"):
        return OutputMode.PLAIN
    if os.environ.get("NO_COLOR") is not None:
        return OutputMode.PLAIN

    if sys.stdout.isatty():
        return OutputMode.PRETTY
    return OutputMode.PLAIN


def configure_output(mode: OutputMode) -> None:
    """Reconfigure module-level consoles based on output mode."""
    global console, err_console

    if mode is OutputMode.PLAIN or mode is OutputMode.JSON:
        console = Console(highlight=False, no_color=True, soft_wrap=True)
        err_console = Console(stderr=True, highlight=False, no_color=True, soft_wrap=True)
    else:
        console = Console()
        err_console = Console(stderr=True)


def set_quiet(quiet: bool) -> None:
    """Suppress success/info messages. Errors, warnings and data still print."""
    global _quiet
    _quiet = quiet


# =============================================================================
# Printers
# =============================================================================

_RICH_MARKUP_RE = re.compile(r"\[/?[a-z][a-z0-9 _#.,=-]*\]")


def print_line(text: str) -> None:
    """Print a line, stripping Rich markup in non-PRETTY mode."""
    if console.no_color:
        print(_RICH_MARKUP_RE.sub("", text))
    else:
        console.print(text)


def print_json(data: Any) -> None:
    if console.no_color:
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        console.print_json(json.dumps(data, ensure_ascii=False))


def print_error(message: str, code: str | None = None) -> None:
    """Print error message to stderr.

    Args:
        message: Error message (will be escaped to prevent markup injection)
        code: Optional error code
    """
    if err_console.no_color:
        print(f"Error: {message}", file=sys.stderr)
        if code:
            print(f"Code: {code}", file=sys.stderr)
        return

    text = Text()
    text.append("Error: ", style="bold red")
    text.append(escape(message))
    err_console.print(text)

    if code:
        code_text = Text()
        code_text.append("Code: ", style="dim")
        code_text.append(escape(code), style="yellow")
        err_console.print(code_text)


def _print_tagged(tag: str, style: str, message: str) -> None:
    if console.no_color:
        print(f"[{tag}] {message}")
        return

    text = Text()
    text.append(f"[{tag}] ", style=style)
    text.append(message)
    console.print(text)


def print_success(message: str) -> None:
    if _quiet:
        return
    _print_tagged("OK", "bold green", message)


def print_warning(message: str) -> None:
    _print_tagged("WARN", "bold yellow", message)


def print_info(message: str) -> None:
    if _quiet:
        return
    _print_tagged("INFO", "bold blue", message)


def print_key_value(data: dict[str, Any], title: str | None = None) -> None:
    """Print dict as key-value pairs."""
    if console.no_color:
        if title:
            print(title)
        for key, value in data.items():
            print(f"  {key}: {value}")
        return

    if title:
        console.print(f"[bold]{escape(title)}[/bold]")

    for key, value in data.items():
        console.print(f"  [cyan]{escape(str(key))}:[/cyan] {escape(str(value))}")

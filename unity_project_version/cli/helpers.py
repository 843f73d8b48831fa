"""Shared CLI helper functions."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

import typer

from unity_project_version import actions
from unity_project_version.cli.exit_codes import exit_code_for
from unity_project_version.cli.output import OutputMode, configure_output, print_error
from unity_project_version.exceptions import UnityVersionError

from .context import CLIContext

# =============================================================================
# Error Handler
# =============================================================================


def _handle_error(e: UnityVersionError | OSError) -> None:
    """Report the failure message and raise typer.Exit with the mapped exit code."""
    if isinstance(e, UnityVersionError):
        message, code = e.message, e.code
    else:
        message, code = str(e), type(e).__name__
    print_error(message, code)
    actions.set_failed(message)
    raise typer.Exit(exit_code_for(e)) from None


def handle_cli_errors(fn: Callable[..., None]) -> Callable[..., None]:
    """Decorator that converts expected errors into a failure message and exit code.

    Anything outside UnityVersionError/OSError propagates unchanged.
    """

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            fn(*args, **kwargs)
        except (UnityVersionError, OSError) as e:
            _handle_error(e)

    return wrapper


# =============================================================================
# Per-command JSON helper
# =============================================================================


def _should_json(context: CLIContext, json_flag: bool) -> bool:
    """Return True when output should be JSON.

    Checks per-command --json flag first, then UNITY_PROJECT_VERSION_JSON env via context.
    """
    if json_flag:
        configure_output(OutputMode.JSON)
        return True
    return context.output.is_json

"""Logging setup for the CLI."""

from __future__ import annotations

import logging
import os
import sys

LOG_ENV_VAR = "UNITY_PROJECT_VERSION_LOG"
LOG_FORMAT = "%(levelname)s: %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _resolve_log_level(debug_flag: bool) -> int:
    """Pick the root log level.

    Priority: --debug > UNITY_PROJECT_VERSION_LOG > RUNNER_DEBUG=1 > INFO
    """
    if debug_flag:
        return logging.DEBUG

    env_level = os.environ.get(LOG_ENV_VAR, "").strip().upper()
    if env_level in _VALID_LOG_LEVELS:
        return int(getattr(logging, env_level))

    # Set by Actions when step debug logging is enabled
    if os.environ.get("RUNNER_DEBUG") == "1":
        return logging.DEBUG

    return logging.INFO


def _setup_logging(level: int) -> None:
    """Configure root logging to stderr, replacing existing handlers."""
    fmt = DEBUG_LOG_FORMAT if level <= logging.DEBUG else LOG_FORMAT
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

"""Exit code definitions for Unix-style process status reporting.

Maps the UnityVersionError hierarchy to exit codes so that workflows
can distinguish a misconfigured step from a registry outage.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from unity_project_version.exceptions import UnityVersionError


class ExitCode(enum.IntEnum):
    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 2
    NETWORK_ERROR = 3


def exit_code_for(exc: UnityVersionError | OSError) -> ExitCode:
    """Map a handled error to the appropriate exit code."""
    from unity_project_version.exceptions import ConfigurationError, NetworkError

    if isinstance(exc, ConfigurationError):
        return ExitCode.USAGE_ERROR
    if isinstance(exc, NetworkError):
        return ExitCode.NETWORK_ERROR
    return ExitCode.FAILURE

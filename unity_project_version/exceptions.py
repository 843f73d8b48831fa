"""
Unity Project Version Exception Classes
========================================

Exception hierarchy for project version detection.

Hierarchy:
    UnityVersionError (base)
    ├── ConfigurationError - Missing or invalid action inputs
    ├── AmbiguousOrMissingVersionFileError - ProjectVersion.txt search found != 1 file
    ├── VersionNotFoundError - ProjectVersion.txt has no editor version line
    └── NetworkError - Registry request or authorization failures
"""

from __future__ import annotations


class UnityVersionError(Exception):
    """Base exception for project version detection.

    Attributes:
        code: Optional error code for programmatic handling
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(UnityVersionError):
    """Missing or invalid input.

    Raised when:
    - path input is not supplied
    - project-version points to a file that does not exist
    - check-image is requested without image-token
    """

    def __init__(self, message: str, code: str | None = "CONFIGURATION_ERROR") -> None:
        super().__init__(message, code)


class AmbiguousOrMissingVersionFileError(UnityVersionError):
    """Recursive search did not find exactly one ProjectVersion.txt.

    Attributes:
        candidates: Every path the search matched (possibly empty)
    """

    def __init__(
        self,
        message: str,
        candidates: list[str] | None = None,
        code: str | None = "VERSION_FILE_NOT_UNIQUE",
    ) -> None:
        super().__init__(message, code)
        self.candidates = candidates or []


class VersionNotFoundError(UnityVersionError):
    """ProjectVersion.txt contains neither m_EditorVersionWithRevision nor m_EditorVersion."""

    def __init__(self, message: str, code: str | None = "VERSION_NOT_FOUND") -> None:
        super().__init__(message, code)


class NetworkError(UnityVersionError):
    """Container registry request failed.

    Raised when:
    - Transport failure (DNS, refused connection, timeout)
    - Non-2xx HTTP status (code is the status, e.g. "401")
    - Response body is not the expected JSON list
    """

    pass

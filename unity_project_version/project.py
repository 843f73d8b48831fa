"""Locate and parse ProjectSettings/ProjectVersion.txt."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from unity_project_version import actions
from unity_project_version.config import ActionInputs
from unity_project_version.exceptions import AmbiguousOrMissingVersionFileError, VersionNotFoundError

logger = logging.getLogger(__name__)

PROJECT_VERSION_RELPATH = "ProjectSettings/ProjectVersion.txt"
LIBRARY_DIR_NAME = "Library"

_REVISION_RE = re.compile(r"^m_EditorVersionWithRevision: ([^ ]*) \(([^)]*)\)$")
_VERSION_RE = re.compile(r"^m_EditorVersion: (.*)$")


@dataclass(frozen=True)
class UnityVersion:
    """Editor version of a Unity project.

    Attributes:
        project_path: Canonical (symlink-resolved) project root.
        version: Editor version, e.g. "2021.3.4f1".
        changeset: Editor revision hash, only present in newer ProjectVersion.txt files.
    """

    project_path: Path
    version: str
    changeset: str | None = None


def find_version_files(root: Path) -> list[Path]:
    """Every ``**/ProjectSettings/ProjectVersion.txt`` under root.

    Hidden directories are skipped and symlinked directories are not descended
    into, so a link back into the tree cannot repeat matches.
    """
    found: list[Path] = []
    for dirpath, dirnames, _ in os.walk(root):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        candidate = Path(dirpath) / PROJECT_VERSION_RELPATH
        if candidate.is_file():
            found.append(candidate)
    return sorted(found)


def find_project_version(inputs: ActionInputs) -> Path:
    """Return the ProjectVersion.txt to read.

    Uses the explicit project-version input when given; otherwise searches
    under the project path and requires exactly one match.

    Raises:
        AmbiguousOrMissingVersionFileError: The search found zero or several files.
    """
    if inputs.project_version is not None:
        return inputs.project_version

    paths = find_version_files(inputs.path)
    if len(paths) != 1:
        for path in paths:
            actions.error(str(path))
        raise AmbiguousOrMissingVersionFileError(
            f"Found {len(paths)} matches for ProjectVersion.txt. Need exactly 1",
            candidates=[str(p) for p in paths],
        )

    return paths[0]


def parse_project_version(version_file: Path) -> tuple[str, str | None]:
    """Extract (version, changeset) from a ProjectVersion.txt.

    The revision-qualified line wins over the plain one regardless of order;
    each form is looked for in its own pass over the file.

    Raises:
        VersionNotFoundError: Neither line is present.
        OSError: The file cannot be read.
    """
    # Undecodable bytes become U+FFFD
    text = version_file.read_bytes().decode("utf-8", errors="replace")
    lines = [line.rstrip() for line in text.split("\n")]

    for line in lines:
        match = _REVISION_RE.match(line)
        if match:
            logger.info("Found Unity version (with changeset) %s (%s)", match.group(1), match.group(2))
            return match.group(1), match.group(2)

    for line in lines:
        match = _VERSION_RE.match(line)
        if match:
            logger.info("Found Unity version %s", match.group(1))
            return match.group(1), None

    raise VersionNotFoundError(f"Failed to find editor version in: '{version_file}'")


def project_root_for(version_file: Path) -> Path:
    """Project directory owning a ProjectVersion.txt, with symlinks resolved."""
    settings_dir = version_file.resolve().parent
    return (settings_dir / "..").resolve()


def determine_unity_version(inputs: ActionInputs) -> UnityVersion:
    """Locate ProjectVersion.txt and build the UnityVersion record."""
    with actions.group("Determining Unity project version"):
        version_file = find_project_version(inputs)
        logger.debug("Using %s", version_file)

        project_path = project_root_for(version_file)
        version, changeset = parse_project_version(version_file)

        return UnityVersion(project_path=project_path, version=version, changeset=changeset)


def library_folder_exists(project_path: Path) -> bool:
    """Whether the project has a Library cache folder."""
    return (project_path / LIBRARY_DIR_NAME).is_dir()

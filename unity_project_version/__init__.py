"""
Unity Project Version
=====================

Detect a Unity project's editor version from ProjectSettings/ProjectVersion.txt
and derive the matching build image for CI pipelines.

Main exports:
    - UnityVersion: Detected project path, editor version and changeset
    - ActionInputs, ToolConfig: Run inputs and registry configuration
    - determine_unity_version, check_image, image_name, run_action
    - Exception classes: UnityVersionError, ConfigurationError, etc.

Example:
    >>> from unity_project_version import ActionInputs, determine_unity_version
    >>> info = determine_unity_version(ActionInputs.resolve(path="."))
    >>> info.version
    '2021.3.4f1'
"""

from unity_project_version.config import (
    CONFIG_FILE_NAME,
    DEFAULT_IMAGE_REPOSITORY,
    DEFAULT_PACKAGE_VERSIONS_URL,
    ActionInputs,
    ToolConfig,
)
from unity_project_version.exceptions import (
    AmbiguousOrMissingVersionFileError,
    ConfigurationError,
    NetworkError,
    UnityVersionError,
    VersionNotFoundError,
)
from unity_project_version.pipeline import run_action
from unity_project_version.project import (
    UnityVersion,
    determine_unity_version,
    find_project_version,
    library_folder_exists,
    parse_project_version,
)
from unity_project_version.registry import check_image, image_name

__all__ = [
    # Config
    "ActionInputs",
    "ToolConfig",
    "CONFIG_FILE_NAME",
    "DEFAULT_IMAGE_REPOSITORY",
    "DEFAULT_PACKAGE_VERSIONS_URL",
    # Detection
    "UnityVersion",
    "determine_unity_version",
    "find_project_version",
    "library_folder_exists",
    "parse_project_version",
    # Registry
    "check_image",
    "image_name",
    # Pipeline
    "run_action",
    # Exceptions
    "UnityVersionError",
    "ConfigurationError",
    "AmbiguousOrMissingVersionFileError",
    "VersionNotFoundError",
    "NetworkError",
]


def main() -> None:
    """Entry point for unity-project-version command.

    This function is called by pyproject.toml's [project.scripts]:
        unity-project-version = "unity_project_version:main"
    """
    from unity_project_version.cli.app import cli_main

    cli_main()

"""
Unity Project Version Configuration Module
==========================================

Pydantic v2 based configuration.

Two layers:
    - ToolConfig: registry/HTTP settings, optionally loaded from TOML.
    - ActionInputs: per-run inputs resolved from the invocation environment
      (GitHub Actions ``INPUT_*`` variables or CLI options).
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from unity_project_version.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_IMAGE_REPOSITORY = "ghcr.io/playeveryware/unity"
DEFAULT_PACKAGE_VERSIONS_URL = "https://api.github.com/orgs/PlayEveryWare/packages/container/unity/versions"
DEFAULT_TIMEOUT = 30.0
CONFIG_FILE_NAME = ".unity-project-version.toml"

INPUT_PATH = "path"
INPUT_PROJECT_VERSION = "project-version"
INPUT_CHECK_IMAGE = "check-image"
INPUT_IMAGE_TOKEN = "image-token"


def input_env_name(name: str) -> str:
    """Environment variable the Actions runner uses for an input.

    Upper-cased, spaces become underscores, hyphens are kept:
    ``project-version`` -> ``INPUT_PROJECT-VERSION``.
    """
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read an action input, returning "" when it is not supplied."""
    env = os.environ if environ is None else environ
    return env.get(input_env_name(name), "").strip()


# =============================================================================
# Tool Configuration
# =============================================================================


class ToolConfig(BaseModel):
    """Registry and HTTP settings.

    Attributes:
        image_repository: Registry prefix joined with the Unity version to form the image name.
        package_versions_url: "List package versions" endpoint queried by check-image.
        timeout: HTTP timeout in seconds for the registry request.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        frozen=False,
        extra="ignore",
    )

    image_repository: str = DEFAULT_IMAGE_REPOSITORY
    package_versions_url: str = DEFAULT_PACKAGE_VERSIONS_URL
    timeout: Annotated[float, Field(gt=0)] = DEFAULT_TIMEOUT

    @field_validator("image_repository")
    @classmethod
    def validate_image_repository(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("image_repository must not be empty")
        if ":" in v.rsplit("/", 1)[-1]:
            raise ValueError("image_repository must not include a tag")
        return v

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """Load configuration from TOML file.

        Args:
            config_path: Path to TOML config file. If None, searches for
                         .unity-project-version.toml in current directory or Unity project root.

        Returns:
            ToolConfig instance with loaded or default values.
        """
        toml_path = config_path if config_path and config_path.exists() else cls._find_config_file()

        if toml_path:
            try:
                with open(toml_path, "rb") as f:
                    data = tomllib.load(f)
                return cls.model_validate(data)
            except (tomllib.TOMLDecodeError, OSError, ValidationError) as e:
                logger.warning("Ignoring config file %s: %s", toml_path, e)

        return cls()

    @classmethod
    def _find_config_file(cls) -> Path | None:
        cwd = Path.cwd()

        config_in_cwd = cwd / CONFIG_FILE_NAME
        if config_in_cwd.exists():
            return config_in_cwd

        for parent in [cwd, *list(cwd.parents)]:
            if (parent / "Assets").is_dir() and (parent / "ProjectSettings").is_dir():
                config_in_project = parent / CONFIG_FILE_NAME
                if config_in_project.exists():
                    return config_in_project
                break

        return None


# =============================================================================
# Action Inputs
# =============================================================================


class ActionInputs(BaseModel):
    """Validated inputs for a single run.

    ``project_version`` is already joined with ``path`` and known to exist.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    project_version: Path | None = None
    check_image: bool = False
    image_token: str | None = None

    @field_validator("check_image", mode="before")
    @classmethod
    def parse_check_image(cls, v: object) -> bool:
        # Anything other than a case-insensitive "true" leaves the check off
        if isinstance(v, bool):
            return v
        if v is None:
            return False
        return str(v).strip().lower() == "true"

    @field_validator("image_token", mode="before")
    @classmethod
    def empty_token_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def resolve(
        cls,
        path: str | None,
        project_version: str | None = None,
        check_image: str | bool | None = None,
        image_token: str | None = None,
    ) -> Self:
        """Validate raw input strings.

        Raises:
            ConfigurationError: path is missing, or project-version does not exist.
        """
        if not path or not path.strip():
            raise ConfigurationError("No path or project-version supplied to the action")

        root = Path(path.strip())
        version_path: Path | None = None
        if project_version and project_version.strip():
            version_path = root / project_version.strip()
            if not version_path.exists():
                raise ConfigurationError(f"project-version specified but path '{version_path}' does not exist")

        return cls(
            path=root,
            project_version=version_path,
            check_image=check_image,
            image_token=image_token,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Resolve inputs from ``INPUT_*`` environment variables."""
        return cls.resolve(
            path=get_input(INPUT_PATH, environ),
            project_version=get_input(INPUT_PROJECT_VERSION, environ),
            check_image=get_input(INPUT_CHECK_IMAGE, environ),
            image_token=get_input(INPUT_IMAGE_TOKEN, environ),
        )

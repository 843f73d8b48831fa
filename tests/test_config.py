"""Tests for input resolution and TOML configuration."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from unity_project_version.config import (
    CONFIG_FILE_NAME,
    DEFAULT_IMAGE_REPOSITORY,
    DEFAULT_PACKAGE_VERSIONS_URL,
    ActionInputs,
    ToolConfig,
    get_input,
    input_env_name,
)
from unity_project_version.exceptions import ConfigurationError

# =============================================================================
# Input names
# =============================================================================


class TestInputEnvName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("path", "INPUT_PATH"),
            ("project-version", "INPUT_PROJECT-VERSION"),
            ("check-image", "INPUT_CHECK-IMAGE"),
            ("image token", "INPUT_IMAGE_TOKEN"),
        ],
    )
    def test_env_name(self, name: str, expected: str) -> None:
        assert input_env_name(name) == expected

    def test_get_input_trims(self) -> None:
        assert get_input("path", {"INPUT_PATH": "  ./game \n"}) == "./game"

    def test_get_input_missing_is_empty(self) -> None:
        assert get_input("path", {}) == ""


# =============================================================================
# ActionInputs
# =============================================================================


class TestActionInputsResolve:
    def test_missing_path(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ActionInputs.resolve(path=None)
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_blank_path(self) -> None:
        with pytest.raises(ConfigurationError):
            ActionInputs.resolve(path="   ")

    def test_path_only(self, tmp_path: Path) -> None:
        inputs = ActionInputs.resolve(path=str(tmp_path))
        assert inputs.path == tmp_path
        assert inputs.project_version is None
        assert inputs.check_image is False
        assert inputs.image_token is None

    def test_project_version_joined_with_path(self, tmp_path: Path, make_project: Callable[..., Path]) -> None:
        make_project("game")
        inputs = ActionInputs.resolve(path=str(tmp_path), project_version="game/ProjectSettings/ProjectVersion.txt")
        assert inputs.project_version == tmp_path / "game" / "ProjectSettings" / "ProjectVersion.txt"

    def test_project_version_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ActionInputs.resolve(path=str(tmp_path), project_version="nope/ProjectVersion.txt")
        assert "does not exist" in exc_info.value.message
        assert "nope" in exc_info.value.message

    def test_empty_project_version_is_ignored(self, tmp_path: Path) -> None:
        inputs = ActionInputs.resolve(path=str(tmp_path), project_version="")
        assert inputs.project_version is None

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("TRUE", True),
            (" True ", True),
            ("false", False),
            ("yes", False),
            ("1", False),
            ("", False),
            (None, False),
            (True, True),
        ],
    )
    def test_check_image_parsing(self, tmp_path: Path, raw: str | bool | None, expected: bool) -> None:
        inputs = ActionInputs.resolve(path=str(tmp_path), check_image=raw)
        assert inputs.check_image is expected

    def test_blank_token_is_none(self, tmp_path: Path) -> None:
        inputs = ActionInputs.resolve(path=str(tmp_path), image_token="  ")
        assert inputs.image_token is None

    def test_token_without_check_image_is_accepted(self, tmp_path: Path) -> None:
        inputs = ActionInputs.resolve(path=str(tmp_path), image_token="FAKE_TOKEN")
        assert inputs.image_token == "FAKE_TOKEN"
        assert inputs.check_image is False

    def test_inputs_are_frozen(self, tmp_path: Path) -> None:
        inputs = ActionInputs.resolve(path=str(tmp_path))
        with pytest.raises(ValidationError):
            inputs.check_image = True  # type: ignore[misc]


class TestActionInputsFromEnv:
    def test_reads_hyphenated_variables(self, tmp_path: Path, make_project: Callable[..., Path]) -> None:
        make_project("game")
        env = {
            "INPUT_PATH": str(tmp_path),
            "INPUT_PROJECT-VERSION": "game/ProjectSettings/ProjectVersion.txt",
            "INPUT_CHECK-IMAGE": "true",
            "INPUT_IMAGE-TOKEN": "FAKE_TOKEN",
        }
        inputs = ActionInputs.from_env(env)
        assert inputs.path == tmp_path
        assert inputs.project_version is not None
        assert inputs.check_image is True
        assert inputs.image_token == "FAKE_TOKEN"

    def test_missing_path(self) -> None:
        with pytest.raises(ConfigurationError):
            ActionInputs.from_env({})

    def test_reads_process_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INPUT_PATH", str(tmp_path))
        assert ActionInputs.from_env().path == tmp_path


# =============================================================================
# ToolConfig
# =============================================================================


class TestToolConfig:
    def test_defaults(self) -> None:
        cfg = ToolConfig()
        assert cfg.image_repository == DEFAULT_IMAGE_REPOSITORY == "ghcr.io/playeveryware/unity"
        assert cfg.package_versions_url == DEFAULT_PACKAGE_VERSIONS_URL
        assert cfg.timeout == 30.0

    def test_repository_trailing_slash_stripped(self) -> None:
        assert ToolConfig(image_repository="ghcr.io/acme/unity/").image_repository == "ghcr.io/acme/unity"

    def test_repository_with_tag_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ToolConfig(image_repository="ghcr.io/acme/unity:latest")

    def test_repository_with_registry_port_accepted(self) -> None:
        assert ToolConfig(image_repository="localhost:5000/unity").image_repository == "localhost:5000/unity"

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ToolConfig(timeout=0)

    def test_load_explicit_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text('image_repository = "ghcr.io/acme/unity"\ntimeout = 5\n')
        cfg = ToolConfig.load(config_file)
        assert cfg.image_repository == "ghcr.io/acme/unity"
        assert cfg.timeout == 5.0

    def test_load_from_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("timeout = 12.5\n")
        monkeypatch.chdir(tmp_path)
        assert ToolConfig.load().timeout == 12.5

    def test_load_from_project_root(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_project: Callable[..., Path]
    ) -> None:
        root = make_project("game")
        (root / CONFIG_FILE_NAME).write_text('image_repository = "ghcr.io/acme/unity"\n')
        nested = root / "Assets" / "Scripts"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert ToolConfig.load().image_repository == "ghcr.io/acme/unity"

    def test_invalid_toml_falls_back_to_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "broken.toml"
        config_file.write_text("image_repository = [unterminated")
        assert ToolConfig.load(config_file) == ToolConfig()

    def test_invalid_values_fall_back_to_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.toml"
        config_file.write_text("timeout = -1\n")
        assert ToolConfig.load(config_file) == ToolConfig()

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        config_file = tmp_path / "extra.toml"
        config_file.write_text('something_else = "x"\n')
        assert ToolConfig.load(config_file) == ToolConfig()

    def test_no_file_uses_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert ToolConfig.load() == ToolConfig()

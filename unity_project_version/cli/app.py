"""
Unity Project Version - Typer Application
==========================================

Main Typer application: global options callback, the basic commands,
and registration of the project version commands.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import Annotated

import typer

from unity_project_version.cli.commands import project
from unity_project_version.cli.context import CLIContext
from unity_project_version.cli.output import (
    OutputConfig,
    configure_output,
    print_line,
    resolve_output_mode,
    set_quiet,
)
from unity_project_version.config import ToolConfig
from unity_project_version.log import _resolve_log_level, _setup_logging

# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    name="unity-project-version",
    help="Detect a Unity project's editor version and its build image for CI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# =============================================================================
# Global Options Callback
# =============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="TOML config file (default: .unity-project-version.toml in cwd or project root)",
            envvar="UNITY_PROJECT_VERSION_CONFIG",
        ),
    ] = None,
    pretty_flag: Annotated[
        bool | None,
        typer.Option(
            "--pretty/--no-pretty",
            help="Force pretty or plain output",
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress success messages (errors still go to stderr)",
            envvar="UNITY_PROJECT_VERSION_QUIET",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Enable debug logging",
        ),
    ] = False,
) -> None:
    """Detect a Unity project's editor version and its build image for CI."""
    _setup_logging(_resolve_log_level(debug_flag=debug))

    output_mode = resolve_output_mode(pretty_flag=pretty_flag)
    configure_output(output_mode)
    set_quiet(quiet)

    ctx.obj = CLIContext(
        config=ToolConfig.load(config_path),
        output=OutputConfig(mode=output_mode),
    )


# =============================================================================
# Basic Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show CLI version."""
    try:
        ver = pkg_version("unity-project-version")
    except PackageNotFoundError:
        ver = "unknown"
    print_line(f"unity-project-version {ver}")


@app.command("image-name")
def image_name_cmd(
    ctx: typer.Context,
    unity_version: Annotated[str, typer.Argument(help="Unity editor version, e.g. 2021.3.4f1")],
) -> None:
    """Print the build image name for a Unity version."""
    from unity_project_version.registry import image_name

    context: CLIContext = ctx.obj
    print_line(image_name(unity_version, context.config))


project.register(app)


def cli_main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    cli_main()

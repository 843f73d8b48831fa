"""Project version commands (file-based; only `run --check-image` touches the network)."""

from __future__ import annotations

from typing import Annotated

import typer

from unity_project_version.cli.context import CLIContext
from unity_project_version.cli.helpers import _should_json, handle_cli_errors
from unity_project_version.cli.output import print_json, print_key_value, print_success
from unity_project_version.config import (
    INPUT_CHECK_IMAGE,
    INPUT_IMAGE_TOKEN,
    INPUT_PATH,
    INPUT_PROJECT_VERSION,
    ActionInputs,
    input_env_name,
)

PathOption = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Unity project (or repository) root", envvar=input_env_name(INPUT_PATH)),
]
ProjectVersionOption = Annotated[
    str | None,
    typer.Option(
        "--project-version",
        help="ProjectVersion.txt path relative to --path (skips the search)",
        envvar=input_env_name(INPUT_PROJECT_VERSION),
    ),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


def register(app: typer.Typer) -> None:
    @app.command("run")
    @handle_cli_errors
    def run(
        ctx: typer.Context,
        path: PathOption = None,
        project_version: ProjectVersionOption = None,
        check_image: Annotated[
            str | None,
            typer.Option(
                "--check-image",
                help="'true' to look up the matching image tag in the registry",
                envvar=input_env_name(INPUT_CHECK_IMAGE),
            ),
        ] = None,
        image_token: Annotated[
            str | None,
            typer.Option(
                "--image-token",
                help="Token for the registry package API (required with --check-image true)",
                envvar=input_env_name(INPUT_IMAGE_TOKEN),
                show_default=False,
            ),
        ] = None,
        json_flag: JsonOption = False,
    ) -> None:
        """Detect the project's Unity version and write step outputs.

        Inputs default to the GitHub Actions INPUT_* variables. Outputs are
        appended to $GITHUB_OUTPUT when set, and always printed.
        """
        from unity_project_version.actions import OutputWriter
        from unity_project_version.pipeline import run_action

        context: CLIContext = ctx.obj
        inputs = ActionInputs.resolve(
            path=path,
            project_version=project_version,
            check_image=check_image,
            image_token=image_token,
        )
        writer = OutputWriter()
        run_action(inputs, writer, context.config)

        if _should_json(context, json_flag):
            print_json(writer.values)
        else:
            print_key_value(writer.values, "Outputs")
            if writer.output_file:
                print_success(f"Wrote {len(writer.values)} outputs to {writer.output_file}")

    @app.command("detect")
    @handle_cli_errors
    def detect(
        ctx: typer.Context,
        path: PathOption = None,
        project_version: ProjectVersionOption = None,
        json_flag: JsonOption = False,
    ) -> None:
        """Show the detected Unity version without writing outputs."""
        from unity_project_version.project import determine_unity_version, library_folder_exists
        from unity_project_version.registry import image_name

        context: CLIContext = ctx.obj
        inputs = ActionInputs.resolve(path=path, project_version=project_version)
        unity_version = determine_unity_version(inputs)

        data = {
            "project_path": str(unity_version.project_path),
            "version": unity_version.version,
            "changeset": unity_version.changeset,
            "library_folder_exists": library_folder_exists(unity_version.project_path),
            "image_name": image_name(unity_version.version, context.config),
        }
        if _should_json(context, json_flag):
            print_json(data)
        else:
            print_key_value({k: "" if v is None else v for k, v in data.items()}, "Unity project")

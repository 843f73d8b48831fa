"""Run the full detection pipeline and emit step outputs."""

from __future__ import annotations

from unity_project_version.actions import OutputWriter
from unity_project_version.config import ActionInputs, ToolConfig
from unity_project_version.project import UnityVersion, determine_unity_version, library_folder_exists
from unity_project_version.registry import check_image, image_name

OUTPUT_PROJECT_PATH = "project-path"
OUTPUT_UNITY_VERSION = "unity-version"
OUTPUT_UNITY_CHANGESET = "unity-changeset"
OUTPUT_LIBRARY_FOLDER_EXISTS = "library-folder-exists"
OUTPUT_IMAGE_NAME = "image-name"
OUTPUT_IMAGE_EXISTS = "image-exists"


def run_action(
    inputs: ActionInputs,
    writer: OutputWriter,
    config: ToolConfig | None = None,
) -> UnityVersion:
    """Detect the project version and write every output.

    image-exists is written as soon as the registry check finishes; the
    remaining outputs follow once nothing else can fail. Any exception
    leaves ``writer`` holding only what was already emitted.
    """
    cfg = config or ToolConfig()

    unity_version = determine_unity_version(inputs)
    library_exists = library_folder_exists(unity_version.project_path)
    name = image_name(unity_version.version, cfg)

    if inputs.check_image:
        exists = check_image(unity_version.version, inputs.image_token, cfg)
        writer.set(OUTPUT_IMAGE_EXISTS, exists)

    writer.set(OUTPUT_PROJECT_PATH, str(unity_version.project_path))
    writer.set(OUTPUT_UNITY_VERSION, unity_version.version)
    writer.set(OUTPUT_UNITY_CHANGESET, unity_version.changeset)
    writer.set(OUTPUT_LIBRARY_FOLDER_EXISTS, library_exists)
    writer.set(OUTPUT_IMAGE_NAME, name)

    return unity_version

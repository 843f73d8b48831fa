"""CLI context object."""

from __future__ import annotations

from dataclasses import dataclass

from unity_project_version.cli.output import OutputConfig, OutputMode
from unity_project_version.config import ToolConfig


@dataclass
class CLIContext:
    """Context object shared across commands via ctx.obj."""

    config: ToolConfig
    output: OutputConfig = OutputConfig(mode=OutputMode.PRETTY)

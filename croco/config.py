"""Croco configuration.

Typed run configuration for the command-line generator.  Settings use
Pydantic v2 models so they are validated at construction time.  Only the CLI
layer reads the environment; the scaffolder itself is handed explicit values.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from croco.scaffolder.catalog import Variant
from croco.scaffolder.materializer import project_root


class Config(BaseModel):
    """Settings for one generator run.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and handed to the ``RunCoordinator``.
    """

    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory the project folder is created in",
    )
    variant: Variant = Field(default=Variant.MINIMAL, description="Skeleton to generate")
    vcs_command: list[str] = Field(
        default_factory=lambda: ["git", "init"],
        min_length=1,
        description="Command that initialises version control in the new project",
    )
    install_command: list[str] = Field(
        default_factory=lambda: ["npm", "install"],
        min_length=1,
        description="Command that installs the new project's dependencies",
    )
    command_timeout: int | None = Field(
        default=None,
        ge=1,
        description="Per-command timeout in seconds; None waits for completion",
    )

    def project_root(self, project_name: str) -> Path:
        """Return the directory a project named *project_name* is generated into."""
        return project_root(self.output_dir, project_name)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CROCO_OUTPUT_DIR, CROCO_VARIANT, CROCO_VCS_COMMAND,
            CROCO_INSTALL_COMMAND, CROCO_COMMAND_TIMEOUT.

        Command variables are split shell-style, e.g.
        ``CROCO_INSTALL_COMMAND="pnpm install --silent"``.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CROCO_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CROCO_OUTPUT_DIR"])
        if os.environ.get("CROCO_VARIANT"):
            kwargs["variant"] = os.environ["CROCO_VARIANT"].strip().lower()
        if os.environ.get("CROCO_VCS_COMMAND"):
            kwargs["vcs_command"] = shlex.split(os.environ["CROCO_VCS_COMMAND"])
        if os.environ.get("CROCO_INSTALL_COMMAND"):
            kwargs["install_command"] = shlex.split(os.environ["CROCO_INSTALL_COMMAND"])
        if os.environ.get("CROCO_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["CROCO_COMMAND_TIMEOUT"])

        return cls(**kwargs)

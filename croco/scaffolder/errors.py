"""Exceptions raised while scaffolding a project.

Every failure of a run derives from ``ScaffoldError`` so the CLI entry point
can report it in one place.  None of these are retried or recovered from: the
first one raised aborts the run and leaves whatever was already written on
disk.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class UnknownTemplateError(ScaffoldError):
    """Raised when a tree entry references a template id the catalog lacks.

    This is a defect in the tree specification, never a user error.
    """

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Unknown template: {template_id!r}")


class FilesystemError(ScaffoldError):
    """Raised when creating a directory or writing a file fails."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class ExternalCommandError(ScaffoldError):
    """Raised when a post-step command (git, npm, ...) does not succeed."""

    def __init__(self, message: str, command: str = "", returncode: int | None = None) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(message)

"""Shared pytest fixtures for the Croco test suite.

Provides reusable fixtures for:
- Stock template catalogs and render parameters
- Temporary output directories
- Scripted prompt answers and recorded post-step commands
"""

from __future__ import annotations

from pathlib import Path

import pytest

from croco.config import Config
from croco.scaffolder import RenderParams, TemplateCatalog, Variant


# ---------------------------------------------------------------------------
# Catalogs & parameters
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_catalog() -> TemplateCatalog:
    """Catalog for the minimal skeleton."""
    return TemplateCatalog.for_variant(Variant.MINIMAL)


@pytest.fixture
def full_catalog() -> TemplateCatalog:
    """Catalog for the full skeleton."""
    return TemplateCatalog.for_variant(Variant.FULL)


@pytest.fixture
def params() -> RenderParams:
    """Render parameters for a project called ``acme-app``."""
    return RenderParams(project_name="acme-app")


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Empty directory that generated projects are placed in."""
    out = tmp_path / "workspace"
    out.mkdir()
    yield out


@pytest.fixture
def config(output_dir: Path) -> Config:
    """Minimal-variant config writing into ``output_dir``."""
    return Config(output_dir=output_dir)


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------

class ScriptedPrompter:
    """Prompter returning fixed answers."""

    def __init__(self, project_name: str = "acme-app", install: bool = False) -> None:
        self.project_name = project_name
        self.install = install
        self.asked: list[str] = []

    def ask_project_name(self) -> str:
        self.asked.append("project_name")
        return self.project_name

    def ask_install(self) -> bool:
        self.asked.append("install")
        return self.install


class RecordingRunner:
    """Command runner that records calls instead of spawning processes.

    ``fail_on`` names a program (``cmd[0]``) whose invocation raises the
    supplied exception.
    """

    def __init__(self, fail_on: str | None = None, error: Exception | None = None) -> None:
        self.calls: list[tuple[list[str], Path]] = []
        self.fail_on = fail_on
        self.error = error

    async def run(self, cmd: list[str], cwd: str | Path) -> None:
        self.calls.append((list(cmd), Path(cwd)))
        if self.fail_on is not None and cmd[0] == self.fail_on:
            raise self.error


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()

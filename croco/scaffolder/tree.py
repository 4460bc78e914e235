"""Declarative project tree specifications.

A ``TreeSpec`` is a fixed, ordered list of directories to pre-create plus an
ordered list of ``(relative path, template id)`` file entries.  The minimal
and full skeletons share one common prefix; the full skeleton only appends the
frontend page, layout, component and stylesheet entries.

The materializer trusts these declarations: it creates exactly the declared
directories and never infers a missing parent from a file path.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import Variant
from .errors import UnknownTemplateError

if TYPE_CHECKING:
    from .catalog import TemplateCatalog


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


def _validate_relative(value: str) -> str:
    """Normalise *value* to a POSIX path that stays inside the project root."""
    if not value or not value.strip():
        raise ValueError("path must not be empty")
    path = PurePosixPath(value.replace("\\", "/"))
    if path.is_absolute():
        raise ValueError(f"path must be relative to the project root: {value!r}")
    if ".." in path.parts:
        raise ValueError(f"path must not contain '..' segments: {value!r}")
    if path.as_posix() == ".":
        raise ValueError(f"path must name something below the project root: {value!r}")
    return path.as_posix()


class DirEntry(BaseModel):
    """A directory to create, relative to the project root."""

    model_config = ConfigDict(frozen=True)

    path: str

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return _validate_relative(value)


class PathEntry(BaseModel):
    """A file to write, relative to the project root, and its template id."""

    model_config = ConfigDict(frozen=True)

    path: str
    template_id: str = Field(..., min_length=1)

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return _validate_relative(value)

    @property
    def parent(self) -> str:
        """Parent directory of the file, ``"."`` for files at the root."""
        return PurePosixPath(self.path).parent.as_posix()


# ---------------------------------------------------------------------------
# TreeSpec
# ---------------------------------------------------------------------------


class TreeSpec(BaseModel):
    """Ordered directory and file declarations for one project skeleton."""

    model_config = ConfigDict(frozen=True)

    name: str = "custom"
    dir_entries: tuple[DirEntry, ...] = ()
    file_entries: tuple[PathEntry, ...] = ()

    @classmethod
    def build(
        cls,
        name: str,
        directories: Iterable[str],
        files: Iterable[tuple[str, str]],
    ) -> TreeSpec:
        """Build a spec from plain ``str`` directories and ``(path, id)`` pairs."""
        return cls(
            name=name,
            dir_entries=tuple(DirEntry(path=d) for d in directories),
            file_entries=tuple(PathEntry(path=p, template_id=t) for p, t in files),
        )

    def directories(self) -> tuple[DirEntry, ...]:
        return self.dir_entries

    def files(self) -> tuple[PathEntry, ...]:
        return self.file_entries

    def template_ids(self) -> list[str]:
        """Return the referenced template ids in first-use order."""
        return list(dict.fromkeys(entry.template_id for entry in self.file_entries))

    # -- Build-time checks ---------------------------------------------------

    def check_against(self, catalog: TemplateCatalog) -> None:
        """Raise ``UnknownTemplateError`` for the first id *catalog* lacks."""
        for template_id in self.template_ids():
            if template_id not in catalog:
                raise UnknownTemplateError(template_id)

    def undeclared_parents(self) -> list[PathEntry]:
        """Return file entries whose parent directory is not declared."""
        declared = {entry.path for entry in self.dir_entries}
        return [
            entry
            for entry in self.file_entries
            if entry.parent != "." and entry.parent not in declared
        ]


# ---------------------------------------------------------------------------
# Stock skeletons
# ---------------------------------------------------------------------------

_COMMON_DIRECTORIES: tuple[str, ...] = (
    "apps",
    "apps/frontend",
    "apps/frontend/src",
    "apps/frontend/src/utils",
    "apps/backend",
    "apps/backend/src",
    "apps/backend/src/controllers",
    "apps/backend/src/models",
    "apps/backend/src/routes",
    "apps/backend/src/middleware",
    "packages",
    "packages/types",
)

_COMMON_FILES: tuple[tuple[str, str], ...] = (
    # Root workspace
    ("package.json", "root/package.json"),
    ("tsconfig.json", "root/tsconfig.json"),
    (".env", "root/env"),
    (".gitignore", "root/gitignore"),
    ("turbo.json", "root/turbo.json"),
    # Frontend
    ("apps/frontend/package.json", "frontend/package.json"),
    ("apps/frontend/astro.config.mjs", "frontend/astro.config.mjs"),
    ("apps/frontend/src/utils/cn.ts", "frontend/src/utils/cn.ts"),
    # Backend
    ("apps/backend/package.json", "backend/package.json"),
    ("apps/backend/tsconfig.json", "backend/tsconfig.json"),
    ("apps/backend/src/index.ts", "backend/src/index.ts"),
    ("apps/backend/src/errors.ts", "backend/src/errors.ts"),
    ("apps/backend/src/middleware/errorHandler.ts", "backend/src/middleware/errorHandler.ts"),
    ("apps/backend/src/routes/index.ts", "backend/src/routes/index.ts"),
    (
        "apps/backend/src/controllers/exampleController.ts",
        "backend/src/controllers/exampleController.ts",
    ),
    ("apps/backend/src/models/example.ts", "backend/src/models/example.ts"),
    # Shared types
    ("packages/types/package.json", "types/package.json"),
    ("packages/types/index.ts", "types/index.ts"),
)

_FULL_DIRECTORIES: tuple[str, ...] = (
    "apps/frontend/src/layouts",
    "apps/frontend/src/pages",
    "apps/frontend/src/components",
    "apps/frontend/src/components/ui",
    "apps/frontend/src/styles",
)

_FULL_FILES: tuple[tuple[str, str], ...] = (
    ("apps/frontend/tsconfig.json", "frontend/tsconfig.json"),
    ("apps/frontend/src/styles/global.css", "frontend/src/styles/global.css"),
    ("apps/frontend/src/layouts/Layout.astro", "frontend/src/layouts/Layout.astro"),
    ("apps/frontend/src/components/ui/Button.tsx", "frontend/src/components/ui/Button.tsx"),
    ("apps/frontend/src/components/Welcome.tsx", "frontend/src/components/Welcome.tsx"),
    ("apps/frontend/src/pages/index.astro", "frontend/src/pages/index.astro"),
)

MINIMAL_TREE = TreeSpec.build(Variant.MINIMAL.value, _COMMON_DIRECTORIES, _COMMON_FILES)

FULL_TREE = TreeSpec.build(
    Variant.FULL.value,
    _COMMON_DIRECTORIES + _FULL_DIRECTORIES,
    _COMMON_FILES + _FULL_FILES,
)

_TREES: dict[Variant, TreeSpec] = {
    Variant.MINIMAL: MINIMAL_TREE,
    Variant.FULL: FULL_TREE,
}


def tree_spec_for(variant: Variant | str) -> TreeSpec:
    """Return the stock tree specification for *variant*."""
    return _TREES[Variant(variant)]

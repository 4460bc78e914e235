"""Materializes a tree specification onto the filesystem.

Takes a ``TreeSpec``, a ``TemplateCatalog`` and the run's ``RenderParams`` and
writes the project in three strictly ordered steps:

1. create the project root (no-op if it already exists);
2. create every declared directory, in declared order;
3. render and write every declared file, in declared order.

The first failure aborts the run.  Nothing already written is rolled back,
and existing files at declared paths are overwritten.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePath

from .catalog import RenderParams, TemplateCatalog
from .errors import FilesystemError
from .tree import TreeSpec


def project_root(output_dir: str | Path, project_name: str) -> Path:
    """Return the directory a project named *project_name* is generated into.

    The name is always joined under *output_dir*: a leading anchor (such as
    ``/`` in ``/tmp/acme-app``) is dropped rather than replacing the base.
    """
    name = PurePath(project_name)
    parts = name.parts[1:] if name.anchor else name.parts
    return Path(output_dir).joinpath(*parts)


class Materializer:
    """Writes the files a ``TreeSpec`` declares, rendered from a catalog."""

    def __init__(self, catalog: TemplateCatalog) -> None:
        self.catalog = catalog

    # -- Public API --------------------------------------------------------

    async def materialize(
        self,
        root: str | Path,
        spec: TreeSpec,
        params: RenderParams,
    ) -> list[Path]:
        """Create *spec* under *root*.

        Args:
            root: Project root.  Created if missing; an existing directory is
                reused as-is.
            spec: Directories and files to create.
            params: Parameters passed to every template render.

        Returns:
            The written file paths, in declared order.

        Raises:
            FilesystemError: A directory or file operation failed.
            UnknownTemplateError: A file entry names a template the catalog
                does not have.
        """
        root = Path(root)

        await asyncio.to_thread(_make_dir, root)
        await self._create_directories(root, spec)
        return await self._write_files(root, spec, params)

    # -- Steps -------------------------------------------------------------

    async def _create_directories(self, root: Path, spec: TreeSpec) -> None:
        for entry in spec.directories():
            await asyncio.to_thread(_make_dir, root / entry.path)

    async def _write_files(
        self, root: Path, spec: TreeSpec, params: RenderParams
    ) -> list[Path]:
        written: list[Path] = []
        for entry in spec.files():
            content = self.catalog.render(entry.template_id, params)
            target = root / entry.path
            await asyncio.to_thread(_write_file, target, content)
            written.append(target)
        return written


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------


def _make_dir(path: Path) -> None:
    """Create *path* and any missing ancestors; existing directories are fine."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            f"Cannot create directory {path}: {exc.strerror or exc}", path=path
        ) from exc


def _write_file(path: Path, content: str) -> None:
    """Create or truncate *path* with *content*.  Parents are never created."""
    try:
        path.write_text(content, encoding="utf-8")
    except FileNotFoundError as exc:
        if not path.parent.is_dir():
            raise FilesystemError(
                f"Cannot write {path}: parent directory {path.parent} does not exist",
                path=path.parent,
            ) from exc
        raise FilesystemError(f"Cannot write {path}: {exc.strerror or exc}", path=path) from exc
    except OSError as exc:
        raise FilesystemError(f"Cannot write {path}: {exc.strerror or exc}", path=path) from exc

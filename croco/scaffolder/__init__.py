"""Croco scaffolder -- materializes the project skeleton.

The scaffolder turns a project name into a populated multi-package tree
(workspace manifests, Astro frontend, Express backend, shared types).

Quick usage::

    from croco.scaffolder import Materializer, RenderParams, TemplateCatalog, tree_spec_for

    catalog = TemplateCatalog.for_variant("full")
    materializer = Materializer(catalog)
    written = await materializer.materialize(
        "/tmp/acme-app", tree_spec_for("full"), RenderParams(project_name="acme-app")
    )
"""

from croco.scaffolder.catalog import RenderParams, TemplateCatalog, Variant
from croco.scaffolder.errors import (
    ExternalCommandError,
    FilesystemError,
    ScaffoldError,
    UnknownTemplateError,
)
from croco.scaffolder.materializer import Materializer, project_root
from croco.scaffolder.tree import (
    FULL_TREE,
    MINIMAL_TREE,
    DirEntry,
    PathEntry,
    TreeSpec,
    tree_spec_for,
)

__all__ = [
    "DirEntry",
    "ExternalCommandError",
    "FULL_TREE",
    "FilesystemError",
    "MINIMAL_TREE",
    "Materializer",
    "PathEntry",
    "RenderParams",
    "ScaffoldError",
    "TemplateCatalog",
    "TreeSpec",
    "UnknownTemplateError",
    "Variant",
    "project_root",
    "tree_spec_for",
]

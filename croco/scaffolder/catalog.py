"""Template catalog for project scaffolding.

A ``TemplateCatalog`` is an immutable registry mapping a template id to a pure
render function ``(RenderParams) -> str``.  The stock catalogs are built from
the Jinja2 files shipped under ``croco/scaffolder/templates/``:

* ``core/`` holds every template of the minimal skeleton.
* ``full/`` holds the page, layout, component and stylesheet templates that
  the full skeleton adds on top.

A template's id is its path relative to its layer directory with the ``.j2``
suffix dropped, e.g. ``core/root/package.json.j2`` -> ``"root/package.json"``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from enum import Enum
from functools import partial
from pathlib import Path
from types import MappingProxyType
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, meta, select_autoescape
from pydantic import BaseModel, ConfigDict, Field

from .errors import UnknownTemplateError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

_TEMPLATE_SUFFIX = ".j2"


class Variant(str, Enum):
    """Project skeleton variants."""

    MINIMAL = "minimal"
    FULL = "full"


# Template layers loaded for each variant, in order.
_VARIANT_LAYERS: dict[Variant, tuple[str, ...]] = {
    Variant.MINIMAL: ("core",),
    Variant.FULL: ("core", "full"),
}


# ---------------------------------------------------------------------------
# Render parameters
# ---------------------------------------------------------------------------


class RenderParams(BaseModel):
    """The only input threaded into every template render."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1, description="Name of the generated project")

    def as_context(self) -> dict[str, Any]:
        """Return the Jinja2 context for this run."""
        return {"project_name": self.project_name}


RenderFn = Callable[[RenderParams], str]


# ---------------------------------------------------------------------------
# TemplateCatalog
# ---------------------------------------------------------------------------


class TemplateCatalog:
    """Immutable registry of named, pure render functions.

    Catalogs are normally obtained from :meth:`for_variant`.  Constructing one
    directly from a mapping is useful for ad-hoc trees (and in tests).
    """

    def __init__(
        self,
        renderers: Mapping[str, RenderFn],
        *,
        parameterized: Iterable[str] = (),
    ) -> None:
        self._renderers: Mapping[str, RenderFn] = MappingProxyType(dict(renderers))
        self._parameterized = frozenset(parameterized)
        unknown = self._parameterized - set(self._renderers)
        if unknown:
            raise UnknownTemplateError(sorted(unknown)[0])

    @classmethod
    def for_variant(
        cls,
        variant: Variant | str = Variant.MINIMAL,
        template_dir: str | Path | None = None,
    ) -> TemplateCatalog:
        """Build the catalog for *variant* from the Jinja2 template layers.

        Args:
            variant: ``"minimal"`` or ``"full"``.  The full catalog is a strict
                superset of the minimal one.
            template_dir: Root holding the ``core/`` and ``full/`` layers.
                Defaults to the templates shipped with the package.

        Raises:
            ValueError: If two layers define the same template id.
        """
        variant = Variant(variant)
        root = Path(template_dir) if template_dir is not None else _DEFAULT_TEMPLATE_DIR
        layers = [root / layer for layer in _VARIANT_LAYERS[variant]]

        env = Environment(
            loader=FileSystemLoader([str(layer) for layer in layers]),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        renderers: dict[str, RenderFn] = {}
        parameterized: set[str] = set()
        for layer in layers:
            for template_file in sorted(layer.rglob(f"*{_TEMPLATE_SUFFIX}")):
                name = template_file.relative_to(layer).as_posix()
                template_id = name[: -len(_TEMPLATE_SUFFIX)]
                if template_id in renderers:
                    raise ValueError(
                        f"Template {template_id!r} is defined by more than one layer"
                    )
                renderers[template_id] = partial(_render_template, env, name)
                if "project_name" in _referenced_names(env, name):
                    parameterized.add(template_id)

        return cls(renderers, parameterized=parameterized)

    # -- Lookup --------------------------------------------------------------

    def render(self, template_id: str, params: RenderParams) -> str:
        """Render *template_id* with *params*.

        Raises:
            UnknownTemplateError: If *template_id* is not registered.
        """
        try:
            renderer = self._renderers[template_id]
        except KeyError:
            raise UnknownTemplateError(template_id) from None
        return renderer(params)

    def parameterized_ids(self) -> frozenset[str]:
        """Return the ids of templates that interpolate ``project_name``."""
        return self._parameterized

    def ids(self) -> list[str]:
        """Return every registered template id, sorted."""
        return sorted(self._renderers)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._renderers

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())

    def __len__(self) -> int:
        return len(self._renderers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} templates)"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _render_template(env: Environment, name: str, params: RenderParams) -> str:
    return env.get_template(name).render(**params.as_context())


def _referenced_names(env: Environment, name: str) -> set[str]:
    """Return the undeclared variables a template reads."""
    source, _, _ = env.loader.get_source(env, name)
    return meta.find_undeclared_variables(env.parse(source))

"""Tests for project tree specifications.

Covers:
- DirEntry / PathEntry path validation
- Stock minimal and full trees (shared prefix, declared parents, catalog ids)
- Build-time checks (check_against, undeclared_parents)
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from croco.scaffolder.catalog import TemplateCatalog, Variant
from croco.scaffolder.errors import UnknownTemplateError
from croco.scaffolder.tree import (
    FULL_TREE,
    MINIMAL_TREE,
    DirEntry,
    PathEntry,
    TreeSpec,
    tree_spec_for,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


class TestEntries:
    def test_relative_path_accepted(self):
        entry = PathEntry(path="apps/backend/src/index.ts", template_id="backend/src/index.ts")
        assert entry.path == "apps/backend/src/index.ts"
        assert entry.parent == "apps/backend/src"

    def test_root_file_parent(self):
        assert PathEntry(path="package.json", template_id="root/package.json").parent == "."

    def test_backslashes_normalised(self):
        assert DirEntry(path="apps\\frontend").path == "apps/frontend"

    def test_redundant_segments_normalised(self):
        assert DirEntry(path="apps//frontend/./src/").path == "apps/frontend/src"

    @pytest.mark.parametrize("bad", ["", "   ", "/etc", "../outside", "apps/../../x", "."])
    def test_escaping_paths_rejected(self, bad):
        with pytest.raises(ValidationError):
            DirEntry(path=bad)
        with pytest.raises(ValidationError):
            PathEntry(path=bad, template_id="root/package.json")

    def test_empty_template_id_rejected(self):
        with pytest.raises(ValidationError):
            PathEntry(path="package.json", template_id="")

    def test_entries_hashable(self):
        assert len({DirEntry(path="apps"), DirEntry(path="apps")}) == 1


# ---------------------------------------------------------------------------
# Stock trees
# ---------------------------------------------------------------------------


class TestStockTrees:
    def test_lookup_by_variant(self):
        assert tree_spec_for(Variant.MINIMAL) is MINIMAL_TREE
        assert tree_spec_for("full") is FULL_TREE

    def test_unknown_variant(self):
        with pytest.raises(ValueError):
            tree_spec_for("enterprise")

    def test_minimal_layout(self):
        dirs = [d.path for d in MINIMAL_TREE.directories()]
        assert dirs[:2] == ["apps", "apps/frontend"]
        assert "packages/types" in dirs
        files = [f.path for f in MINIMAL_TREE.files()]
        assert files[0] == "package.json"
        assert len(files) == 18
        assert ".env" in files
        assert ".gitignore" in files

    def test_full_shares_minimal_prefix(self):
        n_dirs = len(MINIMAL_TREE.directories())
        n_files = len(MINIMAL_TREE.files())
        assert FULL_TREE.directories()[:n_dirs] == MINIMAL_TREE.directories()
        assert FULL_TREE.files()[:n_files] == MINIMAL_TREE.files()
        assert len(FULL_TREE.files()) > n_files

    @pytest.mark.parametrize("variant", list(Variant))
    def test_every_parent_declared(self, variant):
        assert tree_spec_for(variant).undeclared_parents() == []

    @pytest.mark.parametrize("variant", list(Variant))
    def test_every_template_in_catalog(self, variant):
        tree_spec_for(variant).check_against(TemplateCatalog.for_variant(variant))

    @pytest.mark.parametrize("variant", list(Variant))
    def test_catalog_fully_used(self, variant):
        catalog = TemplateCatalog.for_variant(variant)
        assert sorted(tree_spec_for(variant).template_ids()) == catalog.ids()

    @pytest.mark.parametrize("variant", list(Variant))
    def test_file_paths_unique(self, variant):
        paths = [f.path for f in tree_spec_for(variant).files()]
        assert len(paths) == len(set(paths))

    def test_full_tree_rejected_by_minimal_catalog(self, minimal_catalog):
        with pytest.raises(UnknownTemplateError):
            FULL_TREE.check_against(minimal_catalog)


# ---------------------------------------------------------------------------
# Custom trees
# ---------------------------------------------------------------------------


class TestCustomTree:
    def test_build(self):
        spec = TreeSpec.build("demo", ["a", "a/b"], [("a/b/c.txt", "x"), ("top.txt", "y")])
        assert spec.name == "demo"
        assert [d.path for d in spec.directories()] == ["a", "a/b"]
        assert [(f.path, f.template_id) for f in spec.files()] == [
            ("a/b/c.txt", "x"),
            ("top.txt", "y"),
        ]

    def test_template_ids_first_use_order(self):
        spec = TreeSpec.build("demo", [], [("a", "y"), ("b", "x"), ("c", "y")])
        assert spec.template_ids() == ["y", "x"]

    def test_undeclared_parents(self):
        spec = TreeSpec.build("demo", ["a"], [("a/ok.txt", "x"), ("b/missing.txt", "x")])
        assert [e.path for e in spec.undeclared_parents()] == ["b/missing.txt"]

    def test_check_against_reports_first_missing(self):
        catalog = TemplateCatalog({"x": lambda p: "x"})
        spec = TreeSpec.build("demo", [], [("a", "x"), ("b", "ghost"), ("c", "phantom")])
        with pytest.raises(UnknownTemplateError) as exc_info:
            spec.check_against(catalog)
        assert exc_info.value.template_id == "ghost"

    def test_frozen(self):
        with pytest.raises(ValidationError):
            MINIMAL_TREE.name = "changed"

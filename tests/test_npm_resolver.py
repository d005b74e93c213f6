"""Tests for export subpath probing and the module path resolver."""

import pytest

from conftest import real
from resolution.npm_resolver import export_subpaths, npm_resolve_wesl


class TestExportSubpaths:

    def test_longest_first(self):
        assert export_subpaths(["foo", "bar", "baz"]) == ["foo/bar/baz", "foo/bar", "foo"]

    def test_single_segment(self):
        assert export_subpaths(["foo"]) == ["foo"]

    @pytest.mark.parametrize("segments", [["a"], ["a", "b"], ["a", "b", "c", "d", "e"]])
    def test_one_candidate_per_segment(self, segments):
        paths = export_subpaths(segments)
        assert len(paths) == len(segments)
        counts = [len(p.split("/")) for p in paths]
        assert counts == sorted(counts, reverse=True)
        assert len(set(counts)) == len(counts)
        full = "/".join(segments)
        assert all(full.startswith(p) for p in paths)


class TestNpmResolveWesl:
    """Lookup order and short-circuiting, using a resolver double."""

    def test_lookup_order(self, fake_resolver):
        resolver = fake_resolver({"@lygia/shader-utils/color": "/pkgs/color.js"})

        found = npm_resolve_wesl(["lygia__shader_utils", "color", "rgb"], "/proj", resolver)

        assert found == "/pkgs/color.js"
        assert resolver.calls == [
            "@lygia/shader_utils/color/rgb",
            "@lygia/shader-utils/color/rgb",
            "@lygia/shader_utils/color",
            "@lygia/shader-utils/color",
        ]

    def test_first_hit_wins(self, fake_resolver):
        resolver = fake_resolver({"foo/bar": "/a.js", "foo": "/b.js"})
        assert npm_resolve_wesl(["foo", "bar"], "/proj", resolver) == "/a.js"
        assert resolver.calls == ["foo/bar"]

    def test_underscore_variant_preferred(self, fake_resolver):
        resolver = fake_resolver({"my_pkg": "/under.js", "my-pkg": "/hyphen.js"})
        assert npm_resolve_wesl(["my_pkg", "fn"], "/proj", resolver) == "/under.js"

    def test_not_found_returns_none(self, fake_resolver):
        resolver = fake_resolver()
        assert npm_resolve_wesl(["nope", "elem"], "/proj", resolver) is None
        assert len(resolver.calls) == 4

    def test_resolver_receives_project_dir(self):
        seen = []

        class Recorder:
            def resolve(self, base_dir, specifier):
                seen.append(base_dir)
                return None

        npm_resolve_wesl(["a", "b"], "/my/project", Recorder())
        assert set(seen) == {"/my/project"}


class TestNpmResolveWeslOnDisk:
    """End to end with the default node resolver."""

    def test_single_bundle_package(self, project):
        found = npm_resolve_wesl(["random_wgsl", "pcg"], str(project))
        assert found == real(project / "node_modules/random_wgsl/dist/weslBundle.js")

    def test_wildcard_export_prefers_longest_subpath(self, project):
        found = npm_resolve_wesl(["multi_pkg", "dir", "nested", "elem"], str(project))
        assert found == real(project / "node_modules/multi_pkg/dist/dir/nested/weslBundle.js")

    def test_scoped_hyphenated_package(self, project):
        found = npm_resolve_wesl(["lygia__shader_utils", "color", "rgb2hsv"], str(project))
        assert found == real(project / "node_modules/@lygia/shader-utils/dist/weslBundle.js")

    def test_missing_package(self, project):
        assert npm_resolve_wesl(["not_installed", "fn"], str(project)) is None

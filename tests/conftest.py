"""Shared fixtures: small on-disk npm projects holding weslBundle packages."""

import json
import os

import pytest

from constants import Constants

BUNDLE_JS = """\
export const weslBundle = {{
  name: "{name}",
  edition: "unstable_2025_1",
  modules: {{
    "{module}": "fn main() {{ }}",
  }},
}};

export default weslBundle;
"""


def write_package(root, name, manifest=None, files=None):
    """Create node_modules/<name> below root and return the package dir."""
    package_dir = root / "node_modules" / name
    package_dir.mkdir(parents=True, exist_ok=True)
    data = {"name": name, "version": "1.0.0"}
    data.update(manifest or {})
    (package_dir / "package.json").write_text(json.dumps(data, indent=2))
    for rel_path, content in (files or {}).items():
        target = package_dir / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return package_dir


def bundle_js(name, module="lib.wgsl"):
    """Source of a minimal generated weslBundle.js."""
    return BUNDLE_JS.format(name=name, module=module)


def real(path):
    return os.path.realpath(str(path))


@pytest.fixture
def project(tmp_path):
    """Project with a single-bundle, a multi-bundle and a scoped package."""
    (tmp_path / "package.json").write_text(json.dumps({"name": "app", "version": "0.0.1"}))
    write_package(
        tmp_path,
        "random_wgsl",
        {"exports": {".": {"types": "./dist/weslBundle.d.ts", "import": "./dist/weslBundle.js"}}},
        {"dist/weslBundle.js": bundle_js("random_wgsl")},
    )
    write_package(
        tmp_path,
        "multi_pkg",
        {"exports": {"./*": {"import": "./dist/*/weslBundle.js"}}},
        {"dist/dir/nested/weslBundle.js": bundle_js("multi_pkg", "dir/nested.wesl")},
    )
    write_package(
        tmp_path,
        "@lygia/shader-utils",
        {"exports": {".": "./dist/weslBundle.js"}},
        {"dist/weslBundle.js": bundle_js("lygia__shader_utils", "color.wesl")},
    )
    return tmp_path


@pytest.fixture
def restore_constants():
    """Undo Constants changes made by configuration code under test."""
    saved = {
        "BUILTIN_NAMESPACES": list(Constants.BUILTIN_NAMESPACES),
        "RESOLVE_CONDITIONS": list(Constants.RESOLVE_CONDITIONS),
        "RESOLVE_EXTENSIONS": list(Constants.RESOLVE_EXTENSIONS),
    }
    yield
    for attr, value in saved.items():
        setattr(Constants, attr, value)


class FakeResolver:
    """Resolver double answering from a dict and recording every lookup."""

    def __init__(self, known=None):
        self.known = known or {}
        self.calls = []

    def resolve(self, base_dir, specifier):
        self.calls.append(specifier)
        return self.known.get(specifier)


@pytest.fixture
def fake_resolver():
    return FakeResolver

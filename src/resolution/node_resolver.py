"""Node.js style module resolution for bare package specifiers.

Supports:
- node_modules lookup walking up from the base directory
- package self-reference (a package importing its own name)
- package.json "exports" (subpath keys, "*" patterns, conditions, fallback arrays)
- "main" / index fallback for packages without "exports"

Only specifiers naming a package (``pkg``, ``pkg/sub``, ``@scope/pkg/sub``)
are handled; relative and absolute specifiers never resolve. A fresh
resolver is expected per resolution call, so the package.json cache lives
only as long as the instance.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

logger = logging.getLogger(__name__)


def split_package_specifier(specifier: str) -> Tuple[Optional[str], Optional[str]]:
    """Split a bare specifier into (package name, export subpath).

    The subpath is ``"."`` for the package root, otherwise ``"./rest"``.
    Returns (None, None) for specifiers that cannot name a package.

    Examples:
        "foo"               -> ("foo", ".")
        "foo/bar/baz"       -> ("foo", "./bar/baz")
        "@scope/pkg/nested" -> ("@scope/pkg", "./nested")
    """
    if not specifier or specifier.startswith((".", "/")) or "\\" in specifier:
        return None, None

    if specifier.startswith("@"):
        parts = specifier.split("/", 2)
        if len(parts) < 2 or len(parts[0]) < 2 or not parts[1]:
            return None, None
        name = f"{parts[0]}/{parts[1]}"
    else:
        name = specifier.split("/", 1)[0]

    if "%" in name:
        return None, None
    return name, "." + specifier[len(name):]


def _search_dirs(base_dir: str) -> Iterator[str]:
    """Yield base_dir and its ancestors, skipping node_modules directories."""
    current = os.path.abspath(base_dir)
    while True:
        if os.path.basename(current) != Constants.NODE_MODULES_DIR:
            yield current
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def _pattern_key_order(key: str) -> Tuple[int, int]:
    """Sort key for export patterns: longest prefix, then longest key."""
    return key.index("*") + 1, len(key)


class NodeResolver:
    """Resolve bare specifiers to files following Node's package rules."""

    def __init__(
        self,
        conditions: Optional[Sequence[str]] = None,
        extensions: Optional[Sequence[str]] = None,
    ):
        self.conditions: List[str] = list(
            Constants.RESOLVE_CONDITIONS if conditions is None else conditions
        )
        self.extensions: List[str] = list(
            Constants.RESOLVE_EXTENSIONS if extensions is None else extensions
        )
        self._manifests: Dict[str, Optional[Dict[str, Any]]] = {}

    def resolve(self, base_dir: str, specifier: str) -> Optional[str]:
        """Resolve ``specifier`` as if imported from a file inside ``base_dir``.

        Returns:
            The real path of the resolved file, or None when unresolvable.
        """
        name, subpath = split_package_specifier(specifier)
        if name is None or subpath is None:
            return None

        for directory in _search_dirs(base_dir):
            manifest = self._read_manifest(directory)
            if manifest and manifest.get("name") == name and "exports" in manifest:
                return self._finish(
                    specifier, self._resolve_exports(directory, manifest["exports"], subpath)
                )

            package_dir = os.path.join(directory, Constants.NODE_MODULES_DIR, name)
            if not os.path.isdir(package_dir):
                continue
            package_manifest = self._read_manifest(package_dir)
            if package_manifest and "exports" in package_manifest:
                return self._finish(
                    specifier,
                    self._resolve_exports(package_dir, package_manifest["exports"], subpath),
                )
            found = self._resolve_legacy(package_dir, subpath)
            if found:
                return self._finish(specifier, found)

        return self._finish(specifier, None)

    def _finish(self, specifier: str, found: Optional[str]) -> Optional[str]:
        if found is not None:
            found = os.path.realpath(found)
        if is_debug_enabled(logger):
            logger.debug(
                "Node resolution %s",
                "hit" if found else "miss",
                extra=extra_context(
                    event="resolve",
                    component="node_resolver",
                    action="resolve",
                    target=specifier,
                    outcome=found or "unresolved",
                ),
            )
        return found

    def _read_manifest(self, directory: str) -> Optional[Dict[str, Any]]:
        """Load directory/package.json once per resolver; None if absent or invalid."""
        if directory in self._manifests:
            return self._manifests[directory]
        manifest = None
        path = os.path.join(directory, Constants.PACKAGE_JSON_FILE)
        if os.path.isfile(path):
            try:
                with open(path, "r", encoding="utf-8") as file:
                    data = json.load(file)
                if isinstance(data, dict):
                    manifest = data
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.warning("Failed to parse %s: %s", path, e)
        self._manifests[directory] = manifest
        return manifest

    # package.json "exports"

    def _resolve_exports(self, package_dir: str, exports: Any, subpath: str) -> Optional[str]:
        if isinstance(exports, dict) and any(key.startswith(".") for key in exports):
            return self._match_subpath(package_dir, exports, subpath)
        # "exports": "./x.js" / [...] / {conditions} are sugar for {".": ...}
        if subpath == ".":
            return self._resolve_target(package_dir, exports, None)
        return None

    def _match_subpath(
        self, package_dir: str, exports: Dict[str, Any], subpath: str
    ) -> Optional[str]:
        if subpath in exports and "*" not in subpath:
            return self._resolve_target(package_dir, exports[subpath], None)

        best_key = None
        best_match = None
        for key in exports:
            if key.count("*") != 1:
                continue
            prefix, trailer = key.split("*")
            if not subpath.startswith(prefix) or subpath == prefix:
                continue
            if trailer and not (subpath.endswith(trailer) and len(subpath) >= len(key)):
                continue
            if best_key is None or _pattern_key_order(key) > _pattern_key_order(best_key):
                best_key = key
                best_match = subpath[len(prefix):len(subpath) - len(trailer)]

        if best_key is None:
            return None
        return self._resolve_target(package_dir, exports[best_key], best_match)

    def _resolve_target(
        self, package_dir: str, target: Any, pattern_match: Optional[str]
    ) -> Optional[str]:
        if isinstance(target, str):
            return self._target_file(package_dir, target, pattern_match)
        if isinstance(target, list):
            for item in target:
                found = self._resolve_target(package_dir, item, pattern_match)
                if found:
                    return found
            return None
        if isinstance(target, dict):
            for condition, value in target.items():
                if condition == "default" or condition in self.conditions:
                    found = self._resolve_target(package_dir, value, pattern_match)
                    if found:
                        return found
            return None
        # null targets exclude a subpath
        return None

    def _target_file(
        self, package_dir: str, target: str, pattern_match: Optional[str]
    ) -> Optional[str]:
        if not target.startswith("./"):
            return None
        if pattern_match is not None:
            if any(part in ("", ".", "..", Constants.NODE_MODULES_DIR)
                   for part in pattern_match.split("/")):
                return None
            target = target.replace("*", pattern_match)
        segments = target[2:].split("/")
        if any(part in ("..", Constants.NODE_MODULES_DIR) for part in segments):
            return None
        path = os.path.join(package_dir, *segments)
        return path if os.path.isfile(path) else None

    # packages without "exports"

    def _resolve_legacy(self, package_dir: str, subpath: str) -> Optional[str]:
        if subpath == ".":
            return self._load_as_directory(package_dir)
        target = os.path.join(package_dir, *subpath[2:].split("/"))
        return self._load_as_file(target) or self._load_as_directory(target)

    def _load_as_file(self, path: str) -> Optional[str]:
        if os.path.isfile(path):
            return path
        for ext in self.extensions:
            if os.path.isfile(path + ext):
                return path + ext
        return None

    def _load_index(self, directory: str) -> Optional[str]:
        for main_file in Constants.RESOLVE_MAIN_FILES:
            found = self._load_as_file(os.path.join(directory, main_file))
            if found:
                return found
        return None

    def _load_as_directory(self, directory: str) -> Optional[str]:
        if not os.path.isdir(directory):
            return None
        manifest = self._read_manifest(directory)
        main = manifest.get("main") if manifest else None
        if isinstance(main, str) and main:
            main_path = os.path.join(directory, main)
            found = self._load_as_file(main_path) or self._load_index(main_path)
            if found:
                return found
        return self._load_index(directory)

"""Library entry points: module paths -> npm package files -> WeslBundles.

    resolve_module_paths(["random_wgsl::pcg"], "/path/to/project")
    extract_bundles(["/path/to/node_modules/random_wgsl/dist/weslBundle.js"])
    resolve_and_extract(["random_wgsl::pcg"], "/path/to/project")
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Set

from bundle.models import WeslBundle
from bundle.parse import parse_wesl_bundle
from resolution.dependencies import resolve_dependencies
from resolution.package_names import sanitize_package_name

logger = logging.getLogger(__name__)


def resolve_module_paths(module_paths: Sequence[str], project_dir: str) -> Set[str]:
    """Find the npm package files that WESL module paths refer to.

    Unresolvable module paths (builtins, missing packages) are silently
    dropped. Never raises.
    """
    return resolve_dependencies(module_paths, str(project_dir))


def extract_bundle(package_path: str) -> WeslBundle:
    """Parse one resolved weslBundle file.

    A bundle whose name is not already a WESL package identifier is still
    returned, but a warning is logged since module paths cannot refer to it.

    Raises:
        bundle.errors.BundleError: on any read, parse or shape failure.
    """
    bundle = parse_wesl_bundle(str(package_path))
    expected = sanitize_package_name(bundle.name)
    if expected != bundle.name:
        logger.warning(
            "Bundle name %r in %s is not a WESL package identifier (expected %r)",
            bundle.name, package_path, expected,
        )
    return bundle


def extract_bundles(package_paths: Sequence[str]) -> List[WeslBundle]:
    """Parse bundle files in order; the first failure aborts the batch."""
    return [extract_bundle(path) for path in package_paths]


def resolve_and_extract(module_paths: Sequence[str], project_dir: str) -> List[WeslBundle]:
    """Resolve module paths and load the bundles of every package found.

    Resolved paths are processed in sorted order so results are stable.
    """
    resolved = sorted(resolve_module_paths(module_paths, project_dir))
    logger.debug("Loading %d bundle(s)", len(resolved))
    return extract_bundles(resolved)

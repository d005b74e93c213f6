"""Turn a list of WESL module paths into the set of npm package files they use."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Set

from common.logging_utils import extra_context, is_debug_enabled, Timer
from constants import Constants
from resolution.npm_resolver import npm_resolve_wesl

logger = logging.getLogger(__name__)


def split_module_path(module_path: str) -> List[str]:
    """Split ``foo::bar::baz`` into its segments."""
    return module_path.split(Constants.MODULE_SEPARATOR)


def is_package_reference(
    segments: Sequence[str], builtin_namespaces: Optional[Iterable[str]] = None
) -> bool:
    """True if the module path may name an npm package.

    Single segment paths are WGSL builtins (functions or types), and paths
    rooted in a builtin namespace such as ``constants`` are virtual modules
    provided by the linker.
    """
    if builtin_namespaces is None:
        builtin_namespaces = Constants.BUILTIN_NAMESPACES
    return len(segments) > 1 and segments[0] not in set(builtin_namespaces)


def resolve_dependencies(
    module_paths: Sequence[str], project_dir: str, resolver=None
) -> Set[str]:
    """Resolve module paths to a deduplicated set of package file paths.

    Unresolvable paths are left out; this function never raises for them.

    Args:
        module_paths: WESL module paths like "random_wgsl::pcg".
        project_dir: Directory to resolve from.
        resolver: Optional resolver shared by all lookups (a fresh
            NodeResolver per lookup otherwise).

    Returns:
        Set of resolved file paths; sort it when order matters.
    """
    deps: Set[str] = set()
    with Timer() as t:
        for module_path in module_paths:
            segments = split_module_path(module_path)
            if not is_package_reference(segments):
                logger.debug("Skipping non-package module path %s", module_path)
                continue
            resolved = npm_resolve_wesl(segments, project_dir, resolver)
            if resolved:
                deps.add(resolved)

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved dependencies",
            extra=extra_context(
                event="function_exit",
                component="dependencies",
                action="resolve_dependencies",
                count=len(deps),
                duration_ms=t.duration_ms(),
            ),
        )
    return deps

"""Find the npm package (and export) a WESL module path refers to.

A WESL statement like ``import foo__bar::baz::elem;`` references an npm
package, possibly an export subpath within it, a module inside the bundle and
finally an element. Translating the module path to an npm path involves:

- mapping sanitized package names to npm names (``foo__bar`` -> ``@foo/bar``)
- probing for the longest valid export subpath (``mypkg::gpu`` may be the
  ``mypkg/gpu`` export or just ``mypkg``)
- probing spelling variations (``foo_bar`` may be ``foo-bar`` on npm)
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from resolution.node_resolver import NodeResolver
from resolution.package_names import npm_name_variations

logger = logging.getLogger(__name__)


def export_subpaths(m_path: Sequence[str]) -> List[str]:
    """Return slash-joined prefixes of the module path, longest first.

    The full path comes first so that wildcard exports such as ``./*``
    serving ``dir/nested`` win over the bare package root.
    """
    return ["/".join(m_path[:i]) for i in range(len(m_path), 0, -1)]


def npm_resolve_wesl(
    m_path: Sequence[str], project_dir: str, resolver=None
) -> Optional[str]:
    """Resolve module path segments to the file of the matching npm export.

    Args:
        m_path: Module path segments, e.g. ["random_wgsl", "pcg"].
        project_dir: Directory to resolve from (holds package.json/node_modules).
        resolver: Object with ``resolve(base_dir, specifier) -> Optional[str]``.
            A fresh NodeResolver is used when omitted.

    Returns:
        The first resolved file path, or None when nothing resolves.
    """
    if resolver is None:
        resolver = NodeResolver()

    for sub_path in export_subpaths(m_path):
        for npm_path in npm_name_variations(sub_path):
            resolved = resolver.resolve(project_dir, npm_path)
            if resolved:
                if is_debug_enabled(logger):
                    logger.debug(
                        "Resolved module path",
                        extra=extra_context(
                            event="decision",
                            component="npm_resolver",
                            action="npm_resolve_wesl",
                            target=npm_path,
                            outcome=resolved,
                        ),
                    )
                return resolved

    logger.debug("No npm package found for %s", "::".join(m_path))
    return None

"""Package name sanitization for WESL module paths.

npm package names can contain ``@``, ``/`` and ``-``, none of which are legal
in a WGSL identifier, so packagers encode them:

    @     ==>  (removed)
    /     ==>  __
    -     ==>  _

    random-wgsl         ==>  random_wgsl
    @scope/my-pkg       ==>  scope__my_pkg

The encoding is lossy, so the reverse direction yields candidates to try:

    scope__my_pkg       ==>  @scope/my_pkg, @scope/my-pkg
    random_wgsl         ==>  random_wgsl, random-wgsl

Export subpaths never introduce ``__``; it only appears when the package
name itself contains ``/``.
"""

from typing import List, Tuple

from constants import Constants


def sanitize_package_name(npm_name: str) -> str:
    """Convert an npm package name to its WGSL-safe identifier."""
    name = npm_name[1:] if npm_name.startswith("@") else npm_name
    return name.replace("/", Constants.SCOPE_SEPARATOR).replace("-", "_")


def break_at(text: str, delimiter: str) -> Tuple[str, str]:
    """Split at the first delimiter; the second part keeps the delimiter."""
    index = text.find(delimiter)
    if index == -1:
        return text, ""
    return text[:index], text[index:]


def npm_name_variations(sanitized_path: str) -> List[str]:
    """Return npm spellings for a sanitized subpath, most literal first.

    Examples:
        "lygia__shader_utils" -> ["@lygia/shader_utils", "@lygia/shader-utils"]
        "random_wgsl"         -> ["random_wgsl", "random-wgsl"]
        "foo_bar/baz_qux"     -> ["foo_bar/baz_qux", "foo-bar/baz_qux"]
    """
    pkg, sub = break_at(sanitized_path, "/")

    scope_prefix = ""
    pkg_name = pkg
    if Constants.SCOPE_SEPARATOR in pkg:
        scope, *rest = pkg.split(Constants.SCOPE_SEPARATOR)
        # only the first separator marks the scope
        pkg_name = Constants.SCOPE_SEPARATOR.join(rest)
        scope_prefix = f"@{scope}/"

    return [
        f"{scope_prefix}{pkg_name}{sub}",
        f"{scope_prefix}{pkg_name.replace('_', '-')}{sub}",
    ]

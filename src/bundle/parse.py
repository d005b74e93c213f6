"""Extract the weslBundle descriptor from a generated bundle file.

Bundle files are plain ES modules written by the WESL packager:

    export const weslBundle = {
      name: "random_wgsl",
      edition: "unstable_2025_1",
      modules: { "lib.wgsl": "fn pcg_2u_3f(...) ..." },
    };

    export default weslBundle;

The file is parsed, never executed. Only the shape of the top-level
``weslBundle`` object literal matters; surrounding code is ignored.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node

from bundle.errors import (
    BundleMissingFieldError,
    BundleNotFoundError,
    BundleReadError,
    BundleSyntaxError,
)
from bundle.js_parser import infer_source_kind, parse_source
from bundle.models import WeslBundle
from common.logging_utils import extra_context, is_debug_enabled, Timer
from constants import Constants, SourceKinds

logger = logging.getLogger(__name__)

_SIMPLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}
_LINE_TERMINATORS = ("\n", "\r", "\r\n", "\u2028", "\u2029")


def decode_escape(sequence: str) -> str:
    """Decode one JavaScript escape sequence (including its backslash).

    Raises:
        ValueError: the sequence names a code point beyond U+10FFFF.
    """
    body = sequence[1:]
    if body in _LINE_TERMINATORS:
        return ""
    if body.startswith("u{"):
        return chr(int(body[2:-1], 16))
    if body.startswith(("u", "x")) and len(body) > 1:
        return chr(int(body[1:], 16))
    if body[:1].isdigit() and body[0] in "01234567":
        return chr(int(body, 8))
    return _SIMPLE_ESCAPES.get(body, body)


def string_value(node: Optional[Node]) -> Optional[str]:
    """Value of a string literal node; None for any other expression."""
    if node is None or node.type != "string":
        return None
    parts: List[str] = []
    for child in node.named_children:
        text = child.text.decode("utf-8")
        if child.type == "escape_sequence":
            parts.append(decode_escape(text))
        else:
            parts.append(text)
    value = "".join(parts)
    if any("\ud800" <= ch <= "\udfff" for ch in value):
        # astral escapes such as \ud83d\ude00 arrive as surrogate pairs
        value = value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
    return value


def property_key(node: Optional[Node]) -> Optional[str]:
    """Key of an object property written as an identifier or a string."""
    if node is None:
        return None
    if node.type == "property_identifier":
        return node.text.decode("utf-8")
    return string_value(node)


def _pairs(obj: Node) -> Iterator[Tuple[Optional[str], Optional[Node]]]:
    for child in obj.named_children:
        if child.type == "pair":
            yield property_key(child.child_by_field_name("key")), child.child_by_field_name("value")


def top_level_declarators(root: Node) -> Iterator[Node]:
    """Yield variable declarators of top-level (optionally exported) declarations."""
    for statement in root.named_children:
        if statement.type == "export_statement":
            statement = statement.child_by_field_name("declaration")
            if statement is None:
                continue
        if statement.type not in ("lexical_declaration", "variable_declaration"):
            continue
        for child in statement.named_children:
            if child.type == "variable_declarator":
                yield child


def find_bundle_declarator(root: Node, binding: str = Constants.BUNDLE_BINDING_NAME) -> Optional[Node]:
    """First top-level declarator binding exactly ``binding``."""
    for declarator in top_level_declarators(root):
        name = declarator.child_by_field_name("name")
        if name is not None and name.type == "identifier" and name.text.decode("utf-8") == binding:
            return declarator
    return None


def extract_modules(node: Optional[Node]) -> List[Tuple[str, str]]:
    """Collect string-valued entries of the ``modules`` object literal."""
    modules: List[Tuple[str, str]] = []
    if node is None or node.type != "object":
        return modules
    for key, value_node in _pairs(node):
        value = string_value(value_node)
        if key is not None and value is not None:
            modules.append((key, value))
    return modules


def extract_bundle_object(
    node: Optional[Node],
) -> Tuple[Optional[str], Optional[str], List[Tuple[str, str]]]:
    """Return (name, edition, modules) found in the weslBundle initializer."""
    name = None
    edition = None
    modules: List[Tuple[str, str]] = []
    if node is None or node.type != "object":
        return name, edition, modules

    for key, value in _pairs(node):
        if key == "name":
            name = string_value(value)
        elif key == "edition":
            edition = string_value(value)
        elif key == "modules":
            modules = extract_modules(value)
    return name, edition, modules


def parse_bundle_source(
    source_text: str, file_path: str, kind: Optional[SourceKinds] = None
) -> WeslBundle:
    """Extract the bundle from already loaded source text.

    Raises:
        BundleSyntaxError: the parser reported errors.
        BundleNotFoundError: no top-level weslBundle declaration.
        BundleMissingFieldError: name or edition is absent.
    """
    if kind is None:
        kind = infer_source_kind(file_path)
    result = parse_source(source_text, kind)
    if not result.ok:
        raise BundleSyntaxError(file_path, result.diagnostics)

    declarator = find_bundle_declarator(result.tree.root_node)
    if declarator is None:
        raise BundleNotFoundError(file_path, Constants.BUNDLE_BINDING_NAME)

    try:
        name, edition, modules = extract_bundle_object(declarator.child_by_field_name("value"))
    except ValueError as e:
        # an escape the parser let through but no string can hold
        raise BundleSyntaxError(file_path, [f"invalid string literal: {e}"]) from e
    found = {"name": name, "edition": edition}
    missing = [field for field in Constants.BUNDLE_REQUIRED_FIELDS if found[field] is None]
    if missing:
        raise BundleMissingFieldError(file_path, missing)

    return WeslBundle(name=name, edition=edition, modules=modules, dependencies=[])


def parse_wesl_bundle(file_path: str) -> WeslBundle:
    """Read and parse a weslBundle.js file.

    Args:
        file_path: Path of the bundle file.

    Returns:
        The bundle's name, edition and modules.

    Raises:
        BundleReadError: the file could not be read as text.
        BundleSyntaxError, BundleNotFoundError, BundleMissingFieldError: see
            parse_bundle_source.
    """
    file_path = str(file_path)
    try:
        with open(file_path, "r", encoding="utf-8") as file:
            source_text = file.read()
    except (OSError, UnicodeDecodeError) as e:
        raise BundleReadError(file_path, e) from e

    with Timer() as t:
        bundle = parse_bundle_source(source_text, file_path)
    if is_debug_enabled(logger):
        logger.debug(
            "Parsed bundle",
            extra=extra_context(
                event="parse",
                component="bundle",
                action="parse_wesl_bundle",
                target=file_path,
                count=len(bundle.modules),
                duration_ms=t.duration_ms(),
            ),
        )
    return bundle

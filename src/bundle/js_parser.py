"""JavaScript / TypeScript parsing for bundle files using tree-sitter."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from constants import Constants, SourceKinds

logger = logging.getLogger(__name__)

MAX_CODE_POINT = 0x10FFFF


@dataclass
class ParseResult:
    """Syntax tree plus any problems the parser recovered from."""
    tree: Tree
    diagnostics: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def infer_source_kind(file_path: str) -> SourceKinds:
    """Pick the grammar from the file extension, defaulting to a JS module."""
    ext = os.path.splitext(file_path)[1].lower()
    return Constants.SOURCE_KIND_EXTENSIONS.get(ext, Constants.DEFAULT_SOURCE_KIND)


def _language(kind: SourceKinds) -> Language:
    if kind == SourceKinds.TYPESCRIPT:
        return Language(tree_sitter_typescript.language_typescript())
    if kind == SourceKinds.TSX:
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_javascript.language())


def _position(node: Node) -> str:
    row, column = node.start_point[0], node.start_point[1]
    return f"{row + 1}:{column + 1}"


def collect_diagnostics(root: Node) -> List[str]:
    """Describe every ERROR and MISSING node, in source order."""
    diagnostics: List[str] = []
    if not root.has_error:
        return diagnostics
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing:
            diagnostics.append(f"missing '{node.type}' at {_position(node)}")
        elif node.is_error:
            snippet = node.text.decode("utf-8", errors="replace").strip().splitlines()
            found = f" near '{snippet[0][:40]}'" if snippet else ""
            diagnostics.append(f"unexpected syntax{found} at {_position(node)}")
        elif node.has_error:
            stack.extend(reversed(node.children))
    return diagnostics


def _escape_problem(sequence: str) -> Optional[str]:
    """Why an escape sequence is illegal in module code, or None."""
    body = sequence[1:]
    if body.startswith("u{"):
        if int(body[2:-1], 16) > MAX_CODE_POINT:
            return "code point out of range"
        return None
    if body[:1] in ("8", "9") or (body[:1].isdigit() and body != "0"):
        return "octal escape sequences are not allowed in module code"
    return None


def collect_module_diagnostics(root: Node) -> List[str]:
    """Report errors that tree-sitter accepts but ES modules reject.

    Bundle files are always ES modules, so they are strict mode code: legacy
    octal escapes are forbidden and every ``const`` needs an initializer.
    """
    diagnostics: List[str] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "escape_sequence":
            sequence = node.text.decode("utf-8", errors="replace")
            problem = _escape_problem(sequence)
            if problem:
                diagnostics.append(f"{problem} '{sequence}' at {_position(node)}")
            continue
        if (node.type == "lexical_declaration"
                and node.child_count
                and node.children[0].type == "const"
                and (node.parent is None or node.parent.type != "ambient_declaration")):
            for declarator in node.named_children:
                if declarator.type == "variable_declarator" and \
                        declarator.child_by_field_name("value") is None:
                    diagnostics.append(
                        f"missing initializer in const declaration at {_position(declarator)}"
                    )
        stack.extend(reversed(node.children))
    return diagnostics


def parse_source(source_text: str, kind: SourceKinds = Constants.DEFAULT_SOURCE_KIND) -> ParseResult:
    """Parse source text; problems are reported in ``diagnostics``."""
    parser = Parser(_language(kind))
    tree = parser.parse(source_text.encode("utf-8"))
    diagnostics = collect_diagnostics(tree.root_node) + collect_module_diagnostics(tree.root_node)
    result = ParseResult(tree=tree, diagnostics=diagnostics)
    if not result.ok:
        logger.debug("Parser reported %d problem(s)", len(result.diagnostics))
    return result

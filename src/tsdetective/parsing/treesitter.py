"""Tree-sitter adapter: source text to ESTree-shaped syntax trees.

This module provides:
- Grammar loading for the JavaScript family (typescript, tsx, javascript)
- Parsing with syntax-error detection (tree-sitter never fails outright; it
  marks ERROR and missing nodes, which are surfaced here as ``ParseError``)
- Lowering of the resulting tree into ESTree dicts for the classifier
"""

from __future__ import annotations

import importlib
import threading
from dataclasses import dataclass
from typing import Any

import tree_sitter

from tsdetective.core.errors import ParseError
from tsdetective.parsing.dialects import DialectPack
from tsdetective.parsing.estree import EstreeNode, to_estree

# Language objects are immutable and safe to share; parsers are not, so each
# parse gets its own tree_sitter.Parser.
_languages: dict[str, tree_sitter.Language] = {}
_languages_lock = threading.Lock()


@dataclass
class ParseResult:
    """Result of parsing a file."""

    tree: Any  # Tree-sitter Tree (not serializable)
    dialect: str

    @property
    def root_node(self) -> Any:
        return self.tree.root_node


def load_language(pack: DialectPack) -> tree_sitter.Language:
    """Get or load the tree-sitter language for a dialect."""
    with _languages_lock:
        if pack.name in _languages:
            return _languages[pack.name]
        try:
            module = importlib.import_module(pack.grammar_module)
            language_fn = getattr(module, pack.language_func)
        except (ImportError, AttributeError) as err:
            raise ParseError.dialect_unavailable(
                pack.name, f"install {pack.grammar_package}"
            ) from err
        language = tree_sitter.Language(language_fn())
        _languages[pack.name] = language
        return language


def _first_error(root: Any) -> Any:
    """Find the first ERROR or missing node in document order.

    Descends through the first child carrying an error at each level, so the
    search follows a single path and needs no stack.
    """
    node = root
    while node.type != "ERROR" and not node.is_missing:
        for child in node.children:
            if child.has_error or child.is_missing:
                node = child
                break
        else:
            return node
    return node


def parse(source: str | bytes, pack: DialectPack) -> ParseResult:
    """
    Parse source text with the dialect's grammar.

    Args:
        source: File content as text or UTF-8 bytes.
        pack: Dialect to parse with.

    Returns:
        ParseResult holding the tree and the dialect it was parsed with.

    Raises:
        ParseError: If the grammar is unavailable or the text has syntax errors.
    """
    content = source.encode("utf-8") if isinstance(source, str) else source
    parser = tree_sitter.Parser(load_language(pack))
    tree = parser.parse(content)

    result = ParseResult(tree=tree, dialect=pack.name)
    check_syntax(result.root_node, pack.name)
    return result


def check_syntax(root: Any, dialect: str) -> None:
    """Raise ParseError if the tree rooted at ``root`` has syntax errors."""
    if not root.has_error:
        return
    row, column = _first_error(root).start_point
    raise ParseError.syntax(row + 1, column, dialect)


def parse_to_estree(source: str | bytes, pack: DialectPack) -> EstreeNode:
    """Parse source text and lower it to an ESTree ``Program``."""
    return to_estree(parse(source, pack).root_node)


def tree_to_estree(tree: tree_sitter.Tree, dialect: str = "tree") -> EstreeNode:
    """Lower an already-parsed tree-sitter tree, rejecting trees with errors."""
    check_syntax(tree.root_node, dialect)
    return to_estree(tree.root_node)

"""Syntax source adapter: tree-sitter grammars lowered to ESTree."""

from tsdetective.parsing.dialects import (
    DIALECTS,
    DialectPack,
    get_dialect,
    select_dialect,
)
from tsdetective.parsing.estree import EstreeLowering, EstreeNode, to_estree
from tsdetective.parsing.treesitter import (
    ParseResult,
    parse,
    parse_to_estree,
    tree_to_estree,
)

__all__ = [
    "DIALECTS",
    "DialectPack",
    "EstreeLowering",
    "EstreeNode",
    "ParseResult",
    "get_dialect",
    "parse",
    "parse_to_estree",
    "select_dialect",
    "to_estree",
    "tree_to_estree",
]

"""Grammar registry for the JavaScript family.

Each dialect the adapter can parse has exactly ONE DialectPack describing
where its tree-sitter grammar lives. The DIALECTS registry is the
canonical lookup: ``DIALECTS["tsx"]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DialectPack:
    """Tree-sitter grammar metadata for one dialect."""

    name: str
    grammar_package: str  # PyPI distribution name
    grammar_module: str  # Importable module name
    language_func: str = "language"  # Function returning the language pointer


TYPESCRIPT = DialectPack(
    name="typescript",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    language_func="language_typescript",
)

TSX = DialectPack(
    name="tsx",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    language_func="language_tsx",
)

JAVASCRIPT = DialectPack(
    name="javascript",
    grammar_package="tree-sitter-javascript",
    grammar_module="tree_sitter_javascript",
)

DIALECTS: dict[str, DialectPack] = {
    pack.name: pack for pack in (TYPESCRIPT, TSX, JAVASCRIPT)
}


def get_dialect(name: str) -> DialectPack | None:
    return DIALECTS.get(name)


def select_dialect(parser: str, *, jsx: bool) -> DialectPack | None:
    """Pick the grammar for a parser front-end and JSX mode.

    The typescript front-end has a separate grammar for TSX. The javascript
    grammar always accepts JSX, so ``jsx`` does not change it.
    """
    if parser == "typescript":
        return TSX if jsx else TYPESCRIPT
    return get_dialect(parser)


def wants_jsx(path: Path) -> bool:
    """Whether a file's extension implies JSX/TSX syntax."""
    return path.suffix.lower() in (".tsx", ".jsx")

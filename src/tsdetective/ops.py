"""Extraction entry points.

Pipeline: source → adapter (tree-sitter, lowered to ESTree) → pre-order walk
→ ``classify`` per node → records in visiting order.

Usage::

    from tsdetective import extract, extract_tsx

    extract('import {a, b} from "./mod"')
    # [DependencyRecord(specifier='./mod', imported_names=('a', 'b'))]

    extract('const x = require("x")', {"mixedImports": True})
    # [DependencyRecord(specifier='x', imported_names=None)]
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tree_sitter
from pydantic import ValidationError

from tsdetective.classify import classify
from tsdetective.core.errors import InvalidInputError, ParseError
from tsdetective.core.logging import get_logger
from tsdetective.models import DependencyRecord, ExtractOptions
from tsdetective.parsing.dialects import select_dialect, wants_jsx
from tsdetective.parsing.treesitter import parse_to_estree, tree_to_estree
from tsdetective.walk import is_node, iter_nodes

log = get_logger(__name__)

OptionsLike = ExtractOptions | Mapping[str, Any] | None


def coerce_options(options: OptionsLike) -> ExtractOptions:
    """Accept an ExtractOptions, a plain mapping, or None."""
    if options is None:
        return ExtractOptions()
    if isinstance(options, ExtractOptions):
        return options
    try:
        return ExtractOptions.model_validate(dict(options))
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise InvalidInputError.invalid_options(field, err["msg"]) from e


def _build_tree(source: Any, options: ExtractOptions) -> Mapping[str, Any]:
    """Turn the caller's source into an ESTree tree."""
    if isinstance(source, Mapping):
        if not is_node(source):
            raise InvalidInputError.unsupported_type(source)
        return source
    if isinstance(source, tree_sitter.Tree):
        return tree_to_estree(source)
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidInputError.undecodable(e.start, e.reason) from e
    if not isinstance(source, str):
        raise InvalidInputError.unsupported_type(source)

    pack = select_dialect(options.parser, jsx=options.jsx)
    if pack is None:
        raise ParseError.dialect_unavailable(options.parser, "unknown parser")
    log.debug("parsing source", dialect=pack.name, size=len(source))
    try:
        return parse_to_estree(source, pack)
    except ParseError as e:
        log.debug("parse failed", **e.details)
        raise


def extract(source: Any, options: OptionsLike = None) -> list[DependencyRecord]:
    """Extract the dependencies referenced by one JavaScript/TypeScript file.

    Args:
        source: Source text (``str`` or UTF-8 ``bytes``), an ESTree mapping,
            or a parsed ``tree_sitter.Tree``.
        options: ExtractOptions or a mapping of option names
            (``skipTypeImports``, ``skipAsyncImports``, ``mixedImports``,
            ``jsx``, ``parser``).

    Returns:
        One record per dependency-bearing construct, in document order.

    Raises:
        InvalidInputError: If ``source`` is None, of an unsupported type, or
            bytes that are not valid UTF-8.
        ParseError: If the source text is not valid for the selected dialect.
    """
    if source is None:
        raise InvalidInputError.missing_source()
    if isinstance(source, str | bytes) and not source:
        return []

    opts = coerce_options(options)
    tree = _build_tree(source, opts)

    dependencies: list[DependencyRecord] = []
    for node in iter_nodes(tree):
        record = classify(node, opts)
        if record is not None:
            dependencies.append(record)

    log.debug("dependencies extracted", count=len(dependencies))
    return dependencies


def extract_tsx(source: Any, options: OptionsLike = None) -> list[DependencyRecord]:
    """``extract`` with the JSX/TSX grammar forced on."""
    return extract(source, coerce_options(options).model_copy(update={"jsx": True}))


def extract_file(path: Path, options: OptionsLike = None) -> list[DependencyRecord]:
    """Read a UTF-8 file and extract its dependencies.

    ``.tsx`` and ``.jsx`` files are always parsed with JSX enabled.
    """
    opts = coerce_options(options)
    if wants_jsx(path):
        opts = opts.model_copy(update={"jsx": True})
    return extract(path.read_text(encoding="utf-8"), opts)

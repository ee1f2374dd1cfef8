"""Lowering of tree-sitter JavaScript/TypeScript trees into ESTree dicts.

The classifier matches on ESTree node kinds (``ImportDeclaration``,
``CallExpression``, ...). Tree-sitter produces a concrete syntax tree with its
own snake_case kinds, so this module rewrites the constructs that carry
dependency information into their ESTree shape and keeps everything else as
generic nodes:

    {"type": "<tree-sitter kind>", "children": [...], "range": [...], "loc": {...}}

Generic nodes keep their named children so that nested constructs (a
``require()`` inside a function body, a dynamic import inside a JSX
attribute) stay reachable by the walker. Comments are dropped and
parenthesized expressions collapse to their inner expression, as in ESTree.

Lowering runs bottom-up over an explicit stack, so nesting depth is bounded
by memory rather than the interpreter's recursion limit.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Any

EstreeNode = dict[str, Any]

# Node kinds whose subtree is type-level syntax. ``import("x")`` found inside
# one of these is an import type, not a dynamic import.
_TYPE_CONTEXTS = frozenset(
    {
        "type_annotation",
        "type_alias_declaration",
        "interface_declaration",
        "type_arguments",
        "type_parameters",
        "type_query",
        "type_predicate_annotation",
        "asserts_annotation",
        "implements_clause",
        "extends_type_clause",
    }
)

# ``x as T`` and ``x satisfies T``: only the operand after the keyword is a type.
_TYPE_CASTS = frozenset({"as_expression", "satisfies_expression"})
_CAST_KEYWORDS = frozenset({"as", "satisfies"})

_IDENTIFIER_KINDS = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "statement_identifier",
        "type_identifier",
    }
)

_SKIPPED_KINDS = frozenset({"comment", "html_comment"})

# Lowered without looking at their children.
_LEAF_KINDS = _IDENTIFIER_KINDS | _SKIPPED_KINDS | {"string"}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")


def unescape_js(raw: str) -> str:
    """Decode JavaScript string escape sequences."""

    def replace(match: re.Match[str]) -> str:
        seq = match.group(1)
        if len(seq) > 1 and seq[0] in "ux":
            digits = seq[2:-1] if seq[1] == "{" else seq[1:]
            code_point = int(digits, 16)
            return chr(code_point) if code_point <= 0x10FFFF else seq
        if seq in _LINE_CONTINUATIONS:
            return ""
        return _SIMPLE_ESCAPES.get(seq, seq)

    return _ESCAPE_RE.sub(replace, raw)


def _text(node: Any) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _position(node: Any) -> dict[str, Any]:
    return {
        "start": {"line": node.start_point[0] + 1, "column": node.start_point[1]},
        "end": {"line": node.end_point[0] + 1, "column": node.end_point[1]},
    }


def _make(node: Any, kind: str, **fields: Any) -> EstreeNode:
    return {
        "type": kind,
        **fields,
        "range": [node.start_byte, node.end_byte],
        "loc": _position(node),
    }


def _first_child(node: Any, kind: str) -> Any | None:
    for child in node.children:
        if child.type == kind:
            return child
    return None


def _keyword_kind(node: Any) -> str:
    """Return ``type``/``typeof`` for ``import type``/``export type`` forms."""
    for child in node.children:
        if not child.is_named and child.type in ("type", "typeof"):
            return str(child.type)
    return "value"


def _child_contexts(node: Any, in_type: bool) -> list[tuple[Any, bool]]:
    """Named children of ``node``, each paired with whether it is type syntax."""
    in_type = in_type or node.type in _TYPE_CONTEXTS
    if node.type not in _TYPE_CASTS:
        return [(child, in_type) for child in node.named_children]

    pairs = []
    type_side = in_type
    for child in node.children:
        if child.is_named:
            pairs.append((child, type_side))
        elif child.type in _CAST_KEYWORDS:
            type_side = True
    return pairs


class EstreeLowering:
    """Converts one tree-sitter tree into ESTree dicts.

    ``lower`` visits nodes children-first and keeps each result in a table
    keyed by node id; handlers assemble their node from the already-lowered
    children. Use a fresh instance per tree (``to_estree`` does this).
    """

    def __init__(self) -> None:
        self._lowered: dict[int, EstreeNode | None] = {}
        self._in_type = False
        self._handlers: dict[str, Callable[[Any], EstreeNode | None]] = {
            "program": self._program,
            "string": self._string,
            "template_string": self._template_string,
            "parenthesized_expression": self._parenthesized,
            "call_expression": self._call_expression,
            "member_expression": self._member_expression,
            "subscript_expression": self._subscript_expression,
            "import_statement": self._import_statement,
            "export_statement": self._export_statement,
            "type_query": self._type_query,
        }

    def lower(self, root: Any) -> EstreeNode | None:
        stack: list[tuple[Any, bool, bool]] = [(root, False, False)]
        while stack:
            node, in_type, expanded = stack.pop()
            if expanded:
                self._lowered[node.id] = self._lower_node(node, in_type)
                continue
            stack.append((node, in_type, True))
            if node.type in _LEAF_KINDS:
                continue
            for child, child_in_type in reversed(_child_contexts(node, in_type)):
                stack.append((child, child_in_type, False))
        return self._lowered.get(root.id)

    def _lower_node(self, node: Any, in_type: bool) -> EstreeNode | None:
        if node.type in _SKIPPED_KINDS:
            return None
        if node.type in _IDENTIFIER_KINDS:
            return _make(node, "Identifier", name=_text(node))
        self._in_type = in_type
        handler = self._handlers.get(node.type, self._generic)
        return handler(node)

    def _result(self, node: Any | None) -> EstreeNode | None:
        """Lowered form of a child visited before its parent."""
        if node is None:
            return None
        if node.id in self._lowered:
            return self._lowered[node.id]
        # Anonymous tokens are never pushed and have no children to lower.
        return _make(node, str(node.type), children=[])

    def _results(self, nodes: Iterable[Any]) -> list[EstreeNode]:
        lowered = []
        for node in nodes:
            result = self._result(node)
            if result is not None:
                lowered.append(result)
        return lowered

    def _generic(self, node: Any) -> EstreeNode:
        return _make(node, str(node.type), children=self._results(node.named_children))

    def _program(self, node: Any) -> EstreeNode:
        return _make(
            node,
            "Program",
            sourceType="module",
            body=self._results(node.named_children),
        )

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _string(self, node: Any) -> EstreeNode:
        raw = _text(node)
        return _make(node, "Literal", value=unescape_js(raw[1:-1]), raw=raw)

    def _template_string(self, node: Any) -> EstreeNode:
        source = node.text or b""
        base = node.start_byte
        quasis: list[EstreeNode] = []
        expressions: list[EstreeNode] = []

        def quasi(start: int, end: int, *, tail: bool) -> EstreeNode:
            raw = source[start:end].decode("utf-8", errors="replace")
            return {
                "type": "TemplateElement",
                "value": {"raw": raw, "cooked": unescape_js(raw)},
                "tail": tail,
                "range": [base + start, base + end],
            }

        start = 1  # skip the opening backtick
        for child in node.named_children:
            if child.type != "template_substitution":
                continue
            quasis.append(quasi(start, child.start_byte - base, tail=False))
            expressions.extend(self._results(child.named_children))
            start = child.end_byte - base
        quasis.append(quasi(start, max(start, len(source) - 1), tail=True))

        return _make(node, "TemplateLiteral", quasis=quasis, expressions=expressions)

    def _parenthesized(self, node: Any) -> EstreeNode:
        inner = self._results(node.named_children)
        if len(inner) == 1:
            return inner[0]
        return _make(node, str(node.type), children=inner)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _call_expression(self, node: Any) -> EstreeNode:
        function = node.child_by_field_name("function")
        args = node.child_by_field_name("arguments")

        if args is not None and args.type == "template_string":
            return _make(
                node,
                "TaggedTemplateExpression",
                tag=self._result(function),
                quasi=self._result(args),
            )

        arguments = self._results(args.named_children) if args is not None else []

        if function is not None and function.type == "import":
            if self._in_type:
                return self._import_type(node, arguments)
            return _make(
                node,
                "ImportExpression",
                source=arguments[0] if arguments else None,
                options=arguments[1] if len(arguments) > 1 else None,
            )

        fields: dict[str, Any] = {"callee": self._result(function)}
        type_arguments = node.child_by_field_name("type_arguments")
        if type_arguments is not None:
            fields["typeArguments"] = self._result(type_arguments)
        fields["arguments"] = arguments
        fields["optional"] = _first_child(node, "optional_chain") is not None
        return _make(node, "CallExpression", **fields)

    def _import_type(self, node: Any, arguments: list[EstreeNode]) -> EstreeNode:
        parameter: EstreeNode | None = None
        if arguments:
            argument = arguments[0]
            if argument["type"] == "Literal":
                parameter = {
                    "type": "TSLiteralType",
                    "literal": argument,
                    "range": argument["range"],
                    "loc": argument["loc"],
                }
            else:
                parameter = argument
        return _make(node, "TSImportType", parameter=parameter, qualifier=None)

    def _member_expression(self, node: Any) -> EstreeNode:
        return _make(
            node,
            "MemberExpression",
            object=self._result(node.child_by_field_name("object")),
            property=self._result(node.child_by_field_name("property")),
            computed=False,
            optional=_first_child(node, "optional_chain") is not None,
        )

    def _subscript_expression(self, node: Any) -> EstreeNode:
        return _make(
            node,
            "MemberExpression",
            object=self._result(node.child_by_field_name("object")),
            property=self._result(node.child_by_field_name("index")),
            computed=True,
            optional=_first_child(node, "optional_chain") is not None,
        )

    def _type_query(self, node: Any) -> EstreeNode:
        inner = self._results(node.named_children)
        return _make(node, "TSTypeQuery", exprName=inner[0] if inner else None)

    # ------------------------------------------------------------------
    # Module syntax
    # ------------------------------------------------------------------

    def _module_name(self, node: Any) -> EstreeNode:
        """Identifier, or Literal for string names (``import {"a-b" as c}``)."""
        if node.type == "string":
            return self._string(node)
        return _make(node, "Identifier", name=_text(node))

    def _import_statement(self, node: Any) -> EstreeNode:
        import_kind = _keyword_kind(node)

        require_clause = _first_child(node, "import_require_clause")
        if require_clause is not None:
            return self._import_equals(node, require_clause, import_kind)

        source = node.child_by_field_name("source")
        if source is None:
            return self._generic(node)

        clause = _first_child(node, "import_clause")
        specifiers = self._import_clause(clause) if clause is not None else []
        return _make(
            node,
            "ImportDeclaration",
            specifiers=specifiers,
            source=self._result(source),
            importKind=import_kind,
        )

    def _import_equals(self, node: Any, clause: Any, import_kind: str) -> EstreeNode:
        name = _first_child(clause, "identifier")
        source = clause.child_by_field_name("source") or _first_child(clause, "string")
        reference = _make(
            clause,
            "TSExternalModuleReference",
            expression=self._result(source),
        )
        return _make(
            node,
            "TSImportEqualsDeclaration",
            id=self._result(name),
            moduleReference=reference,
            importKind=import_kind,
        )

    def _import_clause(self, clause: Any) -> list[EstreeNode]:
        specifiers: list[EstreeNode] = []
        for child in clause.named_children:
            if child.type == "identifier":
                specifiers.append(
                    _make(child, "ImportDefaultSpecifier", local=self._result(child))
                )
            elif child.type == "namespace_import":
                name = _first_child(child, "identifier")
                specifiers.append(
                    _make(
                        child,
                        "ImportNamespaceSpecifier",
                        local=self._result(name),
                    )
                )
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type == "import_specifier":
                        specifiers.append(self._import_specifier(spec))
        return specifiers

    def _import_specifier(self, spec: Any) -> EstreeNode:
        name = spec.child_by_field_name("name")
        alias = spec.child_by_field_name("alias")
        imported = self._module_name(name) if name is not None else None
        local = self._module_name(alias) if alias is not None else imported
        return _make(
            spec,
            "ImportSpecifier",
            imported=imported,
            local=local,
            importKind=_keyword_kind(spec),
        )

    def _export_statement(self, node: Any) -> EstreeNode:
        export_kind = _keyword_kind(node)
        tokens = {child.type for child in node.children if not child.is_named}
        source = self._result(node.child_by_field_name("source"))

        namespace = _first_child(node, "namespace_export")
        if source is not None and ("*" in tokens or namespace is not None):
            exported = None
            if namespace is not None:
                names = [c for c in namespace.named_children if c.type not in _SKIPPED_KINDS]
                exported = self._module_name(names[0]) if names else None
            return _make(
                node,
                "ExportAllDeclaration",
                exported=exported,
                source=source,
                exportKind=export_kind,
            )

        if "default" in tokens:
            value = node.child_by_field_name("declaration") or node.child_by_field_name(
                "value"
            )
            return _make(
                node,
                "ExportDefaultDeclaration",
                declaration=self._result(value),
            )

        if "=" in tokens:
            values = self._results(node.named_children)
            return _make(
                node,
                "TSExportAssignment",
                expression=values[0] if values else None,
            )

        declaration = node.child_by_field_name("declaration")
        clause = _first_child(node, "export_clause")
        if declaration is None and clause is None and source is None:
            return self._generic(node)

        return _make(
            node,
            "ExportNamedDeclaration",
            declaration=self._result(declaration),
            specifiers=self._export_clause(clause) if clause is not None else [],
            source=source,
            exportKind=export_kind,
        )

    def _export_clause(self, clause: Any) -> list[EstreeNode]:
        specifiers: list[EstreeNode] = []
        for spec in clause.named_children:
            if spec.type != "export_specifier":
                continue
            name = spec.child_by_field_name("name")
            alias = spec.child_by_field_name("alias")
            local = self._module_name(name) if name is not None else None
            specifiers.append(
                _make(
                    spec,
                    "ExportSpecifier",
                    local=local,
                    exported=self._module_name(alias) if alias is not None else local,
                    exportKind=_keyword_kind(spec),
                )
            )
        return specifiers


def to_estree(root: Any) -> EstreeNode:
    """Lower a tree-sitter root node into an ESTree ``Program`` dict."""
    lowered = EstreeLowering().lower(root)
    if lowered is None:
        return {"type": "Program", "sourceType": "module", "body": []}
    return lowered

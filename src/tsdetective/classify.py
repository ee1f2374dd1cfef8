"""Dependency classification for ESTree nodes.

``classify`` is called once per visited node. It looks the node's ``type``
up in ``HANDLERS`` and lets the handler decide whether the node references a
module. Handlers return a ``DependencyRecord`` or ``None``; they never raise,
so a malformed construct only loses its own record.

Recognized kinds:

==============================  =============================================
``ImportExpression``            ``import("x")``, unless ``skip_async_imports``
``ImportDeclaration``           ``import a, {b} from "x"``; type-only forms are
                                dropped under ``skip_type_imports``
``ExportNamedDeclaration``      ``export {a} from "x"``
``ExportAllDeclaration``        ``export * from "x"``
``TSExternalModuleReference``   ``import a = require("x")``
``TSImportType``                ``typeof import("x")``, unless ``skip_type_imports``
``CallExpression``              ``require("x")``, ``main.require("x")`` and
                                ``require.main.require("x")``, only with
                                ``mixed_imports``
==============================  =============================================

Re-exports are reported even when type-only: ``skip_type_imports`` only
applies to import forms.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from tsdetective.models import DependencyRecord, ExtractOptions

Node = Mapping[str, Any]
Handler = Callable[[Node, ExtractOptions], "DependencyRecord | None"]

_STRING_LITERALS = frozenset({"Literal", "StringLiteral"})


def _field(node: Any, name: str) -> Any:
    return node.get(name) if isinstance(node, Mapping) else None


def _string_value(node: Any) -> str | None:
    """Non-empty string ``value`` of a node, or None."""
    value = _field(node, "value")
    return value if isinstance(value, str) and value else None


def _is_identifier(node: Any, name: str) -> bool:
    return _field(node, "type") == "Identifier" and _field(node, "name") == name


def _imported_name(specifier: Any) -> str | None:
    if _field(specifier, "type") != "ImportSpecifier":
        return None
    imported = _field(specifier, "imported")
    name = _field(imported, "name")
    if isinstance(name, str):
        return name
    # String-named import: import {"a-b" as c} from "x"
    value = _field(imported, "value")
    return value if isinstance(value, str) else None


def _source_record(node: Node) -> DependencyRecord | None:
    specifier = _string_value(_field(node, "source"))
    return DependencyRecord(specifier) if specifier else None


def _import_expression(node: Node, options: ExtractOptions) -> DependencyRecord | None:
    if options.skip_async_imports:
        return None
    return _source_record(node)


def _import_declaration(node: Node, options: ExtractOptions) -> DependencyRecord | None:
    if options.skip_type_imports and node.get("importKind") == "type":
        return None
    specifier = _string_value(node.get("source"))
    if not specifier:
        return None
    specifiers = node.get("specifiers")
    names = []
    if isinstance(specifiers, list):
        for spec in specifiers:
            name = _imported_name(spec)
            if name is not None:
                names.append(name)
    return DependencyRecord(specifier, tuple(names))


def _reexport(node: Node, options: ExtractOptions) -> DependencyRecord | None:
    return _source_record(node)


def _external_module_reference(
    node: Node, options: ExtractOptions
) -> DependencyRecord | None:
    specifier = _string_value(node.get("expression"))
    return DependencyRecord(specifier) if specifier else None


def _import_type(node: Node, options: ExtractOptions) -> DependencyRecord | None:
    if options.skip_type_imports:
        return None
    # typescript-estree renamed ``parameter`` to ``argument``
    parameter = node.get("parameter") or node.get("argument")
    if _field(parameter, "type") != "TSLiteralType":
        return None
    specifier = _string_value(_field(parameter, "literal"))
    return DependencyRecord(specifier) if specifier else None


def is_plain_require(node: Node) -> bool:
    """``require(...)``"""
    return node.get("type") == "CallExpression" and _is_identifier(node.get("callee"), "require")


def is_main_scoped_require(node: Node) -> bool:
    """``main.require(...)`` or ``require.main.require(...)``"""
    if node.get("type") != "CallExpression":
        return False
    callee = node.get("callee")
    if _field(callee, "type") != "MemberExpression" or _field(callee, "computed"):
        return False
    if not _is_identifier(_field(callee, "property"), "require"):
        return False
    owner = _field(callee, "object")
    if _is_identifier(owner, "main"):
        return True
    return (
        _field(owner, "type") == "MemberExpression"
        and not _field(owner, "computed")
        and _is_identifier(_field(owner, "object"), "require")
        and _is_identifier(_field(owner, "property"), "main")
    )


def require_specifier(argument: Any) -> str | None:
    """Module name passed to a require call.

    String literals give their value. Template literals give the raw text of
    their leading chunk, so ``require(`./locale/${lang}`)`` yields
    ``./locale/``. Anything else is not statically known.
    """
    kind = _field(argument, "type")
    if kind in _STRING_LITERALS:
        return _string_value(argument)
    if kind == "TemplateLiteral":
        quasis = _field(argument, "quasis")
        if not isinstance(quasis, list) or not quasis:
            return None
        raw = _field(_field(quasis[0], "value"), "raw")
        return raw if isinstance(raw, str) and raw else None
    return None


def _call_expression(node: Node, options: ExtractOptions) -> DependencyRecord | None:
    if not options.mixed_imports:
        return None
    if not (is_plain_require(node) or is_main_scoped_require(node)):
        return None
    arguments = node.get("arguments")
    if not isinstance(arguments, list) or not arguments:
        return None
    specifier = require_specifier(arguments[0])
    return DependencyRecord(specifier) if specifier else None


HANDLERS: dict[str, Handler] = {
    "ImportExpression": _import_expression,
    "ImportDeclaration": _import_declaration,
    "ExportNamedDeclaration": _reexport,
    "ExportAllDeclaration": _reexport,
    "TSExternalModuleReference": _external_module_reference,
    "TSImportType": _import_type,
    "CallExpression": _call_expression,
}


def classify(node: Node, options: ExtractOptions) -> DependencyRecord | None:
    """Return the dependency ``node`` references, if any."""
    kind = _field(node, "type")
    handler = HANDLERS.get(kind) if isinstance(kind, str) else None
    if handler is None:
        return None
    return handler(node, options)

"""Depth-first traversal over ESTree-shaped trees.

Visiting order is pre-order: a node is visited before its children, and
children are visited in the order of the fields that hold them (dict
insertion order), each list field front to back. For trees produced by
``tsdetective.parsing`` that is source-text document order.

A child is any field value that is a mapping with a string ``type``, or any
such mapping inside a list field. Other values (``range``, ``loc``,
``TemplateElement.value``) are data, not nodes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any


def is_node(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("type"), str)


def child_nodes(node: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    """Yield the direct children of ``node`` in field order."""
    for key, value in node.items():
        if key == "type":
            continue
        if is_node(value):
            yield value
        elif isinstance(value, list):
            for item in value:
                if is_node(item):
                    yield item


def iter_nodes(root: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    """Yield every node under ``root`` (inclusive) in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(child_nodes(node))))


def walk(root: Mapping[str, Any], visit: Callable[[Mapping[str, Any]], None]) -> None:
    for node in iter_nodes(root):
        visit(node)

"""Tests for ESTree traversal order."""

from __future__ import annotations

from typing import Any

from tsdetective.walk import child_nodes, is_node, iter_nodes, walk


def node(kind: str, **fields: Any) -> dict[str, Any]:
    return {"type": kind, **fields}


TREE = node(
    "Program",
    body=[
        node("A", left=node("A1"), right=node("A2", inner=[node("A2a")])),
        node("B"),
    ],
    range=[0, 10],
    loc={"start": {"line": 1, "column": 0}},
)


class TestIsNode:
    def test_mapping_with_string_type(self) -> None:
        assert is_node({"type": "X"})

    def test_rejects_non_nodes(self) -> None:
        assert not is_node({"raw": "x"})
        assert not is_node({"type": 1})
        assert not is_node(["type"])
        assert not is_node(None)


class TestChildNodes:
    def test_yields_fields_and_list_items_in_order(self) -> None:
        kinds = [c["type"] for c in child_nodes(TREE["body"][0])]
        assert kinds == ["A1", "A2"]

    def test_ignores_data_fields(self) -> None:
        """range, loc and TemplateElement values are not nodes."""
        element = {"type": "TemplateElement", "value": {"raw": "a", "cooked": "a"}}
        assert list(child_nodes(element)) == []
        assert [c["type"] for c in child_nodes(TREE)] == ["A", "B"]

    def test_skips_non_node_list_items(self) -> None:
        parent = node("P", items=[None, "x", node("C"), {"no": "type"}])
        assert [c["type"] for c in child_nodes(parent)] == ["C"]


class TestIterNodes:
    def test_pre_order_document_order(self) -> None:
        kinds = [n["type"] for n in iter_nodes(TREE)]
        assert kinds == ["Program", "A", "A1", "A2", "A2a", "B"]

    def test_single_node(self) -> None:
        assert [n["type"] for n in iter_nodes(node("Leaf"))] == ["Leaf"]

    def test_deep_tree_does_not_recurse(self) -> None:
        """Iterative walk handles nesting beyond the recursion limit."""
        root = leaf = node("N")
        for _ in range(5000):
            child = node("N")
            leaf["next"] = child
            leaf = child
        assert sum(1 for _ in iter_nodes(root)) == 5001


class TestWalk:
    def test_visits_every_node_once(self) -> None:
        seen: list[str] = []
        walk(TREE, lambda n: seen.append(n["type"]))
        assert seen == ["Program", "A", "A1", "A2", "A2a", "B"]

"""Tests for ofcov.graph.node."""

from __future__ import annotations

import pytest

from ofcov.fields import AccessibleField
from ofcov.graph import GraphNode
from ofcov.model import FieldDecl, TypeRef


def _node(name: str, pseudo: bool = False) -> GraphNode:
    field = FieldDecl(name=name, type=TypeRef("int"), declaring_type="com.example.Node", pseudo=pseudo)
    return GraphNode(AccessibleField.direct(field))


class TestGraphNode:
    def test_requires_accessible_field(self) -> None:
        with pytest.raises(ValueError, match="accessible_field"):
            GraphNode(None)  # type: ignore[arg-type]

    def test_add_child_deduplicates_by_identity(self) -> None:
        parent, child = _node("parent"), _node("child")
        assert parent.add_child(child)
        assert not parent.add_child(child)
        assert parent.children == (child,)

    def test_structurally_equal_children_are_both_kept(self) -> None:
        parent = _node("parent")
        parent.add_children([_node("child"), _node("child")])
        assert len(parent.children) == 2

    def test_has_child_is_structural(self) -> None:
        parent, child = _node("parent"), _node("child")
        parent.add_child(child)
        assert parent.has_child(_node("child"))
        assert not parent.has_child(_node("other"))

    def test_self_loop_is_hashable(self) -> None:
        node = _node("sibling")
        node.add_child(node)
        assert node.has_child(node)
        assert hash(node) == hash(node)
        assert not node.is_leaf

    def test_equality_compares_child_identity(self) -> None:
        first, second = _node("a"), _node("a")
        shared = _node("b")
        first.add_child(shared)
        assert first != second
        second.add_child(shared)
        assert first == second
        assert hash(first) == hash(second)

    def test_equal_but_distinct_children_differ(self) -> None:
        first, second = _node("a"), _node("a")
        first.add_child(_node("b"))
        second.add_child(_node("b"))
        assert first != second

    def test_equality_ignores_grandchildren(self) -> None:
        first, second = _node("a"), _node("a")
        shared = _node("b")
        first.add_child(shared)
        second.add_child(shared)
        shared.add_child(_node("c"))
        assert first == second

    def test_leaf_and_pseudo(self) -> None:
        value = _node("value", pseudo=True)
        assert value.is_leaf
        assert value.is_pseudo
        assert not _node("plain").is_pseudo

    def test_repr_lists_children(self) -> None:
        parent = _node("parent")
        parent.add_child(_node("child"))
        assert "children=[child]" in repr(parent)

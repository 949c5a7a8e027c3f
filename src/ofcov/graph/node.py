"""Nodes of an accessible field graph."""

from __future__ import annotations

from collections.abc import Iterable

from ofcov.fields import AccessibleField


class GraphNode:
    """An accessible field plus the nodes reachable one hop further through it.

    Children are kept in insertion order and deduplicated by identity.  A node
    may be its own child and may share children with other nodes, so equality
    and hashing look at the node's own field and the identity of its direct
    children only, never further down.
    """

    __slots__ = ("_accessible_field", "_children", "_child_ids")

    def __init__(self, accessible_field: AccessibleField) -> None:
        if accessible_field is None:
            raise ValueError("accessible_field cannot be None")
        self._accessible_field = accessible_field
        self._children: list[GraphNode] = []
        self._child_ids: set[int] = set()

    @property
    def accessible_field(self) -> AccessibleField:
        return self._accessible_field

    @property
    def children(self) -> tuple[GraphNode, ...]:
        return tuple(self._children)

    @property
    def is_pseudo(self) -> bool:
        return self._accessible_field.is_pseudo

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def add_child(self, child: GraphNode) -> bool:
        """Add *child*; returns False when this exact node was already a child."""
        if id(child) in self._child_ids:
            return False
        self._child_ids.add(id(child))
        self._children.append(child)
        return True

    def add_children(self, children: Iterable[GraphNode]) -> None:
        for child in children:
            self.add_child(child)

    def has_child(self, node: GraphNode) -> bool:
        """True when a structurally equal node is a child of this node."""
        return any(child == node for child in self._children)

    def _child_identities(self) -> frozenset[int]:
        return frozenset(self._child_ids)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, GraphNode):
            return NotImplemented
        return (
            self._accessible_field == other._accessible_field
            and self._child_ids == other._child_ids
        )

    def __hash__(self) -> int:
        return hash((self._accessible_field, self._child_identities()))

    def __repr__(self) -> str:
        children = ", ".join(child.accessible_field.name for child in self._children)
        return f"GraphNode(field={self._accessible_field.field}, children=[{children}])"

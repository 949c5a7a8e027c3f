"""Reachability paths through an accessible field graph."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ofcov.errors import InvalidPathError
from ofcov.graph.node import GraphNode
from ofcov.model.declarations import FieldDecl


class Path:
    """An immutable sequence of nodes where each node is a child of its predecessor.

    Two paths are equal when their node sequences are equal.  Adjacency is
    checked on construction and by :meth:`append`/:meth:`prepend`.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Iterable[GraphNode] = ()) -> None:
        node_tuple = tuple(nodes)
        for parent, child in zip(node_tuple, node_tuple[1:]):
            if not parent.has_child(child):
                raise InvalidPathError(
                    f"{child.accessible_field.field} is not a child of {parent.accessible_field.field}"
                )
        self._nodes = node_tuple

    @property
    def nodes(self) -> tuple[GraphNode, ...]:
        return self._nodes

    @property
    def length(self) -> int:
        return len(self._nodes)

    @property
    def last(self) -> GraphNode | None:
        return self._nodes[-1] if self._nodes else None

    @property
    def fields(self) -> tuple[FieldDecl, ...]:
        """The underlying fields, root first."""
        return tuple(node.accessible_field.field for node in self._nodes)

    def is_empty(self) -> bool:
        return not self._nodes

    def append(self, node: GraphNode) -> Path:
        """Return a new path extended by *node*, which must be a child of :attr:`last`."""
        if self._nodes and not self._nodes[-1].has_child(node):
            raise InvalidPathError(
                f"{node.accessible_field.field} is not a child of {self._nodes[-1].accessible_field.field}"
            )
        extended = Path.__new__(Path)
        extended._nodes = (*self._nodes, node)
        return extended

    def prepend(self, node: GraphNode) -> Path:
        """Return a new path starting with *node*, whose child must be the current first node."""
        if self._nodes and not node.has_child(self._nodes[0]):
            raise InvalidPathError(
                f"{self._nodes[0].accessible_field.field} is not a child of {node.accessible_field.field}"
            )
        extended = Path.__new__(Path)
        extended._nodes = (node, *self._nodes)
        return extended

    def starts_with(self, prefix: Path) -> bool:
        return self._nodes[: len(prefix._nodes)] == prefix._nodes

    def contains(self, node: GraphNode) -> bool:
        """True when this exact node instance is part of the path."""
        return any(existing is node for existing in self._nodes)

    def contains_loop(self) -> bool:
        """True when some node instance appears more than once."""
        return len({id(node) for node in self._nodes}) != len(self._nodes)

    def closed_at_first_loop(self) -> Path:
        """Return the prefix ending at the first repeated node instance."""
        seen: set[int] = set()
        for index, node in enumerate(self._nodes):
            if id(node) in seen:
                closed = Path.__new__(Path)
                closed._nodes = self._nodes[: index + 1]
                return closed
            seen.add(id(node))
        return self

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._nodes == other._nodes

    def __hash__(self) -> int:
        return hash(self._nodes)

    def __repr__(self) -> str:
        fields = "->".join(node.accessible_field.name for node in self._nodes)
        return f"Path(length={len(self._nodes)}, fields=[{fields}])"

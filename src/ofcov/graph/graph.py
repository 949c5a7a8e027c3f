"""The accessible field graph of a type."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Sequence

from ofcov.graph.node import GraphNode
from ofcov.graph.path import Path
from ofcov.model.declarations import FieldDecl
from ofcov.model.types import TypeRef

logger = logging.getLogger(__name__)


class AccessibleFieldGraph:
    """Root nodes for the fields directly accessible on a type.

    The graph is read-only once built; the reachability paths are computed on
    first use and cached.
    """

    def __init__(self, roots: Iterable[GraphNode], target: TypeRef | None = None) -> None:
        unique: list[GraphNode] = []
        seen: set[int] = set()
        for root in roots:
            if id(root) not in seen:
                seen.add(id(root))
                unique.append(root)
        self._roots = tuple(unique)
        self._target = target
        self._paths: frozenset[Path] | None = None

    @classmethod
    def empty(cls, target: TypeRef | None = None) -> AccessibleFieldGraph:
        return cls((), target)

    @property
    def roots(self) -> tuple[GraphNode, ...]:
        return self._roots

    @property
    def target(self) -> TypeRef | None:
        """The type the graph was built for, when known."""
        return self._target

    def is_empty(self) -> bool:
        return not self._roots

    def all_nodes(self) -> list[GraphNode]:
        """Breadth-first closure over the children of every root, deduplicated by identity."""
        seen: set[int] = set()
        nodes: list[GraphNode] = []
        frontier: deque[GraphNode] = deque()
        for root in self._roots:
            seen.add(id(root))
            nodes.append(root)
            frontier.append(root)
        while frontier:
            current = frontier.popleft()
            for child in current.children:
                if id(child) not in seen:
                    seen.add(id(child))
                    nodes.append(child)
                    frontier.append(child)
        return nodes

    def transitive_reachability_paths(self) -> frozenset[Path]:
        """Every maximal path starting at a root.

        A path ends at a leaf, or is closed off as soon as it is extended by a
        node it already contains.  The closed path keeps the repeated node, so
        ``[sibling, sibling]`` represents the self loop of ``sibling``.
        """
        if self._paths is None:
            self._paths = frozenset(self._collect_paths())
            logger.debug("Collected %d reachability paths", len(self._paths))
        return self._paths

    def _collect_paths(self) -> list[Path]:
        paths: list[Path] = []
        stack = [Path((root,)) for root in reversed(self._roots)]
        while stack:
            path = stack.pop()
            last = path.nodes[-1]
            if last.is_leaf:
                paths.append(path)
                continue
            for child in reversed(last.children):
                extended = path.append(child)
                if path.contains(child):
                    paths.append(extended)
                else:
                    stack.append(extended)
        return paths

    def find_path(self, fields: Sequence[FieldDecl]) -> Path | None:
        """Follow *fields* from the roots; ``None`` when some field is not reachable."""
        path = Path()
        candidates: Sequence[GraphNode] = self._roots
        for field in fields:
            node = next((c for c in candidates if c.accessible_field.field == field), None)
            if node is None:
                return None
            path = path.append(node)
            candidates = node.children
        return path

    def find_path_by_names(self, names: Sequence[str]) -> Path | None:
        """Like :meth:`find_path` but matching field names."""
        path = Path()
        candidates: Sequence[GraphNode] = self._roots
        for name in names:
            node = next((c for c in candidates if c.accessible_field.name == name), None)
            if node is None:
                return None
            path = path.append(node)
            candidates = node.children
        return path

    def __repr__(self) -> str:
        roots = ", ".join(root.accessible_field.name for root in self._roots)
        return f"AccessibleFieldGraph(target={self._target}, roots=[{roots}])"

"""Per asserted type evaluation data."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ofcov.graph.graph import AccessibleFieldGraph
from ofcov.graph.node import GraphNode
from ofcov.graph.path import Path
from ofcov.model.types import TypeRef


@dataclass(frozen=True)
class EvaluationInformation:
    """Graphs of an asserted type and the paths its equals leaves uncompared."""

    asserted_type: TypeRef
    """The asserted type."""

    graph: AccessibleFieldGraph
    """All fields reachable from the asserted type."""

    equals_graph: AccessibleFieldGraph
    """The fields compared by equals, same builder with an equals filter."""

    uncovered_paths: frozenset[Path]
    """Paths of :attr:`graph` whose last node is the first one not compared in equals."""

    @classmethod
    def empty(cls, asserted_type: TypeRef) -> EvaluationInformation:
        return cls(
            asserted_type=asserted_type,
            graph=AccessibleFieldGraph.empty(asserted_type),
            equals_graph=AccessibleFieldGraph.empty(asserted_type),
            uncovered_paths=frozenset(),
        )

    def all_accessible_fields_used_in_equals(self) -> bool:
        return not self.uncovered_paths


def find_paths_not_compared_in_equals(
    graph: AccessibleFieldGraph, equals_graph: AccessibleFieldGraph
) -> frozenset[Path]:
    """Return the prefixes of *graph*'s paths that end at the first uncompared node.

    Each path of the full graph is followed through the equals graph, matching
    nodes by accessible field.  Paths that can be followed to their end (which
    is a leaf or the first repetition of a node) are fully compared.
    """
    uncovered: set[Path] = set()
    for path in graph.transitive_reachability_paths():
        candidates: Sequence[GraphNode] = equals_graph.roots
        prefix = Path()
        for node in path:
            prefix = prefix.append(node)
            match = next(
                (c for c in candidates if c.accessible_field == node.accessible_field), None
            )
            if match is None:
                uncovered.add(prefix)
                break
            candidates = match.children
    return frozenset(uncovered)

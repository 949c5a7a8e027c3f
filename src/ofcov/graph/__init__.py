"""Accessible field graphs and reachability paths."""

from ofcov.graph.builder import AccessibleFieldGraphBuilder, FieldFilter, build_graph
from ofcov.graph.graph import AccessibleFieldGraph
from ofcov.graph.node import GraphNode
from ofcov.graph.path import Path

__all__ = [
    "AccessibleFieldGraph",
    "AccessibleFieldGraphBuilder",
    "FieldFilter",
    "GraphNode",
    "Path",
    "build_graph",
]

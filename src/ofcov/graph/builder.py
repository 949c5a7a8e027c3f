"""Builds accessible field graphs from a type model and field finders."""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from collections.abc import Callable, Sequence
from typing import Protocol

from ofcov.errors import check_not_none
from ofcov.fields import AccessibleField
from ofcov.finders.base import FieldFinder, FieldFinderChain
from ofcov.graph.graph import AccessibleFieldGraph
from ofcov.graph.node import GraphNode
from ofcov.model.declarations import FieldDecl, TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import TypeRef

logger = logging.getLogger(__name__)

FieldFilter = Callable[[AccessibleField, TypeRef], bool]
"""Decides whether an accessible field found on a type (second argument) is kept."""


class AccessibleFieldSource(Protocol):
    def find_accessible_fields(self, accessing: TypeDecl, ref: TypeRef) -> list[AccessibleField]: ...


class AccessibleFieldGraphBuilder:
    """Builds the graph of fields reachable from a target type.

    Types are processed breadth-first starting at the target.  Each distinct
    field becomes exactly one node, so a type reached along several routes
    shares its nodes, and a field whose type is its own declaring type links
    back to that type's nodes.  Pseudo fields are leaves.  A type that cannot be
    resolved yields no fields, so fields of that type become leaves as well.

    A builder holds no state between builds; it is not meant to be shared
    between threads while a build is running.
    """

    def __init__(self, finder: AccessibleFieldSource, model: TypeModel) -> None:
        self._finder = finder
        self._model = model

    def build(
        self,
        accessing: TypeDecl,
        target: TypeRef,
        field_filter: FieldFilter | None = None,
    ) -> AccessibleFieldGraph:
        check_not_none(accessing, "accessing")
        check_not_none(target, "target")

        root_type = target.erasure()
        queue: deque[TypeRef] = deque([root_type])
        enqueued = {root_type}
        processed: list[TypeRef] = []
        accessible_by_field: dict[FieldDecl, AccessibleField] = {}
        fields_by_type: dict[TypeRef, list[FieldDecl]] = {}

        while queue:
            current = queue.popleft()
            processed.append(current)

            found = self._finder.find_accessible_fields(accessing, current)
            if field_filter is not None:
                found = [candidate for candidate in found if field_filter(candidate, current)]
            if not found and not current.is_primitive and self._model.resolve(current) is None:
                logger.warning("Cannot resolve type %s, its fields become leaves", current)

            type_fields: list[FieldDecl] = []
            for accessible_field in found:
                existing = accessible_by_field.get(accessible_field.field)
                accessible_by_field[accessible_field.field] = (
                    accessible_field if existing is None else existing.unite(accessible_field)
                )
                type_fields.append(accessible_field.field)
                if accessible_field.is_pseudo:
                    continue
                field_type = accessible_field.type.erasure()
                if field_type not in enqueued:
                    enqueued.add(field_type)
                    queue.append(field_type)
            fields_by_type[current] = type_fields

        nodes_by_field = {
            field: GraphNode(accessible_field)
            for field, accessible_field in accessible_by_field.items()
        }
        nodes_by_field_type: dict[TypeRef, list[GraphNode]] = defaultdict(list)
        for node in nodes_by_field.values():
            if not node.is_pseudo:
                nodes_by_field_type[node.accessible_field.type.erasure()].append(node)

        for type_ref in processed:
            children = [nodes_by_field[field] for field in fields_by_type[type_ref]]
            for parent in nodes_by_field_type.get(type_ref, ()):
                parent.add_children(children)

        roots = [nodes_by_field[field] for field in fields_by_type[root_type]]
        logger.info(
            "Built graph for %s from %s: %d types, %d nodes, %d roots",
            target,
            accessing,
            len(processed),
            len(nodes_by_field),
            len(roots),
        )
        return AccessibleFieldGraph(roots, target)


def build_graph(
    finders: Sequence[FieldFinder],
    model: TypeModel,
    accessing: TypeDecl,
    target: TypeRef,
    field_filter: FieldFilter | None = None,
) -> AccessibleFieldGraph:
    """Build the graph of *target* as seen from *accessing* using a chain of *finders*."""
    builder = AccessibleFieldGraphBuilder(FieldFinderChain(finders), model)
    return builder.build(accessing, target, field_filter)

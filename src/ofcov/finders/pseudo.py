"""Finders exposing the pseudo fields of value-like types."""

from __future__ import annotations

from ofcov.fields import GrantingElement
from ofcov.finders.base import FieldFinder
from ofcov.model.declarations import FieldDecl, TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import TypeRef
from ofcov.pseudo import PseudoFieldGenerator


class PseudoFieldFinder(FieldFinder):
    """Returns the pseudo fields of the types handled by one pseudo field rule kind.

    Pseudo fields are always accessible and grant access through themselves.
    Once a type has pseudo fields no later finder in a chain is asked about it,
    so the internals of value types never show up in a graph.
    """

    kind: str = ""

    def __init__(self, model: TypeModel, generator: PseudoFieldGenerator) -> None:
        super().__init__(model)
        self._generator = generator

    def contains_pseudo_fields(self, ref: TypeRef) -> bool:
        rule = self._generator.rule_for(ref.erasure())
        return rule is not None and rule.kind == self.kind

    def fields_in_type(self, ref: TypeRef) -> list[FieldDecl]:
        if not self.contains_pseudo_fields(ref):
            return []
        return self._generator.pseudo_fields_for(ref)

    def is_accessible(self, accessing: TypeDecl, field: FieldDecl) -> bool:
        return field.pseudo

    def granting_elements(self, accessing: TypeDecl, field: FieldDecl) -> set[GrantingElement]:
        return {field}

    def call_next(self, accessing: TypeDecl, ref: TypeRef) -> bool:
        return not self.contains_pseudo_fields(ref)


class PrimitivePseudoFieldFinder(PseudoFieldFinder):
    """``value`` of primitives, wrappers and other value types."""

    name = "primitive"
    kind = "primitive"


class CollectionPseudoFieldFinder(PseudoFieldFinder):
    """``size``, ``elements`` and ``order`` of collections and arrays."""

    name = "collection"
    kind = "collection"


class ThrowablePseudoFieldFinder(PseudoFieldFinder):
    """``type``, ``message`` and ``cause`` of throwables."""

    name = "throwable"
    kind = "throwable"

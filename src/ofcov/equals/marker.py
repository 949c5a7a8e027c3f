"""Equality generated from declarative markers.

Supported marker parameters on the equals marker:

``callSuper``
    the generated equality delegates to the superclass first.
``onlyExplicitlyIncluded``
    only fields carrying the include marker are compared.
``exclude``
    names of fields left out of the comparison.

A data marker generates the same equality as a bare equals marker.
"""

from __future__ import annotations

from ofcov.equals.base import ComparedElement, EqualsMethodAnalyzer
from ofcov.model.declarations import FieldDecl, TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import Marker, TypeRef


class MarkerEqualsAnalyzer(EqualsMethodAnalyzer):
    name = "marker"

    def __init__(
        self,
        model: TypeModel,
        data_marker: str = "lombok.Data",
        equals_marker: str = "lombok.EqualsAndHashCode",
        include_marker: str = "lombok.EqualsAndHashCode.Include",
        exclude_marker: str = "lombok.EqualsAndHashCode.Exclude",
    ) -> None:
        super().__init__(model)
        self._data_marker = data_marker
        self._equals_marker = equals_marker
        self._include_marker = include_marker
        self._exclude_marker = exclude_marker

    def _marked_type(self, ref: TypeRef) -> TypeDecl | None:
        type_decl = self._model.resolve(ref)
        if type_decl is None:
            return None
        if self._model.has_marker(type_decl, self._equals_marker) or self._model.has_marker(
            type_decl, self._data_marker
        ):
            return type_decl
        return None

    def _equals_marker_of(self, type_decl: TypeDecl) -> Marker | None:
        return self._model.marker(type_decl, self._equals_marker)

    def overrides_equals(self, ref: TypeRef) -> bool:
        return self._marked_type(ref) is not None

    def _calls_super(self, ref: TypeRef) -> bool:
        type_decl = self._marked_type(ref)
        if type_decl is None:
            return False
        marker = self._equals_marker_of(type_decl)
        return bool(marker is not None and marker.get("callSuper", False))

    def included_fields(self, type_decl: TypeDecl) -> list[FieldDecl]:
        """Return the fields declared on *type_decl* that the generated equality compares."""
        candidates = [
            field for field in type_decl.fields if not field.static and not field.transient
        ]
        marker = self._equals_marker_of(type_decl)
        if marker is not None and marker.get("onlyExplicitlyIncluded", False):
            return [field for field in candidates if self._model.has_marker(field, self._include_marker)]

        excluded = set(marker.get("exclude", ())) if marker is not None else set()
        return [
            field
            for field in candidates
            if field.name not in excluded and not self._model.has_marker(field, self._exclude_marker)
        ]

    def _compared_elements(self, ref: TypeRef) -> set[ComparedElement]:
        type_decl = self._marked_type(ref)
        if type_decl is None:
            return set()
        return {field.ref for field in self.included_fields(type_decl)}

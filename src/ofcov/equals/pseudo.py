"""Equality of types represented by pseudo fields."""

from __future__ import annotations

from ofcov.equals.base import ComparedElement, EqualsMethodAnalyzer
from ofcov.model.type_model import TypeModel
from ofcov.model.types import TypeRef
from ofcov.pseudo import PseudoFieldGenerator


class PseudoFieldEqualsAnalyzer(EqualsMethodAnalyzer):
    """A type with pseudo fields compares all of them and never calls super."""

    name = "pseudo"

    def __init__(self, model: TypeModel, generator: PseudoFieldGenerator) -> None:
        super().__init__(model)
        self._generator = generator

    def overrides_equals(self, ref: TypeRef) -> bool:
        return self._generator.has_pseudo_fields(ref.erasure())

    def _calls_super(self, ref: TypeRef) -> bool:
        return False

    def _compared_elements(self, ref: TypeRef) -> set[ComparedElement]:
        return {field.ref for field in self._generator.pseudo_fields_for(ref)}

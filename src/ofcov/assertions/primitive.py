"""Assertions on primitive values."""

from __future__ import annotations

from enum import Enum
from fractions import Fraction
from typing import TYPE_CHECKING

from ofcov.assertions.base import Assertion
from ofcov.model.declarations import TypeDecl
from ofcov.model.types import WRAPPER_TYPE_NAMES, TypeRef

if TYPE_CHECKING:
    from ofcov.evaluation.information import EvaluationInformation
    from ofcov.graph.path import Path


class PrimitiveType(Enum):
    BOOLEAN = "boolean"
    BYTE = "byte"
    CHAR = "char"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"

    @property
    def type_ref(self) -> TypeRef:
        return TypeRef(self.value)

    @classmethod
    def of(cls, ref: TypeRef) -> PrimitiveType:
        """Return the primitive type of a primitive or wrapper reference."""
        name = WRAPPER_TYPE_NAMES.get(ref.qualified_name, ref.qualified_name)
        if ref.is_array:
            raise ValueError(f"{ref} is not a primitive or wrapper type")
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"{ref} is not a primitive or wrapper type") from None


class PrimitiveTypeAssertion(Assertion):
    """Comparison of a primitive value, which is always fully covered."""

    def __init__(self, primitive_type: PrimitiveType, accessing_type: TypeDecl) -> None:
        super().__init__(primitive_type.type_ref, accessing_type)
        self.primitive_type = primitive_type

    def covered_paths(self, information: EvaluationInformation) -> set[Path]:
        return set(information.graph.transitive_reachability_paths())

    def fixed_fraction(self) -> Fraction | None:
        return Fraction(1)

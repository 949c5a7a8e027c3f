"""Accessible fields: a field plus the elements that grant access to it."""

from __future__ import annotations

from collections.abc import Iterable

from ofcov.model.declarations import FieldDecl, MethodDecl
from ofcov.model.types import TypeRef

GrantingElement = FieldDecl | MethodDecl


class AccessibleField:
    """A field that can be observed, together with every element granting access.

    Granting elements are the field itself for direct access or accessor methods.
    Instances are immutable; :meth:`unite` returns a new instance.
    """

    __slots__ = ("_field", "_granting_elements")

    def __init__(self, field: FieldDecl, granting_elements: Iterable[GrantingElement]) -> None:
        if field is None:
            raise ValueError("field cannot be None")
        elements = frozenset(granting_elements)
        if not elements:
            raise ValueError(f"At least one granting element is required for {field}")
        self._field = field
        self._granting_elements = elements

    @classmethod
    def direct(cls, field: FieldDecl) -> AccessibleField:
        """Accessible field granted by direct access to the field itself."""
        return cls(field, (field,))

    @property
    def field(self) -> FieldDecl:
        return self._field

    @property
    def granting_elements(self) -> frozenset[GrantingElement]:
        return self._granting_elements

    @property
    def name(self) -> str:
        return self._field.name

    @property
    def type(self) -> TypeRef:
        return self._field.type

    @property
    def is_pseudo(self) -> bool:
        return self._field.pseudo

    def unite(self, other: AccessibleField) -> AccessibleField:
        """Merge with *other*, which must refer to the same field."""
        if other.field != self._field:
            raise ValueError(
                f"Cannot unite accessible fields of different fields: {self._field} and {other.field}"
            )
        if other.granting_elements <= self._granting_elements:
            return self
        return AccessibleField(self._field, self._granting_elements | other.granting_elements)

    @staticmethod
    def unite_all(accessible_fields: Iterable[AccessibleField]) -> list[AccessibleField]:
        """Group by underlying field and unite each group, keeping first-seen order."""
        united: dict[FieldDecl, AccessibleField] = {}
        for accessible_field in accessible_fields:
            existing = united.get(accessible_field.field)
            united[accessible_field.field] = (
                accessible_field if existing is None else existing.unite(accessible_field)
            )
        return list(united.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccessibleField):
            return NotImplemented
        return self._field == other._field and self._granting_elements == other._granting_elements

    def __hash__(self) -> int:
        return hash((self._field, self._granting_elements))

    def __repr__(self) -> str:
        elements = ", ".join(sorted(str(element) for element in self._granting_elements))
        return f"AccessibleField(field={self._field}, granting=[{elements}])"

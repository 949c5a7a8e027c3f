"""Equals analyzer contract."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from ofcov.errors import EqualsNotOverriddenError
from ofcov.fields import AccessibleField
from ofcov.model.declarations import MethodDecl, TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import FieldRef, MethodRef, TypeRef

logger = logging.getLogger(__name__)

EQUALS_METHOD_NAME = "equals"
OBJECT_TYPE = TypeRef("java.lang.Object")
BOOLEAN_TYPE = TypeRef("boolean")

ComparedElement = FieldRef | MethodRef


def find_equals_method(type_decl: TypeDecl) -> MethodDecl | None:
    """Return the ``boolean equals(Object)`` method declared directly on *type_decl*."""
    for method in type_decl.methods_named(EQUALS_METHOD_NAME):
        if (
            not method.static
            and len(method.parameters) == 1
            and method.parameters[0].type.erasure() == OBJECT_TYPE
            and method.return_type == BOOLEAN_TYPE
        ):
            return method
    return None


class EqualsMethodAnalyzer(ABC):
    """Strategy describing how a type's equality check compares its fields.

    :meth:`calls_super` and :meth:`compared_fields` are only defined for types
    that override equals according to this analyzer and raise
    :class:`~ofcov.errors.EqualsNotOverriddenError` otherwise.
    """

    name: str = ""
    """Registry name of the analyzer."""

    def __init__(self, model: TypeModel) -> None:
        self._model = model

    @abstractmethod
    def overrides_equals(self, ref: TypeRef) -> bool:
        """True when the type itself defines its own equality."""

    def calls_super(self, ref: TypeRef) -> bool:
        """True when the type's equality also delegates to its superclass."""
        self._require_override(ref)
        return self._calls_super(ref)

    def compared_fields(
        self, ref: TypeRef, accessible_fields: Iterable[AccessibleField]
    ) -> set[AccessibleField]:
        """Return the subset of *accessible_fields* compared by the type's equality."""
        self._require_override(ref)
        compared_elements = self._compared_elements(ref)
        compared: set[AccessibleField] = set()
        for accessible_field in accessible_fields:
            if self._is_compared(accessible_field, compared_elements):
                logger.debug("%s compared in equals of %s", accessible_field.field, ref)
                compared.add(accessible_field)
            else:
                logger.debug("%s not compared in equals of %s", accessible_field.field, ref)
        return compared

    def _is_compared(
        self, accessible_field: AccessibleField, compared_elements: set[ComparedElement]
    ) -> bool:
        if accessible_field.field.ref in compared_elements:
            return True
        return any(element.ref in compared_elements for element in accessible_field.granting_elements)

    def _require_override(self, ref: TypeRef) -> None:
        if not self.overrides_equals(ref):
            raise EqualsNotOverriddenError(f"{ref} does not override equals according to {self.name}")

    @abstractmethod
    def _calls_super(self, ref: TypeRef) -> bool: ...

    @abstractmethod
    def _compared_elements(self, ref: TypeRef) -> set[ComparedElement]: ...

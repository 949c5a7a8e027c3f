"""Equality along a superclass chain."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ofcov.equals.base import EqualsMethodAnalyzer
from ofcov.fields import AccessibleField
from ofcov.model.type_model import TypeModel
from ofcov.model.types import OBJECT_TYPE_NAME, TypeRef

logger = logging.getLogger(__name__)


class IterativeEqualsAnalyzer:
    """Combines several analyzers over a type and its superclasses.

    A class that does not override equals inherits the equality of its nearest
    overriding superclass.  From there, compared fields of every analyzer
    claiming the class are united, and the walk continues to the superclass as
    long as one of those analyzers reports a call to ``super.equals``.
    """

    def __init__(self, analyzers: Sequence[EqualsMethodAnalyzer], model: TypeModel) -> None:
        self._analyzers = list(analyzers)
        self._model = model

    @property
    def analyzers(self) -> list[EqualsMethodAnalyzer]:
        return list(self._analyzers)

    def _superclass(self, ref: TypeRef) -> TypeRef | None:
        type_decl = self._model.resolve(ref)
        if type_decl is None or type_decl.superclass is None:
            return None
        if type_decl.superclass.qualified_name == OBJECT_TYPE_NAME:
            return None
        return type_decl.superclass.erasure()

    def _overriding(self, ref: TypeRef) -> list[EqualsMethodAnalyzer]:
        return [analyzer for analyzer in self._analyzers if analyzer.overrides_equals(ref)]

    def overrides_equals(self, ref: TypeRef) -> bool:
        """True when the type or one of its superclasses overrides equals."""
        current: TypeRef | None = ref.erasure()
        seen: set[TypeRef] = set()
        while current is not None and current not in seen:
            if self._overriding(current):
                return True
            seen.add(current)
            current = self._superclass(current)
        return False

    def compared_fields(
        self, ref: TypeRef, accessible_fields: Iterable[AccessibleField]
    ) -> set[AccessibleField]:
        fields = list(accessible_fields)
        compared: list[AccessibleField] = []
        found_override = False
        current: TypeRef | None = ref.erasure()
        seen: set[TypeRef] = set()

        while current is not None and current not in seen:
            seen.add(current)
            overriding = self._overriding(current)
            if overriding:
                found_override = True
                for analyzer in overriding:
                    compared.extend(analyzer.compared_fields(current, fields))
                if not any(analyzer.calls_super(current) for analyzer in overriding):
                    break
                logger.debug("Equals of %s calls super", current)
            current = self._superclass(current)

        if not found_override:
            logger.info("Equals method not overridden by %s or its superclasses", ref)
        return set(AccessibleField.unite_all(compared))


def analyze_equals(
    analyzers: Sequence[EqualsMethodAnalyzer],
    model: TypeModel,
    ref: TypeRef,
    accessible_fields: Iterable[AccessibleField],
) -> set[AccessibleField]:
    """Return the accessible fields compared by the equality of *ref*.

    Empty when neither the type nor a superclass overrides equals.
    """
    return IterativeEqualsAnalyzer(analyzers, model).compared_fields(ref, accessible_fields)

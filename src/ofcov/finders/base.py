"""Field finder contract and its aggregating combinators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from ofcov.errors import check_not_none
from ofcov.fields import AccessibleField, GrantingElement
from ofcov.model.declarations import FieldDecl, TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import TypeRef

logger = logging.getLogger(__name__)


class FieldFinder(ABC):
    """Strategy deciding whether a field is observable from an accessing type.

    Transient fields and compile time constants (static final fields) are never
    object state and are skipped before a finder is asked.
    """

    name: str = ""
    """Registry name of the finder."""

    def __init__(self, model: TypeModel) -> None:
        self._model = model

    @property
    def model(self) -> TypeModel:
        return self._model

    @abstractmethod
    def is_accessible(self, accessing: TypeDecl, field: FieldDecl) -> bool:
        """True when *field* can be observed from code in *accessing*."""

    @abstractmethod
    def granting_elements(self, accessing: TypeDecl, field: FieldDecl) -> set[GrantingElement]:
        """Return the elements through which *accessing* observes *field*.

        Only meaningful when :meth:`is_accessible` is true.
        """

    def fields_in_type(self, ref: TypeRef) -> list[FieldDecl]:
        """Return the candidate fields of *ref*, inherited ones included."""
        return self._model.all_fields(ref)

    def call_next(self, accessing: TypeDecl, ref: TypeRef) -> bool:
        """False to stop a :class:`FieldFinderChain` after this finder for *ref*."""
        return True

    def find_accessible_fields(self, accessing: TypeDecl, ref: TypeRef) -> list[AccessibleField]:
        check_not_none(accessing, "accessing")
        check_not_none(ref, "ref")

        accessible: list[AccessibleField] = []
        for field in self.fields_in_type(ref):
            if field.transient or (field.static and field.final):
                continue
            if not self.is_accessible(accessing, field):
                continue
            elements = self.granting_elements(accessing, field)
            if not elements:
                logger.debug("%s accepted %s without granting elements", type(self).__name__, field)
                continue
            logger.debug("%s found %s accessible from %s", type(self).__name__, field, accessing)
            accessible.append(AccessibleField(field, elements))
        return accessible


class FieldFinderAggregator:
    """OR-combination of several finders.

    A field is accessible when at least one finder accepts it; its granting
    elements are the union over every accepting finder.
    """

    def __init__(self, finders: Sequence[FieldFinder]) -> None:
        self._finders = list(finders)

    @property
    def finders(self) -> list[FieldFinder]:
        return list(self._finders)

    def is_accessible(self, accessing: TypeDecl, field: FieldDecl) -> bool:
        return any(finder.is_accessible(accessing, field) for finder in self._finders)

    def granting_elements(self, accessing: TypeDecl, field: FieldDecl) -> set[GrantingElement]:
        elements: set[GrantingElement] = set()
        for finder in self._finders:
            if finder.is_accessible(accessing, field):
                elements |= finder.granting_elements(accessing, field)
        return elements

    def find_accessible_fields(self, accessing: TypeDecl, ref: TypeRef) -> list[AccessibleField]:
        found: list[AccessibleField] = []
        for finder in self._finders:
            found.extend(finder.find_accessible_fields(accessing, ref))
        return AccessibleField.unite_all(found)


class FieldFinderChain(FieldFinderAggregator):
    """Aggregator that stops at the first finder whose :meth:`~FieldFinder.call_next` is false.

    The order of the finders is significant.
    """

    def find_accessible_fields(self, accessing: TypeDecl, ref: TypeRef) -> list[AccessibleField]:
        check_not_none(accessing, "accessing")
        check_not_none(ref, "ref")

        found: list[AccessibleField] = []
        for finder in self._finders:
            found.extend(finder.find_accessible_fields(accessing, ref))
            if not finder.call_next(accessing, ref):
                logger.debug("Not calling next field finder after %s for %s", finder.name, ref)
                break
        return AccessibleField.unite_all(found)

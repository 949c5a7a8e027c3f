"""Analyzers inspecting the body of a declared equals method."""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Iterable

from ofcov.equals.base import (
    EQUALS_METHOD_NAME,
    ComparedElement,
    EqualsMethodAnalyzer,
    find_equals_method,
)
from ofcov.finders.getter import accessed_field
from ofcov.model.code import (
    CodeElement,
    FieldRead,
    Invocation,
    LocalVariable,
    Return,
    walk_all,
)
from ofcov.model.declarations import MethodDecl
from ofcov.model.types import TypeRef

logger = logging.getLogger(__name__)


def _is_super_equals_call(element: CodeElement) -> bool:
    return (
        isinstance(element, Invocation)
        and element.invokes_on_super
        and element.method.name == EQUALS_METHOD_NAME
    )


def _contains_super_equals_call(element: CodeElement | None) -> bool:
    return element is not None and any(_is_super_equals_call(node) for node in element.walk())


class MethodBodyEqualsAnalyzer(EqualsMethodAnalyzer):
    """Base for analyzers that read the compared values out of an equals method body.

    The type overrides equals when it declares ``boolean equals(Object)``.  It
    calls super when the result of ``super.equals(..)`` is returned, as a whole
    or as part of the returned expression, or is assigned to a local variable.
    A compared accessor call on ``this`` also counts for the field it returns.
    """

    def equals_method(self, ref: TypeRef) -> MethodDecl | None:
        type_decl = self._model.resolve(ref)
        if type_decl is None:
            return None
        return find_equals_method(type_decl)

    def overrides_equals(self, ref: TypeRef) -> bool:
        return self.equals_method(ref) is not None

    def _calls_super(self, ref: TypeRef) -> bool:
        method = self.equals_method(ref)
        if method is None:
            return False
        for element in walk_all(method.body):
            if isinstance(element, LocalVariable) and _contains_super_equals_call(element.initializer):
                logger.debug("super.equals result of %s is assigned to %s", ref, element.name)
                return True
            if isinstance(element, Return) and _contains_super_equals_call(element.expression):
                logger.debug("super.equals result of %s is returned", ref)
                return True
        return False

    @abstractmethod
    def compared_expressions(self, method: MethodDecl) -> Iterable[CodeElement]:
        """Yield the expressions denoting values of ``this`` compared in *method*."""

    def _compared_elements(self, ref: TypeRef) -> set[ComparedElement]:
        method = self.equals_method(ref)
        if method is None:
            return set()
        elements: set[ComparedElement] = set()
        for expression in self.compared_expressions(method):
            if isinstance(expression, FieldRead) and expression.reads_this:
                elements.add(expression.field)
            elif isinstance(expression, Invocation) and expression.invokes_on_this and not expression.arguments:
                elements.add(expression.method)
                field = accessed_field(self._model, expression.method)
                if field is not None:
                    logger.debug("%s returns %s compared in equals of %s", expression.method, field, ref)
                    elements.add(field)
        return elements

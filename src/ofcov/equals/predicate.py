"""Field filter keeping only fields compared in equals."""

from __future__ import annotations

from ofcov.equals.iterative import IterativeEqualsAnalyzer
from ofcov.fields import AccessibleField
from ofcov.model.declarations import FieldDecl
from ofcov.model.types import TypeRef


class ComparedInEqualsPredicate:
    """Graph builder filter: is an accessible field compared in the equals of its type?

    Answers are memoized per (type, field).
    """

    def __init__(self, analyzer: IterativeEqualsAnalyzer) -> None:
        self._analyzer = analyzer
        self._memo: dict[tuple[TypeRef, FieldDecl], bool] = {}

    def __call__(self, accessible_field: AccessibleField, origin: TypeRef) -> bool:
        key = (origin.erasure(), accessible_field.field)
        cached = self._memo.get(key)
        if cached is None:
            cached = accessible_field in self._analyzer.compared_fields(origin, [accessible_field])
            self._memo[key] = cached
        return cached

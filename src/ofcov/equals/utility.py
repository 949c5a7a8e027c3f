"""Equality utility invocations such as ``Objects.equals(a, b)``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ofcov.equals.method import MethodBodyEqualsAnalyzer
from ofcov.model.code import CodeElement, Invocation, walk_all
from ofcov.model.declarations import MethodDecl
from ofcov.model.type_model import TypeModel

DEFAULT_UTILITY_METHODS: tuple[str, ...] = (
    "java.util.Objects#equals",
    "java.util.Objects#deepEquals",
    "java.util.Arrays#equals",
    "java.util.Arrays#deepEquals",
)


class UtilityEqualsAnalyzer(MethodBodyEqualsAnalyzer):
    """The first argument of every configured utility invocation is compared."""

    name = "utility"

    def __init__(self, model: TypeModel, utility_methods: Iterable[str] = DEFAULT_UTILITY_METHODS) -> None:
        super().__init__(model)
        self._utility_methods = frozenset(utility_methods)

    def compared_expressions(self, method: MethodDecl) -> Iterator[CodeElement]:
        for element in walk_all(method.body):
            if (
                isinstance(element, Invocation)
                and element.method.signature in self._utility_methods
                and element.arguments
            ):
                yield element.arguments[0]

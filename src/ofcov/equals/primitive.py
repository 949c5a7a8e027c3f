"""Primitive ``==`` comparisons."""

from __future__ import annotations

from collections.abc import Iterator

from ofcov.equals.method import MethodBodyEqualsAnalyzer
from ofcov.model.code import BinaryOperator, CodeElement, walk_all
from ofcov.model.declarations import MethodDecl


def _is_primitive(expression: CodeElement) -> bool:
    expression_type = getattr(expression, "type", None)
    return expression_type is not None and expression_type.is_primitive


class PrimitiveEqualsAnalyzer(MethodBodyEqualsAnalyzer):
    """The left operand of ``==`` between two primitive operands is compared."""

    name = "primitive"

    def compared_expressions(self, method: MethodDecl) -> Iterator[CodeElement]:
        for element in walk_all(method.body):
            if (
                isinstance(element, BinaryOperator)
                and element.operator == "=="
                and _is_primitive(element.left)
                and _is_primitive(element.right)
            ):
                yield element.left

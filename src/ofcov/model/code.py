"""Minimal code tree for method bodies.

Only the constructs needed to analyze equals methods and accessor bodies are
modelled.  Every node can be walked in pre-order with :meth:`CodeElement.walk`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from ofcov.model.types import FieldRef, MethodRef, TypeRef

BOOLEAN = TypeRef("boolean")

COMPARISON_OPERATORS = frozenset({"==", "!=", "<", "<=", ">", ">="})


class CodeElement:
    """Base class of all code tree nodes."""

    def children(self) -> tuple[CodeElement, ...]:
        return ()

    def walk(self) -> Iterator[CodeElement]:
        """Yield this element and all of its descendants in pre-order."""
        stack: list[CodeElement] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children()))


def walk_all(elements: tuple[CodeElement, ...]) -> Iterator[CodeElement]:
    """Walk several statements in order."""
    for element in elements:
        yield from element.walk()


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class ThisAccess(CodeElement):
    """``this``."""

    type: TypeRef | None = None


@dataclass(frozen=True)
class SuperAccess(CodeElement):
    """``super``."""

    type: TypeRef | None = None


@dataclass(frozen=True)
class VariableRead(CodeElement):
    """Read of a local variable or parameter."""

    name: str
    type: TypeRef | None = None


@dataclass(frozen=True)
class Literal(CodeElement):
    value: Any
    type: TypeRef | None = None


@dataclass(frozen=True)
class FieldRead(CodeElement):
    """Read of a field; a ``None`` target is an implicit ``this``."""

    field: FieldRef
    type: TypeRef | None = None
    target: CodeElement | None = None

    @property
    def reads_this(self) -> bool:
        return self.target is None or isinstance(self.target, ThisAccess)

    def children(self) -> tuple[CodeElement, ...]:
        return () if self.target is None else (self.target,)


@dataclass(frozen=True)
class Invocation(CodeElement):
    """Method invocation; a ``None`` target is an implicit ``this`` unless the method is static."""

    method: MethodRef
    target: CodeElement | None = None
    arguments: tuple[CodeElement, ...] = ()

    @property
    def type(self) -> TypeRef | None:
        return self.method.return_type

    @property
    def invokes_on_this(self) -> bool:
        return not self.method.static and (
            self.target is None or isinstance(self.target, ThisAccess)
        )

    @property
    def invokes_on_super(self) -> bool:
        return isinstance(self.target, SuperAccess)

    def children(self) -> tuple[CodeElement, ...]:
        head = () if self.target is None else (self.target,)
        return head + self.arguments


@dataclass(frozen=True)
class BinaryOperator(CodeElement):
    operator: str
    left: CodeElement
    right: CodeElement

    @property
    def type(self) -> TypeRef | None:
        if self.operator in COMPARISON_OPERATORS or self.operator in {"&&", "||"}:
            return BOOLEAN
        return getattr(self.left, "type", None)

    def children(self) -> tuple[CodeElement, ...]:
        return (self.left, self.right)


@dataclass(frozen=True)
class UnaryOperator(CodeElement):
    operator: str
    operand: CodeElement

    @property
    def type(self) -> TypeRef | None:
        return getattr(self.operand, "type", None)

    def children(self) -> tuple[CodeElement, ...]:
        return (self.operand,)


@dataclass(frozen=True)
class Cast(CodeElement):
    type: TypeRef
    expression: CodeElement

    def children(self) -> tuple[CodeElement, ...]:
        return (self.expression,)


# ── Statements ───────────────────────────────────────────────────


@dataclass(frozen=True)
class Return(CodeElement):
    expression: CodeElement | None = None

    def children(self) -> tuple[CodeElement, ...]:
        return () if self.expression is None else (self.expression,)


@dataclass(frozen=True)
class LocalVariable(CodeElement):
    name: str
    type: TypeRef
    initializer: CodeElement | None = None

    def children(self) -> tuple[CodeElement, ...]:
        return () if self.initializer is None else (self.initializer,)


@dataclass(frozen=True)
class If(CodeElement):
    condition: CodeElement
    then: tuple[CodeElement, ...] = ()
    otherwise: tuple[CodeElement, ...] = ()

    def children(self) -> tuple[CodeElement, ...]:
        return (self.condition, *self.then, *self.otherwise)

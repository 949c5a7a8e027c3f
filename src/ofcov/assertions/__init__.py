"""Assertion kinds and the paths they cover."""

from ofcov.assertions.base import Assertion
from ofcov.assertions.equality import EqualsAssertion, NotNullAssertion, ReferenceEqualsAssertion
from ofcov.assertions.primitive import PrimitiveType, PrimitiveTypeAssertion
from ofcov.assertions.throwable import ThrowableAssertion

__all__ = [
    "Assertion",
    "EqualsAssertion",
    "NotNullAssertion",
    "PrimitiveType",
    "PrimitiveTypeAssertion",
    "ReferenceEqualsAssertion",
    "ThrowableAssertion",
]

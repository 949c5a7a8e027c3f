"""Exceptions raised by ofcov."""

from __future__ import annotations

from typing import TypeVar

_T = TypeVar("_T")


class CoverageError(Exception):
    """Base exception for object field coverage errors."""


class InvalidPathError(CoverageError, ValueError):
    """Raised when a path is built from nodes that are not parent and child."""


class PseudoFieldConflictError(CoverageError):
    """Raised when an existing pseudo field has a different type than requested."""


class EqualsNotOverriddenError(CoverageError, ValueError):
    """Raised when equals details are requested for a type that does not override equals."""


class MissingPathError(CoverageError, LookupError):
    """Raised when a path that must exist in a graph cannot be found."""


def check_not_none(value: _T | None, name: str) -> _T:
    """Return *value*, raising ``ValueError`` naming *name* when it is ``None``."""
    if value is None:
        raise ValueError(f"{name} cannot be None")
    return value

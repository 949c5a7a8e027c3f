"""Assertion contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from fractions import Fraction
from typing import TYPE_CHECKING

from ofcov.errors import check_not_none
from ofcov.model.declarations import TypeDecl
from ofcov.model.types import TypeRef

if TYPE_CHECKING:
    from ofcov.evaluation.information import EvaluationInformation
    from ofcov.graph.path import Path


class Assertion(ABC):
    """An assertion made in a test about an object of a given type.

    Args:
        asserted_type: Type of the asserted object.
        accessing_type: The test type the assertion is written in; it decides
            which fields of the asserted object are observable.
    """

    establishes_values: bool = True
    """False for assertions that say nothing about field values at all."""

    def __init__(self, asserted_type: TypeRef, accessing_type: TypeDecl) -> None:
        self._asserted_type = check_not_none(asserted_type, "asserted_type")
        self._accessing_type = check_not_none(accessing_type, "accessing_type")

    @property
    def asserted_type(self) -> TypeRef:
        return self._asserted_type

    @property
    def accessing_type(self) -> TypeDecl:
        return self._accessing_type

    @abstractmethod
    def covered_paths(self, information: EvaluationInformation) -> set[Path]:
        """Return the reachability paths this assertion covers."""

    def fixed_fraction(self) -> Fraction | None:
        """Coverage fraction independent of the evaluation, if any."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(asserted_type={self._asserted_type})"

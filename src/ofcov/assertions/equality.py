"""Equality, identity and null assertions."""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from ofcov.assertions.base import Assertion

if TYPE_CHECKING:
    from ofcov.evaluation.information import EvaluationInformation
    from ofcov.graph.path import Path


class EqualsAssertion(Assertion):
    """Deep value comparison through the asserted type's equals."""

    def covered_paths(self, information: EvaluationInformation) -> set[Path]:
        return set(information.equals_graph.transitive_reachability_paths())


class ReferenceEqualsAssertion(Assertion):
    """Identity comparison (``==``); asserts the whole observable structure at once."""

    def covered_paths(self, information: EvaluationInformation) -> set[Path]:
        return set(information.graph.transitive_reachability_paths())

    def fixed_fraction(self) -> Fraction | None:
        return Fraction(1)


class NotNullAssertion(Assertion):
    """A null check, which establishes nothing about any field."""

    establishes_values = False

    def covered_paths(self, information: EvaluationInformation) -> set[Path]:
        return set()

    def fixed_fraction(self) -> Fraction | None:
        return Fraction(0)

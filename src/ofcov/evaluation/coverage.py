"""Object field coverage fractions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from fractions import Fraction

from ofcov.assertions.base import Assertion
from ofcov.errors import MissingPathError, check_not_none
from ofcov.evaluation.builder import EvaluationBuilder
from ofcov.graph.graph import AccessibleFieldGraph
from ofcov.graph.path import Path
from ofcov.model.declarations import TypeDecl
from ofcov.model.types import TypeRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoverageTarget:
    """The object coverage is measured for.

    The asserted objects are reached from an object of type ``root`` through the
    fields named in ``access_path``; an empty access path asserts the root itself.
    """

    root: TypeRef
    """Type of the object coverage is measured against."""

    accessing_type: TypeDecl
    """The test type the assertions are written in."""

    access_path: tuple[str, ...] = ()
    """Field names leading from the root to the asserted object."""


@dataclass(frozen=True)
class CoverageResult:
    """Coverage of a target by one or more assertions."""

    fraction: Fraction
    """Covered paths divided by all paths."""

    covered_paths: frozenset[Path]
    """Paths of the root graph covered by the assertions."""

    all_paths: frozenset[Path]
    """All reachability paths of the root graph."""

    @property
    def uncovered_paths(self) -> frozenset[Path]:
        return self.all_paths - self.covered_paths

    @property
    def percentage(self) -> float:
        return float(self.fraction * 100)


def _coverage_fraction(covered: int, total: int, establishes_values: bool) -> Fraction:
    if total == 0:
        return Fraction(1) if establishes_values else Fraction(0)
    return Fraction(covered, total)


class CoverageCalculator:
    """Combines evaluation information and assertions into coverage fractions."""

    def __init__(self, evaluation_builder: EvaluationBuilder) -> None:
        self._evaluation_builder = evaluation_builder

    def fraction(self, assertion: Assertion) -> Fraction:
        """Coverage fraction of a single assertion on the object it asserts."""
        check_not_none(assertion, "assertion")
        fixed = assertion.fixed_fraction()
        if fixed is not None:
            return fixed
        target = CoverageTarget(assertion.asserted_type, assertion.accessing_type)
        return self.calculate(target, [assertion]).fraction

    def calculate(self, target: CoverageTarget, assertions: Sequence[Assertion]) -> CoverageResult:
        """Coverage of *target* by the union of the paths covered by *assertions*."""
        check_not_none(target, "target")
        if not assertions:
            raise ValueError("assertions cannot be empty")

        root_graph = self._evaluation_builder.evaluate_type(target.root, target.accessing_type).graph
        all_paths = root_graph.transitive_reachability_paths()
        prefix = self._access_prefix(root_graph, target)

        covered: set[Path] = set()
        for assertion in assertions:
            covered |= self._covered_in_root(root_graph, all_paths, prefix, assertion)

        establishes_values = any(assertion.establishes_values for assertion in assertions)
        fraction = _coverage_fraction(len(covered), len(all_paths), establishes_values)
        logger.info(
            "Coverage of %s via %s: %d of %d paths",
            target.root,
            ".".join(target.access_path) or "<root>",
            len(covered),
            len(all_paths),
        )
        return CoverageResult(
            fraction=fraction, covered_paths=frozenset(covered), all_paths=all_paths
        )

    def _access_prefix(self, root_graph: AccessibleFieldGraph, target: CoverageTarget) -> Path:
        if not target.access_path:
            return Path()
        prefix = root_graph.find_path_by_names(target.access_path)
        if prefix is None:
            raise MissingPathError(
                f"Access path {'.'.join(target.access_path)} not found in the graph of {target.root}"
            )
        return prefix

    def _covered_in_root(
        self,
        root_graph: AccessibleFieldGraph,
        all_paths: frozenset[Path],
        prefix: Path,
        assertion: Assertion,
    ) -> set[Path]:
        fixed = assertion.fixed_fraction()
        if fixed is not None:
            if fixed == 0:
                return set()
            return {path for path in all_paths if path.starts_with(prefix)}

        information = self._evaluation_builder.evaluate(assertion)
        covered: set[Path] = set()
        for path in assertion.covered_paths(information):
            mapped = root_graph.find_path(prefix.fields + path.fields)
            if mapped is None:
                logger.debug("Covered path %r not found in graph of %s", path, root_graph.target)
                continue
            mapped = mapped.closed_at_first_loop()
            if mapped in all_paths:
                covered.add(mapped)
        return covered

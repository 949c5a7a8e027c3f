"""Evaluation of assertions into coverage information."""

from ofcov.evaluation.builder import EvaluationBuilder
from ofcov.evaluation.coverage import CoverageCalculator, CoverageResult, CoverageTarget
from ofcov.evaluation.information import EvaluationInformation, find_paths_not_compared_in_equals

__all__ = [
    "CoverageCalculator",
    "CoverageResult",
    "CoverageTarget",
    "EvaluationBuilder",
    "EvaluationInformation",
    "find_paths_not_compared_in_equals",
]

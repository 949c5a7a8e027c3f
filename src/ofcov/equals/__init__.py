"""Equals analyzers deciding which fields a type's equality compares."""

from ofcov.equals.base import EqualsMethodAnalyzer, find_equals_method
from ofcov.equals.iterative import IterativeEqualsAnalyzer, analyze_equals
from ofcov.equals.marker import MarkerEqualsAnalyzer
from ofcov.equals.method import MethodBodyEqualsAnalyzer
from ofcov.equals.platform import PlatformEqualsAnalyzer
from ofcov.equals.predicate import ComparedInEqualsPredicate
from ofcov.equals.primitive import PrimitiveEqualsAnalyzer
from ofcov.equals.pseudo import PseudoFieldEqualsAnalyzer
from ofcov.equals.utility import UtilityEqualsAnalyzer

__all__ = [
    "ComparedInEqualsPredicate",
    "EqualsMethodAnalyzer",
    "IterativeEqualsAnalyzer",
    "MarkerEqualsAnalyzer",
    "MethodBodyEqualsAnalyzer",
    "PlatformEqualsAnalyzer",
    "PrimitiveEqualsAnalyzer",
    "PseudoFieldEqualsAnalyzer",
    "UtilityEqualsAnalyzer",
    "analyze_equals",
    "find_equals_method",
]

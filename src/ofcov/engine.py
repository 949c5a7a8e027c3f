"""Wires configuration, finders, analyzers and evaluation together."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from fractions import Fraction
from pathlib import Path

from ofcov.assertions.base import Assertion
from ofcov.config import OfcovConfig, load_config
from ofcov.equals.iterative import IterativeEqualsAnalyzer
from ofcov.evaluation.builder import EvaluationBuilder
from ofcov.evaluation.coverage import CoverageCalculator, CoverageResult, CoverageTarget
from ofcov.evaluation.information import EvaluationInformation
from ofcov.graph.graph import AccessibleFieldGraph
from ofcov.model.declarations import TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import TypeRef
from ofcov.pseudo import PseudoFieldGenerator, PseudoFieldPolicy
from ofcov.registry import create_analyzers, create_field_finder

logger = logging.getLogger(__name__)


class CoverageEngine:
    """Entry point computing object field coverage for a type model.

    Args:
        model: The analyzed program's types.
        config: Configuration; defaults are used when omitted.
    """

    def __init__(self, model: TypeModel, config: OfcovConfig | None = None) -> None:
        self._config = config or OfcovConfig()
        self._model = model
        self._generator = PseudoFieldGenerator(
            model, PseudoFieldPolicy.from_config(self._config.pseudo_fields)
        )
        self._finder = create_field_finder(self._config, model, self._generator)
        self._analyzer = IterativeEqualsAnalyzer(
            create_analyzers(self._config, model, self._generator), model
        )
        self._evaluation = EvaluationBuilder(
            self._finder,
            self._analyzer,
            model,
            cache_size=self._config.evaluation.cache_size,
        )
        self._calculator = CoverageCalculator(self._evaluation)
        logger.debug(
            "Coverage engine with finders %s and analyzers %s",
            self._config.finders,
            self._config.analyzers,
        )

    @classmethod
    def from_root(cls, model: TypeModel, root: str | Path) -> CoverageEngine:
        """Create an engine configured from ``.ofcov.yml`` in *root*."""
        return cls(model, load_config(root))

    @property
    def config(self) -> OfcovConfig:
        return self._config

    @property
    def generator(self) -> PseudoFieldGenerator:
        return self._generator

    @property
    def analyzer(self) -> IterativeEqualsAnalyzer:
        return self._analyzer

    def build_graph(self, accessing: TypeDecl, target: TypeRef) -> AccessibleFieldGraph:
        return self._evaluation.graph_builder.build(accessing, target)

    def evaluate(self, assertion: Assertion) -> EvaluationInformation:
        return self._evaluation.evaluate(assertion)

    def fraction(self, assertion: Assertion) -> Fraction:
        return self._calculator.fraction(assertion)

    def coverage(self, target: CoverageTarget, assertions: Sequence[Assertion]) -> CoverageResult:
        return self._calculator.calculate(target, assertions)

"""Builds and caches evaluation information per asserted type."""

from __future__ import annotations

import logging

from ofcov.assertions.base import Assertion
from ofcov.equals.iterative import IterativeEqualsAnalyzer
from ofcov.equals.predicate import ComparedInEqualsPredicate
from ofcov.evaluation.information import EvaluationInformation, find_paths_not_compared_in_equals
from ofcov.graph.builder import AccessibleFieldGraphBuilder, AccessibleFieldSource
from ofcov.model.declarations import TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import TypeRef
from ofcov.utils.cache import MemoryCache

logger = logging.getLogger(__name__)


class EvaluationBuilder:
    """Creates :class:`EvaluationInformation`, cached by (asserted type, accessing type).

    Primitive asserted types get empty graphs.
    """

    def __init__(
        self,
        finder: AccessibleFieldSource,
        analyzer: IterativeEqualsAnalyzer,
        model: TypeModel,
        cache_size: int = 128,
    ) -> None:
        self._graph_builder = AccessibleFieldGraphBuilder(finder, model)
        self._predicate = ComparedInEqualsPredicate(analyzer)
        self._cache: MemoryCache[tuple[TypeRef, str], EvaluationInformation] = MemoryCache(
            max_size=cache_size
        )

    @property
    def graph_builder(self) -> AccessibleFieldGraphBuilder:
        return self._graph_builder

    def evaluate(self, assertion: Assertion) -> EvaluationInformation:
        return self.evaluate_type(assertion.asserted_type, assertion.accessing_type)

    def evaluate_type(self, asserted_type: TypeRef, accessing: TypeDecl) -> EvaluationInformation:
        key = (asserted_type.erasure(), accessing.qualified_name)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Using cached evaluation of %s from %s", asserted_type, accessing)
            return cached

        if asserted_type.is_primitive:
            information = EvaluationInformation.empty(asserted_type)
        else:
            graph = self._graph_builder.build(accessing, asserted_type)
            equals_graph = self._graph_builder.build(accessing, asserted_type, self._predicate)
            information = EvaluationInformation(
                asserted_type=asserted_type,
                graph=graph,
                equals_graph=equals_graph,
                uncovered_paths=find_paths_not_compared_in_equals(graph, equals_graph),
            )
            logger.info(
                "Evaluated %s from %s: %d uncovered paths",
                asserted_type,
                accessing,
                len(information.uncovered_paths),
            )
        self._cache.put(key, information)
        return information

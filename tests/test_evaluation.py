"""Tests for ofcov.evaluation.builder and ofcov.evaluation.information."""

from __future__ import annotations

from ofcov.assertions import EqualsAssertion
from ofcov.evaluation import EvaluationBuilder, EvaluationInformation, find_paths_not_compared_in_equals
from ofcov.graph import Path
from ofcov.model import TypeDecl, TypeRef


def _ref(simple: str) -> TypeRef:
    return TypeRef(f"com.example.{simple}")


def _names(paths: frozenset[Path]) -> set[tuple[str, ...]]:
    return {tuple(node.accessible_field.name for node in path) for path in paths}


class TestEvaluationInformation:
    def test_empty(self) -> None:
        information = EvaluationInformation.empty(TypeRef("int"))
        assert information.graph.is_empty()
        assert information.equals_graph.is_empty()
        assert information.all_accessible_fields_used_in_equals()


class TestEvaluationBuilder:
    def test_graphs_of_asserted_type(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate_type(_ref("Address"), model_test)
        assert information.asserted_type == _ref("Address")
        assert len(information.graph.transitive_reachability_paths()) == 4
        assert _names(information.equals_graph.transitive_reachability_paths()) == {
            ("houseNumber", "value"),
            ("street", "value"),
            ("city", "name", "value"),
        }

    def test_uncovered_paths(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate_type(_ref("Address"), model_test)
        assert _names(information.uncovered_paths) == {("postalCode",)}
        assert not information.all_accessible_fields_used_in_equals()

    def test_all_fields_used_in_equals(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate_type(_ref("City"), model_test)
        assert information.all_accessible_fields_used_in_equals()

    def test_every_field_compared(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate_type(_ref("Country"), model_test)
        assert _names(information.equals_graph.transitive_reachability_paths()) == {
            ("code", "value"),
            ("name", "value"),
        }
        assert information.uncovered_paths == frozenset()
        assert information.all_accessible_fields_used_in_equals()

    def test_inherited_equals(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate_type(_ref("SportsCar"), model_test)
        assert _names(information.uncovered_paths) == {("topSpeed",), ("color",)}

    def test_evaluate_uses_assertion_types(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate(EqualsAssertion(_ref("City"), model_test))
        assert information.asserted_type == _ref("City")

    def test_cached_per_asserted_and_accessing_type(
        self,
        evaluation_builder: EvaluationBuilder,
        model_test: TypeDecl,
        other_test: TypeDecl,
    ) -> None:
        first = evaluation_builder.evaluate_type(_ref("Address"), model_test)
        assert evaluation_builder.evaluate_type(_ref("Address"), model_test) is first
        assert evaluation_builder.evaluate_type(_ref("Address"), other_test) is not first

    def test_primitive_type_is_empty(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate_type(TypeRef("long"), model_test)
        assert information.graph.is_empty()
        assert information.uncovered_paths == frozenset()


class TestFindPathsNotComparedInEquals:
    def test_no_equals_leaves_every_root_uncovered(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate_type(_ref("Person"), model_test)
        assert information.equals_graph.is_empty()
        assert _names(information.uncovered_paths) == {("name",), ("sibling",), ("homeAddress",)}

    def test_recomputes_from_graphs(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        information = evaluation_builder.evaluate_type(_ref("Address"), model_test)
        assert (
            find_paths_not_compared_in_equals(information.graph, information.equals_graph)
            == information.uncovered_paths
        )

    def test_identical_graphs_have_no_uncovered_paths(
        self, evaluation_builder: EvaluationBuilder, model_test: TypeDecl
    ) -> None:
        graph = evaluation_builder.evaluate_type(_ref("Order"), model_test).graph
        assert find_paths_not_compared_in_equals(graph, graph) == frozenset()

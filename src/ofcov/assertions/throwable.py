"""Assertions on thrown exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ofcov.assertions.base import Assertion
from ofcov.errors import MissingPathError
from ofcov.model.declarations import TypeDecl
from ofcov.model.types import TypeRef
from ofcov.pseudo import CAUSE_FIELD, MESSAGE_FIELD, TYPE_FIELD

if TYPE_CHECKING:
    from ofcov.evaluation.information import EvaluationInformation
    from ofcov.graph.path import Path


class ThrowableAssertion(Assertion):
    """Covers the ``type``, ``message`` and ``cause`` pseudo fields that were checked."""

    def __init__(
        self,
        asserted_type: TypeRef,
        accessing_type: TypeDecl,
        *,
        type_checked: bool = False,
        message_checked: bool = False,
        cause_checked: bool = False,
    ) -> None:
        super().__init__(asserted_type, accessing_type)
        self.type_checked = type_checked
        self.message_checked = message_checked
        self.cause_checked = cause_checked

    def checked_fields(self) -> list[str]:
        checked = []
        if self.type_checked:
            checked.append(TYPE_FIELD)
        if self.message_checked:
            checked.append(MESSAGE_FIELD)
        if self.cause_checked:
            checked.append(CAUSE_FIELD)
        return checked

    def covered_paths(self, information: EvaluationInformation) -> set[Path]:
        covered: set[Path] = set()
        for name in self.checked_fields():
            path = information.graph.find_path_by_names([name])
            if path is None or not path.nodes[0].is_pseudo:
                raise MissingPathError(
                    f"No pseudo field path '{name}' in the graph of {self.asserted_type}"
                )
            covered.add(path)
        return covered

"""Equality of platform library types."""

from __future__ import annotations

import re

from ofcov.equals.base import ComparedElement, EqualsMethodAnalyzer
from ofcov.fields import AccessibleField
from ofcov.model.type_model import TypeModel
from ofcov.model.types import TypeRef

DEFAULT_PLATFORM_PACKAGES = r"^java(\..*)?$"


class PlatformEqualsAnalyzer(EqualsMethodAnalyzer):
    """Types in platform packages are trusted to compare every accessible field."""

    name = "platform"

    def __init__(self, model: TypeModel, packages: str = DEFAULT_PLATFORM_PACKAGES) -> None:
        super().__init__(model)
        self._packages = re.compile(packages)

    def overrides_equals(self, ref: TypeRef) -> bool:
        if ref.is_primitive:
            return False
        package = ref.qualified_name.split("$", 1)[0].rpartition(".")[0]
        return self._packages.match(package) is not None

    def _calls_super(self, ref: TypeRef) -> bool:
        return False

    def _is_compared(
        self, accessible_field: AccessibleField, compared_elements: set[ComparedElement]
    ) -> bool:
        return True

    def _compared_elements(self, ref: TypeRef) -> set[ComparedElement]:
        return set()

"""Direct field access."""

from __future__ import annotations

from ofcov.fields import GrantingElement
from ofcov.finders.base import FieldFinder
from ofcov.model.declarations import FieldDecl, TypeDecl
from ofcov.visibility import is_member_visible


class DirectAccessFieldFinder(FieldFinder):
    """Fields read directly, granted by the field itself."""

    name = "direct"

    def is_accessible(self, accessing: TypeDecl, field: FieldDecl) -> bool:
        declaring = self._model.find_type(field.declaring_type)
        if declaring is None:
            return False
        return is_member_visible(self._model, accessing, declaring, field.visibility)

    def granting_elements(self, accessing: TypeDecl, field: FieldDecl) -> set[GrantingElement]:
        return {field}

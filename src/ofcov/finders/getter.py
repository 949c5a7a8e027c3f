"""Accessor based field finders.

:class:`GetterFieldFinder` follows the bean naming convention and also accepts
alias accessors whose body just returns the field.  :class:`MarkerGetterFieldFinder`
resolves getters generated from declarative markers.
"""

from __future__ import annotations

import logging

from ofcov.fields import GrantingElement
from ofcov.finders.base import FieldFinder
from ofcov.model.code import FieldRead, Invocation, Return, ThisAccess
from ofcov.model.declarations import FieldDecl, MethodDecl, TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import FieldRef, MethodRef, TypeRef, Visibility
from ofcov.visibility import is_member_visible

logger = logging.getLogger(__name__)

GETTER_PREFIX = "get"
BOOLEAN_GETTER_PREFIX = "is"
ACCESS_NONE = "NONE"


def getter_names(field: FieldDecl) -> list[str]:
    """Return the conventional getter names of *field*."""
    suffix = field.name[:1].upper() + field.name[1:]
    names = [GETTER_PREFIX + suffix]
    if field.type.is_boolean:
        names.append(BOOLEAN_GETTER_PREFIX + suffix)
    return names


def _is_instance_accessor(method: MethodDecl, field: FieldDecl) -> bool:
    return (
        not method.static
        and not method.parameters
        and method.return_type is not None
        and method.return_type.erasure() == field.type.erasure()
    )


def _returned_expression(method: MethodDecl) -> object | None:
    if len(method.body) != 1 or not isinstance(method.body[0], Return):
        return None
    return method.body[0].expression


def _resolve_method(model: TypeModel, ref: MethodRef) -> MethodDecl | None:
    declaring = model.find_type(ref.declaring_type)
    if declaring is None:
        return None
    return declaring.method(ref.name, *ref.parameter_types)


def _conventional_field(model: TypeModel, method: MethodDecl) -> FieldRef | None:
    for field in model.all_fields(TypeRef(method.declaring_type)):
        if method.name in getter_names(field) and _is_instance_accessor(method, field):
            return field.ref
    return None


def accessed_field(model: TypeModel, ref: MethodRef) -> FieldRef | None:
    """Return the field of ``this`` returned by the accessor *ref* denotes.

    Accessors returning another accessor of ``this`` are followed.  An accessor
    without a body maps to the field its conventional getter name denotes.
    """
    seen: set[MethodRef] = set()
    while ref not in seen:
        seen.add(ref)
        method = _resolve_method(model, ref)
        if method is None or method.static or method.parameters or method.return_type is None:
            return None
        if not method.body:
            return _conventional_field(model, method)
        returned = _returned_expression(method)
        if isinstance(returned, FieldRead) and returned.reads_this:
            return returned.field
        if not (isinstance(returned, Invocation) and returned.invokes_on_this and not returned.arguments):
            return None
        ref = returned.method
    return None


class GetterFieldFinder(FieldFinder):
    """Fields exposed through getter methods; the getters grant access."""

    name = "getter"

    def getters(self, field: FieldDecl) -> list[MethodDecl]:
        """Return every accessor of *field* regardless of visibility."""
        declaring = self._model.find_type(field.declaring_type)
        if declaring is None:
            return []

        names = set(getter_names(field))
        candidates = [
            method
            for method in self._model.all_methods(declaring)
            if _is_instance_accessor(method, field)
        ]
        conventional = [method for method in candidates if method.name in names]
        aliases = [
            method
            for method in candidates
            if method.name not in names
            and method.body
            and accessed_field(self._model, method.ref) == field.ref
        ]
        return conventional + aliases

    def _visible_getters(self, accessing: TypeDecl, field: FieldDecl) -> list[MethodDecl]:
        visible = []
        for method in self.getters(field):
            declaring = self._model.find_type(method.declaring_type)
            if declaring is not None and is_member_visible(
                self._model, accessing, declaring, method.visibility
            ):
                visible.append(method)
        return visible

    def is_accessible(self, accessing: TypeDecl, field: FieldDecl) -> bool:
        return bool(self._visible_getters(accessing, field))

    def granting_elements(self, accessing: TypeDecl, field: FieldDecl) -> set[GrantingElement]:
        return set(self._visible_getters(accessing, field))


class MarkerGetterFieldFinder(FieldFinder):
    """Fields whose getter is generated from a ``getter`` or ``data`` marker.

    The ``access`` marker parameter sets the getter visibility (public by
    default); ``NONE`` suppresses the getter.  A marker on the field takes
    precedence over one on the declaring type.  When the declaring type already
    declares a method with the getter name that method is used, otherwise an
    accessor is synthesized.
    """

    name = "marker_getter"

    def __init__(
        self,
        model: TypeModel,
        getter_marker: str = "lombok.Getter",
        data_marker: str = "lombok.Data",
    ) -> None:
        super().__init__(model)
        self._getter_marker = getter_marker
        self._data_marker = data_marker

    def _access_level(self, declaring: TypeDecl, field: FieldDecl) -> str | None:
        marker = self._model.marker(field, self._getter_marker) or self._model.marker(
            declaring, self._getter_marker
        )
        if marker is not None:
            return str(marker.get("access", Visibility.PUBLIC.name)).upper()
        if self._model.has_marker(declaring, self._data_marker):
            return Visibility.PUBLIC.name
        return None

    def accessor(self, field: FieldDecl) -> MethodDecl | None:
        """Return the generated (or already declared) getter of *field*."""
        if field.static or field.pseudo:
            return None
        declaring = self._model.find_type(field.declaring_type)
        if declaring is None:
            return None
        access = self._access_level(declaring, field)
        if access is None or access == ACCESS_NONE:
            return None

        name = (BOOLEAN_GETTER_PREFIX if field.type.is_boolean else GETTER_PREFIX) + (
            field.name[:1].upper() + field.name[1:]
        )
        existing = declaring.method(name)
        if existing is not None:
            logger.debug("Getter %s of %s already declared", name, field)
            return existing
        return MethodDecl(
            name=name,
            declaring_type=declaring.qualified_name,
            return_type=field.type,
            visibility=Visibility.parse(access),
            body=(Return(field.read(ThisAccess())),),
            synthetic=True,
        )

    def is_accessible(self, accessing: TypeDecl, field: FieldDecl) -> bool:
        accessor = self.accessor(field)
        if accessor is None:
            return False
        declaring = self._model.find_type(accessor.declaring_type)
        return declaring is not None and is_member_visible(
            self._model, accessing, declaring, accessor.visibility
        )

    def granting_elements(self, accessing: TypeDecl, field: FieldDecl) -> set[GrantingElement]:
        accessor = self.accessor(field)
        return set() if accessor is None else {accessor}

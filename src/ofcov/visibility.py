"""Member and type visibility rules.

A member is visible from an accessing type when its declaring type is visible
and:

* both types share the same top-level type (covers the declaring type itself
  and every inner type, which may even read private members),
* the member is public,
* the member is protected and the accessing type is in the same package or is
  (or is nested in) a real subclass of the declaring type,
* the member is package-visible and both types are in the same package.

A declaring type is visible when the most strict visibility along its chain of
enclosing types is public, or is package/protected and the accessing type is in
the same package.
"""

from __future__ import annotations

from ofcov.model.declarations import TypeDecl
from ofcov.model.type_model import TypeModel
from ofcov.model.types import Visibility


def _same_top_level(model: TypeModel, first: TypeDecl, second: TypeDecl) -> bool:
    return model.top_level(first).qualified_name == model.top_level(second).qualified_name


def _is_subclass_context(model: TypeModel, accessing: TypeDecl, declaring: TypeDecl) -> bool:
    return any(
        model.is_real_subclass(candidate, declaring)
        for candidate in model.enclosing_types(accessing)
    )


def most_strict_visibility(model: TypeModel, type_decl: TypeDecl) -> Visibility:
    """Return the most strict visibility of *type_decl* and its enclosing types."""
    return min(current.visibility for current in model.enclosing_types(type_decl))


def is_type_visible(model: TypeModel, accessing: TypeDecl, type_decl: TypeDecl) -> bool:
    """True when *type_decl* can be referenced from *accessing*."""
    if _same_top_level(model, accessing, type_decl):
        return True
    visibility = most_strict_visibility(model, type_decl)
    if visibility is Visibility.PUBLIC:
        return True
    if visibility is Visibility.PRIVATE:
        return False
    return accessing.package_name == type_decl.package_name


def is_member_visible(
    model: TypeModel,
    accessing: TypeDecl,
    declaring: TypeDecl,
    visibility: Visibility,
) -> bool:
    """True when a member of *declaring* with *visibility* is visible from *accessing*."""
    if not is_type_visible(model, accessing, declaring):
        return False
    if _same_top_level(model, accessing, declaring):
        return True
    if visibility is Visibility.PUBLIC:
        return True
    same_package = accessing.package_name == declaring.package_name
    if visibility is Visibility.PROTECTED:
        return same_package or _is_subclass_context(model, accessing, declaring)
    if visibility is Visibility.PACKAGE:
        return same_package
    return False

"""Read-only view of the analyzed program's types."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from ofcov.model.declarations import FieldDecl, MethodDecl, TypeDecl
from ofcov.model.types import OBJECT_TYPE_NAME, Marker, TypeRef

logger = logging.getLogger(__name__)


class TypeModel(ABC):
    """Lookup of type declarations plus hierarchy queries derived from them.

    Subclasses only have to implement :meth:`find_type`.  Types that cannot be
    found (library types, primitives, arrays) are answered conservatively:
    they have no fields, no methods and no known supertypes.
    """

    @abstractmethod
    def find_type(self, qualified_name: str) -> TypeDecl | None:
        """Return the declaration named *qualified_name*, or ``None``."""

    def resolve(self, ref: TypeRef) -> TypeDecl | None:
        """Return the declaration behind *ref*; arrays and primitives never resolve."""
        if ref.is_array or ref.is_primitive:
            return None
        return self.find_type(ref.qualified_name)

    def superclass(self, type_decl: TypeDecl) -> TypeDecl | None:
        """Return the resolved direct superclass, ``None`` at ``java.lang.Object``."""
        if type_decl.superclass is None or type_decl.superclass.qualified_name == OBJECT_TYPE_NAME:
            return None
        return self.resolve(type_decl.superclass)

    def superclass_chain(self, type_decl: TypeDecl) -> list[TypeDecl]:
        """Return *type_decl* followed by its resolvable superclasses."""
        chain = [type_decl]
        seen = {type_decl.qualified_name}
        current = self.superclass(type_decl)
        while current is not None and current.qualified_name not in seen:
            chain.append(current)
            seen.add(current.qualified_name)
            current = self.superclass(current)
        return chain

    def supertype_names(self, ref: TypeRef) -> set[str]:
        """Return the qualified names of *ref* and all its known supertypes."""
        names = {ref.qualified_name}
        if ref.is_array:
            return names
        pending = [ref]
        while pending:
            current = self.resolve(pending.pop())
            if current is None:
                continue
            supertypes = list(current.interfaces)
            if current.superclass is not None:
                supertypes.append(current.superclass)
            for supertype in supertypes:
                if supertype.qualified_name not in names:
                    names.add(supertype.qualified_name)
                    pending.append(supertype)
        return names

    def is_subtype(self, ref: TypeRef, supertype_name: str) -> bool:
        """True when *ref* is *supertype_name* or extends/implements it."""
        return supertype_name in self.supertype_names(ref)

    def is_real_subclass(self, sub: TypeDecl, sup: TypeDecl) -> bool:
        """True when *sub* is a proper subclass of *sup*."""
        return any(
            current.qualified_name == sup.qualified_name
            for current in self.superclass_chain(sub)[1:]
        )

    def top_level(self, type_decl: TypeDecl) -> TypeDecl:
        """Return the outermost type enclosing *type_decl*."""
        current = type_decl
        while current.declaring_type is not None:
            enclosing = self.find_type(current.declaring_type)
            if enclosing is None:
                break
            current = enclosing
        return current

    def enclosing_types(self, type_decl: TypeDecl) -> list[TypeDecl]:
        """Return *type_decl* followed by its resolvable enclosing types."""
        result = [type_decl]
        current = type_decl
        while current.declaring_type is not None:
            enclosing = self.find_type(current.declaring_type)
            if enclosing is None:
                break
            result.append(enclosing)
            current = enclosing
        return result

    def all_fields(self, ref: TypeRef) -> list[FieldDecl]:
        """Return the fields declared on the type and inherited from its superclasses."""
        type_decl = self.resolve(ref)
        if type_decl is None:
            return []
        fields: list[FieldDecl] = []
        for current in self.superclass_chain(type_decl):
            fields.extend(current.fields)
        return fields

    def all_methods(self, type_decl: TypeDecl) -> list[MethodDecl]:
        """Return declared and inherited methods, overriding declarations first."""
        methods: list[MethodDecl] = []
        seen: set[tuple[str, tuple[TypeRef, ...]]] = set()
        for current in self.superclass_chain(type_decl):
            for method in current.methods:
                key = (method.name, method.ref.parameter_types)
                if key not in seen:
                    seen.add(key)
                    methods.append(method)
        return methods

    def marker(self, element: TypeDecl | FieldDecl | MethodDecl, name: str) -> Marker | None:
        """Return the marker named *name* carried by *element*."""
        return element.marker(name)

    def has_marker(self, element: TypeDecl | FieldDecl | MethodDecl, name: str) -> bool:
        return self.marker(element, name) is not None


class InMemoryTypeModel(TypeModel):
    """Type model backed by a dictionary of declarations."""

    def __init__(self, types: Iterable[TypeDecl] = ()) -> None:
        self._types: dict[str, TypeDecl] = {}
        for type_decl in types:
            self.add(type_decl)

    def add(self, type_decl: TypeDecl) -> None:
        if type_decl.qualified_name in self._types:
            logger.debug("Replacing declaration of %s", type_decl.qualified_name)
        self._types[type_decl.qualified_name] = type_decl

    def find_type(self, qualified_name: str) -> TypeDecl | None:
        return self._types.get(qualified_name)

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._types

    def __len__(self) -> int:
        return len(self._types)

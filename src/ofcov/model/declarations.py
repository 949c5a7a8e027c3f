"""Field, method and type declarations of the host type model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ofcov.model.code import CodeElement, FieldRead, Invocation
from ofcov.model.types import FieldRef, Marker, MethodRef, TypeRef, Visibility


class TypeKind(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"


def _find_marker(markers: tuple[Marker, ...], name: str) -> Marker | None:
    for marker in markers:
        if marker.name == name:
            return marker
    return None


@dataclass(frozen=True, eq=False)
class FieldDecl:
    """A field declared on a type, or a pseudo field of a generated pseudo class.

    Two declarations are equal when they have the same declaring type and name.
    """

    name: str
    type: TypeRef
    declaring_type: str
    visibility: Visibility = Visibility.PACKAGE
    static: bool = False
    final: bool = False
    transient: bool = False
    pseudo: bool = False
    markers: tuple[Marker, ...] = ()

    @property
    def ref(self) -> FieldRef:
        return FieldRef(self.declaring_type, self.name)

    def marker(self, name: str) -> Marker | None:
        return _find_marker(self.markers, name)

    def read(self, target: CodeElement | None = None) -> FieldRead:
        """Build a code node reading this field from *target*."""
        return FieldRead(self.ref, self.type, target)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldDecl):
            return NotImplemented
        return self.ref == other.ref

    def __hash__(self) -> int:
        return hash(self.ref)

    def __str__(self) -> str:
        return f"{self.declaring_type}.{self.name}"


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeRef


@dataclass(frozen=True, eq=False)
class MethodDecl:
    """A method declared on a type.

    Identity is the declaring type, the name and the erased parameter types.
    A ``None`` return type stands for ``void``.
    """

    name: str
    declaring_type: str
    return_type: TypeRef | None = None
    parameters: tuple[Parameter, ...] = ()
    visibility: Visibility = Visibility.PACKAGE
    static: bool = False
    abstract: bool = False
    markers: tuple[Marker, ...] = ()
    body: tuple[CodeElement, ...] = ()
    synthetic: bool = False

    @property
    def ref(self) -> MethodRef:
        return MethodRef(
            self.declaring_type,
            self.name,
            tuple(param.type.erasure() for param in self.parameters),
            self.return_type,
            static=self.static,
        )

    def marker(self, name: str) -> Marker | None:
        return _find_marker(self.markers, name)

    def call(self, target: CodeElement | None = None, *arguments: CodeElement) -> Invocation:
        """Build a code node invoking this method on *target*."""
        return Invocation(self.ref, target, tuple(arguments))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MethodDecl):
            return NotImplemented
        return self.ref == other.ref

    def __hash__(self) -> int:
        return hash(self.ref)

    def __str__(self) -> str:
        return f"{self.declaring_type}#{self.name}()"


@dataclass(frozen=True, eq=False)
class TypeDecl:
    """A declared type.

    Nested types use binary names (``com.acme.Outer$Inner``) and name their
    enclosing type in ``declaring_type``.
    """

    qualified_name: str
    kind: TypeKind = TypeKind.CLASS
    visibility: Visibility = Visibility.PUBLIC
    superclass: TypeRef | None = None
    interfaces: tuple[TypeRef, ...] = ()
    fields: tuple[FieldDecl, ...] = ()
    methods: tuple[MethodDecl, ...] = ()
    markers: tuple[Marker, ...] = ()
    declaring_type: str | None = None

    @property
    def ref(self) -> TypeRef:
        return TypeRef(self.qualified_name)

    @property
    def package_name(self) -> str:
        return self.qualified_name.split("$", 1)[0].rpartition(".")[0]

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rpartition(".")[2].rpartition("$")[2]

    @property
    def is_nested(self) -> bool:
        return self.declaring_type is not None

    def field(self, name: str) -> FieldDecl | None:
        for field_decl in self.fields:
            if field_decl.name == name:
                return field_decl
        return None

    def methods_named(self, name: str) -> list[MethodDecl]:
        return [method for method in self.methods if method.name == name]

    def method(self, name: str, *parameter_types: TypeRef) -> MethodDecl | None:
        """Return the method with exactly the given erased parameter types."""
        erased = tuple(param.erasure() for param in parameter_types)
        for method in self.methods_named(name):
            if method.ref.parameter_types == erased:
                return method
        return None

    def marker(self, name: str) -> Marker | None:
        return _find_marker(self.markers, name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeDecl):
            return NotImplemented
        return self.qualified_name == other.qualified_name

    def __hash__(self) -> int:
        return hash(self.qualified_name)

    def __str__(self) -> str:
        return self.qualified_name

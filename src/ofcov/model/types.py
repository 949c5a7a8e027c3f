"""Type references, visibilities and element references of the host type model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

PRIMITIVE_TYPE_NAMES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double"}
)

WRAPPER_TYPE_NAMES: dict[str, str] = {
    "java.lang.Boolean": "boolean",
    "java.lang.Byte": "byte",
    "java.lang.Character": "char",
    "java.lang.Short": "short",
    "java.lang.Integer": "int",
    "java.lang.Long": "long",
    "java.lang.Float": "float",
    "java.lang.Double": "double",
}

OBJECT_TYPE_NAME = "java.lang.Object"

_ARRAY_SUFFIX = "[]"


class Visibility(IntEnum):
    """Member visibility, ordered from the most to the least strict."""

    PRIVATE = 0
    PACKAGE = 1
    PROTECTED = 2
    PUBLIC = 3

    @classmethod
    def parse(cls, value: str | Visibility) -> Visibility:
        """Parse a visibility name such as ``"public"`` or ``"PACKAGE"``."""
        if isinstance(value, Visibility):
            return value
        normalized = str(value).strip().upper()
        if normalized in {"PACKAGE_PRIVATE", "DEFAULT", "MODULE"}:
            return cls.PACKAGE
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"Unknown visibility: {value}") from None


@dataclass(frozen=True)
class TypeRef:
    """Reference to a (possibly generic, possibly array) type by qualified name."""

    qualified_name: str
    """Qualified name of the referenced type, without type arguments."""

    arguments: tuple[TypeRef, ...] = ()
    """Actual type arguments."""

    array_dimensions: int = 0
    """Number of array dimensions, ``0`` for non-array types."""

    @classmethod
    def of(cls, name: str, *arguments: TypeRef) -> TypeRef:
        """Build a reference from a name like ``"int[][]"`` or ``"java.util.List"``."""
        dimensions = 0
        while name.endswith(_ARRAY_SUFFIX):
            name = name[: -len(_ARRAY_SUFFIX)]
            dimensions += 1
        return cls(name, tuple(arguments), dimensions)

    def erasure(self) -> TypeRef:
        """Return this reference without type arguments."""
        if not self.arguments:
            return self
        return TypeRef(self.qualified_name, (), self.array_dimensions)

    def component(self) -> TypeRef:
        """Return the component type of an array reference."""
        if not self.is_array:
            raise ValueError(f"{self} is not an array type")
        return TypeRef(self.qualified_name, self.arguments, self.array_dimensions - 1)

    @property
    def is_array(self) -> bool:
        return self.array_dimensions > 0

    @property
    def is_primitive(self) -> bool:
        return not self.is_array and self.qualified_name in PRIMITIVE_TYPE_NAMES

    @property
    def is_wrapper(self) -> bool:
        return not self.is_array and self.qualified_name in WRAPPER_TYPE_NAMES

    @property
    def is_boolean(self) -> bool:
        """True for ``boolean`` and ``java.lang.Boolean``."""
        return not self.is_array and self.qualified_name in {"boolean", "java.lang.Boolean"}

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rpartition(".")[2] + _ARRAY_SUFFIX * self.array_dimensions

    def __str__(self) -> str:
        text = self.qualified_name
        if self.arguments:
            text += "<" + ", ".join(str(arg) for arg in self.arguments) + ">"
        return text + _ARRAY_SUFFIX * self.array_dimensions


@dataclass(frozen=True)
class Marker:
    """A marker (annotation) attached to an element, with its parameters."""

    name: str
    params: tuple[tuple[str, Any], ...] = ()

    @classmethod
    def of(cls, name: str, **params: Any) -> Marker:
        frozen = tuple(
            sorted(
                (key, tuple(value) if isinstance(value, list) else value)
                for key, value in params.items()
            )
        )
        return cls(name, frozen)

    def get(self, key: str, default: Any = None) -> Any:
        for param_key, value in self.params:
            if param_key == key:
                return value
        return default


@dataclass(frozen=True)
class FieldRef:
    """Identity of a field: its declaring type and its name."""

    declaring_type: str
    name: str

    def __str__(self) -> str:
        return f"{self.declaring_type}#{self.name}"


@dataclass(frozen=True)
class MethodRef:
    """Identity of a method: declaring type, name and erased parameter types."""

    declaring_type: str
    name: str
    parameter_types: tuple[TypeRef, ...] = ()
    return_type: TypeRef | None = field(default=None, compare=False)
    static: bool = field(default=False, compare=False)
    """Static methods are invoked without a receiver object."""

    @property
    def signature(self) -> str:
        """``Type#method`` form used in configuration."""
        return f"{self.declaring_type}#{self.name}"

    def __str__(self) -> str:
        params = ", ".join(str(param) for param in self.parameter_types)
        return f"{self.signature}({params})"

"""Host type model consumed by the coverage core."""

from ofcov.model.code import (
    BinaryOperator,
    Cast,
    CodeElement,
    FieldRead,
    If,
    Invocation,
    Literal,
    LocalVariable,
    Return,
    SuperAccess,
    ThisAccess,
    UnaryOperator,
    VariableRead,
)
from ofcov.model.declarations import FieldDecl, MethodDecl, Parameter, TypeDecl, TypeKind
from ofcov.model.type_model import InMemoryTypeModel, TypeModel
from ofcov.model.types import FieldRef, Marker, MethodRef, TypeRef, Visibility

__all__ = [
    "BinaryOperator",
    "Cast",
    "CodeElement",
    "FieldDecl",
    "FieldRead",
    "FieldRef",
    "If",
    "InMemoryTypeModel",
    "Invocation",
    "Literal",
    "LocalVariable",
    "Marker",
    "MethodDecl",
    "MethodRef",
    "Parameter",
    "Return",
    "SuperAccess",
    "ThisAccess",
    "TypeDecl",
    "TypeKind",
    "TypeModel",
    "TypeRef",
    "UnaryOperator",
    "VariableRead",
    "Visibility",
]

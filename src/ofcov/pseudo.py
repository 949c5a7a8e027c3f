"""Pseudo classes and pseudo fields for value-like types.

Types without navigable structure (primitives and their wrappers, collections,
throwables) are represented by a generated pseudo class whose pseudo fields
name the aspects an assertion can observe.  Which types receive which pseudo
fields is decided by a :class:`PseudoFieldPolicy`.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ofcov.errors import PseudoFieldConflictError
from ofcov.model.declarations import FieldDecl
from ofcov.model.types import PRIMITIVE_TYPE_NAMES, WRAPPER_TYPE_NAMES, TypeRef, Visibility

if TYPE_CHECKING:
    from ofcov.config import PseudoFieldConfig
    from ofcov.model.type_model import TypeModel

logger = logging.getLogger(__name__)

PSEUDO_CLASS_SUFFIX = "PseudoClass"

VALUE_FIELD = "value"
SIZE_FIELD = "size"
ELEMENTS_FIELD = "elements"
ORDER_FIELD = "order"
TYPE_FIELD = "type"
MESSAGE_FIELD = "message"
CAUSE_FIELD = "cause"

_BOOLEAN = TypeRef("boolean")
_INT = TypeRef("int")
_JAVA_LANG = "java.lang"

DEFAULT_VALUE_TYPES: tuple[str, ...] = (
    *sorted(PRIMITIVE_TYPE_NAMES),
    *WRAPPER_TYPE_NAMES,
    "java.lang.String",
)

DEFAULT_ORDERED_COLLECTIONS: tuple[str, ...] = (
    "java.util.List",
    "java.util.Queue",
    "java.util.SortedSet",
    "java.util.SortedMap",
    "java.util.LinkedHashSet",
    "java.util.LinkedHashMap",
    "java.util.ArrayList",
    "java.util.LinkedList",
    "java.util.ArrayDeque",
    "java.util.TreeSet",
    "java.util.TreeMap",
)

DEFAULT_UNORDERED_COLLECTIONS: tuple[str, ...] = (
    "java.util.Collection",
    "java.util.Set",
    "java.util.Map",
    "java.util.HashSet",
    "java.util.HashMap",
)

DEFAULT_THROWABLE_TYPES: tuple[str, ...] = (
    "java.lang.Throwable",
    "java.lang.Exception",
    "java.lang.RuntimeException",
    "java.lang.Error",
)


# ── Rules ────────────────────────────────────────────────────────


class PseudoFieldRule(ABC):
    """Decides whether a type gets pseudo fields, and which ones."""

    kind: str = ""

    @abstractmethod
    def matches(self, model: TypeModel, ref: TypeRef) -> bool:
        """True when *ref* is handled by this rule."""

    @abstractmethod
    def field_specs(self, model: TypeModel, ref: TypeRef) -> list[tuple[str, TypeRef]]:
        """Return ``(name, type)`` pairs of the pseudo fields of *ref*."""

    def pseudo_class_name(self, ref: TypeRef) -> str:
        package, prefix = _package_and_prefix(ref)
        qualified = f"{prefix}{PSEUDO_CLASS_SUFFIX}"
        return f"{package}.{qualified}" if package else qualified


def _package_and_prefix(ref: TypeRef) -> tuple[str, str]:
    if ref.is_array:
        base = TypeRef(ref.qualified_name)
        package, prefix = _package_and_prefix(base)
        return package, prefix + "Array" * ref.array_dimensions
    if ref.is_primitive:
        return _JAVA_LANG, ref.qualified_name.capitalize()
    package, _, simple = ref.qualified_name.rpartition(".")
    return package, simple.replace("$", "")


def _matches_names(model: TypeModel, ref: TypeRef, names: frozenset[str]) -> bool:
    if ref.is_array:
        return False
    return bool(model.supertype_names(ref.erasure()) & names)


class ValuePseudoFieldRule(PseudoFieldRule):
    """Primitives, wrappers and configured value types get a single ``value`` field."""

    kind = "primitive"

    def __init__(self, value_types: Iterable[str] = DEFAULT_VALUE_TYPES) -> None:
        self._value_types = frozenset(value_types)

    def matches(self, model: TypeModel, ref: TypeRef) -> bool:
        return not ref.is_array and ref.qualified_name in self._value_types

    def pseudo_class_name(self, ref: TypeRef) -> str:
        # a wrapper shares the pseudo class of its primitive
        primitive = WRAPPER_TYPE_NAMES.get(ref.qualified_name)
        if primitive is not None:
            return super().pseudo_class_name(TypeRef(primitive))
        return super().pseudo_class_name(ref)

    def field_specs(self, model: TypeModel, ref: TypeRef) -> list[tuple[str, TypeRef]]:
        primitive = WRAPPER_TYPE_NAMES.get(ref.qualified_name)
        value_type = TypeRef(primitive) if primitive is not None else ref.erasure()
        return [(VALUE_FIELD, value_type)]


class CollectionPseudoFieldRule(PseudoFieldRule):
    """Collections get ``size`` and ``elements``, ordered ones also ``order``.

    Arrays are always ordered collections.
    """

    kind = "collection"

    def __init__(
        self,
        ordered: Iterable[str] = DEFAULT_ORDERED_COLLECTIONS,
        unordered: Iterable[str] = DEFAULT_UNORDERED_COLLECTIONS,
    ) -> None:
        self._ordered = frozenset(ordered)
        self._unordered = frozenset(unordered)

    def is_ordered(self, model: TypeModel, ref: TypeRef) -> bool:
        return ref.is_array or _matches_names(model, ref, self._ordered)

    def matches(self, model: TypeModel, ref: TypeRef) -> bool:
        return self.is_ordered(model, ref) or _matches_names(model, ref, self._unordered)

    def field_specs(self, model: TypeModel, ref: TypeRef) -> list[tuple[str, TypeRef]]:
        specs = [(SIZE_FIELD, _INT), (ELEMENTS_FIELD, _BOOLEAN)]
        if self.is_ordered(model, ref):
            specs.append((ORDER_FIELD, _BOOLEAN))
        return specs


class ThrowablePseudoFieldRule(PseudoFieldRule):
    """Throwables get ``type``, ``message`` and ``cause``."""

    kind = "throwable"

    def __init__(self, throwable_types: Iterable[str] = DEFAULT_THROWABLE_TYPES) -> None:
        self._throwable_types = frozenset(throwable_types)

    def matches(self, model: TypeModel, ref: TypeRef) -> bool:
        return not ref.is_array and _matches_names(model, ref, self._throwable_types)

    def field_specs(self, model: TypeModel, ref: TypeRef) -> list[tuple[str, TypeRef]]:
        return [
            (TYPE_FIELD, TypeRef("java.lang.Class")),
            (MESSAGE_FIELD, TypeRef("java.lang.String")),
            (CAUSE_FIELD, TypeRef("java.lang.Throwable")),
        ]


class PseudoFieldPolicy:
    """Ordered list of rules; the first matching rule wins."""

    def __init__(self, rules: Sequence[PseudoFieldRule]) -> None:
        self._rules = list(rules)

    @classmethod
    def default(cls) -> PseudoFieldPolicy:
        return cls(
            [ValuePseudoFieldRule(), ThrowablePseudoFieldRule(), CollectionPseudoFieldRule()]
        )

    @classmethod
    def from_config(cls, config: PseudoFieldConfig) -> PseudoFieldPolicy:
        return cls(
            [
                ValuePseudoFieldRule(config.value_types),
                ThrowablePseudoFieldRule(config.throwable_types),
                CollectionPseudoFieldRule(config.ordered_collections, config.unordered_collections),
            ]
        )

    @property
    def rules(self) -> list[PseudoFieldRule]:
        return list(self._rules)

    def rule_for(self, model: TypeModel, ref: TypeRef) -> PseudoFieldRule | None:
        for rule in self._rules:
            if rule.matches(model, ref):
                return rule
        return None


# ── Generator ────────────────────────────────────────────────────


@dataclass
class PseudoClass:
    """A generated class holding the pseudo fields of one or more real types."""

    qualified_name: str
    """Qualified name, ending in ``PseudoClass``."""

    kind: str
    """Kind of the rule that generated the class."""

    fields: dict[str, FieldDecl] = field(default_factory=dict)
    """Pseudo fields by name."""


class PseudoFieldGenerator:
    """Creates and caches pseudo classes and their pseudo fields.

    Generation is idempotent: the same real type always yields the same
    :class:`PseudoClass` instance and the same field instances.  The caches are
    guarded by a lock so a generator can be shared between builders.
    """

    def __init__(self, model: TypeModel, policy: PseudoFieldPolicy | None = None) -> None:
        self._model = model
        self._policy = policy or PseudoFieldPolicy.default()
        self._lock = threading.Lock()
        self._classes: dict[str, PseudoClass] = {}
        self._by_real_type: dict[TypeRef, PseudoClass] = {}

    @property
    def policy(self) -> PseudoFieldPolicy:
        return self._policy

    def rule_for(self, ref: TypeRef) -> PseudoFieldRule | None:
        return self._policy.rule_for(self._model, ref)

    def has_pseudo_fields(self, ref: TypeRef) -> bool:
        return self.rule_for(ref) is not None

    def is_pseudo_class(self, qualified_name: str) -> bool:
        with self._lock:
            return qualified_name in self._classes

    def pseudo_class_for(self, ref: TypeRef) -> PseudoClass | None:
        """Return the (possibly newly generated) pseudo class of *ref*."""
        erased = ref.erasure()
        rule = self.rule_for(erased)
        if rule is None:
            return None
        return self._pseudo_class(erased, rule)

    def pseudo_fields_for(self, ref: TypeRef) -> list[FieldDecl]:
        """Return the pseudo fields of *ref*, empty when it has none."""
        erased = ref.erasure()
        rule = self.rule_for(erased)
        if rule is None:
            return []
        pseudo_class = self._pseudo_class(erased, rule)
        return [pseudo_class.fields[name] for name, _ in rule.field_specs(self._model, erased)]

    def ensure_field(self, pseudo_class: PseudoClass, name: str, field_type: TypeRef) -> FieldDecl:
        """Return the pseudo field *name* of *pseudo_class*, creating it if needed.

        Raises:
            PseudoFieldConflictError: If the field exists with a different type.
        """
        with self._lock:
            return self._ensure_field(pseudo_class, name, field_type)

    def _pseudo_class(self, erased: TypeRef, rule: PseudoFieldRule) -> PseudoClass:
        with self._lock:
            cached = self._by_real_type.get(erased)
            if cached is not None:
                return cached
            pseudo_class = self._find_or_create_class(rule.pseudo_class_name(erased), rule.kind)
            for name, field_type in rule.field_specs(self._model, erased):
                self._ensure_field(pseudo_class, name, field_type)
            self._by_real_type[erased] = pseudo_class
            return pseudo_class

    def _find_or_create_class(self, qualified_name: str, kind: str) -> PseudoClass:
        existing = self._classes.get(qualified_name)
        if existing is not None:
            return existing
        pseudo_class = PseudoClass(qualified_name=qualified_name, kind=kind)
        self._classes[qualified_name] = pseudo_class
        logger.info("Created pseudo class %s", qualified_name)
        return pseudo_class

    def _ensure_field(self, pseudo_class: PseudoClass, name: str, field_type: TypeRef) -> FieldDecl:
        existing = pseudo_class.fields.get(name)
        if existing is not None:
            if existing.type != field_type:
                message = (
                    f"Pseudo field '{name}' of {pseudo_class.qualified_name} exists with type "
                    f"{existing.type} but {field_type} was requested"
                )
                logger.error(message)
                raise PseudoFieldConflictError(message)
            logger.debug("Pseudo field %s.%s already exists", pseudo_class.qualified_name, name)
            return existing
        created = FieldDecl(
            name=name,
            type=field_type,
            declaring_type=pseudo_class.qualified_name,
            visibility=Visibility.PUBLIC,
            final=True,
            pseudo=True,
        )
        pseudo_class.fields[name] = created
        logger.debug("Generated pseudo field %s.%s", pseudo_class.qualified_name, name)
        return created

"""Field finders deciding which fields are observable from an accessing type."""

from ofcov.finders.base import FieldFinder, FieldFinderAggregator, FieldFinderChain
from ofcov.finders.direct import DirectAccessFieldFinder
from ofcov.finders.getter import (
    GetterFieldFinder,
    MarkerGetterFieldFinder,
    accessed_field,
    getter_names,
)
from ofcov.finders.pseudo import (
    CollectionPseudoFieldFinder,
    PrimitivePseudoFieldFinder,
    PseudoFieldFinder,
    ThrowablePseudoFieldFinder,
)

__all__ = [
    "CollectionPseudoFieldFinder",
    "DirectAccessFieldFinder",
    "FieldFinder",
    "FieldFinderAggregator",
    "FieldFinderChain",
    "GetterFieldFinder",
    "MarkerGetterFieldFinder",
    "PrimitivePseudoFieldFinder",
    "PseudoFieldFinder",
    "ThrowablePseudoFieldFinder",
    "accessed_field",
    "getter_names",
]

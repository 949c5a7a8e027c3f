"""Name based lookup of field finders and equals analyzers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ofcov.equals import (
    EqualsMethodAnalyzer,
    MarkerEqualsAnalyzer,
    PlatformEqualsAnalyzer,
    PrimitiveEqualsAnalyzer,
    PseudoFieldEqualsAnalyzer,
    UtilityEqualsAnalyzer,
)
from ofcov.finders import (
    CollectionPseudoFieldFinder,
    DirectAccessFieldFinder,
    FieldFinder,
    FieldFinderChain,
    GetterFieldFinder,
    MarkerGetterFieldFinder,
    PrimitivePseudoFieldFinder,
    PseudoFieldFinder,
    ThrowablePseudoFieldFinder,
)

if TYPE_CHECKING:
    from ofcov.config import OfcovConfig
    from ofcov.model.type_model import TypeModel
    from ofcov.pseudo import PseudoFieldGenerator

_FINDERS: dict[str, type[FieldFinder]] = {
    "primitive": PrimitivePseudoFieldFinder,
    "collection": CollectionPseudoFieldFinder,
    "throwable": ThrowablePseudoFieldFinder,
    "direct": DirectAccessFieldFinder,
    "getter": GetterFieldFinder,
    "marker_getter": MarkerGetterFieldFinder,
}

_ANALYZERS: dict[str, type[EqualsMethodAnalyzer]] = {
    "pseudo": PseudoFieldEqualsAnalyzer,
    "platform": PlatformEqualsAnalyzer,
    "marker": MarkerEqualsAnalyzer,
    "utility": UtilityEqualsAnalyzer,
    "primitive": PrimitiveEqualsAnalyzer,
}

FINDER_NAMES = tuple(_FINDERS)
ANALYZER_NAMES = tuple(_ANALYZERS)


def get_finder_class(name: str) -> type[FieldFinder]:
    """Get the field finder class registered under *name*."""
    cls = _FINDERS.get(name)
    if cls is None:
        raise ValueError(f"No field finder named: {name}")
    return cls


def get_analyzer_class(name: str) -> type[EqualsMethodAnalyzer]:
    """Get the equals analyzer class registered under *name*."""
    cls = _ANALYZERS.get(name)
    if cls is None:
        raise ValueError(f"No equals analyzer named: {name}")
    return cls


def create_finder(
    name: str, config: OfcovConfig, model: TypeModel, generator: PseudoFieldGenerator
) -> FieldFinder:
    """Instantiate the field finder *name* configured from *config*."""
    cls = get_finder_class(name)
    if issubclass(cls, PseudoFieldFinder):
        return cls(model, generator)
    if cls is MarkerGetterFieldFinder:
        return MarkerGetterFieldFinder(
            model, getter_marker=config.markers.getter, data_marker=config.markers.data
        )
    return cls(model)


def create_analyzer(
    name: str, config: OfcovConfig, model: TypeModel, generator: PseudoFieldGenerator
) -> EqualsMethodAnalyzer:
    """Instantiate the equals analyzer *name* configured from *config*."""
    cls = get_analyzer_class(name)
    if cls is PseudoFieldEqualsAnalyzer:
        return PseudoFieldEqualsAnalyzer(model, generator)
    if cls is PlatformEqualsAnalyzer:
        return PlatformEqualsAnalyzer(model, config.equals.platform_packages)
    if cls is UtilityEqualsAnalyzer:
        return UtilityEqualsAnalyzer(model, config.equals.utility_methods)
    if cls is MarkerEqualsAnalyzer:
        markers = config.markers
        return MarkerEqualsAnalyzer(
            model,
            data_marker=markers.data,
            equals_marker=markers.equals_and_hash_code,
            include_marker=markers.include,
            exclude_marker=markers.exclude,
        )
    return cls(model)


def create_field_finder(
    config: OfcovConfig, model: TypeModel, generator: PseudoFieldGenerator
) -> FieldFinderChain:
    """Build the finder chain listed in ``config.finders``, in order."""
    return FieldFinderChain(
        [create_finder(name, config, model, generator) for name in config.finders]
    )


def create_analyzers(
    config: OfcovConfig, model: TypeModel, generator: PseudoFieldGenerator
) -> list[EqualsMethodAnalyzer]:
    """Build the equals analyzers listed in ``config.analyzers``."""
    return [create_analyzer(name, config, model, generator) for name in config.analyzers]

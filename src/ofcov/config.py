"""Configuration parsing from ``.ofcov.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ofcov.equals.platform import DEFAULT_PLATFORM_PACKAGES
from ofcov.equals.utility import DEFAULT_UTILITY_METHODS
from ofcov.pseudo import (
    DEFAULT_ORDERED_COLLECTIONS,
    DEFAULT_THROWABLE_TYPES,
    DEFAULT_UNORDERED_COLLECTIONS,
    DEFAULT_VALUE_TYPES,
)
from ofcov.registry import ANALYZER_NAMES, FINDER_NAMES

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".ofcov.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

_SIGNATURE_RE = re.compile(r"^[\w.$]+#\w+$")

DEFAULT_FINDERS: tuple[str, ...] = (
    "primitive",
    "collection",
    "throwable",
    "direct",
    "getter",
    "marker_getter",
)

DEFAULT_ANALYZERS: tuple[str, ...] = ("pseudo", "platform", "marker", "utility", "primitive")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name, {})
    return section if isinstance(section, dict) else {}


def _string_list(value: Any, default: tuple[str, ...]) -> list[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    return list(default)


@dataclass
class PseudoFieldConfig:
    """Which types are represented by pseudo fields."""

    value_types: list[str] = field(default_factory=lambda: list(DEFAULT_VALUE_TYPES))
    """Types with a single ``value`` pseudo field (primitives, wrappers, String)."""

    ordered_collections: list[str] = field(
        default_factory=lambda: list(DEFAULT_ORDERED_COLLECTIONS)
    )
    """Collection types (and their subtypes) with ``size``, ``elements`` and ``order``."""

    unordered_collections: list[str] = field(
        default_factory=lambda: list(DEFAULT_UNORDERED_COLLECTIONS)
    )
    """Collection types (and their subtypes) with ``size`` and ``elements``."""

    throwable_types: list[str] = field(default_factory=lambda: list(DEFAULT_THROWABLE_TYPES))
    """Throwable types (and their subtypes) with ``type``, ``message`` and ``cause``."""


@dataclass
class MarkerConfig:
    """Names of the markers used by declarative getters and equality."""

    getter: str = "lombok.Getter"
    """Marker generating a getter for a field, or for every field of a type."""

    data: str = "lombok.Data"
    """Marker generating getters and equality for a type."""

    equals_and_hash_code: str = "lombok.EqualsAndHashCode"
    """Marker generating equality for a type."""

    include: str = "lombok.EqualsAndHashCode.Include"
    """Marker including a field in generated equality."""

    exclude: str = "lombok.EqualsAndHashCode.Exclude"
    """Marker excluding a field from generated equality."""


@dataclass
class EqualsConfig:
    """Equals analysis settings."""

    utility_methods: list[str] = field(default_factory=lambda: list(DEFAULT_UTILITY_METHODS))
    """``Type#method`` signatures whose first argument is a compared value."""

    platform_packages: str = DEFAULT_PLATFORM_PACKAGES
    """Regex of packages whose types compare every accessible field."""


@dataclass
class EvaluationConfig:
    """Evaluation settings."""

    cache_size: int = 128
    """Maximum number of cached (asserted type, accessing type) evaluations."""


@dataclass
class OfcovConfig:
    """Complete ofcov configuration from ``.ofcov.yml``."""

    root: str = "."
    """Project root directory."""

    finders: list[str] = field(default_factory=lambda: list(DEFAULT_FINDERS))
    """Field finders in chain order."""

    analyzers: list[str] = field(default_factory=lambda: list(DEFAULT_ANALYZERS))
    """Equals analyzers."""

    pseudo_fields: PseudoFieldConfig = field(default_factory=PseudoFieldConfig)
    """Pseudo field policy."""

    markers: MarkerConfig = field(default_factory=MarkerConfig)
    """Marker names."""

    equals: EqualsConfig = field(default_factory=EqualsConfig)
    """Equals analysis settings."""

    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    """Evaluation settings."""

    raw: dict[str, Any] = field(default_factory=dict)
    """Raw parsed YAML for extension/debugging."""


def _parse_pseudo_field_config(raw: dict[str, Any]) -> PseudoFieldConfig:
    """Parse pseudo field configuration from raw YAML."""
    pseudo_raw = _section(raw, "pseudo_fields")

    return PseudoFieldConfig(
        value_types=_string_list(pseudo_raw.get("value_types"), DEFAULT_VALUE_TYPES),
        ordered_collections=_string_list(
            pseudo_raw.get("ordered_collections"), DEFAULT_ORDERED_COLLECTIONS
        ),
        unordered_collections=_string_list(
            pseudo_raw.get("unordered_collections"), DEFAULT_UNORDERED_COLLECTIONS
        ),
        throwable_types=_string_list(pseudo_raw.get("throwable_types"), DEFAULT_THROWABLE_TYPES),
    )


def _parse_marker_config(raw: dict[str, Any]) -> MarkerConfig:
    """Parse marker names from raw YAML."""
    markers_raw = _section(raw, "markers")
    default = MarkerConfig()

    return MarkerConfig(
        getter=str(markers_raw.get("getter", default.getter)),
        data=str(markers_raw.get("data", default.data)),
        equals_and_hash_code=str(
            markers_raw.get("equals_and_hash_code", default.equals_and_hash_code)
        ),
        include=str(markers_raw.get("include", default.include)),
        exclude=str(markers_raw.get("exclude", default.exclude)),
    )


def _parse_equals_config(raw: dict[str, Any]) -> EqualsConfig:
    """Parse equals analysis configuration from raw YAML."""
    equals_raw = _section(raw, "equals")

    return EqualsConfig(
        utility_methods=_string_list(equals_raw.get("utility_methods"), DEFAULT_UTILITY_METHODS),
        platform_packages=str(equals_raw.get("platform_packages", DEFAULT_PLATFORM_PACKAGES)),
    )


def _parse_evaluation_config(raw: dict[str, Any]) -> EvaluationConfig:
    """Parse evaluation configuration from raw YAML."""
    evaluation_raw = _section(raw, "evaluation")

    return EvaluationConfig(cache_size=int(evaluation_raw.get("cache_size", 128)))


def load_config(root: str | Path) -> OfcovConfig:
    """Load and parse the ``.ofcov.yml`` configuration.

    Falls back to defaults when the YAML file is missing or incomplete.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILE_NAME

    raw: dict[str, Any] = {}
    if config_file.is_file():
        text = config_file.read_text(encoding="utf-8")
        parsed = yaml.safe_load(text)
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        elif parsed is not None:
            logger.warning("Ignoring %s: top level is not a mapping", config_file)

    return OfcovConfig(
        root=str(root_path),
        finders=_string_list(raw.get("finders"), DEFAULT_FINDERS),
        analyzers=_string_list(raw.get("analyzers"), DEFAULT_ANALYZERS),
        pseudo_fields=_parse_pseudo_field_config(raw),
        markers=_parse_marker_config(raw),
        equals=_parse_equals_config(raw),
        evaluation=_parse_evaluation_config(raw),
        raw=raw,
    )


def _validate_names(kind: str, names: list[str], known: set[str]) -> list[str]:
    errors: list[str] = []
    seen: set[str] = set()
    for name in names:
        if name not in known:
            errors.append(f"{kind} contains unknown name '{name}' (known: {', '.join(sorted(known))})")
        if name in seen:
            errors.append(f"{kind} lists '{name}' more than once")
        seen.add(name)
    return errors


def _validate_equals_config(equals: EqualsConfig) -> list[str]:
    """Validate equals analysis settings."""
    errors: list[str] = []

    try:
        re.compile(equals.platform_packages)
    except re.error as exc:
        errors.append(f"equals.platform_packages is not a valid regex ({exc})")

    for signature in equals.utility_methods:
        if not _SIGNATURE_RE.match(signature):
            errors.append(
                f"equals.utility_methods entry must look like 'Type#method' (got: {signature})"
            )

    return errors


def _validate_evaluation_config(evaluation: EvaluationConfig) -> list[str]:
    """Validate evaluation settings."""
    errors: list[str] = []

    if evaluation.cache_size < 1:
        errors.append(f"evaluation.cache_size must be at least 1 (got: {evaluation.cache_size})")

    return errors


def validate_config(config: OfcovConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    errors.extend(_validate_names("finders", config.finders, set(FINDER_NAMES)))
    errors.extend(_validate_names("analyzers", config.analyzers, set(ANALYZER_NAMES)))
    if not config.finders:
        errors.append("finders must name at least one field finder")

    errors.extend(_validate_equals_config(config.equals))
    errors.extend(_validate_evaluation_config(config.evaluation))

    return errors

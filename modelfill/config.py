"""Configuration for modelfill.

A ``PopulationConfig`` is created once per builder and shared by reference
with the population service and every value synthesizer for that build.
There is no process-wide default instance.

Config resolution order (highest priority first):
1. Programmatic (PopulationConfig constructed in code, or ``configure()``)
2. Environment variables (MODELFILL_MAX_DEPTH, MODELFILL_INT_MAXIMUM, etc.)
3. Config file (~/.config/modelfill/config.json)
4. Hardcoded defaults

Conventions and the random generator are never read from or written to the
config file; they are code.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .core.models.conventions import ConventionMap
from .core.models.enums import (
    CharacterSetType,
    Casing,
    ConventionFilterType,
    Language,
    PropertyType,
    Spaces,
)
from .core.randomizers import RandomValueGenerator
from .population.conventions import Conventions


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "modelfill"
CONFIG_FILE = CONFIG_DIR / "config.json"


# =============================================================================
# Default conventions
# =============================================================================


def _semantic(property_type: PropertyType):
    def result(config: "PopulationConfig") -> str:
        return config.generator.random_property_type(
            property_type, config.default_language
        )

    return result


_DEFAULT_CONVENTION_FILTERS: list[tuple[ConventionFilterType, str, PropertyType]] = [
    (ConventionFilterType.CONTAINS, "email", PropertyType.EMAIL),
    (ConventionFilterType.CONTAINS, "postcode", PropertyType.POSTAL_CODE),
    (ConventionFilterType.CONTAINS, "postal_code", PropertyType.POSTAL_CODE),
    (ConventionFilterType.CONTAINS, "zip_code", PropertyType.POSTAL_CODE),
    (ConventionFilterType.CONTAINS, "phone", PropertyType.TELEPHONE_NUMBER),
    (ConventionFilterType.CONTAINS, "website", PropertyType.URL),
    (ConventionFilterType.ENDS_WITH, "url", PropertyType.URL),
    (ConventionFilterType.CONTAINS, "firstname", PropertyType.FIRST_NAME),
    (ConventionFilterType.CONTAINS, "first_name", PropertyType.FIRST_NAME),
    (ConventionFilterType.CONTAINS, "lastname", PropertyType.LAST_NAME),
    (ConventionFilterType.CONTAINS, "last_name", PropertyType.LAST_NAME),
    (ConventionFilterType.CONTAINS, "surname", PropertyType.LAST_NAME),
]


def default_conventions() -> list[ConventionMap]:
    """Name-based string conventions registered on every new config."""
    return [
        ConventionMap(filter_type, filter, str, _semantic(property_type))
        for filter_type, filter, property_type in _DEFAULT_CONVENTION_FILTERS
    ]


# =============================================================================
# Main config class
# =============================================================================

# Scalar fields that can come from the config file / env vars.
_ENV_INT_FIELDS: dict[str, str] = {
    "MODELFILL_MAX_DEPTH": "max_depth",
    "MODELFILL_COLLECTION_ITEM_COUNT": "default_collection_item_count",
    "MODELFILL_INT_MINIMUM": "int_minimum",
    "MODELFILL_INT_MAXIMUM": "int_maximum",
    "MODELFILL_STRING_MIN_LENGTH": "string_min_length",
    "MODELFILL_STRING_MAX_LENGTH": "string_max_length",
}

_ENV_FLOAT_FIELDS: dict[str, str] = {
    "MODELFILL_DOUBLE_MINIMUM": "double_minimum",
    "MODELFILL_DOUBLE_MAXIMUM": "double_maximum",
}

_ENUM_FIELDS: dict[str, type] = {
    "default_string_character_set": CharacterSetType,
    "default_string_spaces": Spaces,
    "default_string_casing": Casing,
    "default_language": Language,
}

_NON_PERSISTED = {"conventions", "generator", "use_default_conventions"}


@dataclass
class PopulationConfig:
    """Settings for one build.

    Examples:
        # Package use
        config = PopulationConfig(max_depth=3, default_collection_item_count=5)

        # CLI use, layering config file and env vars
        config = PopulationConfig.load()

        # Deterministic output
        config = PopulationConfig(generator=RandomValueGenerator(seed=7))
    """

    default_collection_item_count: int = 2
    max_depth: int = 10
    int_minimum: int = 1
    int_maximum: int = 1000
    double_minimum: float = 1.0
    double_maximum: float = 1000.0
    string_min_length: int = 5
    string_max_length: int = 50
    default_string_character_set: CharacterSetType = CharacterSetType.ALPHA
    default_string_spaces: Spaces = Spaces.NONE
    default_string_casing: Casing = Casing.ANY
    default_language: Language = Language.ENGLISH
    use_default_conventions: bool = True
    conventions: Conventions = field(default_factory=Conventions)
    generator: RandomValueGenerator = field(default_factory=RandomValueGenerator)

    def __post_init__(self) -> None:
        if self.use_default_conventions:
            # Defaults are matched before any rule passed in or added later.
            # Remove or clear them to take over one of their names.
            defaults = default_conventions()
            existing = list(self.conventions)
            self.conventions.clear()
            self.conventions.add_many(defaults)
            self.conventions.add_many(existing)

    @classmethod
    def load(cls, path: Path | None = None) -> "PopulationConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()
        config_file = path or CONFIG_FILE

        # Layer 1: config file
        if config_file.exists():
            try:
                with open(config_file) as f:
                    data = json.load(f)
                apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", config_file, exc)

        # Layer 2: env var overrides
        for env_name, attr in _ENV_INT_FIELDS.items():
            if val := os.environ.get(env_name):
                try:
                    setattr(config, attr, int(val))
                except ValueError:
                    logger.warning("Invalid %s=%r, ignoring", env_name, val)
        for env_name, attr in _ENV_FLOAT_FIELDS.items():
            if val := os.environ.get(env_name):
                try:
                    setattr(config, attr, float(val))
                except ValueError:
                    logger.warning("Invalid %s=%r, ignoring", env_name, val)
        if val := os.environ.get("MODELFILL_LANGUAGE"):
            try:
                config.default_language = Language(val.lower())
            except ValueError:
                logger.warning("Invalid MODELFILL_LANGUAGE=%r, ignoring", val)

        return config

    def save(self, path: Path | None = None) -> None:
        """Save scalar settings to ~/.config/modelfill/config.json."""
        config_file = path or CONFIG_FILE
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Scalar settings as plain JSON-able values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            if f.name in _NON_PERSISTED:
                continue
            value = getattr(self, f.name)
            result[f.name] = value.value if f.name in _ENUM_FIELDS else value
        return result


# =============================================================================
# Config dict application
# =============================================================================


def apply_dict(config: PopulationConfig, data: dict) -> None:
    """Apply a dict of values onto a PopulationConfig."""
    for k, v in data.items():
        if k in _NON_PERSISTED or not hasattr(config, k):
            logger.warning("Unknown config key %r, ignoring", k)
            continue
        if k in _ENUM_FIELDS:
            try:
                v = _ENUM_FIELDS[k](v)
            except ValueError:
                logger.warning("Invalid value %r for %s, ignoring", v, k)
                continue
        setattr(config, k, v)


def coerce_setting(key: str, raw: str) -> Any:
    """Convert a string (from the CLI) into the type of setting ``key``.

    Raises:
        KeyError: If ``key`` is not a persisted setting.
        ValueError: If ``raw`` cannot be converted.
    """
    defaults = PopulationConfig(use_default_conventions=False).to_dict()
    if key not in defaults:
        raise KeyError(key)
    if key in _ENUM_FIELDS:
        return _ENUM_FIELDS[key](raw.lower())
    current = defaults[key]
    if isinstance(current, bool):
        return raw.lower() in ("1", "true", "yes")
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    return raw

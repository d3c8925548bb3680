"""Attribute-derived conventions for string properties.

Declared constraints are turned into a value in this order:
1. A recognized data type (email, postal code, phone number, url) wins
   outright and ignores any length constraints.
2. MinLength / MaxLength: a bounded string, with the config's own bound
   standing in for whichever one is missing.
3. StringLength: ``maximum_length == 0`` means ``minimum_length + 50``;
   a maximum below the minimum is an error.
4. Otherwise None, and the caller falls back to default synthesis.

The convention registry is never consulted here; it outranks this resolver.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidConstraintError
from ..core.models.descriptors import PropertyDescriptor
from ..core.models.enums import DataType, PropertyType

if TYPE_CHECKING:
    from ..config import PopulationConfig

logger = logging.getLogger(__name__)

_DATA_TYPE_PROPERTY_TYPES: dict[DataType, PropertyType] = {
    DataType.EMAIL_ADDRESS: PropertyType.EMAIL,
    DataType.POSTAL_CODE: PropertyType.POSTAL_CODE,
    DataType.PHONE_NUMBER: PropertyType.TELEPHONE_NUMBER,
    DataType.URL: PropertyType.URL,
}

# Added to StringLength.minimum_length when no maximum is declared.
STRING_LENGTH_DEFAULT_SPAN = 50


class DataAnnotationConventionMapper:
    """Turns declared property constraints into a generated string."""

    def try_get_value(
        self,
        type: Any,
        descriptor: PropertyDescriptor | None,
        config: PopulationConfig,
    ) -> Any | None:
        if descriptor is None or type is not str:
            return None

        constraints = descriptor.constraints
        if constraints.is_empty:
            return None
        if constraints.data_type is not None:
            property_type = _DATA_TYPE_PROPERTY_TYPES.get(constraints.data_type)
            if property_type is not None:
                return config.generator.random_property_type(
                    property_type, config.default_language
                )

        return self._string_from_lengths(descriptor, config)

    def _string_from_lengths(
        self, descriptor: PropertyDescriptor, config: PopulationConfig
    ) -> str | None:
        constraints = descriptor.constraints

        if constraints.min_length is not None or constraints.max_length is not None:
            min_length = config.string_min_length
            max_length = config.string_max_length
            if constraints.min_length is not None:
                min_length = constraints.min_length
                # A lone MinLength above the config maximum widens the range.
                if constraints.max_length is None:
                    max_length = max(max_length, min_length)
            if constraints.max_length is not None:
                max_length = constraints.max_length
                if constraints.min_length is None:
                    min_length = min(min_length, max_length)
            if max_length < min_length:
                raise InvalidConstraintError(
                    f"Property {descriptor.name}: the minimum string length "
                    f"({min_length}) cannot be greater than the maximum string "
                    f"length ({max_length})"
                )
            return self._random_string(min_length, max_length, config)

        string_length = constraints.string_length
        if string_length is not None:
            min_length = string_length.minimum_length
            max_length = string_length.maximum_length
            if max_length == 0:
                max_length = min_length + STRING_LENGTH_DEFAULT_SPAN
            if max_length < min_length:
                raise InvalidConstraintError(
                    f"Property {descriptor.name}: the minimum string length "
                    f"({min_length}) cannot be greater than the maximum string "
                    f"length ({max_length})"
                )
            return self._random_string(min_length, max_length, config)

        return None

    @staticmethod
    def _random_string(min_length: int, max_length: int, config: PopulationConfig) -> str:
        logger.debug("Generating string of length %d..%d", min_length, max_length)
        return config.generator.random_string(
            min_length,
            max_length,
            config.default_string_character_set,
            config.default_string_spaces,
            config.default_string_casing,
            config.default_language,
        )

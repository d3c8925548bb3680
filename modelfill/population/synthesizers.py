"""Value synthesizers, one per primitive kind.

Every synthesizer follows the same steps in ``populate``:
1. A value that is already set is returned unchanged.
2. A matching convention supplies the value.
3. Otherwise a bounded random value is generated from the config.

Nullable variants only treat ``None`` as unset, so an explicit ``0`` on an
``Optional[int]`` survives. Strings consult the data-annotation mapper
between steps 2 and 3.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from ..core.models.annotations import Byte
from ..core.models.descriptors import PropertyDescriptor
from .annotations import DataAnnotationConventionMapper

if TYPE_CHECKING:
    from ..config import PopulationConfig

BYTE_MINIMUM = 1
BYTE_MAXIMUM = 255


class PopulateProperty:
    """Base class for kind-specific synthesizers."""

    type: Any = None
    nullable: bool = False
    zero: Any = None

    def __init__(self, type: Any = None, nullable: bool | None = None):
        if type is not None:
            self.type = type
        if nullable is not None:
            self.nullable = nullable
        self._config: PopulationConfig | None = None

    @property
    def config(self) -> PopulationConfig:
        if self._config is None:
            raise RuntimeError(f"{type(self).__name__} has no configuration set")
        return self._config

    def set_configuration(self, config: PopulationConfig) -> None:
        self._config = config

    def is_unset(self, value: Any) -> bool:
        if value is None:
            return True
        if self.nullable or self.zero is None:
            return False
        return value == self.zero

    def populate(
        self,
        property_name: str,
        current_value: Any,
        descriptor: PropertyDescriptor | None = None,
    ) -> Any:
        if not self.is_unset(current_value):
            return current_value

        conventions = self.config.conventions
        if conventions.matches(property_name, self.type):
            return conventions.resolve(property_name, self.type, self.config)

        return self.generate(property_name, descriptor)

    def generate(
        self, property_name: str, descriptor: PropertyDescriptor | None
    ) -> Any:
        raise NotImplementedError


# =============================================================================
# Numbers
# =============================================================================


class PopulateIntService(PopulateProperty):
    type = int
    zero = 0

    def generate(self, property_name, descriptor):
        return self.config.generator.random_integer(
            self.config.int_minimum, self.config.int_maximum
        )


class PopulateNullableIntService(PopulateIntService):
    type = Optional[int]
    nullable = True


class PopulateDoubleService(PopulateProperty):
    type = float
    zero = 0.0

    def generate(self, property_name, descriptor):
        return self.config.generator.random_double(
            self.config.double_minimum, self.config.double_maximum
        )


class PopulateNullableDoubleService(PopulateDoubleService):
    type = Optional[float]
    nullable = True


class PopulateByteService(PopulateProperty):
    type = Byte
    zero = 0

    def generate(self, property_name, descriptor):
        return Byte(self.config.generator.random_integer(BYTE_MINIMUM, BYTE_MAXIMUM))


class PopulateDecimalService(PopulateProperty):
    type = Decimal
    zero = Decimal(0)

    def generate(self, property_name, descriptor):
        return self.config.generator.random_decimal(
            self.config.double_minimum, self.config.double_maximum
        )


class PopulateBoolService(PopulateProperty):
    """False counts as unset, so non-nullable bools always get a fresh draw."""

    type = bool
    zero = False

    def generate(self, property_name, descriptor):
        return self.config.generator.random_bool()


# =============================================================================
# Strings
# =============================================================================


class PopulateStringService(PopulateProperty):
    type = str
    zero = ""

    def __init__(
        self,
        type: Any = None,
        nullable: bool | None = None,
        annotation_mapper: DataAnnotationConventionMapper | None = None,
    ):
        super().__init__(type, nullable)
        self.annotation_mapper = annotation_mapper or DataAnnotationConventionMapper()

    def generate(self, property_name, descriptor):
        value = self.annotation_mapper.try_get_value(str, descriptor, self.config)
        if value is not None:
            return value
        config = self.config
        return config.generator.random_string(
            config.string_min_length,
            config.string_max_length,
            config.default_string_character_set,
            config.default_string_spaces,
            config.default_string_casing,
            config.default_language,
        )


class PopulateNullableStringService(PopulateStringService):
    type = Optional[str]
    nullable = True


# =============================================================================
# Dates, identifiers, enums
# =============================================================================


class PopulateDateTimeService(PopulateProperty):
    type = datetime

    def generate(self, property_name, descriptor):
        return self.config.generator.random_datetime()


class PopulateDateService(PopulateProperty):
    type = date

    def generate(self, property_name, descriptor):
        return self.config.generator.random_date()


class PopulateUuidService(PopulateProperty):
    type = uuid.UUID
    zero = uuid.UUID(int=0)

    def generate(self, property_name, descriptor):
        return self.config.generator.random_uuid()


class PopulateEnumService(PopulateProperty):
    """Picks a random member of ``enum_type``. Any set member is kept."""

    def __init__(self, enum_type: type[Enum], nullable: bool = False):
        super().__init__(Optional[enum_type] if nullable else enum_type, nullable)
        self.enum_type = enum_type

    def generate(self, property_name, descriptor):
        return self.config.generator.random_choice(list(self.enum_type))

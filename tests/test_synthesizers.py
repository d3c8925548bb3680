"""Tests for the per-kind value synthesizers."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

import pytest

from modelfill import (
    ConventionFilterType,
    DataType,
    DataTypeOf,
    PopulationConfig,
    RandomValueGenerator,
)
from modelfill.core.introspection import describe
from modelfill.population.synthesizers import (
    BYTE_MAXIMUM,
    BYTE_MINIMUM,
    PopulateBoolService,
    PopulateByteService,
    PopulateDateTimeService,
    PopulateDecimalService,
    PopulateDoubleService,
    PopulateEnumService,
    PopulateIntService,
    PopulateNullableDoubleService,
    PopulateNullableIntService,
    PopulateNullableStringService,
    PopulateStringService,
    PopulateUuidService,
)

from sample_models import Colour


@pytest.fixture
def config():
    return PopulationConfig(
        use_default_conventions=False, generator=RandomValueGenerator(seed=1234)
    )


def _with_config(synthesizer, config):
    synthesizer.set_configuration(config)
    return synthesizer


class TestIdempotence:
    """Already-set values are never replaced."""

    @pytest.mark.parametrize(
        "synthesizer,value",
        [
            (PopulateIntService(), 7),
            (PopulateNullableIntService(), 0),
            (PopulateDoubleService(), 2.5),
            (PopulateNullableDoubleService(), 0.0),
            (PopulateByteService(), 9),
            (PopulateStringService(), "keep me"),
            (PopulateNullableStringService(), ""),
            (PopulateBoolService(), True),
            (PopulateDecimalService(), Decimal("3.10")),
            (PopulateDateTimeService(), datetime(2020, 1, 1)),
            (PopulateUuidService(), uuid.UUID(int=5)),
            (PopulateEnumService(Colour), Colour.RED),
        ],
    )
    def test_set_value_is_returned(self, config, synthesizer, value):
        result = _with_config(synthesizer, config).populate("prop", value)
        assert result == value

    def test_set_value_beats_convention(self, config):
        config.conventions.add_convention(
            ConventionFilterType.EXACT, "count", int, lambda c: 42
        )
        synthesizer = _with_config(PopulateIntService(), config)
        assert synthesizer.populate("count", 3) == 3


class TestUnsetValues:
    """Zero / empty values are synthesized."""

    def test_int_within_bounds(self, config):
        config.int_minimum, config.int_maximum = 10, 12
        synthesizer = _with_config(PopulateIntService(), config)
        for _ in range(20):
            assert 10 <= synthesizer.populate("count", 0) <= 12

    def test_nullable_int_populates_none(self, config):
        synthesizer = _with_config(PopulateNullableIntService(), config)
        value = synthesizer.populate("count", None)
        assert config.int_minimum <= value <= config.int_maximum

    def test_double_within_bounds(self, config):
        config.double_minimum, config.double_maximum = 1.5, 2.5
        synthesizer = _with_config(PopulateDoubleService(), config)
        assert 1.5 <= synthesizer.populate("ratio", 0.0) <= 2.5

    def test_nullable_double_populates_none(self, config):
        synthesizer = _with_config(PopulateNullableDoubleService(), config)
        assert synthesizer.populate("ratio", None) is not None

    def test_byte_range(self, config):
        synthesizer = _with_config(PopulateByteService(), config)
        for _ in range(50):
            assert BYTE_MINIMUM <= synthesizer.populate("flags", 0) <= BYTE_MAXIMUM

    def test_string_uses_config_lengths(self, config):
        config.string_min_length, config.string_max_length = 3, 4
        synthesizer = _with_config(PopulateStringService(), config)
        assert 3 <= len(synthesizer.populate("title", "")) <= 4
        assert 3 <= len(synthesizer.populate("title", None)) <= 4

    def test_enum_member(self, config):
        synthesizer = _with_config(PopulateEnumService(Colour), config)
        assert synthesizer.populate("colour", None) in list(Colour)

    def test_nullable_enum_type(self):
        assert PopulateEnumService(Colour, nullable=True).type == Optional[Colour]

    def test_uuid_and_decimal(self, config):
        assert isinstance(
            _with_config(PopulateUuidService(), config).populate("id", None), uuid.UUID
        )
        assert isinstance(
            _with_config(PopulateDecimalService(), config).populate("total", None),
            Decimal,
        )

    def test_missing_configuration_raises(self):
        with pytest.raises(RuntimeError):
            PopulateIntService().populate("count", 0)


class TestPrecedence:
    """Convention > annotation > default."""

    def test_convention_result_used_verbatim(self, config):
        config.conventions.add_convention(
            ConventionFilterType.EXACT, "Count", int, lambda c: 42
        )
        synthesizer = _with_config(PopulateIntService(), config)
        assert synthesizer.populate("Count", 0) == 42

    def test_nullable_convention_needs_nullable_type(self, config):
        config.conventions.add_convention(
            ConventionFilterType.EXACT, "count", int, lambda c: 42
        )
        config.conventions.add_convention(
            ConventionFilterType.EXACT, "count", Optional[int], lambda c: 43
        )
        synthesizer = _with_config(PopulateNullableIntService(), config)
        assert synthesizer.populate("count", None) == 43

    def test_convention_beats_annotation(self, config):
        config.conventions.add_convention(
            ConventionFilterType.CONTAINS, "mail", str, lambda c: "not-an-email"
        )
        descriptor = describe(
            "email", Annotated[str, DataTypeOf(DataType.EMAIL_ADDRESS)]
        )
        synthesizer = _with_config(PopulateStringService(), config)
        assert synthesizer.populate("email", None, descriptor) == "not-an-email"

    def test_annotation_beats_default(self, config):
        descriptor = describe(
            "email", Annotated[str, DataTypeOf(DataType.EMAIL_ADDRESS)]
        )
        synthesizer = _with_config(PopulateStringService(), config)
        assert "@" in synthesizer.populate("email", None, descriptor)

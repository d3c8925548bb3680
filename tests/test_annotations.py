"""Tests for attribute-derived string generation."""

import re
from typing import Annotated

import pytest

from modelfill import (
    CharacterSetType,
    DataType,
    DataTypeOf,
    InvalidConstraintError,
    MaxLength,
    MinLength,
    PopulationConfig,
    StringLength,
)
from modelfill.core.introspection import describe, get_settable_properties
from modelfill.population.annotations import DataAnnotationConventionMapper

from sample_models import AnnotatedContact, Customer

EMAIL_SHAPE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@pytest.fixture
def mapper():
    return DataAnnotationConventionMapper()


@pytest.fixture
def config():
    return PopulationConfig(use_default_conventions=False)


def _descriptor(name):
    return next(d for d in get_settable_properties(AnnotatedContact) if d.name == name)


class TestDataTypes:
    """Semantic kinds win outright."""

    def test_email(self, mapper, config):
        value = mapper.try_get_value(str, _descriptor("email"), config)
        assert EMAIL_SHAPE.match(value)

    def test_postal_code(self, mapper, config):
        value = mapper.try_get_value(str, _descriptor("post_code"), config)
        assert isinstance(value, str) and value

    def test_phone_number(self, mapper, config):
        value = mapper.try_get_value(str, _descriptor("phone_number"), config)
        assert any(c.isdigit() for c in value)

    def test_url(self, mapper, config):
        value = mapper.try_get_value(str, _descriptor("url"), config)
        assert value.startswith("http")

    def test_data_type_beats_length(self, mapper, config):
        descriptor = describe(
            "contact",
            Annotated[str, DataTypeOf(DataType.EMAIL_ADDRESS), MaxLength(3)],
        )
        value = mapper.try_get_value(str, descriptor, config)
        assert EMAIL_SHAPE.match(value)
        assert len(value) > 3

    def test_unmapped_data_type_falls_through_to_lengths(self, mapper, config):
        descriptor = describe(
            "secret", Annotated[str, DataTypeOf(DataType.PASSWORD), MaxLength(4)]
        )
        value = mapper.try_get_value(str, descriptor, config)
        assert len(value) <= 4


class TestLengths:
    """Min/max length and string length constraints."""

    def test_max_length_only(self, mapper, config):
        for _ in range(20):
            value = mapper.try_get_value(str, _descriptor("max_length_test"), config)
            assert len(value) <= 10

    def test_min_and_max_length(self, mapper, config):
        value = mapper.try_get_value(str, _descriptor("min_length_test"), config)
        assert 500 <= len(value) <= 1000

    def test_narrow_min_max_length(self, mapper, config):
        for _ in range(20):
            value = mapper.try_get_value(
                str, _descriptor("min_max_length_test"), config
            )
            assert 50 <= len(value) <= 55

    def test_min_length_above_config_maximum(self, mapper, config):
        descriptor = describe("notes", Annotated[str, MinLength(80)])
        value = mapper.try_get_value(str, descriptor, config)
        assert len(value) == 80

    def test_max_length_below_config_minimum(self, mapper, config):
        descriptor = describe("code", Annotated[str, MaxLength(2)])
        value = mapper.try_get_value(str, descriptor, config)
        assert len(value) <= 2

    def test_contradictory_min_max_length_raises(self, mapper, config):
        descriptor = describe("bad", Annotated[str, MinLength(20), MaxLength(10)])
        with pytest.raises(InvalidConstraintError, match="bad"):
            mapper.try_get_value(str, descriptor, config)

    def test_string_length_without_minimum(self, mapper, config):
        for _ in range(20):
            value = mapper.try_get_value(
                str, _descriptor("string_length_test_no_minimum"), config
            )
            assert len(value) <= 10

    def test_string_length_min_and_max(self, mapper, config):
        value = mapper.try_get_value(
            str, _descriptor("string_length_test_min_and_max"), config
        )
        assert 45 <= len(value) <= 50

    def test_string_length_zero_maximum_defaults_to_min_plus_fifty(
        self, mapper, config
    ):
        descriptor = describe("memo", Annotated[str, StringLength(0, minimum_length=5)])
        for _ in range(20):
            value = mapper.try_get_value(str, descriptor, config)
            assert 5 <= len(value) <= 55

    def test_string_length_max_below_min_raises(self, mapper, config):
        descriptor = describe(
            "code", Annotated[str, StringLength(10, minimum_length=45)]
        )
        with pytest.raises(InvalidConstraintError, match="code"):
            mapper.try_get_value(str, descriptor, config)

    def test_uses_config_string_defaults(self, mapper):
        config = PopulationConfig(
            use_default_conventions=False,
            default_string_character_set=CharacterSetType.NUMERIC,
        )
        descriptor = describe("pin", Annotated[str, MinLength(4), MaxLength(4)])
        value = mapper.try_get_value(str, descriptor, config)
        assert value.isdigit() and len(value) == 4

    def test_pydantic_field_lengths(self, mapper, config):
        descriptor = next(
            d for d in get_settable_properties(Customer) if d.name == "nickname"
        )
        for _ in range(20):
            value = mapper.try_get_value(str, descriptor, config)
            assert 3 <= len(value) <= 6


class TestNoDirective:
    """Cases where the mapper declines."""

    def test_non_string_type(self, mapper, config):
        descriptor = describe("count", Annotated[int, MaxLength(3)])
        assert mapper.try_get_value(int, descriptor, config) is None

    def test_no_descriptor(self, mapper, config):
        assert mapper.try_get_value(str, None, config) is None

    def test_no_constraints(self, mapper, config):
        assert mapper.try_get_value(str, describe("plain", str), config) is None

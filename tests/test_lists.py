"""Tests for the list population strategy."""

from typing import Annotated

import pytest

from modelfill import MaxLength, PopulationConfig
from modelfill.population.lists import PopulateListService


@pytest.fixture
def config():
    return PopulationConfig()


@pytest.fixture
def list_service(config):
    service = PopulateListService()
    service.set_configuration(config)
    return service


def _constant(value):
    return lambda depth, name, type, current, descriptor: value


def test_instantiates_and_populates_list(list_service, config):
    result = list_service.populate("property", list[str], None, 0, _constant("string"))

    assert isinstance(result, list)
    assert len(result) == config.default_collection_item_count
    assert result[0] == "string"
    assert result[-1] == "string"


def test_uses_passed_in_list(list_service, config):
    items: list[str] = []

    result = list_service.populate("property", list[str], items, 0, _constant("string"))

    assert result is items
    assert len(result) == config.default_collection_item_count
    assert result == ["string"] * config.default_collection_item_count


def test_existing_elements_are_replaced_to_exact_count(list_service, config):
    config.default_collection_item_count = 5
    items = ["x"]

    result = list_service.populate("property", list[str], items, 0, _constant("y"))

    assert result is items
    assert result == ["y"] * 5


def test_callback_receives_slot_details(list_service):
    calls = []

    def populate(depth, name, type, current, descriptor):
        calls.append((depth, name, type, current, descriptor))
        return len(calls)

    result = list_service.populate(
        "scores", list[Annotated[str, MaxLength(3)]], None, 4, populate
    )

    assert result == [1, 2]
    depth, name, element_type, current, descriptor = calls[0]
    assert depth == 4
    assert name == "scores"
    assert element_type is str
    assert current is None
    assert descriptor.constraints.max_length == 3


def test_zero_items(list_service, config):
    config.default_collection_item_count = 0
    assert list_service.populate("p", list[int], [1, 2], 0, _constant(3)) == []


def test_rejects_non_list_type(list_service):
    with pytest.raises(TypeError):
        list_service.populate("p", dict[str, int], None, 0, _constant(1))


def test_requires_configuration():
    with pytest.raises(RuntimeError):
        PopulateListService().populate("p", list[int], None, 0, _constant(1))

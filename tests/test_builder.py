"""Tests for the fluent AutoBuilder."""

import json
from datetime import datetime

import pytest

from modelfill import (
    AutoBuilder,
    Casing,
    ConventionFilterType,
    ConventionMap,
    InvalidConstraintError,
    PopulationConfig,
    PreconditionViolationError,
    PropertyType,
    RandomValueGenerator,
    UnsupportedTypeError,
    prop,
)

from sample_models import (
    Account,
    Address,
    Counter,
    Customer,
    EmailWithLength,
    Greeter,
    InvalidStringLength,
    Person,
    Shape,
)


def _config(**kwargs):
    return PopulationConfig(generator=RandomValueGenerator(seed=11), **kwargs)


def _person(**kwargs):
    return AutoBuilder(Person, _config(**kwargs)).construct()


class TestConstruct:
    """construct() and build()."""

    def test_builds_populated_instance(self):
        person = _person().build()

        assert isinstance(person, Person)
        assert person.name
        assert 1 <= person.age <= 1000
        assert person.address is not None
        assert person.address.postcode
        assert len(person.previous_addresses) == 2

    def test_explicit_constructor_arguments(self):
        account = AutoBuilder(Account, _config()).construct("ada", 10).build()

        assert account.owner == "ada"
        assert account.balance == 10
        assert isinstance(account.opened, datetime)

    def test_required_arguments_synthesized(self):
        account = AutoBuilder(Account, _config()).construct().build()
        assert account.owner
        assert account.balance >= 1

    def test_pydantic_root(self):
        customer = AutoBuilder(Customer, _config()).construct().build()

        assert customer.name
        assert 3 <= len(customer.nickname) <= 6
        assert customer.address.city
        assert len(customer.orders) == 2

    def test_list_root(self):
        addresses = AutoBuilder(list[Address], _config()).construct().build()

        assert isinstance(addresses, list)
        assert len(addresses) == 2
        assert all(isinstance(a, Address) and a.city for a in addresses)

    def test_tuple_root_uses_item_count(self):
        numbers = (
            AutoBuilder(tuple[int, ...], _config(default_collection_item_count=4))
            .construct()
            .build()
        )

        assert isinstance(numbers, tuple)
        assert len(numbers) == 4
        assert all(1 <= n <= 1000 for n in numbers)

    @pytest.mark.parametrize("model_type", [Shape, Greeter])
    def test_abstract_root_rejected(self, model_type):
        with pytest.raises(UnsupportedTypeError):
            AutoBuilder(model_type).construct()

    def test_failed_construct_leaves_no_instance(self):
        builder = AutoBuilder(InvalidStringLength, _config())
        with pytest.raises(InvalidConstraintError, match="code"):
            builder.construct()
        with pytest.raises(PreconditionViolationError):
            builder.build()

    def test_build_before_construct(self):
        with pytest.raises(PreconditionViolationError, match="construct"):
            AutoBuilder(Person).build()

    def test_to_json(self):
        data = json.loads(_person().to_json(indent=2))

        assert data["name"]
        assert data["address"]["postcode"]
        assert data["colour"] in ("red", "green", "blue")
        assert len(data["tags"]) == 2


class TestConventions:
    """Builder-level convention configuration."""

    def test_add_convention_parts(self):
        counter = (
            AutoBuilder(Counter, _config())
            .add_convention(ConventionFilterType.EXACT, "count", int, lambda c: 42)
            .construct()
            .build()
        )
        assert counter.Count == 42

    def test_add_conventions_maps(self):
        counter = (
            AutoBuilder(Counter, _config())
            .add_conventions(
                ConventionMap(ConventionFilterType.STARTS_WITH, "Co", int, lambda c: 7),
                ConventionMap(ConventionFilterType.EXACT, "Count", int, lambda c: 8),
            )
            .construct()
            .build()
        )
        assert counter.Count == 7

    def test_clear_conventions(self):
        address = AutoBuilder(Address, _config()).clear_conventions().construct().build()
        assert address.postcode.isalpha()

    def test_clear_single_convention(self):
        address = (
            AutoBuilder(Address, _config())
            .clear_convention("postcode", str)
            .construct()
            .build()
        )
        assert address.postcode.isalpha()

    def test_configure(self):
        counter = (
            AutoBuilder(Counter, _config())
            .configure(lambda c: setattr(c, "int_maximum", 3))
            .construct()
            .build()
        )
        assert 1 <= counter.Count <= 3

    def test_data_type_without_default_conventions(self):
        contact = (
            AutoBuilder(EmailWithLength, _config(use_default_conventions=False))
            .construct()
            .build()
        )
        assert "@" in contact.email_address


class TestOverrides:
    """with_* overrides applied after construct()."""

    def test_with_value_nested_path(self):
        person = _person().with_value("address.postcode", "N1 9GU").build()
        assert person.address.postcode == "N1 9GU"

    def test_with_value_recorded_path(self):
        person = _person().with_value(prop.address.city, lambda: "Leeds").build()
        assert person.address.city == "Leeds"

    def test_with_value_index_path(self):
        person = _person().with_value("previous_addresses[1].city", "York").build()

        assert person.previous_addresses[1].city == "York"
        assert person.previous_addresses[0].city != "York"

    def test_override_touches_only_target(self):
        builder = _person()
        before = builder.build().address.line1

        builder.with_value("address.city", "Bath")
        assert builder.build().address.line1 == before

    def test_with_string_exact_length(self):
        person = _person().with_string(prop.name, 8, casing=Casing.UPPER).build()

        assert len(person.name) == 8
        assert person.name.isupper()

    def test_with_string_bounds(self):
        person = _person().with_string("name", min_length=3, max_length=6).build()
        assert 3 <= len(person.name) <= 6

    def test_with_string_needs_bounds(self):
        with pytest.raises(ValueError):
            _person().with_string("name", min_length=3)

    def test_with_int(self):
        person = _person().with_int("age", 18, 21).build()
        assert 18 <= person.age <= 21

    def test_with_int_single_bound(self):
        person = _person().with_int("age", 5).build()
        assert 0 <= person.age <= 5

    def test_with_double(self):
        person = _person().with_double("height", 1.5, 2.0).build()
        assert 1.5 <= person.height <= 2.0

    def test_with_property_type(self):
        person = _person().with_property_type("name", PropertyType.EMAIL).build()
        assert "@" in person.name

    def test_with_list(self):
        builder = _person()
        person = builder.with_list("previous_addresses", 4).build()

        assert len(person.previous_addresses) == 4
        assert all(a.city for a in person.previous_addresses)
        assert builder.configuration.default_collection_item_count == 2

    def test_with_list_rejects_scalars(self):
        with pytest.raises(PreconditionViolationError, match="not a list"):
            _person().with_list("name", 3)

    def test_with_action(self):
        person = _person().with_action(lambda p: p.tags.append("extra")).build()
        assert person.tags[-1] == "extra"

    def test_if_then(self):
        person = (
            _person()
            .if_(lambda p: p.age > 0)
            .then(lambda p: setattr(p, "name", "adult"))
            .build()
        )
        assert person.name == "adult"

    def test_if_then_skipped(self):
        person = (
            _person()
            .if_(lambda p: False)
            .then(lambda p: setattr(p, "name", "never"))
            .build()
        )
        assert person.name != "never"

    def test_unset_intermediate_raises(self):
        builder = _person(max_depth=1)
        assert builder.build().address is None

        with pytest.raises(PreconditionViolationError, match="address is not set"):
            builder.with_value("address.city", "Leeds")

    def test_override_before_construct(self):
        with pytest.raises(PreconditionViolationError):
            AutoBuilder(Person).with_value("name", "x")

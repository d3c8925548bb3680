"""Fluent builder: construct, populate, then override.

    person = (
        AutoBuilder(Person)
        .add_convention(ConventionFilterType.EXACT, "age", int, lambda c: 42)
        .construct()
        .with_value("address.postcode", "N1 9GU")
        .with_string(prop.nickname, 8, casing=Casing.UPPER)
        .build()
    )

A builder owns one ``PopulationConfig`` and one instance. It is not safe to
share between threads.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Generic, TypeVar, get_origin

from ..config import PopulationConfig
from ..core.errors import PreconditionViolationError, UnsupportedTypeError
from ..core.introspection import (
    array_element_type,
    describe,
    get_settable_properties,
    is_abstract,
    list_element_type,
    normalize_annotation,
    optional_inner,
)
from ..core.models.conventions import ConventionMap
from ..core.models.enums import (
    CharacterSetType,
    Casing,
    ConventionFilterType,
    PropertyType,
    Spaces,
)
from ..population.service import PropertyPopulationService
from ..utils.serialization import to_json
from .overrides import OverridePath, PathRecorder

logger = logging.getLogger(__name__)

TModel = TypeVar("TModel")

PathLike = str | OverridePath | PathRecorder


class AutoBuilder(Generic[TModel]):
    """Builds a populated instance of ``model_type``.

    Args:
        model_type: Class to build. ``list[T]`` and ``tuple[T, ...]`` build a
            collection of ``default_collection_item_count`` populated items.
        configuration: Settings for this builder; a fresh one by default.
        population_service: Walker to use; a fresh one by default.
    """

    def __init__(
        self,
        model_type: type[TModel],
        configuration: PopulationConfig | None = None,
        population_service: PropertyPopulationService | None = None,
    ):
        self.model_type = model_type
        self.configuration = configuration or PopulationConfig()
        self.population_service = population_service or PropertyPopulationService()
        self._entity: TModel | None = None
        self._constructed = False

    # ── Configuration (before construct) ──

    def clear_conventions(self) -> AutoBuilder[TModel]:
        self.configuration.conventions.clear()
        return self

    def clear_convention(self, filter: str, type: Any) -> AutoBuilder[TModel]:
        self.configuration.conventions.remove(filter, type)
        return self

    def add_convention(
        self,
        filter_type: ConventionFilterType | ConventionMap,
        filter: str | None = None,
        type: Any = None,
        result: Callable[[PopulationConfig], Any] | None = None,
    ) -> AutoBuilder[TModel]:
        """Register a convention, either as a ``ConventionMap`` or its four parts."""
        if isinstance(filter_type, ConventionMap):
            self.configuration.conventions.add(filter_type)
        else:
            if filter is None or result is None:
                raise ValueError("add_convention needs a filter and a result factory")
            self.configuration.conventions.add_convention(
                filter_type, filter, type, result
            )
        return self

    def add_conventions(self, *convention_maps: ConventionMap) -> AutoBuilder[TModel]:
        self.configuration.conventions.add_many(convention_maps)
        return self

    def configure(
        self, configure: Callable[[PopulationConfig], None]
    ) -> AutoBuilder[TModel]:
        configure(self.configuration)
        return self

    # ── Construction ──

    def construct(self, *args: Any, **kwargs: Any) -> AutoBuilder[TModel]:
        """Instantiate the model and populate its whole object graph.

        Arguments, when given, are passed to the constructor verbatim.
        Otherwise required constructor arguments are synthesized.

        Raises:
            UnsupportedTypeError: If the model type is abstract or a protocol.
            InvalidConstraintError: If a property declares contradictory lengths.
        """
        model_type = self.model_type
        if inspect.isclass(model_type) and is_abstract(model_type):
            raise UnsupportedTypeError(
                f"Can't instantiate abstract class or protocol {model_type.__name__}"
            )

        self._entity = None
        self._constructed = False
        service = self.population_service
        service.add_configuration(self.configuration)

        element_type = array_element_type(model_type)
        if element_type is not None and not (args or kwargs):
            entity = self._construct_collection(element_type)
        else:
            entity = service.create_instance(model_type, 1, args, kwargs)
            entity = service.populate_properties(entity, 1)

        self._entity = entity
        self._constructed = True
        logger.debug("Constructed %s", getattr(model_type, "__name__", model_type))
        return self

    def _construct_collection(self, element_type: Any) -> Any:
        descriptor = describe("item", element_type)
        items = [
            self.population_service.populate_property(
                1, "item", element_type, None, descriptor
            )
            for _ in range(self.configuration.default_collection_item_count)
        ]
        if get_origin(self.model_type) is tuple:
            return tuple(items)
        return items

    # ── Overrides (after construct) ──

    def _require_entity(self) -> TModel:
        if not self._constructed:
            raise PreconditionViolationError(
                "construct() must be called before overrides or build()"
            )
        return self._entity

    def with_action(self, action: Callable[[TModel], Any]) -> AutoBuilder[TModel]:
        action(self._require_entity())
        return self

    def with_value(self, path: PathLike, value: Any) -> AutoBuilder[TModel]:
        """Set the property at ``path``; a callable ``value`` is called for it."""
        if callable(value):
            value = value()
        OverridePath.of(path).apply(self._require_entity(), value)
        return self

    def with_property_type(
        self, path: PathLike, property_type: PropertyType
    ) -> AutoBuilder[TModel]:
        generator = self.configuration.generator
        language = self.configuration.default_language
        return self.with_value(
            path, lambda: generator.random_property_type(property_type, language)
        )

    def with_string(
        self,
        path: PathLike,
        length: int | None = None,
        *,
        min_length: int | None = None,
        max_length: int | None = None,
        character_set: CharacterSetType = CharacterSetType.ALPHA,
        spaces: Spaces = Spaces.NONE,
        casing: Casing = Casing.ANY,
    ) -> AutoBuilder[TModel]:
        """Random string of exactly ``length`` chars, or within min/max length."""
        if length is not None:
            min_length = max_length = length
        if min_length is None or max_length is None:
            raise ValueError("with_string needs a length or both min_length and max_length")
        generator = self.configuration.generator
        language = self.configuration.default_language
        return self.with_value(
            path,
            lambda: generator.random_string(
                min_length, max_length, character_set, spaces, casing, language
            ),
        )

    def with_int(
        self, path: PathLike, minimum: int, maximum: int | None = None
    ) -> AutoBuilder[TModel]:
        """Random int in ``[minimum, maximum]``, or ``[0, minimum]`` with one bound."""
        generator = self.configuration.generator
        return self.with_value(path, lambda: generator.random_integer(minimum, maximum))

    def with_double(
        self, path: PathLike, minimum: float, maximum: float
    ) -> AutoBuilder[TModel]:
        generator = self.configuration.generator
        return self.with_value(path, lambda: generator.random_double(minimum, maximum))

    def with_list(
        self, path: PathLike, number_of_items: int = 2
    ) -> AutoBuilder[TModel]:
        """Re-populate the list at ``path`` with ``number_of_items`` fresh items."""
        override = OverridePath.of(path)
        owner = override.locate_owner(self._require_entity())
        name = override.leaf.name
        descriptor = next(
            (d for d in get_settable_properties(type(owner)) if d.name == name), None
        )
        list_type = normalize_annotation(descriptor.type) if descriptor else None
        list_type = optional_inner(list_type) or list_type
        if list_type is None or list_element_type(list_type) is None:
            raise PreconditionViolationError(f"{override} is not a list property")

        config = self.configuration
        saved_count = config.default_collection_item_count
        config.default_collection_item_count = number_of_items
        try:
            items = self.population_service.list_service.populate(
                name,
                list_type,
                getattr(owner, name, None),
                len(override.steps),
                self.population_service.populate_property,
            )
        finally:
            config.default_collection_item_count = saved_count
        override.leaf.write(owner, items)
        return self

    def if_(self, predicate: Callable[[TModel], bool]) -> ConditionalResult[TModel]:
        """Apply the following ``then`` action only when ``predicate`` holds now."""
        entity = self._require_entity()
        return ConditionalResult(self, entity, bool(predicate(entity)))

    # ── Results ──

    def build(self) -> TModel:
        return self._require_entity()

    def to_json(self, indent: int | None = None) -> str:
        return to_json(self._require_entity(), indent=indent)


class ConditionalResult(Generic[TModel]):
    """Result of ``AutoBuilder.if_``."""

    def __init__(self, builder: AutoBuilder[TModel], entity: TModel, matched: bool):
        self.builder = builder
        self.entity = entity
        self.matched = matched

    def then(self, action: Callable[[TModel], Any]) -> AutoBuilder[TModel]:
        if self.matched:
            action(self.entity)
        return self.builder

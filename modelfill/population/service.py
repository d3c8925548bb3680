"""Property population service: the depth-bounded object-graph walker.

For each settable property of an instance the service resolves, in order:
1. a value already present on the instance (kept as is)
2. a matching convention
3. an attribute-derived convention (strings only)
4. a bounded random value

Nested model types are constructed and walked at ``depth + 1``; lists are
handed to the list strategy with a callback that re-enters
``populate_property``. Nothing is constructed or walked once ``depth``
reaches ``max_depth``, which is what makes cyclic model graphs terminate.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from ..core.errors import UnsupportedTypeError
from ..core.introspection import (
    ConstructorParameter,
    get_constructor_parameters,
    get_settable_properties,
    is_abstract,
    is_enum_type,
    is_model_type,
    list_element_type,
    normalize_annotation,
    optional_inner,
)
from ..core.models.annotations import Byte
from ..core.models.descriptors import PropertyDescriptor
from .annotations import DataAnnotationConventionMapper
from .lists import PopulateListService
from .synthesizers import (
    PopulateBoolService,
    PopulateByteService,
    PopulateDateService,
    PopulateDateTimeService,
    PopulateDecimalService,
    PopulateDoubleService,
    PopulateEnumService,
    PopulateIntService,
    PopulateNullableDoubleService,
    PopulateNullableIntService,
    PopulateNullableStringService,
    PopulateProperty,
    PopulateStringService,
    PopulateUuidService,
)

if TYPE_CHECKING:
    from ..config import PopulationConfig

logger = logging.getLogger(__name__)


class PropertyPopulationService:
    """Populates model instances property by property."""

    def __init__(
        self,
        list_service: PopulateListService | None = None,
        annotation_mapper: DataAnnotationConventionMapper | None = None,
    ):
        self.annotation_mapper = annotation_mapper or DataAnnotationConventionMapper()
        self.list_service = list_service or PopulateListService()
        self._config: PopulationConfig | None = None

        synthesizers: list[PopulateProperty] = [
            PopulateIntService(),
            PopulateNullableIntService(),
            PopulateDoubleService(),
            PopulateNullableDoubleService(),
            PopulateByteService(),
            PopulateStringService(annotation_mapper=self.annotation_mapper),
            PopulateNullableStringService(annotation_mapper=self.annotation_mapper),
            PopulateBoolService(),
            PopulateBoolService(Optional[bool], nullable=True),
            PopulateDecimalService(),
            PopulateDecimalService(Optional[Decimal], nullable=True),
            PopulateDateTimeService(),
            PopulateDateTimeService(Optional[datetime], nullable=True),
            PopulateDateService(),
            PopulateDateService(Optional[date], nullable=True),
            PopulateUuidService(),
            PopulateUuidService(Optional[uuid.UUID], nullable=True),
            PopulateByteService(Optional[Byte], nullable=True),
        ]
        self._synthesizers: dict[Any, PopulateProperty] = {
            s.type: s for s in synthesizers
        }

    # ── Configuration ──

    @property
    def config(self) -> PopulationConfig:
        if self._config is None:
            raise RuntimeError("PropertyPopulationService has no configuration set")
        return self._config

    def add_configuration(self, config: PopulationConfig) -> None:
        self._config = config
        self.list_service.set_configuration(config)
        for synthesizer in self._synthesizers.values():
            synthesizer.set_configuration(config)

    def _synthesizer_for(self, annotation: Any) -> PopulateProperty | None:
        synthesizer = self._synthesizers.get(annotation)
        if synthesizer is not None:
            return synthesizer

        inner = optional_inner(annotation)
        enum_type = inner if inner is not None else annotation
        if is_enum_type(enum_type):
            synthesizer = PopulateEnumService(enum_type, nullable=inner is not None)
            synthesizer.set_configuration(self.config)
            self._synthesizers[annotation] = synthesizer
            return synthesizer
        return None

    # ── Walking ──

    def populate_properties(self, instance: Any, depth: int) -> Any:
        """Populate every settable property of ``instance`` in place."""
        for descriptor in get_settable_properties(type(instance)):
            existing = getattr(instance, descriptor.name, None)
            current = existing
            # A list default declared on a plain class is shared by every
            # instance; fill a copy owned by this one.
            if isinstance(existing, list) and existing is getattr(
                type(instance), descriptor.name, None
            ):
                current = list(existing)
            value = self.populate_property(
                depth, descriptor.name, descriptor.type, current, descriptor
            )
            if value is not existing:
                setattr(instance, descriptor.name, value)
        return instance

    def populate_property(
        self,
        depth: int,
        property_name: str,
        annotation: Any,
        current_value: Any,
        descriptor: PropertyDescriptor | None = None,
    ) -> Any:
        """Resolve one property's value. Returns ``current_value`` when nothing applies."""
        annotation = normalize_annotation(annotation)

        synthesizer = self._synthesizer_for(annotation)
        if synthesizer is not None:
            return synthesizer.populate(property_name, current_value, descriptor)

        target = optional_inner(annotation) or annotation

        if list_element_type(target) is not None:
            return self._populate_list(
                depth, property_name, annotation, target, current_value
            )

        if is_model_type(target):
            return self._populate_model(
                depth, property_name, annotation, target, current_value
            )

        logger.debug(
            "No synthesizer for property %r of type %r, leaving it unchanged",
            property_name,
            annotation,
        )
        return current_value

    def _populate_list(
        self,
        depth: int,
        property_name: str,
        annotation: Any,
        list_type: Any,
        current_value: Any,
    ) -> Any:
        element = normalize_annotation(list_element_type(list_type))
        element = optional_inner(element) or element
        # Model elements are built one level further down.
        cutoff = depth + 1 if is_model_type(element) else depth
        if cutoff >= self.config.max_depth:
            logger.debug("Max depth %d reached at list %r", depth, property_name)
            return current_value

        # An empty list is the default value, so conventions still apply to it.
        if not current_value:
            conventions = self.config.conventions
            if conventions.matches(property_name, annotation):
                return conventions.resolve(property_name, annotation, self.config)

        return self.list_service.populate(
            property_name, list_type, current_value, depth + 1, self.populate_property
        )

    def _populate_model(
        self,
        depth: int,
        property_name: str,
        annotation: Any,
        model_type: type,
        current_value: Any,
    ) -> Any:
        if depth >= self.config.max_depth:
            logger.debug("Max depth %d reached at property %r", depth, property_name)
            return current_value

        if current_value is not None:
            return self.populate_properties(current_value, depth + 1)

        conventions = self.config.conventions
        if conventions.matches(property_name, annotation):
            return conventions.resolve(property_name, annotation, self.config)

        instance = self.create_instance(model_type, depth + 1)
        return self.populate_properties(instance, depth + 1)

    # ── Construction ──

    def create_instance(
        self,
        model_type: type,
        depth: int,
        args: tuple = (),
        kwargs: dict[str, Any] | None = None,
    ) -> Any:
        """Instantiate ``model_type``.

        Explicit arguments are used verbatim. Without them, required
        constructor parameters are synthesized at ``depth``.

        Raises:
            UnsupportedTypeError: For abstract classes and protocols.
        """
        if is_abstract(model_type):
            raise UnsupportedTypeError(
                f"Can't instantiate abstract class or protocol {model_type.__name__}"
            )

        if args or kwargs:
            return model_type(*args, **(kwargs or {}))

        parameters = get_constructor_parameters(model_type)
        if not parameters:
            return model_type()

        positional, keyword = self.build_constructor_parameters(parameters, depth)
        logger.debug(
            "Synthesized %d constructor argument(s) for %s",
            len(parameters),
            model_type.__name__,
        )
        return model_type(*positional, **keyword)

    def build_constructor_parameters(
        self, parameters: list[ConstructorParameter], depth: int
    ) -> tuple[list[Any], dict[str, Any]]:
        """One synthesized value per required parameter, split by call style."""
        positional: list[Any] = []
        keyword: dict[str, Any] = {}
        for parameter in parameters:
            descriptor = parameter.descriptor
            value = self.populate_property(
                depth, descriptor.name, descriptor.type, None, descriptor
            )
            if parameter.positional_only:
                positional.append(value)
            else:
                keyword[descriptor.name] = value
        return positional, keyword

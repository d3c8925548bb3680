"""List population strategy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from ..core.introspection import describe, list_element_type, unwrap_annotated
from ..core.models.descriptors import PropertyDescriptor

if TYPE_CHECKING:
    from ..config import PopulationConfig

logger = logging.getLogger(__name__)

# (depth, property_name, element_type, current_element, descriptor) -> element
PopulateCallback = Callable[[int, str, Any, Any, PropertyDescriptor | None], Any]


class PopulateListService:
    """Fills a list with exactly ``default_collection_item_count`` elements."""

    def __init__(self) -> None:
        self._config: PopulationConfig | None = None

    def set_configuration(self, config: PopulationConfig) -> None:
        self._config = config

    def populate(
        self,
        property_name: str,
        list_type: Any,
        existing: list | None,
        depth: int,
        populate: PopulateCallback,
    ) -> list:
        """Populate ``existing`` in place, or a new list when it is None.

        Existing elements are dropped: the result always holds exactly the
        configured number of freshly populated elements.
        """
        if self._config is None:
            raise RuntimeError("PopulateListService has no configuration set")

        element_type = list_element_type(list_type)
        if element_type is None:
            raise TypeError(f"Not a list type: {list_type!r}")
        element_descriptor = describe(property_name, element_type)
        element_type, _ = unwrap_annotated(element_type)

        items = existing if existing is not None else []
        items.clear()
        for _ in range(self._config.default_collection_item_count):
            items.append(
                populate(depth, property_name, element_type, None, element_descriptor)
            )

        logger.debug("Populated list %r with %d items", property_name, len(items))
        return items

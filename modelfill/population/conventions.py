"""Convention registry.

Conventions are evaluated in registration order and the first rule whose
type equals the property type and whose filter matches the property name
wins. Add / remove / clear are configuration-time operations: mutating the
registry while a population pass is running is unsupported.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator

from ..core.introspection import normalize_annotation
from ..core.models.conventions import ConventionMap
from ..core.models.enums import ConventionFilterType

if TYPE_CHECKING:
    from ..config import PopulationConfig

logger = logging.getLogger(__name__)


class Conventions:
    """Ordered collection of ``ConventionMap`` rules."""

    def __init__(self, maps: Iterable[ConventionMap] | None = None):
        self._maps: list[ConventionMap] = list(maps or [])

    def __iter__(self) -> Iterator[ConventionMap]:
        return iter(self._maps)

    def __len__(self) -> int:
        return len(self._maps)

    def __repr__(self) -> str:
        return f"Conventions({self._maps!r})"

    # ── Mutators ──

    def add(self, convention_map: ConventionMap) -> None:
        self._maps.append(convention_map)

    def add_convention(
        self,
        filter_type: ConventionFilterType,
        filter: str,
        type: Any,
        result: Callable[[PopulationConfig], Any],
    ) -> ConventionMap:
        convention_map = ConventionMap(filter_type, filter, type, result)
        self.add(convention_map)
        return convention_map

    def add_many(self, convention_maps: Iterable[ConventionMap]) -> None:
        self._maps.extend(convention_maps)

    def remove(self, filter: str, type: Any) -> bool:
        """Remove the first rule with this filter (any case) and type.

        Returns True if one was found.
        """
        type = normalize_annotation(type)
        for i, convention_map in enumerate(self._maps):
            if convention_map.filter.lower() == filter.lower() and (
                normalize_annotation(convention_map.type) == type
            ):
                del self._maps[i]
                return True
        return False

    def clear(self) -> None:
        self._maps.clear()

    # ── Lookup ──

    def find(self, property_name: str, type: Any) -> ConventionMap | None:
        type = normalize_annotation(type)
        for convention_map in self._maps:
            if normalize_annotation(
                convention_map.type
            ) == type and convention_map.matches_name(property_name):
                return convention_map
        return None

    def matches(self, property_name: str, type: Any) -> bool:
        return self.find(property_name, type) is not None

    def resolve(self, property_name: str, type: Any, config: PopulationConfig) -> Any:
        """Invoke the winning rule's factory.

        Raises:
            LookupError: If no rule matches (callers check ``matches`` first).
        """
        convention_map = self.find(property_name, type)
        if convention_map is None:
            raise LookupError(
                f"No convention matches property {property_name!r} of type {type!r}"
            )
        logger.debug(
            "Convention %s %r matched property %r",
            convention_map.filter_type.value,
            convention_map.filter,
            property_name,
        )
        return convention_map.result(config)

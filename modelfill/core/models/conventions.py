"""Convention rules: property-name filter + type -> value factory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .enums import ConventionFilterType

if TYPE_CHECKING:
    from ...config import PopulationConfig


@dataclass
class ConventionMap:
    """One convention rule.

    ``result`` receives the active ``PopulationConfig`` and returns the value
    to assign. Any side effects inside it are the caller's business.
    """

    filter_type: ConventionFilterType
    filter: str
    type: Any
    result: Callable[[PopulationConfig], Any]

    def matches_name(self, property_name: str) -> bool:
        name = property_name.lower()
        pattern = self.filter.lower()
        if self.filter_type == ConventionFilterType.EXACT:
            return name == pattern
        if self.filter_type == ConventionFilterType.STARTS_WITH:
            return name.startswith(pattern)
        if self.filter_type == ConventionFilterType.ENDS_WITH:
            return name.endswith(pattern)
        if self.filter_type == ConventionFilterType.CONTAINS:
            return pattern in name
        raise ValueError(f"Unknown convention filter type: {self.filter_type!r}")

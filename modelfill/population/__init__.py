"""Recursive property population.

- conventions.py: ordered convention registry
- annotations.py: declared-constraint (attribute-derived) string generation
- synthesizers.py: per-kind value synthesizers
- lists.py: list population strategy
- service.py: the depth-bounded graph walker and constructor synthesis
"""

from .conventions import Conventions
from .annotations import DataAnnotationConventionMapper
from .synthesizers import (
    PopulateProperty,
    PopulateIntService,
    PopulateNullableIntService,
    PopulateDoubleService,
    PopulateNullableDoubleService,
    PopulateByteService,
    PopulateStringService,
    PopulateNullableStringService,
    PopulateBoolService,
    PopulateDecimalService,
    PopulateDateTimeService,
    PopulateDateService,
    PopulateUuidService,
    PopulateEnumService,
)
from .lists import PopulateListService
from .service import PropertyPopulationService

__all__ = [
    "Conventions",
    "DataAnnotationConventionMapper",
    "PopulateProperty",
    "PopulateIntService",
    "PopulateNullableIntService",
    "PopulateDoubleService",
    "PopulateNullableDoubleService",
    "PopulateByteService",
    "PopulateStringService",
    "PopulateNullableStringService",
    "PopulateBoolService",
    "PopulateDecimalService",
    "PopulateDateTimeService",
    "PopulateDateService",
    "PopulateUuidService",
    "PopulateEnumService",
    "PopulateListService",
    "PropertyPopulationService",
]

"""Model definitions for modelfill.

- enums.py: character sets, casing, spaces, languages, semantic kinds
- annotations.py: constraint markers used with ``typing.Annotated``
- descriptors.py: PropertyDescriptor and DeclaredConstraints
- conventions.py: ConventionMap rules
"""

from .enums import (
    CharacterSetType,
    Spaces,
    Casing,
    Language,
    PropertyType,
    DataType,
    ConventionFilterType,
)
from .annotations import (
    Byte,
    MinLength,
    MaxLength,
    StringLength,
    DataTypeOf,
)
from .descriptors import DeclaredConstraints, PropertyDescriptor
from .conventions import ConventionMap

__all__ = [
    # Enums
    "CharacterSetType",
    "Spaces",
    "Casing",
    "Language",
    "PropertyType",
    "DataType",
    "ConventionFilterType",
    # Markers
    "Byte",
    "MinLength",
    "MaxLength",
    "StringLength",
    "DataTypeOf",
    # Descriptors
    "DeclaredConstraints",
    "PropertyDescriptor",
    # Conventions
    "ConventionMap",
]

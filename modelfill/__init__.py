"""modelfill: populate arbitrary model objects with synthetic test data."""

__version__ = "0.1.0"

from .config import PopulationConfig
from .core.errors import (
    ModelFillError,
    UnsupportedTypeError,
    InvalidConstraintError,
    PreconditionViolationError,
)
from .core.models import (
    CharacterSetType,
    Spaces,
    Casing,
    Language,
    PropertyType,
    DataType,
    ConventionFilterType,
    ConventionMap,
    Byte,
    MinLength,
    MaxLength,
    StringLength,
    DataTypeOf,
)
from .core.randomizers import RandomValueGenerator
from .builder import AutoBuilder, OverridePath, prop

__all__ = [
    "__version__",
    "PopulationConfig",
    "RandomValueGenerator",
    "AutoBuilder",
    "OverridePath",
    "prop",
    # Errors
    "ModelFillError",
    "UnsupportedTypeError",
    "InvalidConstraintError",
    "PreconditionViolationError",
    # Models
    "CharacterSetType",
    "Spaces",
    "Casing",
    "Language",
    "PropertyType",
    "DataType",
    "ConventionFilterType",
    "ConventionMap",
    "Byte",
    "MinLength",
    "MaxLength",
    "StringLength",
    "DataTypeOf",
]

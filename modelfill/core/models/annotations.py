"""Constraint markers a model attaches to its properties with ``Annotated``.

    class Contact:
        email: Annotated[str, DataTypeOf(DataType.EMAIL_ADDRESS)]
        code: Annotated[str, StringLength(10, minimum_length=4)]
        notes: Annotated[str, MinLength(500), MaxLength(1000)]

pydantic ``Field(min_length=..., max_length=...)`` constraints are read as
``MinLength`` / ``MaxLength`` as well (see ``core.introspection``).
"""

from dataclasses import dataclass
from typing import NewType

from .enums import DataType


# Small positive integer kind, generated in a fixed 1..255 range.
Byte = NewType("Byte", int)


@dataclass(frozen=True)
class MinLength:
    length: int


@dataclass(frozen=True)
class MaxLength:
    length: int


@dataclass(frozen=True)
class StringLength:
    """Combined length range; ``maximum_length == 0`` means "min + 50"."""

    maximum_length: int = 0
    minimum_length: int = 0


@dataclass(frozen=True)
class DataTypeOf:
    data_type: DataType

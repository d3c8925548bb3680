"""Property descriptors derived from model type metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import annotated_types

from .annotations import DataTypeOf, MaxLength, MinLength, StringLength
from .enums import DataType


@dataclass(frozen=True)
class DeclaredConstraints:
    """Constraints declared on one property. All fields are optional."""

    data_type: DataType | None = None
    min_length: int | None = None
    max_length: int | None = None
    string_length: StringLength | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.data_type is None
            and self.min_length is None
            and self.max_length is None
            and self.string_length is None
        )

    @classmethod
    def from_metadata(cls, metadata: list[Any] | tuple[Any, ...]) -> DeclaredConstraints:
        """Collect known markers from ``Annotated`` extras or pydantic metadata.

        Unknown items are ignored. When a marker repeats, the last one wins.
        """
        data_type = None
        min_length = None
        max_length = None
        string_length = None

        for item in metadata:
            if isinstance(item, DataTypeOf):
                data_type = item.data_type
            elif isinstance(item, MinLength):
                min_length = item.length
            elif isinstance(item, MaxLength):
                max_length = item.length
            elif isinstance(item, StringLength):
                string_length = item
            # pydantic Field(min_length=..., max_length=...) lands here
            elif isinstance(item, annotated_types.Len):
                if item.min_length > 0:
                    min_length = item.min_length
                if item.max_length is not None:
                    max_length = item.max_length
            elif isinstance(item, annotated_types.MinLen):
                min_length = item.min_length
            elif isinstance(item, annotated_types.MaxLen):
                max_length = item.max_length

        return cls(
            data_type=data_type,
            min_length=min_length,
            max_length=max_length,
            string_length=string_length,
        )


@dataclass(frozen=True)
class PropertyDescriptor:
    """A settable property: name, declared type and declared constraints."""

    name: str
    type: Any
    constraints: DeclaredConstraints = field(default_factory=DeclaredConstraints)
    owner: type | None = None

"""Type introspection for model classes.

Answers two questions for the population engine:
- which properties of a type can be set, with their declared types and
  constraints (``get_settable_properties``)
- which constructor arguments a type requires (``get_constructor_parameters``)

Plain classes, dataclasses and pydantic models are supported. Constraints
come from ``typing.Annotated`` extras, or from pydantic field metadata.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
import typing
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Optional, Union, get_args, get_origin

from pydantic import BaseModel

from .models.descriptors import DeclaredConstraints, PropertyDescriptor

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)

# Leaf types that are synthesized directly rather than walked into.
LEAF_TYPES: tuple[type, ...] = (
    str,
    bytes,
    int,
    float,
    bool,
    complex,
    Decimal,
    datetime,
    date,
    uuid.UUID,
)

_SEQUENCE_ORIGINS = {list, typing.List}


@dataclass(frozen=True)
class ConstructorParameter:
    """One required constructor argument."""

    descriptor: PropertyDescriptor
    positional_only: bool = False


# =============================================================================
# Annotation helpers
# =============================================================================


def unwrap_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, *extras]`` into ``(T, extras)``."""
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        return base, tuple(extras)
    return annotation, ()


def optional_inner(annotation: Any) -> Any | None:
    """Return ``T`` for ``Optional[T]`` / ``T | None``, else None."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not _NONE_TYPE]
        if len(args) == 1 and len(get_args(annotation)) == 2:
            return args[0]
    return None


def list_element_type(annotation: Any) -> Any | None:
    """Return the element type of ``list[T]`` (``Any`` when bare), else None."""
    if annotation in _SEQUENCE_ORIGINS:
        return Any
    if get_origin(annotation) in _SEQUENCE_ORIGINS:
        args = get_args(annotation)
        return args[0] if args else Any
    return None


def normalize_annotation(annotation: Any) -> Any:
    """Strip ``Annotated`` at both levels of ``Optional[Annotated[T, ...]]``
    and spell ``T | None`` as ``Optional[T]``.
    """
    annotation, _ = unwrap_annotated(annotation)
    inner = optional_inner(annotation)
    if inner is not None:
        inner, _ = unwrap_annotated(inner)
        return Optional[inner]
    return annotation


def array_element_type(annotation: Any) -> Any | None:
    """Return ``T`` for root collection types ``list[T]`` and ``tuple[T, ...]``."""
    element = list_element_type(annotation)
    if element is not None:
        return element
    if get_origin(annotation) is tuple:
        args = get_args(annotation)
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
    return None


def is_enum_type(annotation: Any) -> bool:
    return inspect.isclass(annotation) and issubclass(annotation, Enum)


def is_model_type(annotation: Any) -> bool:
    """True for user-defined classes the walker should recurse into."""
    if annotation is Any or not inspect.isclass(annotation):
        return False
    if annotation.__module__ in ("builtins", "typing"):
        return False
    if issubclass(annotation, LEAF_TYPES) or is_enum_type(annotation):
        return False
    return True


def is_abstract(cls: type) -> bool:
    """Abstract classes and ``typing.Protocol`` types cannot be instantiated."""
    return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))


def describe(
    name: str, annotation: Any, owner: type | None = None, metadata: tuple = ()
) -> PropertyDescriptor:
    """Build a descriptor, lifting any ``Annotated`` extras into constraints.

    Extras on the inner type of ``Optional[Annotated[T, ...]]`` count too.
    """
    base, extras = unwrap_annotated(annotation)
    inner = optional_inner(base)
    if inner is not None:
        inner, inner_extras = unwrap_annotated(inner)
        if inner_extras:
            base = Optional[inner]
            extras = (*extras, *inner_extras)
    constraints = DeclaredConstraints.from_metadata((*metadata, *extras))
    return PropertyDescriptor(name=name, type=base, constraints=constraints, owner=owner)


def _type_hints(target: Any, owner: type) -> dict[str, Any]:
    localns = {owner.__name__: owner}
    try:
        return typing.get_type_hints(target, localns=localns, include_extras=True)
    except (NameError, TypeError) as exc:
        logger.debug("Could not resolve type hints for %r: %s", target, exc)
        return dict(getattr(target, "__annotations__", {}))


# =============================================================================
# Settable properties
# =============================================================================


def _pydantic_properties(cls: type[BaseModel]) -> list[PropertyDescriptor]:
    return [
        describe(name, info.annotation, cls, tuple(info.metadata))
        for name, info in cls.model_fields.items()
    ]


def _dataclass_properties(cls: type) -> list[PropertyDescriptor]:
    hints = _type_hints(cls, cls)
    return [
        describe(f.name, hints.get(f.name, f.type), cls)
        for f in dataclasses.fields(cls)
    ]


def _class_properties(cls: type) -> list[PropertyDescriptor]:
    hints = _type_hints(cls, cls)
    descriptors = []
    for name, annotation in hints.items():
        if name.startswith("_") or get_origin(annotation) is ClassVar:
            continue
        if annotation is ClassVar:
            continue
        descriptors.append(describe(name, annotation, cls))

    seen = {d.name for d in descriptors}
    for name, member in inspect.getmembers(cls, lambda m: isinstance(m, property)):
        if name.startswith("_") or name in seen or member.fset is None:
            continue
        returns = _type_hints(member.fget, cls).get("return", Any)
        descriptors.append(describe(name, returns, cls))
    return descriptors


def _is_frozen(cls: type) -> bool:
    if dataclasses.is_dataclass(cls):
        return cls.__dataclass_params__.frozen
    if issubclass(cls, BaseModel):
        return bool(cls.model_config.get("frozen"))
    return False


def get_settable_properties(cls: type) -> list[PropertyDescriptor]:
    """Enumerate settable properties of ``cls`` in declaration order.

    Frozen dataclasses and frozen pydantic models have none: their values
    can only arrive through the constructor.
    """
    if _is_frozen(cls):
        return []
    if issubclass(cls, BaseModel):
        return _pydantic_properties(cls)
    if dataclasses.is_dataclass(cls):
        return _dataclass_properties(cls)
    return _class_properties(cls)


# =============================================================================
# Constructors
# =============================================================================


def _all_declared(cls: type) -> dict[str, PropertyDescriptor]:
    if issubclass(cls, BaseModel):
        return {d.name: d for d in _pydantic_properties(cls)}
    if dataclasses.is_dataclass(cls):
        return {d.name: d for d in _dataclass_properties(cls)}
    return {d.name: d for d in _class_properties(cls)}


def get_constructor_parameters(cls: type) -> list[ConstructorParameter]:
    """Required parameters of ``cls.__init__`` (no default, not *args/**kwargs)."""
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return []

    declared = _all_declared(cls)
    init_hints = _type_hints(cls.__init__, cls)

    params = []
    for param in signature.parameters.values():
        if param.default is not inspect.Parameter.empty:
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue

        if param.name in declared:
            descriptor = declared[param.name]
        else:
            annotation = init_hints.get(param.name, param.annotation)
            if annotation is inspect.Parameter.empty:
                annotation = Any
            descriptor = describe(param.name, annotation, cls)

        params.append(
            ConstructorParameter(
                descriptor=descriptor,
                positional_only=param.kind == param.POSITIONAL_ONLY,
            )
        )
    return params

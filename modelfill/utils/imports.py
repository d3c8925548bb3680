"""Resolve ``package.module:Name`` references to objects."""

import importlib
from typing import Any


def import_object(reference: str) -> Any:
    """Import ``package.module:Attr`` (or ``package.module.Attr``).

    Raises:
        ValueError: If the reference is malformed.
        ImportError / AttributeError: If the module or attribute is missing.
    """
    if ":" in reference:
        module_name, _, attr_path = reference.partition(":")
    else:
        module_name, _, attr_path = reference.rpartition(".")
    if not module_name or not attr_path:
        raise ValueError(
            f"Invalid reference: {reference!r}. "
            f"Expected format: 'package.module:ClassName'"
        )

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj

"""Pure utility functions for modelfill.

Modules:
- serialization: JSON rendering of populated object graphs
- imports: resolving ``package.module:Name`` references
"""

from .serialization import to_json, to_jsonable
from .imports import import_object

__all__ = [
    "to_json",
    "to_jsonable",
    "import_object",
]

"""Fluent builder and override paths."""

from .auto_builder import AutoBuilder, ConditionalResult
from .overrides import OverridePath, PathRecorder, PathStep, prop

__all__ = [
    "AutoBuilder",
    "ConditionalResult",
    "OverridePath",
    "PathRecorder",
    "PathStep",
    "prop",
]

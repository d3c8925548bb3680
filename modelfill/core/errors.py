"""Errors raised while building and populating models.

All of them are fatal for the build in progress. Nothing here is retried:
every condition is a deterministic function of the model type, its declared
constraints, or the override path the caller supplied.
"""


class ModelFillError(Exception):
    """Base class for all modelfill errors."""

    pass


class UnsupportedTypeError(ModelFillError, TypeError):
    """Raised when a model type cannot be instantiated (abstract or protocol)."""

    pass


class InvalidConstraintError(ModelFillError, ValueError):
    """Raised when a declared maximum length is smaller than the minimum."""

    pass


class PreconditionViolationError(ModelFillError):
    """Raised when an override path crosses an unset intermediate value."""

    pass

"""Command line interface for modelfill."""

from .app import app

__all__ = ["app"]

"""CLI commands for modelfill."""

from . import build, config_cmd

__all__ = ["build", "config_cmd"]

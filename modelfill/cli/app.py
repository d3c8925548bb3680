"""Core CLI app definition."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="modelfill",
    help="Build model instances filled with synthetic test data.",
    no_args_is_help=True,
)

console = Console()


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route modelfill logging through rich."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )
    logging.getLogger("modelfill").setLevel(level)
    # Faker is chatty at DEBUG.
    logging.getLogger("faker").setLevel(logging.WARNING)


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        print(f"modelfill {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
):
    """modelfill: synthetic object graphs for tests."""


# Import commands to register them with the app
from .commands import build, config_cmd  # noqa: E402, F401

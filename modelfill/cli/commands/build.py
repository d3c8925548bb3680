"""Build command: construct and print populated instances of a model."""

import logging

import typer
from rich.markup import escape

from ...builder import AutoBuilder
from ...config import PopulationConfig
from ...core.errors import ModelFillError
from ...core.randomizers import RandomValueGenerator
from ...utils import import_object, to_json
from ..app import app, console, setup_logging
from ..utils import ExitCode

logger = logging.getLogger(__name__)


@app.command("build")
def build_command(
    target: str = typer.Argument(
        ..., help="Model to build, as 'package.module:ClassName'"
    ),
    count: int = typer.Option(1, "--count", "-n", help="Number of instances"),
    depth: int | None = typer.Option(
        None, "--depth", "-d", help="Maximum nesting depth"
    ),
    items: int | None = typer.Option(
        None, "--items", help="Number of items in each generated list"
    ),
    seed: int | None = typer.Option(
        None, "--seed", help="Random seed for reproducibility"
    ),
    no_default_conventions: bool = typer.Option(
        False,
        "--no-default-conventions",
        help="Don't apply the built-in email/phone/name conventions",
    ),
    indent: int = typer.Option(2, "--indent", help="JSON indentation"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Info logging"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
):
    """
    Build COUNT populated instances of TARGET and print them as JSON.

    EXIT CODES:
        0 = Success
        1 = Build error
        3 = Target not found
    """
    setup_logging(verbose=verbose, debug=debug)

    try:
        model_type = import_object(target)
    except (ImportError, AttributeError, ValueError) as e:
        console.print(f"[red]✗[/red] Cannot load {escape(target)}: {escape(str(e))}")
        raise typer.Exit(ExitCode.TARGET_NOT_FOUND)

    generator = RandomValueGenerator(seed=seed)
    results = []
    for _ in range(count):
        config = PopulationConfig.load()
        config.generator = generator
        if no_default_conventions:
            config.conventions.clear()
        if depth is not None:
            config.max_depth = depth
        if items is not None:
            config.default_collection_item_count = items

        try:
            results.append(AutoBuilder(model_type, config).construct().build())
        except ModelFillError as e:
            console.print(f"[red]✗[/red] Build failed: {escape(str(e))}")
            raise typer.Exit(ExitCode.BUILD_ERROR)

    logger.info("Built %d instance(s) of %s", count, target)
    payload = results[0] if count == 1 else results
    console.print_json(to_json(payload), indent=indent)

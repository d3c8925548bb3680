"""Config command: show or persist population settings."""

import typer
from rich.markup import escape
from rich.table import Table

from ...config import CONFIG_FILE, PopulationConfig, apply_dict, coerce_setting
from ..app import app, console

config_app = typer.Typer(help="Show or persist population settings")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show():
    """Show the effective settings (defaults < config file < env vars)."""
    config = PopulationConfig.load()
    table = Table(title="Population settings")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in config.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)
    console.print(f"[dim]Config file: {CONFIG_FILE}[/dim]")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Setting name, e.g. max_depth"),
    value: str = typer.Argument(..., help="New value"),
):
    """Persist one setting to the config file."""
    try:
        new = coerce_setting(key, value)
    except KeyError:
        console.print(f"[red]Unknown key:[/red] {escape(key)}")
        raise typer.Exit(1)
    except ValueError:
        console.print(f"[red]Invalid value for {escape(key)}:[/red] {escape(value)}")
        raise typer.Exit(1)

    config = PopulationConfig.load()
    apply_dict(config, {key: new})
    config.save()
    console.print(f"[green]✓[/green] {key} = {config.to_dict()[key]}")

"""Registry inspection commands."""

import typer

from service_registry.cli.utils import console, load_target
from service_registry.cli.views import registry_ids, registry_table

app = typer.Typer(help="Inspect a wired registry", no_args_is_help=True)


@app.command("show")
def show(target: str = typer.Argument(..., help="Registry location, e.g. myapp.wiring:LISTENERS")):
    """Print every entry of a registry in lookup order."""
    registry = load_target(target)
    table = registry_table(registry)
    console.print(table)
    console.print(f"[green]Total entries: {len(registry)}[/green]")


@app.command("ids")
def ids(target: str = typer.Argument(..., help="Registry location, e.g. myapp.wiring:LISTENERS")):
    """Print the identifiers of a keyed registry, one per line."""
    registry = load_target(target)
    identifiers = registry_ids(registry)
    if identifiers is None:
        console.print(f"[red]Error: {type(registry).__name__} is not keyed by identifier[/red]")
        raise typer.Exit(1)

    for identifier in identifiers:
        console.print(identifier, highlight=False)

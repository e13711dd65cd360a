"""Main CLI application."""

import typer

from service_registry.cli.commands import inspect
from service_registry.cli.utils import configure_cli_logging

app = typer.Typer(
    name="service-registry",
    help="Service registry CLI - inspect registries assembled by wiring code",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(None, "--log-level", help="Override SERVICE_REGISTRY_LOG_LEVEL"),
):
    """Global options for all commands."""
    if log_level:
        configure_cli_logging(log_level)


# Register command groups
app.add_typer(inspect.app, name="inspect")

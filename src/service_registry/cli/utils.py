"""CLI utility functions shared across commands.

This module contains generic CLI utilities for:
- Logging setup
- Resolving ``module:attribute`` targets
- Console output
"""

import importlib
import sys
from typing import Any

import typer
from loguru import logger
from rich.console import Console

from service_registry.cli.views import is_registry
from service_registry.settings import LOG_LEVELS

console = Console()


def configure_cli_logging(log_level: str) -> None:
    """Configure loguru for CLI (compact format: level + message, no timestamps).

    Raises:
        typer.BadParameter: If the level is unknown
    """
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"Invalid log level: {log_level}. Must be one of: {', '.join(LOG_LEVELS)}")

    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | <level>{message}</level>",
        level=level,
        colorize=True,
    )
    logger.enable("service_registry")


def load_target(target: str) -> Any:
    """Import the object named by ``package.module:attribute``.

    A callable attribute that is not itself a registry is called without
    arguments and its return value is used.

    Raises:
        typer.Exit: If the target cannot be resolved
    """
    module_name, _, attribute_path = target.partition(":")
    if not module_name or not attribute_path:
        console.print(f"[red]Error: Target must look like 'package.module:attribute', got: {target}[/red]")
        raise typer.Exit(1)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        console.print(f"[red]Error: Cannot import module {module_name}: {e}[/red]")
        raise typer.Exit(1) from e

    for attribute in attribute_path.split("."):
        try:
            obj = getattr(obj, attribute)
        except AttributeError as e:
            console.print(f"[red]Error: {target} has no attribute {attribute}[/red]")
            raise typer.Exit(1) from e

    if callable(obj) and not is_registry(obj):
        logger.debug(f"Calling {target} to build the registry")
        obj = obj()

    if not is_registry(obj):
        console.print(f"[red]Error: {target} is not a registry: {type(obj).__name__}[/red]")
        raise typer.Exit(1)

    return obj

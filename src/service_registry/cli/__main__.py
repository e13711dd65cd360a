"""CLI entry point.

Usage:
    python -m service_registry.cli inspect show myapp.wiring:build_listeners
    service-registry inspect ids myapp.wiring:LISTENERS
"""

from service_registry.cli.app import app
from service_registry.cli.utils import configure_cli_logging
from service_registry.settings import get_settings


def main() -> None:
    """CLI entry point with logging configuration."""
    configure_cli_logging(get_settings().log_level)
    app()


if __name__ == "__main__":
    main()

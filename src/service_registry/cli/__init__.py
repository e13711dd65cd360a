"""CLI module for service-registry.

Provides developer tools for looking at registries built by wiring code.
"""

from service_registry.cli.app import app

__all__ = ["app"]

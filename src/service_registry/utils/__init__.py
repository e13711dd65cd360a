"""Utility functions for the service registries."""

from service_registry.utils.naming import object_id, type_name

__all__ = [
    "object_id",
    "type_name",
]

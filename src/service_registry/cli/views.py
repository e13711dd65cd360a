"""Rich renderings of registry contents."""

from typing import Any

from rich.table import Table

from service_registry.callables import CallableRegistry
from service_registry.identity import IdentityServiceRegistry
from service_registry.identity_prioritized import IdentityPrioritizedServiceRegistry
from service_registry.identity_single_prioritized import IdentitySinglePrioritizedServiceRegistry
from service_registry.prioritized import PrioritizedServiceRegistry
from service_registry.service import ServiceRegistry
from service_registry.service_method import ServiceMethodRegistry
from service_registry.utils.naming import object_id, type_name

REGISTRY_TYPES = (
    CallableRegistry,
    IdentityServiceRegistry,
    IdentityPrioritizedServiceRegistry,
    IdentitySinglePrioritizedServiceRegistry,
    PrioritizedServiceRegistry,
    ServiceRegistry,
    ServiceMethodRegistry,
)


def is_registry(obj: Any) -> bool:
    """Check whether ``obj`` is one of the registry types."""
    return isinstance(obj, REGISTRY_TYPES)


def registry_table(registry: Any) -> Table:
    """Build a table listing a registry's entries in lookup order.

    Raises:
        TypeError: If ``registry`` is not a registry
    """
    table = Table(title=f"{type(registry).__name__} ({registry.context})")

    if isinstance(registry, IdentityPrioritizedServiceRegistry):
        table.add_column("Group")
        table.add_column("#", justify="right")
        table.add_column("Service")
        for identifier in registry.get_available_ids():
            for position, service in enumerate(registry.get_items_by_id(identifier), start=1):
                table.add_row(identifier, str(position), object_id(service))
    elif isinstance(registry, PrioritizedServiceRegistry):
        table.add_column("#", justify="right")
        table.add_column("Service")
        for position, service in enumerate(registry.all(), start=1):
            table.add_row(str(position), object_id(service))
    elif isinstance(registry, IdentitySinglePrioritizedServiceRegistry):
        table.add_column("#", justify="right")
        table.add_column("Identifier")
        table.add_column("Service")
        for position, (identifier, service) in enumerate(registry.all(), start=1):
            table.add_row(str(position), identifier, type_name(service))
    elif isinstance(registry, ServiceMethodRegistry):
        table.add_column("Identifier")
        table.add_column("Callable")
        for identifier, entries in registry.all().items():
            for item in entries.values():
                table.add_row(identifier, item.describe())
    elif isinstance(registry, CallableRegistry):
        table.add_column("Identifier")
        table.add_column("Callable")
        for identifier, item in registry.all().items():
            table.add_row(identifier, item.describe())
    elif isinstance(registry, IdentityServiceRegistry):
        table.add_column("Identifier")
        table.add_column("Service")
        for identifier, service in registry.all().items():
            table.add_row(identifier, type_name(service))
    elif isinstance(registry, ServiceRegistry):
        table.add_column("Service")
        for service in registry.all():
            table.add_row(type_name(service))
    else:
        raise TypeError(f"Not a registry: {type(registry).__name__}")

    return table


def registry_ids(registry: Any) -> list[str] | None:
    """Return the identifiers of a keyed registry, or None if it has none."""
    if isinstance(registry, IdentityPrioritizedServiceRegistry):
        return registry.get_available_ids()
    if isinstance(registry, IdentitySinglePrioritizedServiceRegistry):
        return [identifier for identifier, _ in registry.all()]
    if isinstance(registry, IdentityServiceRegistry | ServiceMethodRegistry | CallableRegistry):
        return list(registry.all())
    return None

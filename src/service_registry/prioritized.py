"""Un-keyed registry of services ordered by priority.

Services are stored in registration order and sorted lazily: registering
marks the registry dirty and the next read re-sorts it in place. Python's
sort is stable, so services sharing a priority keep their registration
order. Removing a service never changes the relative order of the others,
so it does not mark the registry dirty.
"""

from collections.abc import Iterator
from typing import Generic, TypeVar

from loguru import logger

from service_registry.exceptions import EmptyRegistryError, ExistingServiceError, NonExistingServiceError
from service_registry.guard import Interface, InterfaceConstrained
from service_registry.models import PrioritizedItem
from service_registry.utils.naming import object_id, type_name


def sort_by_priority(items: list[PrioritizedItem]) -> list[PrioritizedItem]:
    """Sort items by descending priority, keeping the given order for ties."""
    # reverse=True preserves the original order of equal keys
    return sorted(items, key=lambda item: item.priority, reverse=True)

T = TypeVar("T")


class PrioritizedServiceRegistry(InterfaceConstrained, Generic[T]):
    """Registry of service instances, each with an integer priority.

    Membership is decided by object identity: two equal but distinct
    instances are two different members.

    Example:
        ```python
        registry = PrioritizedServiceRegistry(Middleware, context="middleware")
        registry.register(auth, priority=100)
        registry.register(gzip)
        for middleware in registry.all():
            ...
        ```
    """

    def __init__(self, interface: Interface | None = None, context: str | None = None):
        """Initialize an empty registry.

        Args:
            interface: Interface every registered service must implement
            context: Noun used in error messages
        """
        super().__init__(interface, context)
        self._registry: dict[int, PrioritizedItem] = {}
        self._sorted = True

    def register(self, service: T, priority: int = 0) -> None:
        """Register a service instance.

        Args:
            service: The service instance
            priority: Higher priorities come first

        Raises:
            InterfaceMismatchError: If the service does not implement the interface
            ExistingServiceError: If this instance is already registered
        """
        if self.has(service):
            raise ExistingServiceError.from_context_and_type(self.context, object_id(service))

        self._registry[id(service)] = PrioritizedItem(value=service, priority=priority)
        self._sorted = False
        logger.debug(f"Registered {self.context} {object_id(service)} with priority {priority}")

    def unregister(self, service: T) -> None:
        """Remove a service instance.

        Raises:
            InterfaceMismatchError: If the service does not implement the interface
            NonExistingServiceError: If the instance is not registered; the
                message lists the types of all current members
        """
        if not self.has(service):
            raise NonExistingServiceError.from_context_and_type(
                self.context,
                type_name(service),
                [type_name(item.value) for item in self._registry.values()],
            )

        del self._registry[id(service)]
        logger.debug(f"Unregistered {self.context} {object_id(service)}")

    def has(self, service: T) -> bool:
        """Check whether this exact instance is registered.

        Raises:
            InterfaceMismatchError: If the service does not implement the interface
        """
        self._assert_implements(service)
        return id(service) in self._registry

    def all(self) -> Iterator[T]:
        """Iterate services by descending priority.

        Each call returns a fresh iterator over the registry as it is now;
        later registrations do not affect an iterator already handed out.
        """
        items = self._sorted_items()
        return (item.value for item in items)

    def first(self) -> T:
        """Return the highest-priority service.

        Raises:
            EmptyRegistryError: If nothing is registered
        """
        items = self._sorted_items()
        if not items:
            raise EmptyRegistryError()
        return items[0].value

    def last(self) -> T:
        """Return the lowest-priority service.

        Raises:
            EmptyRegistryError: If nothing is registered
        """
        items = self._sorted_items()
        if not items:
            raise EmptyRegistryError()
        return items[-1].value

    def __len__(self) -> int:
        return len(self._registry)

    def _sorted_items(self) -> list[PrioritizedItem]:
        if not self._sorted:
            logger.trace(f"Sorting {len(self._registry)} {self.context} entries by priority")
            ordered = sort_by_priority(list(self._registry.values()))
            self._registry = {id(item.value): item for item in ordered}
            self._sorted = True

        return list(self._registry.values())

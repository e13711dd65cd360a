"""Registry mapping identifiers to single prioritized services."""

from typing import Generic, TypeVar

from collections.abc import Iterable, Iterator

from loguru import logger

from service_registry.exceptions import EmptyRegistryError, ExistingServiceError, NonExistingServiceError
from service_registry.guard import Interface, InterfaceConstrained
from service_registry.models import PrioritizedItem
from service_registry.prioritized import sort_by_priority
from service_registry.utils.naming import type_name

T = TypeVar("T")


class IdentitySinglePrioritizedServiceRegistry(InterfaceConstrained, Generic[T]):
    """One service per identifier, iterated by descending priority.

    Example:
        ```python
        exporters = IdentitySinglePrioritizedServiceRegistry(Exporter, context="exporter")
        exporters.register("csv", CsvExporter(), priority=10)
        exporters.register("json", JsonExporter(), priority=20)
        dict(exporters.all())  # {"json": ..., "csv": ...}
        ```
    """

    def __init__(self, interface: Interface | None = None, context: str | None = None):
        super().__init__(interface, context)
        self._registry: dict[str, PrioritizedItem] = {}
        self._sorted = True

    def register(self, identifier: str, service: T, priority: int = 0) -> None:
        """Bind a service to an identifier with a priority.

        Raises:
            InterfaceMismatchError: If the service does not implement the interface
            ExistingServiceError: If the identifier is already bound
        """
        self._assert_implements(service)

        if self.has(identifier):
            raise ExistingServiceError.from_context_and_type(self.context, identifier)

        self._registry[identifier] = PrioritizedItem(value=service, priority=priority)
        self._sorted = False
        logger.debug(f"Registered {self.context} '{identifier}': {type_name(service)} with priority {priority}")

    def unregister(self, identifier: str) -> None:
        """Remove the binding for an identifier.

        Raises:
            NonExistingServiceError: If the identifier is not bound
        """
        if not self.has(identifier):
            raise NonExistingServiceError.from_context_and_type(self.context, identifier, self._registry.keys())

        del self._registry[identifier]
        logger.debug(f"Unregistered {self.context} '{identifier}'")

    def has(self, identifier: str) -> bool:
        """Check whether an identifier is bound."""
        return identifier in self._registry

    def get(self, identifier: str) -> T:
        """Get the service bound to an identifier.

        Raises:
            NonExistingServiceError: If the identifier is not bound
        """
        if not self.has(identifier):
            raise NonExistingServiceError.from_context_and_type(self.context, identifier, self._registry.keys())

        return self._registry[identifier].value

    def all(self) -> Iterator[tuple[str, T]]:
        """Iterate ``(identifier, service)`` pairs by descending priority."""
        pairs = self._sorted_pairs()
        return iter(pairs)

    def only(self, identifiers: Iterable[str]) -> Iterator[tuple[str, T]]:
        """Iterate the pairs whose identifier is in ``identifiers``, in priority order.

        Unknown identifiers are ignored.
        """
        wanted = set(identifiers)
        pairs = [(identifier, service) for identifier, service in self._sorted_pairs() if identifier in wanted]
        return iter(pairs)

    def first(self) -> T:
        """Return the highest-priority service.

        Raises:
            EmptyRegistryError: If nothing is registered
        """
        pairs = self._sorted_pairs()
        if not pairs:
            raise EmptyRegistryError()
        return pairs[0][1]

    def last(self) -> T:
        """Return the lowest-priority service.

        Raises:
            EmptyRegistryError: If nothing is registered
        """
        pairs = self._sorted_pairs()
        if not pairs:
            raise EmptyRegistryError()
        return pairs[-1][1]

    def __len__(self) -> int:
        return len(self._registry)

    def _sorted_pairs(self) -> list[tuple[str, T]]:
        if not self._sorted:
            identifiers = {id(item): identifier for identifier, item in self._registry.items()}
            ordered = sort_by_priority(list(self._registry.values()))
            self._registry = {identifiers[id(item)]: item for item in ordered}
            self._sorted = True

        return [(identifier, item.value) for identifier, item in self._registry.items()]

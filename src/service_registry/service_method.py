"""Registry binding services to the method that should be invoked on them.

Entries are keyed by identifier and then by the service's concrete class,
so one identifier can hold one service per class. There is no ordering.
"""

from typing import Generic, TypeVar

from loguru import logger

from service_registry.exceptions import ExistingServiceError, NonExistingServiceError
from service_registry.guard import Interface, InterfaceConstrained
from service_registry.models import ServiceMethodItem
from service_registry.utils.naming import type_name

T = TypeVar("T")


class ServiceMethodRegistry(InterfaceConstrained, Generic[T]):
    """Two-level lookup table: identifier -> service class -> (service, method)."""

    def __init__(self, interface: Interface | None = None, context: str | None = None):
        """Initialize an empty registry.

        Args:
            interface: Interface every registered service must implement
            context: Noun used in error messages
        """
        super().__init__(interface, context)
        self._services: dict[str, dict[str, ServiceMethodItem]] = {}

    def register(self, identifier: str, service: T, method: str) -> None:
        """Register a service and the method to call on it.

        Args:
            identifier: Identifier to register under
            service: The service instance
            method: Name of the method to invoke

        Raises:
            InterfaceMismatchError: If the service does not implement the interface
            ExistingServiceError: If the identifier already holds a service of this class
        """
        self._assert_implements(service)

        service_class = type_name(service)
        if self.has(identifier, service_class):
            raise ExistingServiceError.from_context_and_callable(self.context, identifier, service_class, method)

        item = ServiceMethodItem(service=service, method=method)
        self._services.setdefault(identifier, {})[service_class] = item
        logger.debug(f"Registered {self.context} '{identifier}': {item.describe()}")

    def get(self, identifier: str, service_type: str | type) -> ServiceMethodItem:
        """Get the entry for an identifier and service class.

        Args:
            identifier: Registered identifier
            service_type: The service class or its fully-qualified name

        Raises:
            NonExistingServiceError: If there is no such entry
        """
        service_class = self._class_key(service_type)
        if not self.has(identifier, service_class):
            raise self._not_found(identifier, service_class)

        return self._services[identifier][service_class]

    def has(self, identifier: str, service_type: str | type) -> bool:
        """Check whether an identifier holds a service of the given class."""
        return self._class_key(service_type) in self._services.get(identifier, {})

    def has_identifier(self, identifier: str) -> bool:
        """Check whether anything is registered under an identifier."""
        return identifier in self._services

    def unregister(self, identifier: str, service_type: str | type) -> None:
        """Remove the entry for an identifier and service class.

        Removing the last entry of an identifier removes the identifier.

        Raises:
            NonExistingServiceError: If there is no such entry
        """
        service_class = self._class_key(service_type)
        if not self.has(identifier, service_class):
            raise self._not_found(identifier, service_class)

        entries = self._services[identifier]
        del entries[service_class]
        if not entries:
            del self._services[identifier]
        logger.debug(f"Unregistered {self.context} '{identifier}': {service_class}")

    def unregister_all_by_id(self, identifier: str) -> None:
        """Remove every entry registered under an identifier.

        Raises:
            NonExistingServiceError: If the identifier is unused
        """
        if not self.has_identifier(identifier):
            raise NonExistingServiceError.from_context_and_type(self.context, identifier, self._services.keys())

        del self._services[identifier]
        logger.debug(f"Unregistered all {self.context} entries for '{identifier}'")

    def get_all_by_id(self, identifier: str) -> list[ServiceMethodItem]:
        """Return every entry registered under an identifier.

        Raises:
            NonExistingServiceError: If the identifier is unused
        """
        if not self.has_identifier(identifier):
            raise NonExistingServiceError.from_context_and_type(self.context, identifier, self._services.keys())

        return list(self._services[identifier].values())

    def all(self) -> dict[str, dict[str, ServiceMethodItem]]:
        """Return a snapshot of every entry."""
        return {identifier: dict(entries) for identifier, entries in self._services.items()}

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._services.values())

    @staticmethod
    def _class_key(service_type: str | type) -> str:
        return service_type if isinstance(service_type, str) else type_name(service_type)

    def _not_found(self, identifier: str, service_class: str) -> NonExistingServiceError:
        available = [item.describe() for item in self._services.get(identifier, {}).values()]
        return NonExistingServiceError.from_context_and_group(self.context, identifier, service_class, available)

"""Registry mapping a string identifier to exactly one service."""

from typing import Any, Generic, TypeVar

from loguru import logger

from service_registry.exceptions import ExistingServiceError, NonExistingServiceError
from service_registry.guard import Interface, InterfaceConstrained
from service_registry.utils.naming import type_name

T = TypeVar("T")


class IdentityServiceRegistry(InterfaceConstrained, Generic[T]):
    """Registry of services addressed by a caller-chosen identifier.

    Identifiers are compared exactly (case and whitespace sensitive).
    """

    def __init__(self, interface: Interface | None = None, context: str | None = None):
        """Initialize an empty registry.

        Args:
            interface: Interface every registered service must implement
            context: Noun used in error messages (e.g. "handler")
        """
        super().__init__(interface, context)
        self._services: dict[str, T] = {}

    def register(self, identifier: str, service: T) -> None:
        """Bind a service to an identifier.

        Args:
            identifier: Key to register the service under
            service: The service instance

        Raises:
            ExistingServiceError: If the identifier is already bound
            InterfaceMismatchError: If the service does not implement the interface
        """
        if self.has(identifier):
            raise ExistingServiceError.from_context_and_type(self.context, identifier)

        self._assert_implements(service)

        self._services[identifier] = service
        logger.debug(f"Registered {self.context} '{identifier}': {type_name(service)}")

    def unregister(self, identifier: str) -> None:
        """Remove the binding for an identifier.

        Raises:
            NonExistingServiceError: If the identifier is not bound
        """
        if not self.has(identifier):
            raise NonExistingServiceError.from_context_and_type(self.context, identifier, self._services.keys())

        del self._services[identifier]
        logger.debug(f"Unregistered {self.context} '{identifier}'")

    def has(self, identifier: str) -> bool:
        """Check whether an identifier is bound."""
        return identifier in self._services

    def get(self, identifier: str) -> T:
        """Get the service bound to an identifier.

        Raises:
            NonExistingServiceError: If the identifier is not bound; the
                message lists every bound identifier
        """
        if not self.has(identifier):
            raise NonExistingServiceError.from_context_and_type(self.context, identifier, self._services.keys())

        return self._services[identifier]

    def all(self) -> dict[str, T]:
        """Return a snapshot of all bindings in registration order."""
        return dict(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def __contains__(self, identifier: Any) -> bool:
        return isinstance(identifier, str) and self.has(identifier)

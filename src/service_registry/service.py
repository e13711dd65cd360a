"""Registry holding at most one service per concrete class."""

from typing import Any, Generic, TypeVar, cast

from loguru import logger

from service_registry.exceptions import ExistingServiceError, NonExistingServiceError
from service_registry.guard import Interface, InterfaceConstrained
from service_registry.utils.naming import type_name

T = TypeVar("T")


class ServiceRegistry(InterfaceConstrained, Generic[T]):
    """Registry of service singletons keyed by their class."""

    def __init__(self, interface: Interface | None = None, context: str | None = None):
        """Initialize an empty service registry.

        Args:
            interface: Interface every registered service must implement
            context: Noun used in error messages
        """
        super().__init__(interface, context)
        self._services: dict[str, T] = {}

    def register(self, service: T) -> None:
        """Register a service instance under its class.

        Args:
            service: The service instance to register

        Raises:
            TypeError: If a class is passed instead of an instance
            ExistingServiceError: If a service of the same class is registered
            InterfaceMismatchError: If the service does not implement the interface
        """
        if isinstance(service, type):
            raise TypeError(f"Expected a {self.context} instance, got class {type_name(service)}")

        service_name = type_name(service)
        if service_name in self._services:
            raise ExistingServiceError.from_context_and_type(self.context, service_name)

        self._assert_implements(service)

        self._services[service_name] = service
        logger.debug(f"Registered {self.context} {service_name}")

    def unregister(self, service: T | type[T]) -> None:
        """Remove the service registered under the class of ``service``.

        Args:
            service: An instance or the class itself

        Raises:
            NonExistingServiceError: If no service of that class is registered
        """
        service_name = type_name(service)
        if service_name not in self._services:
            raise NonExistingServiceError.from_context_and_type(self.context, service_name, self._services.keys())

        del self._services[service_name]
        logger.debug(f"Unregistered {self.context} {service_name}")

    def has(self, service: Any) -> bool:
        """Check whether a service of the given class (or instance's class) is registered."""
        return type_name(service) in self._services

    def get(self, service_type: type[T]) -> T:
        """Get a service instance by type.

        Args:
            service_type: The type of the service to retrieve

        Returns:
            The registered instance

        Raises:
            NonExistingServiceError: If the requested service is not registered
        """
        service_name = type_name(service_type)
        if service_name not in self._services:
            raise NonExistingServiceError.from_context_and_type(self.context, service_name, self._services.keys())

        return cast(T, self._services[service_name])

    def all(self) -> list[T]:
        """Return every registered service in registration order."""
        return list(self._services.values())

    def __len__(self) -> int:
        return len(self._services)

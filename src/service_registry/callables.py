"""Registry mapping an identifier to a single service method."""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from loguru import logger

from service_registry.exceptions import ExistingServiceError, NonExistingServiceError
from service_registry.guard import Interface, InterfaceConstrained
from service_registry.models import CallableItem
from service_registry.utils.naming import type_name

T = TypeVar("T")


class CallableRegistry(InterfaceConstrained, Generic[T]):
    """Registry of ``(service, method)`` pairs, one per identifier.

    Example:
        ```python
        commands = CallableRegistry(context="command")
        commands.register("cache:clear", cache_service, "clear")
        commands.call("cache:clear")
        ```
    """

    def __init__(self, interface: Interface | None = None, context: str | None = None):
        """Initialize an empty registry.

        Args:
            interface: Interface every registered service must implement
            context: Noun used in error messages
        """
        super().__init__(interface, context)
        self._services: dict[str, CallableItem] = {}

    def register(self, identifier: str, service: T, method: str) -> None:
        """Bind a service method to an identifier.

        Raises:
            ExistingServiceError: If the identifier is already bound
            InterfaceMismatchError: If the service does not implement the interface
        """
        if self.has(identifier):
            raise ExistingServiceError.from_context_and_callable(self.context, identifier, type_name(service), method)

        self._assert_implements(service)

        self._services[identifier] = CallableItem(service=service, method=method)
        logger.debug(f"Registered {self.context} '{identifier}': {self._services[identifier].describe()}")

    def get(self, identifier: str) -> CallableItem:
        """Get the item bound to an identifier.

        Raises:
            NonExistingServiceError: If the identifier is not bound; the
                message lists every binding as ``[id] - Class::method``
        """
        if not self.has(identifier):
            raise self._not_found(identifier)

        return self._services[identifier]

    def has(self, identifier: str) -> bool:
        """Check whether an identifier is bound."""
        return identifier in self._services

    def unregister(self, identifier: str) -> None:
        """Remove the binding for an identifier.

        Raises:
            NonExistingServiceError: If the identifier is not bound
        """
        if not self.has(identifier):
            raise self._not_found(identifier)

        del self._services[identifier]
        logger.debug(f"Unregistered {self.context} '{identifier}'")

    def call(self, identifier: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke the method bound to an identifier."""
        target: Callable[..., Any] = self.get(identifier).resolve()
        logger.trace(f"Calling {self.context} '{identifier}'")
        return target(*args, **kwargs)

    def all(self) -> dict[str, CallableItem]:
        """Return a snapshot of all bindings in registration order."""
        return dict(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def _not_found(self, identifier: str) -> NonExistingServiceError:
        available = [f"[{key}] - {item.describe()}" for key, item in self._services.items()]
        return NonExistingServiceError.from_callable_context_and_id(self.context, identifier, available)

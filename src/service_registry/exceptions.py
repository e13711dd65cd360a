"""Exceptions raised by the service registries.

Every registry failure derives from ``ServiceRegistryError``. Each concrete
error also inherits the closest builtin so callers can catch it either way
(``LookupError`` for missing entries, ``TypeError`` for interface mismatches).
"""

from collections.abc import Iterable


def _ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


def _quoted_list(items: Iterable[str]) -> str:
    return '"' + '", "'.join(items) + '"'


class ServiceRegistryError(Exception):
    """Base exception for all registry errors.

    Use this for catching any registry related error:
        ```python
        try:
            registry.register("mailer", service)
        except ServiceRegistryError as e:
            logger.error(f"Wiring failed: {e}")
        ```
    """


class ExistingServiceError(ServiceRegistryError, ValueError):
    """Raised when a registration collides with an existing entry."""

    def __init__(self, message: str, context: str, key: str):
        self.context = context
        self.key = key
        super().__init__(message)

    @classmethod
    def from_context_and_type(cls, context: str, type_: str) -> "ExistingServiceError":
        return cls(f'{_ucfirst(context)} of type "{type_}" already exists.', context, type_)

    @classmethod
    def from_context_and_group(cls, context: str, group: str, service_id: str) -> "ExistingServiceError":
        return cls(
            f'{_ucfirst(context)} "{service_id}" already exists inside the "{group}" group.',
            context,
            service_id,
        )

    @classmethod
    def from_context_and_callable(cls, context: str, identifier: str, service_class: str, method: str) -> "ExistingServiceError":
        return cls(
            f'{_ucfirst(context)} with id "{identifier}" and callable "{service_class}::{method}()" already exists.',
            context,
            identifier,
        )


class NonExistingServiceError(ServiceRegistryError, LookupError):
    """Raised when a lookup or removal references a missing entry.

    The message always enumerates what *is* available, and the same list is
    kept on ``available``.
    """

    def __init__(self, message: str, context: str, key: str, available: list[str]):
        self.context = context
        self.key = key
        self.available = available
        super().__init__(message)

    @classmethod
    def from_context_and_type(cls, context: str, type_: str, available: Iterable[str]) -> "NonExistingServiceError":
        available = list(available)
        return cls(
            f'{_ucfirst(context)} "{type_}" does not exist, available {context}s: {_quoted_list(available)}',
            context,
            type_,
            available,
        )

    @classmethod
    def from_context_and_group(
        cls, context: str, group: str, service_type: str, available: Iterable[str]
    ) -> "NonExistingServiceError":
        available = list(available)
        return cls(
            f'{_ucfirst(context)} "{service_type}" does not exist inside the "{group}" group, '
            f"available {context}s: {_quoted_list(available)}",
            context,
            service_type,
            available,
        )

    @classmethod
    def from_callable_context_and_id(cls, context: str, identifier: str, available: Iterable[str]) -> "NonExistingServiceError":
        available = list(available)
        return cls(
            f'{_ucfirst(context)} with id "{identifier}" does not exist, available {context}s: {_quoted_list(available)}',
            context,
            identifier,
            available,
        )


class InterfaceMismatchError(ServiceRegistryError, TypeError):
    """Raised when a value does not implement the registry's interface."""

    def __init__(self, context: str, interface: str, actual: str):
        self.context = context
        self.interface = interface
        self.actual = actual
        super().__init__(f'{_ucfirst(context)} needs to be of type "{interface}", "{actual}" given.')


class EmptyRegistryError(ServiceRegistryError, LookupError):
    """Raised by ``first()``/``last()`` when there is nothing to return."""

    def __init__(self, message: str = "Registry is empty, nothing to return."):
        super().__init__(message)

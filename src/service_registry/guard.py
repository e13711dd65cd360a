"""Interface checks shared by every registry.

A registry may be constructed with an *interface*: a class, a
``@runtime_checkable`` protocol, or a tuple of those. Every value that enters
the registry is checked against it with ``isinstance`` before it is stored.
"""

from typing import Any

from loguru import logger

from service_registry.exceptions import InterfaceMismatchError
from service_registry.settings import get_settings
from service_registry.utils.naming import type_name

Interface = type | tuple[type, ...]


def interface_name(interface: Interface) -> str:
    """Render an interface for error messages."""
    if isinstance(interface, tuple):
        return " | ".join(type_name(item) for item in interface)
    return type_name(interface)


def validate_interface(interface: Interface | None) -> Interface | None:
    """Ensure an interface can be used with ``isinstance``.

    Args:
        interface: The interface to validate, or None for no constraint

    Returns:
        The interface unchanged

    Raises:
        TypeError: If the interface is not a class, a runtime checkable
            protocol, or a tuple of those
    """
    if interface is None:
        return None

    members = interface if isinstance(interface, tuple) else (interface,)
    if not members:
        raise TypeError("Interface tuple must not be empty")

    for member in members:
        if not isinstance(member, type):
            raise TypeError(f"Interface must be a class or a tuple of classes, got: {member!r}")
        if getattr(member, "_is_protocol", False) and not getattr(member, "_is_runtime_protocol", False):
            raise TypeError(f"Protocol {type_name(member)} must be decorated with @runtime_checkable")

    return interface


def assert_implements(context: str, interface: Interface | None, value: Any) -> None:
    """Check that ``value`` satisfies ``interface``.

    Args:
        context: Name of the registered thing, used in the error message
        interface: Required interface, or None to accept anything
        value: Candidate value

    Raises:
        InterfaceMismatchError: If the value does not implement the interface
    """
    if interface is None:
        return

    if not isinstance(value, interface):
        logger.trace(f"Rejected {type_name(value)}: not an instance of {interface_name(interface)}")
        raise InterfaceMismatchError(context, interface_name(interface), type_name(value))


class InterfaceConstrained:
    """Base class for registries holding an optional interface constraint."""

    def __init__(self, interface: Interface | None = None, context: str | None = None):
        """Initialize the constraint.

        Args:
            interface: Interface every registered value must implement
            context: Noun used in error messages; defaults to the configured
                ``default_context``
        """
        self._interface = validate_interface(interface)
        self._context = context if context is not None else get_settings().default_context

    @property
    def interface(self) -> Interface | None:
        """The interface values must implement, if any."""
        return self._interface

    @property
    def context(self) -> str:
        """The noun used in error messages."""
        return self._context

    def _assert_implements(self, value: Any) -> None:
        assert_implements(self._context, self._interface, value)

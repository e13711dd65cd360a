"""Tests for the shared interface checks."""

from typing import Protocol, runtime_checkable

import pytest

from service_registry import InterfaceMismatchError, PrioritizedServiceRegistry, assert_implements
from service_registry.guard import interface_name, validate_interface


@runtime_checkable
class Closeable(Protocol):
    """Runtime checkable protocol."""

    def close(self) -> None: ...


class NotRuntimeCheckable(Protocol):
    """Protocol without @runtime_checkable."""

    def close(self) -> None: ...


class Resource:
    """Structurally implements Closeable."""

    def close(self) -> None:
        return None


class Base:
    """A nominal base class."""


class Other:
    """Yet another class."""


def test_no_interface_is_a_noop():
    """Anything passes when no interface is configured."""
    assert_implements("service", None, object())


def test_mismatch_carries_details():
    """The error exposes context, interface and actual type."""
    with pytest.raises(InterfaceMismatchError) as exc_info:
        assert_implements("handler", Base, Other())

    error = exc_info.value
    assert error.context == "handler"
    assert error.interface.endswith("Base")
    assert error.actual.endswith("Other")
    assert str(error).startswith("Handler needs to be of type")
    assert isinstance(error, TypeError)


def test_runtime_checkable_protocol():
    """Protocols are checked structurally."""
    registry = PrioritizedServiceRegistry(Closeable)
    resource = Resource()
    registry.register(resource)

    assert registry.has(resource)
    with pytest.raises(InterfaceMismatchError):
        registry.register(Other())


def test_tuple_interface():
    """A tuple accepts instances of any member."""
    assert_implements("service", (Base, Other), Other())
    assert interface_name((Base, Other)).count(" | ") == 1

    with pytest.raises(InterfaceMismatchError):
        assert_implements("service", (Base, Other), Resource())


@pytest.mark.parametrize("interface", ["Base", 42, (), (Base, "Other")])
def test_invalid_interfaces_rejected(interface):
    """Anything isinstance cannot use is rejected at construction time."""
    with pytest.raises(TypeError):
        validate_interface(interface)


def test_protocol_must_be_runtime_checkable():
    """Plain protocols are rejected with a helpful message."""
    with pytest.raises(TypeError, match="runtime_checkable"):
        PrioritizedServiceRegistry(NotRuntimeCheckable)


def test_interface_property():
    """The configured interface is exposed read-only."""
    registry = PrioritizedServiceRegistry(Base, context="plugin")
    assert registry.interface is Base
    assert registry.context == "plugin"

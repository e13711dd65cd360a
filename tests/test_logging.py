"""Tests for registry log output."""

import logging
import sys

import pytest
from loguru import logger

from service_registry import PrioritizedServiceRegistry
from service_registry.logging import setup_logging


@pytest.fixture
def captured_logs():
    """Collect loguru messages emitted while the package is enabled."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="TRACE", format="{level} {message}")
    logger.enable("service_registry")
    yield messages
    logger.disable("service_registry")
    logger.remove(handler_id)


def test_package_is_silent_by_default():
    """Registry logs are disabled until an application opts in."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="TRACE")
    try:
        PrioritizedServiceRegistry().register(object())
    finally:
        logger.remove(handler_id)

    assert messages == []


def test_mutations_are_logged_at_debug(captured_logs):
    """register/unregister emit DEBUG records."""
    registry = PrioritizedServiceRegistry(context="middleware")
    service = object()
    registry.register(service, 3)
    list(registry.all())
    registry.unregister(service)

    joined = "".join(captured_logs)
    assert "DEBUG Registered middleware object:0x" in joined
    assert "with priority 3" in joined
    assert "TRACE Sorting 1 middleware entries by priority" in joined
    assert "DEBUG Unregistered middleware" in joined


def test_setup_logging_redirects_stdlib(capsys):
    """setup_logging() installs a stderr sink and intercepts stdlib logging."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("info")
        logging.getLogger("some.library").warning("from stdlib")
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
        logger.remove()
        logger.add(sys.stderr)
        logger.disable("service_registry")

    assert "from stdlib" in capsys.readouterr().err

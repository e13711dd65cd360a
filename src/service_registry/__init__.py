"""In-memory service registries.

Registries are passive containers filled during application wiring and read
afterwards. Log output is disabled until ``setup_logging`` or
``logger.enable("service_registry")`` is called.
"""

from loguru import logger

from .callables import CallableRegistry
from .exceptions import (
    EmptyRegistryError,
    ExistingServiceError,
    InterfaceMismatchError,
    NonExistingServiceError,
    ServiceRegistryError,
)
from .guard import InterfaceConstrained, assert_implements
from .identity import IdentityServiceRegistry
from .identity_prioritized import IdentityPrioritizedServiceRegistry
from .identity_single_prioritized import IdentitySinglePrioritizedServiceRegistry
from .models import CallableItem, PrioritizedItem, ServiceMethodItem
from .prioritized import PrioritizedServiceRegistry
from .service import ServiceRegistry
from .service_method import ServiceMethodRegistry
from .settings import Settings, get_settings

logger.disable(__name__)

__all__ = [
    "CallableItem",
    "CallableRegistry",
    "EmptyRegistryError",
    "ExistingServiceError",
    "IdentityPrioritizedServiceRegistry",
    "IdentityServiceRegistry",
    "IdentitySinglePrioritizedServiceRegistry",
    "InterfaceConstrained",
    "InterfaceMismatchError",
    "NonExistingServiceError",
    "PrioritizedItem",
    "PrioritizedServiceRegistry",
    "ServiceMethodItem",
    "ServiceMethodRegistry",
    "ServiceRegistry",
    "ServiceRegistryError",
    "Settings",
    "assert_implements",
    "get_settings",
]

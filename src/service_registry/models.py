"""Data models for registry entries.

Entries hold references to the registered objects; pydantic passes ``Any``
fields through untouched, so the stored value is always the caller's own
instance.
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from service_registry.utils.naming import type_name


class PrioritizedItem(BaseModel):
    """A registered value plus its sort key."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any
    priority: int = Field(default=0, strict=True)


class ServiceMethodItem(BaseModel):
    """A registered service together with the name of the method to invoke on it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    service: Any
    method: str = Field(..., min_length=1)

    @property
    def service_class(self) -> str:
        """Fully-qualified class name of the service."""
        return type_name(self.service)

    def resolve(self) -> Callable[..., Any]:
        """Return the bound method.

        Raises:
            AttributeError: If the service has no such attribute
            TypeError: If the attribute is not callable
        """
        target = getattr(self.service, self.method)
        if not callable(target):
            raise TypeError(f"{self.service_class}.{self.method} is not callable")
        return target

    def describe(self) -> str:
        """Render as ``Class::method``."""
        return f"{self.service_class}::{self.method}"


class CallableItem(ServiceMethodItem):
    """A single callable bound to an identifier in a ``CallableRegistry``."""

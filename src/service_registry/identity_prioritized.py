"""Registry of prioritized service groups.

Services are registered under a group identifier. Each group is an ordered
multi-set deduplicated by object identity, sorted lazily by descending
priority. A group exists only while it has members.

Merged views (``all()`` and ``only()``) visit groups in the order they were
created and members in their stored order, then apply one stable sort over
the merged list. Services sharing a priority therefore come out group by
group, and in registration order within a group.
"""

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

from loguru import logger

from service_registry.exceptions import ExistingServiceError, NonExistingServiceError
from service_registry.guard import Interface, InterfaceConstrained
from service_registry.models import PrioritizedItem
from service_registry.prioritized import sort_by_priority
from service_registry.utils.naming import object_id, type_name

T = TypeVar("T")


class IdentityPrioritizedServiceRegistry(InterfaceConstrained, Generic[T]):
    """Registry of service groups, each ordered by priority.

    Example:
        ```python
        listeners = IdentityPrioritizedServiceRegistry(Listener, context="listener")
        listeners.register("order.created", send_email, priority=10)
        listeners.register("order.created", reserve_stock, priority=50)
        listeners.register("order.paid", ship)

        list(listeners.get_items_by_id("order.created"))  # [reserve_stock, send_email]
        list(listeners.only(["order.created", "order.paid"]))
        ```
    """

    def __init__(self, interface: Interface | None = None, context: str | None = None):
        """Initialize an empty registry.

        Args:
            interface: Interface every registered service must implement
            context: Noun used in error messages
        """
        super().__init__(interface, context)
        self._registry: dict[str, dict[int, PrioritizedItem]] = {}
        self._sorted: set[str] = set()

    def register(self, identifier: str, service: T, priority: int = 0) -> None:
        """Register a service instance inside a group.

        The group is created if it does not exist yet.

        Args:
            identifier: Group identifier
            service: The service instance
            priority: Higher priorities come first

        Raises:
            InterfaceMismatchError: If the service does not implement the interface
            ExistingServiceError: If this instance is already in the group
        """
        self._assert_implements(service)

        if self.has_service(identifier, service):
            raise ExistingServiceError.from_context_and_group(self.context, identifier, object_id(service))

        item = PrioritizedItem(value=service, priority=priority)
        self._registry.setdefault(identifier, {})[id(service)] = item
        self._sorted.discard(identifier)
        logger.debug(f"Registered {self.context} {object_id(service)} in '{identifier}' with priority {priority}")

    def unregister_service(self, identifier: str, service: T) -> None:
        """Remove one service from a group.

        Removing the last member removes the group itself.

        Raises:
            NonExistingServiceError: If the group does not exist or does not
                contain this instance
        """
        if not self.has_service(identifier, service):
            raise NonExistingServiceError.from_context_and_group(
                self.context,
                identifier,
                type_name(service),
                self.get_available_items_by_id(identifier),
            )

        group = self._registry[identifier]
        del group[id(service)]
        logger.debug(f"Unregistered {self.context} {object_id(service)} from '{identifier}'")

        if not group:
            self.unregister(identifier)

    def unregister(self, identifier: str) -> None:
        """Remove a whole group.

        Raises:
            NonExistingServiceError: If the group does not exist
        """
        if not self.has(identifier):
            raise NonExistingServiceError.from_context_and_type(self.context, identifier, self.get_available_ids())

        del self._registry[identifier]
        self._sorted.discard(identifier)
        logger.debug(f"Removed {self.context} group '{identifier}'")

    def has(self, identifier: str) -> bool:
        """Check whether a group exists."""
        return identifier in self._registry

    def has_service(self, identifier: str, service: T) -> bool:
        """Check whether this exact instance is registered in a group."""
        return self.has(identifier) and id(service) in self._registry[identifier]

    def get_available_ids(self) -> list[str]:
        """Return all group identifiers in creation order."""
        return list(self._registry)

    def get_available_items_by_id(self, identifier: str) -> list[str]:
        """Return identity labels of a group's members, or [] for an unknown group."""
        if not self.has(identifier):
            return []
        return [object_id(item.value) for item in self._group_items(identifier)]

    def get_items_by_id(self, identifier: str) -> Iterator[T]:
        """Iterate one group's services by descending priority.

        Raises:
            NonExistingServiceError: If the group does not exist
        """
        self._assert_group_exists(identifier)
        items = self._group_items(identifier)
        return (item.value for item in items)

    def first(self, identifier: str) -> T:
        """Return the highest-priority service of a group.

        Raises:
            NonExistingServiceError: If the group does not exist
        """
        self._assert_group_exists(identifier)
        return self._group_items(identifier)[0].value

    def last(self, identifier: str) -> T:
        """Return the lowest-priority service of a group.

        Raises:
            NonExistingServiceError: If the group does not exist
        """
        self._assert_group_exists(identifier)
        return self._group_items(identifier)[-1].value

    def all_first(self) -> dict[str, T]:
        """Return the highest-priority service of every group."""
        return {identifier: self._group_items(identifier)[0].value for identifier in list(self._registry)}

    def all_last(self) -> dict[str, T]:
        """Return the lowest-priority service of every group."""
        return {identifier: self._group_items(identifier)[-1].value for identifier in list(self._registry)}

    def only(self, identifiers: Iterable[str]) -> Iterator[T]:
        """Iterate the services of the named groups, sorted across groups.

        All identifiers are validated before anything is returned.

        Args:
            identifiers: Groups to include; order and duplicates do not matter

        Raises:
            NonExistingServiceError: Naming the first identifier that does not exist
        """
        wanted = set()
        for identifier in identifiers:
            self._assert_group_exists(identifier)
            wanted.add(identifier)

        items = self._merged_items(identifier for identifier in self._registry if identifier in wanted)
        return (item.value for item in items)

    def all(self) -> Iterator[T]:
        """Iterate every registered service, sorted across groups."""
        items = self._merged_items(self._registry)
        return (item.value for item in items)

    def __len__(self) -> int:
        return sum(len(group) for group in self._registry.values())

    def _assert_group_exists(self, identifier: str) -> None:
        if not self.has(identifier):
            raise NonExistingServiceError.from_context_and_type(self.context, identifier, self.get_available_ids())

    def _group_items(self, identifier: str) -> list[PrioritizedItem]:
        if identifier not in self._sorted:
            logger.trace(f"Sorting {self.context} group '{identifier}'")
            ordered = sort_by_priority(list(self._registry[identifier].values()))
            self._registry[identifier] = {id(item.value): item for item in ordered}
            self._sorted.add(identifier)

        return list(self._registry[identifier].values())

    def _merged_items(self, identifiers: Iterable[str]) -> list[PrioritizedItem]:
        merged = [item for identifier in identifiers for item in self._registry[identifier].values()]
        logger.trace(f"Merged {len(merged)} {self.context} entries")
        return sort_by_priority(merged)

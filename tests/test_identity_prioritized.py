"""Tests for the grouped priority registry."""

import random

import pytest

from service_registry import (
    ExistingServiceError,
    IdentityPrioritizedServiceRegistry,
    InterfaceMismatchError,
    NonExistingServiceError,
)


class Listener:
    """Interface for the registry under test."""


class MockListener(Listener):
    """A mock listener carrying a name."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"MockListener({self.name!r})"


class Anonymous:
    """A class that does not implement the interface."""


def names(services) -> list[str]:
    return [service.name for service in services]


def create_service_list_with_priority() -> list[tuple[MockListener, int]]:
    """Create services with strictly decreasing priorities (highest first)."""
    services = []
    for i in range(100, 10, -10):
        services.append((MockListener(f"p{i}"), random.randint(i - 9, i - 1)))
    return services


class TestRegistration:
    """Registration, dedup and interface checks."""

    def test_register_creates_group(self):
        """The first registration creates the group."""
        registry = IdentityPrioritizedServiceRegistry(Listener)
        assert not registry.has("order.created")

        listener = MockListener("a")
        registry.register("order.created", listener)

        assert registry.has("order.created")
        assert registry.has_service("order.created", listener)
        assert registry.get_available_ids() == ["order.created"]

    def test_same_instance_in_two_groups(self):
        """Dedup is scoped to a group."""
        registry = IdentityPrioritizedServiceRegistry()
        listener = MockListener("shared")

        registry.register("g1", listener, 1)
        registry.register("g2", listener, 2)

        assert registry.has_service("g1", listener)
        assert registry.has_service("g2", listener)
        assert len(registry) == 2

    def test_double_register_in_group_fails(self):
        """Registering an instance twice in one group fails and changes nothing."""
        registry = IdentityPrioritizedServiceRegistry()
        listener = MockListener("a")
        registry.register("g", listener, 5)

        with pytest.raises(ExistingServiceError, match=r'inside the "g" group\.$') as exc_info:
            registry.register("g", listener, 9)

        assert exc_info.value.context == "service"
        assert list(registry.get_items_by_id("g")) == [listener]
        assert len(registry) == 1

    def test_register_with_wrong_interface(self):
        """A capability-constrained registry rejects non-implementers and stays empty."""
        registry = IdentityPrioritizedServiceRegistry(Listener)

        with pytest.raises(InterfaceMismatchError, match=r'^Service needs to be of type ".*Listener", ".*Anonymous" given\.$'):
            registry.register("g", Anonymous(), 5)

        assert not registry.has("g")
        assert registry.get_available_ids() == []
        assert list(registry.all()) == []

    def test_register_without_interface_accepts_anything(self):
        """Without an interface any object is accepted."""
        registry = IdentityPrioritizedServiceRegistry()
        anonymous = Anonymous()
        registry.register("g", anonymous)

        assert list(registry.all()) == [anonymous]


class TestOrdering:
    """Priority ordering within and across groups."""

    def test_scenario_ties_keep_registration_order(self):
        """A(5), B(9), C(5) registered in order yields B, A, C."""
        registry = IdentityPrioritizedServiceRegistry()
        a, b, c = MockListener("A"), MockListener("B"), MockListener("C")
        registry.register("g", a, 5)
        registry.register("g", b, 9)
        registry.register("g", c, 5)

        assert names(registry.get_items_by_id("g")) == ["B", "A", "C"]

    def test_sort_within_group_after_shuffled_registration(self):
        """Shuffled registration still yields descending priority."""
        expected = create_service_list_with_priority()
        registry = IdentityPrioritizedServiceRegistry()

        shuffled = expected[:]
        random.shuffle(shuffled)
        for service, priority in shuffled:
            registry.register("some.group", service, priority)

        assert names(registry.get_items_by_id("some.group")) == [s.name for s, _ in expected]

    def test_resort_after_mutation(self):
        """A group sorted by a read is re-sorted after the next registration."""
        registry = IdentityPrioritizedServiceRegistry()
        registry.register("g", MockListener("low"), 1)
        assert names(registry.get_items_by_id("g")) == ["low"]

        registry.register("g", MockListener("high"), 10)
        assert names(registry.get_items_by_id("g")) == ["high", "low"]

    def test_first_and_last_per_group(self):
        """first()/last() return the head and tail of a group."""
        services = create_service_list_with_priority()
        registry = IdentityPrioritizedServiceRegistry()
        shuffled = services[:]
        random.shuffle(shuffled)
        for service, priority in shuffled:
            registry.register("some.group", service, priority)

        assert registry.first("some.group") is services[0][0]
        assert registry.last("some.group") is services[-1][0]

    def test_first_on_missing_group(self):
        """first() on an unknown group raises NonExistingServiceError."""
        registry = IdentityPrioritizedServiceRegistry()
        with pytest.raises(NonExistingServiceError, match=r'^Service "nope" does not exist, available services: ""$'):
            registry.first("nope")

    def test_all_first_and_all_last(self):
        """all_first()/all_last() map every group to its head/tail."""
        registry = IdentityPrioritizedServiceRegistry()
        expected = {}
        for identifier in ["some.group", "some.second_group", "third.group", "some.fourth.group"]:
            expected[identifier] = services = create_service_list_with_priority()
            shuffled = services[:]
            random.shuffle(shuffled)
            for service, priority in shuffled:
                registry.register(identifier, service, priority)

        firsts = registry.all_first()
        lasts = registry.all_last()

        assert list(firsts) == list(expected)
        for identifier, services in expected.items():
            assert firsts[identifier] is services[0][0]
            assert lasts[identifier] is services[-1][0]

    def test_all_merges_and_sorts_globally(self):
        """all() interleaves groups by priority instead of concatenating them."""
        registry = IdentityPrioritizedServiceRegistry()
        registry.register("g1", MockListener("g1-low"), 1)
        registry.register("g1", MockListener("g1-high"), 30)
        registry.register("g2", MockListener("g2-mid"), 20)
        registry.register("g3", MockListener("g3-top"), 40)

        assert names(registry.all()) == ["g3-top", "g1-high", "g2-mid", "g1-low"]

    def test_all_with_many_groups_matches_stable_reference(self):
        """all() equals a stable sort of the groups concatenated in creation order."""
        registry = IdentityPrioritizedServiceRegistry()
        reference = []
        for identifier in ["test_service_group_1", "test_service_group_2", "test_service_group_3"]:
            services = create_service_list_with_priority()
            shuffled = services[:]
            random.shuffle(shuffled)
            for service, priority in shuffled:
                registry.register(identifier, service, priority)
            reference.extend(shuffled)

        expected = [service for service, _ in sorted(reference, key=lambda e: -e[1])]
        result = list(registry.all())
        assert all(a is b for a, b in zip(result, expected, strict=True))

    def test_merge_tie_break_follows_group_creation_order(self):
        """Equal priorities across groups come out group by group, in creation order."""
        registry = IdentityPrioritizedServiceRegistry()
        registry.register("b", MockListener("b1"), 5)
        registry.register("a", MockListener("a1"), 5)
        registry.register("b", MockListener("b2"), 5)
        registry.register("a", MockListener("a2"), 5)

        assert names(registry.all()) == ["b1", "b2", "a1", "a2"]
        assert names(registry.only(["a", "b"])) == ["b1", "b2", "a1", "a2"]
        assert names(registry.only(["b", "a", "b"])) == ["b1", "b2", "a1", "a2"]

    def test_merge_tie_break_after_group_was_sorted(self):
        """Reading a group first does not change the merged order."""
        registry = IdentityPrioritizedServiceRegistry()
        registry.register("g1", MockListener("x"), 1)
        registry.register("g1", MockListener("y"), 7)
        registry.register("g1", MockListener("z"), 1)
        registry.register("g2", MockListener("w"), 1)

        before = names(registry.all())
        assert names(registry.get_items_by_id("g1")) == ["y", "x", "z"]
        assert names(registry.all()) == before == ["y", "x", "z", "w"]


class TestOnly:
    """Scoped views over selected groups."""

    def test_only_returns_union_of_named_groups(self):
        """only() is unaffected by groups it does not name."""
        registry = IdentityPrioritizedServiceRegistry()
        ids = ["test_service_group_1", "test_service_group_2"]
        reference = []
        for identifier in ids:
            services = create_service_list_with_priority()
            shuffled = services[:]
            random.shuffle(shuffled)
            for service, priority in shuffled:
                registry.register(identifier, service, priority)
            reference.extend(shuffled)

        registry.register("test_service_group_3", MockListener("intruder-3"), 10)
        registry.register("test_service_group_4", MockListener("intruder-4"), 11)

        expected = [service for service, _ in sorted(reference, key=lambda e: -e[1])]
        result = list(registry.only(ids))
        assert all(a is b for a, b in zip(result, expected, strict=True))
        assert "intruder-3" not in names(result)

    def test_only_with_missing_group_fails_without_changes(self):
        """only() names the first missing group and leaves the registry untouched."""
        registry = IdentityPrioritizedServiceRegistry()
        a, b = MockListener("A"), MockListener("B")
        registry.register("g1", a)
        registry.register("g2", b)

        with pytest.raises(NonExistingServiceError, match=r'^Service "g3" does not exist, available services: "g1", "g2"$') as exc_info:
            registry.only(["g1", "g3", "g4"])

        assert exc_info.value.key == "g3"
        assert registry.get_available_ids() == ["g1", "g2"]
        assert list(registry.all()) == [a, b]

    def test_only_with_empty_list(self):
        """only([]) yields nothing."""
        registry = IdentityPrioritizedServiceRegistry()
        registry.register("g", MockListener("a"))
        assert list(registry.only([])) == []


class TestUnregister:
    """Removal and group lifecycle."""

    def test_unregister_last_service_removes_group(self):
        """Removing the last member deletes the group."""
        registry = IdentityPrioritizedServiceRegistry()
        anonymous, listener = Anonymous(), MockListener("a")
        registry.register("test.group", anonymous)
        registry.register("test.group", listener)
        assert len(list(registry.all())) == 2

        registry.unregister_service("test.group", listener)
        assert len(list(registry.all())) == 1
        assert not registry.has_service("test.group", listener)
        assert registry.has("test.group")

        registry.unregister_service("test.group", anonymous)
        assert list(registry.all()) == []
        assert not registry.has("test.group")
        assert "test.group" not in registry.get_available_ids()

    def test_unregister_unregistered_service(self):
        """The message names the group and lists its members."""
        registry = IdentityPrioritizedServiceRegistry()
        registry.register("test.group", Anonymous())

        with pytest.raises(
            NonExistingServiceError,
            match=r'^Service ".*MockListener" does not exist inside the "test\.group" group, available services: ".*Anonymous:0x[0-9a-f]+"$',
        ):
            registry.unregister_service("test.group", MockListener("x"))

    def test_unregister_service_from_missing_group(self):
        """Unknown groups raise NonExistingServiceError with nothing available."""
        registry = IdentityPrioritizedServiceRegistry()
        with pytest.raises(NonExistingServiceError) as exc_info:
            registry.unregister_service("missing", MockListener("x"))
        assert exc_info.value.available == []

    def test_unregister_group(self):
        """unregister() drops a whole group."""
        registry = IdentityPrioritizedServiceRegistry()
        registry.register("g1", MockListener("a"))
        registry.register("g1", MockListener("b"))
        registry.register("g2", MockListener("c"))

        registry.unregister("g1")

        assert registry.get_available_ids() == ["g2"]
        assert names(registry.all()) == ["c"]

    def test_unregister_missing_group(self):
        """unregister() on an unknown group lists the existing groups."""
        registry = IdentityPrioritizedServiceRegistry()
        registry.register("g1", MockListener("a"))

        with pytest.raises(NonExistingServiceError, match=r'^Service "g2" does not exist, available services: "g1"$'):
            registry.unregister("g2")

    def test_get_items_by_missing_id(self):
        """get_items_by_id() raises eagerly for unknown groups."""
        registry = IdentityPrioritizedServiceRegistry(context="listener")
        with pytest.raises(NonExistingServiceError, match=r'^Listener "g" does not exist, available listeners: ""$'):
            registry.get_items_by_id("g")

    def test_recreated_group_moves_to_the_end(self):
        """A group deleted and recreated is ordered after existing groups."""
        registry = IdentityPrioritizedServiceRegistry()
        a = MockListener("a")
        registry.register("g1", a)
        registry.register("g2", MockListener("b"))

        registry.unregister_service("g1", a)
        registry.register("g1", a)

        assert registry.get_available_ids() == ["g2", "g1"]

    def test_round_trip_leaves_empty_registry(self):
        """Register N then unregister all N in any order."""
        registry = IdentityPrioritizedServiceRegistry()
        registered = []
        for i in range(12):
            group = f"g{i % 3}"
            service = MockListener(str(i))
            registry.register(group, service, i % 4)
            registered.append((group, service))

        random.shuffle(registered)
        for group, service in registered:
            registry.unregister_service(group, service)

        fresh = IdentityPrioritizedServiceRegistry()
        assert list(registry.all()) == list(fresh.all()) == []
        assert registry.get_available_ids() == fresh.get_available_ids() == []
        assert registry.all_first() == {}
        assert not any(registry.has(group) for group, _ in registered)

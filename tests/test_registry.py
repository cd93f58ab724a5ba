"""
Tests for the keyed container registry.
"""
from dataclasses import dataclass

import pytest

from subjective import Container, StoreRegistry, get_store, register_store, remove_store


@dataclass(frozen=True)
class CounterState:
    count: int = 0


@pytest.fixture
def registry():
    return StoreRegistry()


class TestStoreRegistry:
    """Test register/lookup lifecycle."""

    def test_lookup_builds_once(self, registry):
        built = []

        def factory():
            built.append(1)
            return Container(CounterState())

        registry.register(CounterState, factory)

        first = registry.lookup(CounterState)
        second = registry.lookup(CounterState)

        assert first is second
        assert built == [1]
        assert first.snapshot == CounterState()

    def test_lookup_unregistered(self, registry):
        assert registry.lookup(CounterState) is None

    def test_register_replaces_container(self, registry):
        registry.register(CounterState, lambda: Container(CounterState(1)))
        old = registry.lookup(CounterState)
        registry.register(CounterState, lambda: Container(CounterState(2)))

        new = registry.lookup(CounterState)

        assert new is not old
        assert new.snapshot.count == 2

    def test_remove_and_contains(self, registry):
        registry.register(CounterState, lambda: Container(CounterState()))
        assert CounterState in registry
        registry.remove(CounterState)
        assert CounterState not in registry
        assert registry.lookup(CounterState) is None

    def test_clear(self, registry):
        registry.register("a", lambda: Container({}))
        registry.clear()
        assert "a" not in registry


def test_global_registry():
    register_store(CounterState, lambda: Container(CounterState()))
    try:
        store = get_store(CounterState)
        store.update(lambda s: CounterState(s.count + 1))
        assert get_store(CounterState).snapshot.count == 1
    finally:
        remove_store(CounterState)
    assert get_store(CounterState) is None

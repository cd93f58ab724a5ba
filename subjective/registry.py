"""
Keyed registry of containers, one per state type.

Factories are registered up front and called lazily on the first lookup,
so a container exists only once something asks for it.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, Optional

from .core.state.container import Container

logger = logging.getLogger(__name__)

ContainerFactory = Callable[[], Container]


class StoreRegistry:
    """
    Maps a state type (or any hashable key) to its container.

    Example:
        >>> registry = StoreRegistry()
        >>> registry.register(CounterState, lambda: Container(CounterState()))
        >>> registry.lookup(CounterState).snapshot
        CounterState(count=0)
    """

    def __init__(self):
        self._factories: Dict[Hashable, ContainerFactory] = {}
        self._containers: Dict[Hashable, Container] = {}

    def register(self, state_type: Hashable, factory: ContainerFactory) -> None:
        """Register or replace the factory for a state type."""
        if state_type in self._factories:
            logger.info(f"Replacing container factory for {state_type!r}")
        self._factories[state_type] = factory
        self._containers.pop(state_type, None)

    def lookup(self, state_type: Hashable) -> Optional[Container]:
        """Get the container for a state type, building it on first use."""
        container = self._containers.get(state_type)
        if container is not None:
            return container

        factory = self._factories.get(state_type)
        if factory is None:
            return None

        container = factory()
        self._containers[state_type] = container
        return container

    def remove(self, state_type: Hashable) -> None:
        """Forget a state type and its container."""
        self._factories.pop(state_type, None)
        self._containers.pop(state_type, None)

    def clear(self) -> None:
        self._factories.clear()
        self._containers.clear()

    def __contains__(self, state_type: Any) -> bool:
        return state_type in self._factories


# Global registry (optional - containers can be created directly)
_default_registry = StoreRegistry()


def register_store(state_type: Hashable, factory: ContainerFactory) -> None:
    """Register a container factory in the global registry."""
    _default_registry.register(state_type, factory)


def get_store(state_type: Hashable) -> Optional[Container]:
    """Get the container for a state type from the global registry."""
    return _default_registry.lookup(state_type)


def remove_store(state_type: Hashable) -> None:
    """Remove a state type from the global registry."""
    _default_registry.remove(state_type)

"""
Registry of named update functions.

An update function table can be any namespace: a dict, a SimpleNamespace,
a module, a class, or an instance whose public methods are update
functions. Nested namespaces produce dotted names such as
``"filter.update_a"``. The table is flattened once at construction so
that functions can be dispatched by name and named for logging without
inspecting their source.
"""
from __future__ import annotations

import logging
import types
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ...exceptions import UnknownUpdateError

logger = logging.getLogger(__name__)

UpdateFn = Callable[..., Any]

# Placeholder label when no name can be found
UNKNOWN_UPDATE_FN_NAME = "UnknownUpdateFnName"


def _is_namespace(value: Any) -> bool:
    if isinstance(value, (Mapping, types.SimpleNamespace, types.ModuleType, type)):
        return True
    if callable(value) or isinstance(value, (str, bytes, int, float, bool, list, tuple, set)):
        return False
    return hasattr(value, "__dict__")


def _members(namespace: Any) -> Iterator[Tuple[str, Any]]:
    if isinstance(namespace, Mapping):
        for key, value in namespace.items():
            yield str(key), value
        return
    for name in dir(namespace):
        if name.startswith("_"):
            continue
        value = getattr(namespace, name)
        # Only what a module defines itself, not what it imports
        if isinstance(namespace, types.ModuleType) and getattr(value, "__module__", None) != namespace.__name__:
            continue
        yield name, value


def _same_function(a: Callable, b: Callable) -> bool:
    # Bound methods are rebuilt on every attribute access, so compare by ==
    return a is b or bool(a == b)


class UpdateFnTable:
    """
    Flattened view of an update function namespace.

    Example:
        >>> table = UpdateFnTable({"filter": {"update_a": set_a}})
        >>> table.get("filter.update_a") is set_a
        True
        >>> table.name_of(set_a)
        'filter.update_a'
    """

    def __init__(self, namespace: Any, max_depth: int = 8):
        """
        Args:
            namespace: Object holding update functions
            max_depth: Nesting limit when walking namespaces
        """
        self._namespace = namespace
        self._entries: Dict[str, UpdateFn] = {}
        self._walk(namespace, "", max_depth, set())
        logger.debug(f"Registered {len(self._entries)} update functions")

    def _walk(self, namespace: Any, prefix: str, depth: int, seen: set) -> None:
        if depth <= 0 or id(namespace) in seen:
            return
        seen.add(id(namespace))

        for name, value in _members(namespace):
            path = f"{prefix}{name}"
            if _is_namespace(value):
                if depth <= 1:
                    logger.warning(f"Update function table nested too deeply, skipping {path}")
                    continue
                self._walk(value, f"{path}.", depth - 1, seen)
            elif callable(value):
                self._entries[path] = value

    @property
    def namespace(self) -> Any:
        return self._namespace

    def names(self) -> List[str]:
        return sorted(self._entries)

    def get(self, name: str) -> UpdateFn:
        """Look up a function by dotted name."""
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownUpdateError(name) from None

    def name_of(self, fn: Callable) -> Optional[str]:
        """Dotted name of a registered function, or None."""
        for name, entry in self._entries.items():
            if _same_function(entry, fn):
                return name
        return None

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def describe_update_fn(
    fn: Callable,
    table: Optional[UpdateFnTable] = None,
    label: Optional[str] = None,
) -> str:
    """
    Best-effort display name for an update function.

    Order: explicit label, dotted path in the table, the function's
    qualified name (lambdas excluded), then UNKNOWN_UPDATE_FN_NAME.
    Names are only used for diagnostics, never for control flow.
    """
    if label:
        return label
    if table is not None:
        name = table.name_of(fn)
        if name is not None:
            return name
    qualname = getattr(fn, "__qualname__", None)
    if qualname and "<lambda>" not in qualname:
        return qualname
    return UNKNOWN_UPDATE_FN_NAME

"""
Structural equality used for change detection.

Containers and most value types already compare by value with ``==``.
Dataclasses are compared field by field, and so are plain objects that
keep the default identity ``__eq__`` (through their ``__dict__``), so two
separately built but equal states never count as a change. A bool never
equals a number.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Callable

EqualityFn = Callable[[Any, Any], bool]


def _uses_identity_eq(value: Any) -> bool:
    return type(value).__eq__ is object.__eq__ and hasattr(value, "__dict__")


def structurally_equal(a: Any, b: Any) -> bool:
    """
    Deep value comparison.

    Args:
        a: First value
        b: Second value

    Returns:
        True if both values hold the same data
    """
    if a is b:
        return True

    # bool is an int subclass, but False -> 0 is still a change
    if isinstance(a, bool) != isinstance(b, bool):
        return False

    if type(a) is not type(b):
        # Let mixed numeric types (1 == 1.0) and similar keep Python semantics
        return bool(a == b)

    if isinstance(a, Mapping):
        if a.keys() != b.keys():
            return False
        return all(structurally_equal(a[k], b[k]) for k in a)

    if isinstance(a, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(structurally_equal(x, y) for x, y in zip(a, b))

    if dataclasses.is_dataclass(a) and not isinstance(a, type):
        return all(
            structurally_equal(getattr(a, f.name), getattr(b, f.name))
            for f in dataclasses.fields(a)
            if f.compare
        )

    if _uses_identity_eq(a):
        return structurally_equal(vars(a), vars(b))

    return bool(a == b)

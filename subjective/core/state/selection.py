"""
Projected, de-duplicated views over a change stream.

A Selection is lazy: nothing is attached to the source until ``subscribe``
is called, and every subscriber gets its own projection chain with its own
"last forwarded value". Two subscribers of the same Selection therefore
never influence each other's distinctness checks.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from ...equality import EqualityFn, structurally_equal
from .stream import ChangeStream, ErrorObserver, Observer, Subscription

S = TypeVar("S")

Projection = Callable[[Any], Any]

_UNSET = object()


def get_key(value: Any, key: Any) -> Any:
    """Item access on mappings, attribute access on everything else."""
    if isinstance(value, Mapping):
        return value[key]
    return getattr(value, key)


class _DistinctChain:
    """
    Per-subscriber pipeline of (projection, distinct) stages.

    Each stage remembers the last value it let through and stops the
    pipeline when the newly projected value is structurally equal.
    """

    def __init__(self, stages: Sequence[Projection], equals: EqualityFn):
        self._stages = stages
        self._equals = equals
        self._last: List[Any] = [_UNSET] * len(stages)

    def push(self, state: Any) -> Any:
        """
        Return the projected value, or _UNSET if a stage filtered it out.

        Stage memory is only updated once every projection has run, so a
        raising projection leaves the chain as it was.
        """
        last = list(self._last)
        value = state
        for i, project in enumerate(self._stages):
            value = project(value)
            if last[i] is not _UNSET and self._equals(last[i], value):
                self._last = last
                return _UNSET
            last[i] = value
        self._last = last
        return value


class Selection(Generic[S]):
    """
    Lazy notification stream of a projected slice of the state.

    Example:
        >>> sel = container.select(lambda s: s["query"])
        >>> sub = sel.subscribe(print)   # prints current query right away
        >>> sub.unsubscribe()
    """

    def __init__(
        self,
        source: ChangeStream,
        stages: Sequence[Projection],
        current: Callable[[], Any],
        return_whole_state: bool = False,
        equals: Optional[EqualityFn] = None,
    ):
        """
        Args:
            source: Stream broadcasting whole states
            stages: Projections applied in order, each followed by a distinct check
            current: Returns the container's latest snapshot, used for the replay
            return_whole_state: Emit the snapshot instead of the projected value
            equals: Equality used by the distinct checks
        """
        self._source = source
        self._stages = tuple(stages)
        self._current = current
        self._return_whole_state = return_whole_state
        self._equals = equals or structurally_equal

    def subscribe(
        self,
        on_next: Observer,
        on_error: Optional[ErrorObserver] = None,
    ) -> Subscription:
        """
        Start receiving notifications.

        The observer is called immediately with the current projection,
        then once per broadcast that changes the projected value.

        If a projection raises during a broadcast, the subscription is
        closed and the error goes to on_error; without on_error it is
        re-raised. Errors from on_next itself are left to the stream.
        """
        chain = _DistinctChain(self._stages, self._equals)
        subscription: Optional[Subscription] = None

        def deliver(state: Any) -> None:
            try:
                value = chain.push(state)
            except Exception as e:
                if subscription is None:
                    raise
                subscription.unsubscribe()
                if on_error is None:
                    raise
                on_error(e)
                return
            if value is _UNSET:
                return
            on_next(state if self._return_whole_state else value)

        subscription = self._source.subscribe(deliver, on_error, replay=False)
        if subscription.closed:
            return subscription
        # Replay from the snapshot so staged (silent) writes are visible
        try:
            deliver(self._current())
        except Exception:
            subscription.unsubscribe()
            raise
        return subscription

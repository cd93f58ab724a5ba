"""
Reactive single-state container.

The container holds one immutable state value. It changes only through
update functions, and observers subscribe to slices of it:

- update(fn, payload) computes fn(snapshot, payload) and replaces the state
- select(selector) notifies only when the selected slice changes
- select_key(key, nested_key) does the same for one or two key lookups

Silent writes (``emit_event=False``) are staged: the snapshot moves on at
once but nothing is broadcast until the next emitting update, which then
broadcasts the latest state a single time.

Re-entrant updates (an update function, logger or observer calling
``update`` on the same container) are not guarded against; observers
may see surprising orderings.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from ...config import SubjectiveConfig
from ...equality import EqualityFn, structurally_equal
from ...logger_hook import LoggerConfig, LoggerHook
from .selection import Selection, get_key
from .stream import ChangeStream
from .update_fns import UpdateFn, UpdateFnTable, describe_update_fn

logger = logging.getLogger(__name__)

S = TypeVar("S")

_NO_PAYLOAD = object()
_NOTHING_STAGED = object()


class Container(Generic[S]):
    """
    Single source of truth for one state value.

    Example:
        >>> counter = Container({"count": 0})
        >>> counter.update(lambda s: {**s, "count": s["count"] + 1})
        {'count': 1}
        >>> counter.initial_state
        {'count': 0}
    """

    def __init__(
        self,
        initial_state: S,
        update_fns: Any = None,
        logger: LoggerConfig = None,
        *,
        equals: Optional[EqualityFn] = None,
        config: Optional[SubjectiveConfig] = None,
    ):
        """
        Initialize the container.

        Args:
            initial_state: Starting state, kept verbatim as initial_state
            update_fns: Optional namespace of update functions (dict, class, object, module)
            logger: False/None, True, or a callable(name, payload, update_fn).
                None falls back to config.log_updates.
            equals: Equality used by selections; defaults to structurally_equal
            config: Container settings
        """
        self._config = config or SubjectiveConfig()
        self._config.validate()

        self._initial_state = initial_state
        self._stream: ChangeStream[S] = ChangeStream(initial_state)
        # Latest silent write, not yet broadcast
        self._staged: Any = _NOTHING_STAGED

        self._update_fns = UpdateFnTable(update_fns) if update_fns is not None else None
        mode = self._config.log_updates if logger is None else logger
        self._logger_hook = LoggerHook(mode, self._config)
        self._equals = equals or structurally_equal

    @property
    def snapshot(self) -> S:
        """Current state, including any staged silent write."""
        value = self._stream.read()
        if self._staged is not _NOTHING_STAGED:
            return self._staged
        return value

    @property
    def initial_state(self) -> S:
        """The value passed at construction; useful for resets."""
        return self._initial_state

    @property
    def update_fns(self) -> Optional[UpdateFnTable]:
        return self._update_fns

    @property
    def config(self) -> SubjectiveConfig:
        return self._config

    def _resolve(self, update_fn: Union[str, UpdateFn]) -> UpdateFn:
        if isinstance(update_fn, str):
            if self._update_fns is None:
                raise TypeError(
                    f"Cannot dispatch {update_fn!r} by name: container has no update functions"
                )
            return self._update_fns.get(update_fn)
        if not callable(update_fn):
            raise TypeError(f"update_fn must be callable or a name, got {type(update_fn).__name__}")
        return update_fn

    def update(
        self,
        update_fn: Union[str, UpdateFn],
        payload: Any = _NO_PAYLOAD,
        emit_event: bool = True,
        *,
        label: Optional[str] = None,
    ) -> S:
        """
        Apply an update function and return the new snapshot.

        EXAMPLES:
        - state.update(increase_count)
        - state.update(update_query, "food")
        - state.update("filter.update_a", [{"id": "1"}])
        - state.update(update_query, "food", emit_event=False)

        Args:
            update_fn: Callable fn(state[, payload]) or a registered dotted name
            payload: Passed as the second argument; omit for fn(state)
            emit_event: False stages the new state without notifying observers
            label: Name reported to the logger instead of the resolved one

        Returns:
            Post-update snapshot
        """
        fn = self._resolve(update_fn)
        current = self.snapshot

        if self._logger_hook.enabled:
            name = describe_update_fn(fn, self._update_fns, label)
            self._logger_hook(name, None if payload is _NO_PAYLOAD else payload, fn)

        if payload is _NO_PAYLOAD:
            next_state = fn(current)
        else:
            next_state = fn(current, payload)

        if emit_event:
            self._staged = _NOTHING_STAGED
            self._stream.write(next_state)
        else:
            self._staged = next_state
        return self.snapshot

    dispatch = update

    def select(
        self,
        selector: Callable[[S], Any],
        return_whole_state: bool = False,
    ) -> Selection:
        """
        Subscribe to the slice returned by selector.

        EXAMPLES:
        - state.select(lambda s: s["items"])
        - state.select(lambda s: s["filter"]["types"], True)

        Args:
            selector: Pure function extracting a sub-value
            return_whole_state: Emit the whole snapshot instead of the slice

        Returns:
            Lazy Selection; call subscribe() to start receiving values
        """
        return Selection(
            self._stream,
            (selector,),
            lambda: self.snapshot,
            return_whole_state=return_whole_state,
            equals=self._equals,
        )

    def select_key(
        self,
        key: Any,
        nested_key: Any = None,
        return_whole_state: bool = False,
    ) -> Selection:
        """
        Subscribe to state[key] or state[key][nested_key].

        Distinctness is checked on the first key before the nested one,
        so unrelated changes stop at the first stage. Mapping states use
        item access, other states attribute access.
        """
        stages = [lambda state: get_key(state, key)]
        if nested_key is not None:
            stages.append(lambda value: get_key(value, nested_key))
        return Selection(
            self._stream,
            stages,
            lambda: self.snapshot,
            return_whole_state=return_whole_state,
            equals=self._equals,
        )

    def fail(self, exc: BaseException) -> None:
        """Put the container into an error state; later reads raise exc."""
        logger.warning(f"Container failed: {exc!r}")
        self._stream.error(exc)

    def close(self) -> None:
        """End all subscriptions; later reads raise UnsubscribedError."""
        self._stream.close()

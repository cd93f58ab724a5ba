"""
Single-slot broadcast stream with replay.

The stream holds exactly one current value. New subscribers receive it
immediately, and every write re-delivers to all live subscribers in the
order they subscribed. There is no buffering or scheduling: ``write``
returns only after every observer has run.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Optional, TypeVar

from ...exceptions import UnsubscribedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[Any], None]
ErrorObserver = Callable[[BaseException], None]


class Subscription:
    """
    Handle for one observer registration.

    ``unsubscribe()`` is idempotent. Once closed, the observer receives
    nothing further, even later in a write that is already in flight.
    """

    def __init__(self, teardown: Optional[Callable[[], None]] = None):
        self._teardown = teardown
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        teardown, self._teardown = self._teardown, None
        if teardown is not None:
            teardown()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class _Registration:
    """An observer plus the subscription guarding it."""

    __slots__ = ("on_next", "on_error", "subscription")

    def __init__(
        self,
        on_next: Observer,
        on_error: Optional[ErrorObserver],
        subscription: Subscription,
    ):
        self.on_next = on_next
        self.on_error = on_error
        self.subscription = subscription


class ChangeStream(Generic[T]):
    """
    Broadcast primitive behind the state container.

    Example:
        >>> stream = ChangeStream(0)
        >>> seen = []
        >>> sub = stream.subscribe(seen.append)
        >>> stream.write(1)
        >>> seen
        [0, 1]
    """

    def __init__(self, value: T):
        self._value = value
        self._registrations: List[_Registration] = []
        self._closed = False
        self._error: Optional[BaseException] = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_error(self) -> bool:
        return self._error is not None

    @property
    def observer_count(self) -> int:
        return len(self._registrations)

    def _check_readable(self) -> None:
        if self._error is not None:
            raise self._error
        if self._closed:
            raise UnsubscribedError()

    def read(self) -> T:
        """Return the last written value."""
        self._check_readable()
        return self._value

    def write(self, value: T) -> None:
        """Store a value and deliver it to every live observer."""
        self._check_readable()
        self._value = value

        # Copy so observers may (un)subscribe while we iterate
        for reg in list(self._registrations):
            if reg.subscription.closed:
                continue
            try:
                reg.on_next(value)
            except Exception as e:
                logger.warning(f"Subscriber error: {e}", exc_info=True)

    def subscribe(
        self,
        on_next: Observer,
        on_error: Optional[ErrorObserver] = None,
        *,
        replay: bool = True,
    ) -> Subscription:
        """
        Register an observer.

        Args:
            on_next: Called with each value
            on_error: Called once if the stream is put into an error state
            replay: Deliver the current value before returning

        Returns:
            Subscription handle
        """
        if self._error is not None:
            if on_error is not None:
                on_error(self._error)
            subscription = Subscription()
            subscription.unsubscribe()
            return subscription
        if self._closed:
            raise UnsubscribedError()

        subscription = Subscription(lambda: self._remove(reg))
        reg = _Registration(on_next, on_error, subscription)

        if replay:
            on_next(self._value)
        # The replay callback may already have closed the subscription
        if not subscription.closed:
            self._registrations.append(reg)
        return subscription

    def _remove(self, reg: _Registration) -> None:
        if reg in self._registrations:
            self._registrations.remove(reg)

    def error(self, exc: BaseException) -> None:
        """Put the stream into the error state and notify observers."""
        self._check_readable()
        self._error = exc
        registrations, self._registrations = self._registrations, []
        for reg in registrations:
            if reg.subscription.closed:
                continue
            reg.subscription._closed = True
            if reg.on_error is not None:
                reg.on_error(exc)
        logger.debug(f"Stream failed with {type(exc).__name__}; dropped {len(registrations)} observers")

    def close(self) -> None:
        """Close the stream. Later reads and writes raise UnsubscribedError."""
        if self._closed:
            return
        self._closed = True
        for reg in self._registrations:
            reg.subscription._closed = True
        self._registrations = []

"""
Exception hierarchy for the state container.

Errors raised by update functions and custom loggers are never wrapped;
they reach the caller of ``update`` unchanged. A selector that raises
during a broadcast closes its subscription and hands the error, unwrapped,
to that subscriber's ``on_error``.
"""
from __future__ import annotations


class SubjectiveError(Exception):
    """Base exception for all container errors."""
    pass


class InvalidConfigurationError(SubjectiveError, ValueError):
    """Logger mode or config values are unusable."""
    pass


class SerializationError(SubjectiveError):
    """A payload could not be rendered by the default update logger."""

    def __init__(self, update_name: str, cause: Exception):
        self.update_name = update_name
        self.cause = cause
        super().__init__(f"Could not serialize payload of {update_name}: {cause}")


class UnsubscribedError(SubjectiveError):
    """The underlying change stream was closed."""

    def __init__(self, message: str = "object unsubscribed"):
        super().__init__(message)


class UnknownUpdateError(SubjectiveError, KeyError):
    """No update function is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"No update function registered as {self.name!r}"

"""subjective - reactive single-state container with selective change notification."""
from subjective.config import SubjectiveConfig
from subjective.core.state import (
    UNKNOWN_UPDATE_FN_NAME,
    ChangeStream,
    Container,
    Selection,
    Subscription,
    UpdateFnTable,
)
from subjective.equality import structurally_equal
from subjective.exceptions import (
    InvalidConfigurationError,
    SerializationError,
    SubjectiveError,
    UnknownUpdateError,
    UnsubscribedError,
)
from subjective.logger_hook import LoggerHook
from subjective.registry import StoreRegistry, get_store, register_store, remove_store

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChangeStream",
    "Container",
    "InvalidConfigurationError",
    "LoggerHook",
    "Selection",
    "SerializationError",
    "StoreRegistry",
    "SubjectiveConfig",
    "SubjectiveError",
    "Subscription",
    "UNKNOWN_UPDATE_FN_NAME",
    "UnknownUpdateError",
    "UnsubscribedError",
    "UpdateFnTable",
    "get_store",
    "register_store",
    "remove_store",
    "structurally_equal",
]

# Reactive state container
from .container import Container
from .selection import Selection
from .stream import ChangeStream, Subscription
from .update_fns import UNKNOWN_UPDATE_FN_NAME, UpdateFnTable, describe_update_fn

__all__ = [
    "Container",
    "Selection",
    "ChangeStream",
    "Subscription",
    "UpdateFnTable",
    "describe_update_fn",
    "UNKNOWN_UPDATE_FN_NAME",
]

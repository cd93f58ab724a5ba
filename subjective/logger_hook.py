"""
Update logging hook.

The hook runs synchronously inside ``Container.update`` and has three modes:

- ``False``/``None``: disabled, nothing happens
- ``True``: default logger, one INFO line per update through ``logging``
- a callable: ``fn(name, payload, update_fn)``; its exceptions propagate

Any other value is rejected with InvalidConfigurationError the first time
the hook fires, not when the container is built.
"""
from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any, Callable, Optional, Union

from .config import SubjectiveConfig
from .exceptions import InvalidConfigurationError, SerializationError

CustomLogger = Callable[[str, Any, Callable], None]
LoggerConfig = Union[bool, None, CustomLogger]


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_payload(name: str, payload: Any, preview_length: int) -> str:
    """
    Render a payload for a log line, truncated to preview_length.

    Raises:
        SerializationError: If the payload cannot be rendered
    """
    try:
        data = json.dumps(payload, default=_to_jsonable)
    except (TypeError, ValueError) as e:
        raise SerializationError(name, e) from e
    return data[:preview_length]


class LoggerHook:
    """
    Resolves the logger mode on every call.

    Example:
        >>> hook = LoggerHook(lambda name, payload, fn: print(name, payload))
        >>> hook("filter.update_a", False, set_a)
        filter.update_a False
    """

    def __init__(self, mode: LoggerConfig, config: Optional[SubjectiveConfig] = None):
        self.mode = mode
        self.config = config or SubjectiveConfig()
        self._logger = logging.getLogger(self.config.logger_name)

    @property
    def enabled(self) -> bool:
        return self.mode is not None and self.mode is not False

    def __call__(self, name: str, payload: Any, update_fn: Callable) -> None:
        mode = self.mode
        if mode is None or mode is False:
            return
        if mode is True:
            self._log_default(name, payload)
        elif callable(mode):
            mode(name, payload, update_fn)
        else:
            raise InvalidConfigurationError(
                f"Logger can be either a bool or a callable, got {type(mode).__name__}"
            )

    def _log_default(self, name: str, payload: Any) -> None:
        if not self._logger.isEnabledFor(self.config.level):
            return
        try:
            preview = serialize_payload(name, payload, self.config.preview_length)
        except SerializationError as e:
            self._logger.warning(
                f"Could not serialize payload of {name}: {payload!r}",
                extra={"subsystem": "update", "update_name": name, "error": str(e.cause)},
            )
            return
        self._logger.log(
            self.config.level,
            f"{name}:{preview}",
            extra={"subsystem": "update", "update_name": name},
        )

"""
Configuration for state containers.

Load container settings from YAML/JSON files or build them in code.
"""
from __future__ import annotations

import os
import json
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Optional, Any

import yaml

from .exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)

# Payload preview length used by the default update logger
DEFAULT_PREVIEW_LENGTH = 100

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SubjectiveConfig:
    """
    Settings shared by containers.

    Attributes:
        log_updates: Default logger mode when a container gets no explicit logger
        preview_length: Max characters of serialized payload in default log lines
        logger_name: Name of the logging.Logger used by the default update logger
        log_level: Level of default update log lines
    """
    log_updates: bool = False
    preview_length: int = DEFAULT_PREVIEW_LENGTH
    logger_name: str = "subjective.updates"
    log_level: str = "INFO"

    def validate(self) -> None:
        """Raise InvalidConfigurationError if any value is unusable."""
        if not isinstance(self.preview_length, int) or self.preview_length <= 0:
            raise InvalidConfigurationError(
                f"preview_length must be a positive int, got {self.preview_length!r}"
            )
        if str(self.log_level).upper() not in _LOG_LEVELS:
            raise InvalidConfigurationError(f"Unknown log level: {self.log_level!r}")

    @property
    def level(self) -> int:
        """Numeric logging level."""
        return getattr(logging, str(self.log_level).upper())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubjectiveConfig":
        """Create from dictionary."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def save(self, path: str) -> None:
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> Optional["SubjectiveConfig"]:
        """Load config from JSON or YAML file."""
        if not os.path.exists(path):
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()

            if path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(content) or {}
            else:
                data = json.loads(content)

            return cls.from_dict(data)

        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            return None

"""
ICL Engine - Configuration Management

This module loads codec settings from YAML files and environment variables
and turns them into the immutable ICLOptions handed to readers, writers and
validators. It is the only place that reads the process environment.
"""

import os
import yaml
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
from pathlib import Path
from enum import Enum
import logging

from .exceptions import ConfigurationException
from ..protocols.x9.options import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_PAYLOAD_LENGTH,
    CharacterEncoding,
    Dialect,
    Framing,
    ICLOptions,
)

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_TRUE_VALUES = ("true", "1", "yes", "on")


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _parse_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationException(f"Invalid integer for {key}: {value!r}", config_key=key)


@dataclass
class ICLConfig:
    """Main configuration class."""

    framing: str = Framing.FIXED.value
    encoding: str = CharacterEncoding.ASCII.value
    dialect: str = Dialect.X9_100_187.value
    frb_compatibility_mode: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE
    max_payload_length: int = DEFAULT_MAX_PAYLOAD_LENGTH
    line_terminator: str = "\n"
    log_level: LogLevel = LogLevel.INFO

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "ICLConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationException(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in configuration file: {e}")

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigurationException(
                f"Configuration file must contain a mapping: {config_path}"
            )
        return cls._from_dict(config_data)

    @classmethod
    def load_from_env(cls, prefix: str = "ICL_") -> "ICLConfig":
        """Load configuration from environment variables."""
        config = cls()

        frb = os.getenv("FRB_COMPATIBILITY_MODE")
        if frb:
            config.frb_compatibility_mode = _parse_bool(frb)
            if config.frb_compatibility_mode:
                logger.warning("FRB compatibility mode enabled from environment")

        config.framing = os.getenv(f"{prefix}FRAMING", config.framing).lower()
        config.encoding = os.getenv(f"{prefix}ENCODING", config.encoding).lower()
        config.dialect = os.getenv(f"{prefix}DIALECT", config.dialect).lower()

        if os.getenv(f"{prefix}BUFFER_SIZE"):
            config.buffer_size = _parse_int(
                f"{prefix}BUFFER_SIZE", os.getenv(f"{prefix}BUFFER_SIZE")
            )
        if os.getenv(f"{prefix}MAX_PAYLOAD_LENGTH"):
            config.max_payload_length = _parse_int(
                f"{prefix}MAX_PAYLOAD_LENGTH", os.getenv(f"{prefix}MAX_PAYLOAD_LENGTH")
            )
        if os.getenv(f"{prefix}LOG_LEVEL"):
            try:
                config.log_level = LogLevel(os.getenv(f"{prefix}LOG_LEVEL", "").upper())
            except ValueError:
                logger.warning(
                    f"Ignoring unknown log level {os.getenv(f'{prefix}LOG_LEVEL')!r}"
                )

        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "ICLConfig":
        """Create configuration from dictionary."""
        config = cls()

        # An "icl" section is accepted so the settings can live in a larger file
        if isinstance(data.get("icl"), dict):
            data = data["icl"]

        for key in ("framing", "encoding", "dialect"):
            if key in data:
                setattr(config, key, str(data[key]).lower())
        if "frb_compatibility_mode" in data:
            config.frb_compatibility_mode = _parse_bool(data["frb_compatibility_mode"])
        for key in ("buffer_size", "max_payload_length"):
            if key in data:
                setattr(config, key, _parse_int(key, data[key]))
        if "line_terminator" in data:
            config.line_terminator = str(data["line_terminator"])
        if "log_level" in data:
            try:
                config.log_level = LogLevel(str(data["log_level"]).upper())
            except ValueError:
                raise ConfigurationException(
                    f"Invalid log level: {data['log_level']!r}", config_key="log_level"
                )

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "framing": self.framing,
            "encoding": self.encoding,
            "dialect": self.dialect,
            "frb_compatibility_mode": self.frb_compatibility_mode,
            "buffer_size": self.buffer_size,
            "max_payload_length": self.max_payload_length,
            "line_terminator": self.line_terminator,
            "log_level": self.log_level.value,
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = []

        if self.framing not in {f.value for f in Framing}:
            errors.append(f"Unknown framing {self.framing!r}")
        if self.encoding not in {e.value for e in CharacterEncoding}:
            errors.append(f"Unknown encoding {self.encoding!r}")
        if self.dialect not in {d.value for d in Dialect}:
            errors.append(f"Unknown dialect {self.dialect!r}")
        if self.buffer_size <= 0:
            errors.append("Buffer size must be positive")
        if self.max_payload_length <= 0:
            errors.append("Maximum payload length must be positive")
        if self.line_terminator not in ("", "\n", "\r\n"):
            errors.append("Line terminator must be empty, LF or CRLF")

        if errors:
            raise ConfigurationException(
                f"Configuration validation failed: {'; '.join(errors)}"
            )

    def to_options(self) -> ICLOptions:
        """Validate and convert to the immutable options used by the codec."""
        self.validate()
        return ICLOptions(
            framing=Framing(self.framing),
            encoding=CharacterEncoding(self.encoding),
            dialect=Dialect(self.dialect),
            frb_compatibility_mode=self.frb_compatibility_mode,
            buffer_size=self.buffer_size,
            max_payload_length=self.max_payload_length,
            line_terminator=self.line_terminator.encode("ascii"),
        )


# Global configuration instance
_config: Optional[ICLConfig] = None


def get_config() -> ICLConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ICLConfig.load_from_env()
    return _config


def set_config(config: ICLConfig) -> None:
    """Set the global configuration instance."""
    global _config
    config.validate()
    _config = config


def load_config(config_path: Union[str, Path]) -> ICLConfig:
    """Load and set configuration from file."""
    config = ICLConfig.load_from_file(config_path)
    set_config(config)
    return config

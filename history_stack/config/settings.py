"""Configuration for result histories.

Configuration can be loaded from a YAML file, overridden from the
environment, and is validated before use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from history_stack.history.stack import HistoryStack
from history_stack.utils.logging import FORMATS, LEVEL_MAP, configure_logging
from history_stack.utils.result import ConfigError, Err, Ok, Result

CONFIG_FILENAME = "history.yaml"

ENV_LOG_LEVEL = "HISTORY_STACK_LOG_LEVEL"
ENV_LOG_FORMAT = "HISTORY_STACK_LOG_FORMAT"
ENV_TRACE_APPENDS = "HISTORY_STACK_TRACE_APPENDS"

TRUTHY = ("1", "true", "yes", "on")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class HistoryConfig:
    """
    Settings for histories and the logging around them.

    Attributes:
        logging: Log level and renderer
        trace_appends: Emit a debug event for every append
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    trace_appends: bool = False

    @classmethod
    def from_yaml(cls, path: Path) -> Result["HistoryConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        if not isinstance(data, dict):
            return Err(ConfigError(
                field="yaml",
                message=f"Expected a mapping at top level, got {type(data).__name__}",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["HistoryConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Result with loaded config or error
        """
        logging_data = data.get("logging") or {}
        if not isinstance(logging_data, dict):
            return Err(ConfigError(
                field="logging",
                message=f"Expected a mapping, got {type(logging_data).__name__}",
            ))

        trace_appends = data.get("trace_appends", False)
        if not isinstance(trace_appends, bool):
            return Err(ConfigError(
                field="trace_appends",
                message=f"Must be a boolean, got {trace_appends!r}",
            ))

        config = cls(
            logging=LoggingConfig(
                level=str(logging_data.get("level", "info")),
                format=str(logging_data.get("format", "json")),
            ),
            trace_appends=trace_appends,
        )
        return config.validate().map(lambda _: config)

    def with_env(self, environ: Optional[dict[str, str]] = None) -> "HistoryConfig":
        """
        Return a copy with environment overrides applied.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            New HistoryConfig
        """
        if environ is None:
            environ = os.environ

        trace_appends = self.trace_appends
        if ENV_TRACE_APPENDS in environ:
            trace_appends = environ[ENV_TRACE_APPENDS].strip().lower() in TRUTHY

        return HistoryConfig(
            logging=LoggingConfig(
                level=environ.get(ENV_LOG_LEVEL, self.logging.level),
                format=environ.get(ENV_LOG_FORMAT, self.logging.format),
            ),
            trace_appends=trace_appends,
        )

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        if self.logging.level.lower() not in LEVEL_MAP:
            return Err(ConfigError(
                field="logging.level",
                message=f"Must be one of {', '.join(LEVEL_MAP)}, got {self.logging.level!r}",
            ))
        if self.logging.format not in FORMATS:
            return Err(ConfigError(
                field="logging.format",
                message=f"Must be one of {', '.join(FORMATS)}, got {self.logging.format!r}",
            ))
        return Ok(None)

    def apply(self, stream: Any = None) -> None:
        """Configure logging from these settings."""
        configure_logging(
            level=self.logging.level,
            format_type=self.logging.format,
            stream=stream,
        )

    def create_history(self) -> HistoryStack:
        """Create a private history using these settings."""
        return HistoryStack.create(trace_appends=self.trace_appends)


def load_config(
    config_dir: Path = None,
    environ: Optional[dict[str, str]] = None,
) -> Result[HistoryConfig, ConfigError]:
    """
    Load configuration from the standard location.

    Loads ``history.yaml`` from the config directory if present, then
    applies environment overrides.

    Args:
        config_dir: Configuration directory (defaults to ./config)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Result with loaded config or error
    """
    if config_dir is None:
        config_dir = Path("./config")

    config_path = Path(config_dir) / CONFIG_FILENAME
    if config_path.exists():
        result = HistoryConfig.from_yaml(config_path)
        if result.is_err():
            return result
        config = result.unwrap()
    else:
        config = HistoryConfig()

    config = config.with_env(environ)

    validation_result = config.validate()
    if validation_result.is_err():
        return Err(validation_result.unwrap_err())

    return Ok(config)

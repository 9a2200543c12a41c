"""Configuration module for history-stack."""

from history_stack.config.settings import HistoryConfig, LoggingConfig, load_config

__all__ = ["HistoryConfig", "LoggingConfig", "load_config"]

"""Utility modules for history-stack."""

from history_stack.utils.logging import (
    clear_suite_context,
    configure_logging,
    get_logger,
    set_suite_context,
)
from history_stack.utils.result import (
    ConfigError,
    Err,
    Ok,
    Result,
    ResultError,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "set_suite_context",
    "clear_suite_context",
    # Result
    "Ok",
    "Err",
    "Result",
    "ResultError",
    "ConfigError",
]

"""Shared history of test results with running pass/fail statistics."""

from history_stack.history import HistoryStack, RecordContractError
from history_stack.models import (
    HistoryStatistics,
    ResultRecord,
    ResultStatus,
    TestOutcome,
)

__version__ = "0.1.0"

__all__ = [
    "HistoryStack",
    "RecordContractError",
    "HistoryStatistics",
    "ResultRecord",
    "ResultStatus",
    "TestOutcome",
]

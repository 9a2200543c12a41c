"""Data models for history-stack."""

from history_stack.models.results import (
    HistoryStatistics,
    ResultRecord,
    ResultStatus,
    TestOutcome,
)

__all__ = [
    "ResultRecord",
    "ResultStatus",
    "TestOutcome",
    "HistoryStatistics",
]

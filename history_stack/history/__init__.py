"""Result history container."""

from history_stack.history.stack import (
    STATISTIC_CLASSIFIERS,
    HistoryStack,
    RecordContractError,
)

__all__ = ["HistoryStack", "RecordContractError", "STATISTIC_CLASSIFIERS"]

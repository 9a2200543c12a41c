"""History of test results with running statistics."""

from __future__ import annotations

import threading
from typing import Iterator, Optional

from history_stack.models.results import HistoryStatistics, ResultRecord
from history_stack.utils.logging import get_logger

logger = get_logger("history.stack")

# counter attribute -> classifier queried on each appended record
STATISTIC_CLASSIFIERS = (
    ("pass_count", "is_pass"),
    ("fail_count", "is_fail"),
    ("todo_count", "is_todo"),
    ("skip_count", "is_skip"),
)


class RecordContractError(TypeError):
    """Raised when a value that is not a result record is appended."""

    def __init__(self, position: int, value: object) -> None:
        self.position = position
        self.value = value
        super().__init__(
            f"Argument {position} is not a result record: "
            f"{type(value).__name__} does not provide "
            "is_pass/is_fail/is_todo/is_skip"
        )


class HistoryStack:
    """
    Ordered history of test results plus running counters.

    A process-wide instance is shared by everyone calling ``shared()``.
    Use ``create()`` for a private history that nobody else sees.

    Counters are updated as part of every append, so ``is_passing`` and the
    counts never rescan the stored records. ``test_count`` counts records
    seen, while ``result_count`` counts records currently stored; the two
    only diverge if a caller edits ``records`` directly.

    Usage:
        history = HistoryStack.shared()
        history.add_result(outcome)
        if not history.is_passing:
            ...
    """

    _shared: Optional["HistoryStack"] = None
    _shared_lock = threading.Lock()

    def __init__(self, trace_appends: bool = False) -> None:
        """
        Initialize an empty history.

        Args:
            trace_appends: Emit a debug event for every append
        """
        self.trace_appends = trace_appends
        self._lock = threading.Lock()
        self._records: list[ResultRecord] = []
        self._test_count = 0
        self._pass_count = 0
        self._fail_count = 0
        self._todo_count = 0
        self._skip_count = 0

    # Shared instance

    @classmethod
    def shared(cls) -> "HistoryStack":
        """
        Get the shared instance, creating it on first use.

        Returns:
            The process-wide HistoryStack
        """
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
                    logger.debug("shared_history_created")
        return cls._shared

    @classmethod
    def set_shared(cls, instance: "HistoryStack") -> "HistoryStack":
        """
        Replace the shared instance.

        Operations already running against the previous instance are not
        waited for; quiesce them before swapping.

        Args:
            instance: History every later ``shared()`` call should return

        Returns:
            The installed instance
        """
        if not isinstance(instance, HistoryStack):
            raise TypeError(
                f"Shared history must be a HistoryStack, got {type(instance).__name__}"
            )
        with cls._shared_lock:
            cls._shared = instance
        logger.info("shared_history_replaced", test_count=instance.test_count)
        return instance

    @classmethod
    def reset_shared(cls) -> "HistoryStack":
        """Install and return a fresh, empty shared instance."""
        return cls.set_shared(cls.create())

    @classmethod
    def create(cls, trace_appends: bool = False) -> "HistoryStack":
        """Create a new history with its own records and counters."""
        return cls(trace_appends=trace_appends)

    # Mutation

    def append(self, *results: ResultRecord) -> None:
        """
        Append results to the history and update the counters.

        All records are checked and classified before anything is stored, so
        a bad argument leaves the history untouched.

        Args:
            *results: Result records, stored in the order given

        Raises:
            RecordContractError: If an argument is not a result record
        """
        contributions = []
        for position, record in enumerate(results):
            if not isinstance(record, ResultRecord):
                logger.error(
                    "record_contract_violation",
                    position=position,
                    value_type=type(record).__name__,
                )
                raise RecordContractError(position, record)
            contributions.append(
                [1 if getattr(record, query)() else 0 for _, query in STATISTIC_CLASSIFIERS]
            )

        if not results:
            return

        with self._lock:
            was_passing = self._fail_count == 0
            self._test_count += len(results)
            for counts in contributions:
                for (attr, _), increment in zip(STATISTIC_CLASSIFIERS, counts):
                    private = f"_{attr}"
                    setattr(self, private, getattr(self, private) + increment)
            self._records.extend(results)
            stats = self._snapshot()

        if self.trace_appends:
            logger.debug("results_appended", added=len(results), **stats.to_dict())

        if was_passing and not stats.is_passing:
            logger.info(
                "suite_failing",
                test_count=stats.test_count,
                fail_count=stats.fail_count,
            )

    def add_test_history(self, result: ResultRecord) -> None:
        """Append a single result."""
        self.append(result)

    def add_result(self, result: ResultRecord) -> None:
        """Append a single result."""
        self.append(result)

    def add_results(self, *results: ResultRecord) -> None:
        """Append several results in order."""
        self.append(*results)

    # Records

    @property
    def records(self) -> list[ResultRecord]:
        """
        The live list backing this history.

        Editing it bypasses the counters: afterwards ``result_count`` no
        longer matches ``test_count`` and the counts still include removed
        records. That is the caller's responsibility.
        """
        return self._records

    @records.setter
    def records(self, value: list[ResultRecord]) -> None:
        if not isinstance(value, list):
            raise TypeError(f"records must be a list, got {type(value).__name__}")
        with self._lock:
            self._records = value

    def results(self) -> tuple[ResultRecord, ...]:
        """Return all stored results in insertion order."""
        with self._lock:
            return tuple(self._records)

    @property
    def result_count(self) -> int:
        """Number of results currently stored (see ``test_count``)."""
        with self._lock:
            return len(self._records)

    @property
    def has_results(self) -> bool:
        return self.result_count > 0

    def summary(self) -> Iterator[bool]:
        """
        Yield True for each stored result that is not a failure.

        The records are captured when called; each call returns a new
        iterator computed from the current records.
        """
        records = self.results()
        return (not record.is_fail() for record in records)

    # Statistics

    @property
    def test_count(self) -> int:
        """Number of results appended, regardless of what is still stored."""
        with self._lock:
            return self._test_count

    @test_count.setter
    def test_count(self, value: int) -> None:
        self._override("test_count", value)

    @property
    def pass_count(self) -> int:
        with self._lock:
            return self._pass_count

    @pass_count.setter
    def pass_count(self, value: int) -> None:
        self._override("pass_count", value)

    @property
    def fail_count(self) -> int:
        with self._lock:
            return self._fail_count

    @fail_count.setter
    def fail_count(self, value: int) -> None:
        self._override("fail_count", value)

    @property
    def todo_count(self) -> int:
        with self._lock:
            return self._todo_count

    @todo_count.setter
    def todo_count(self, value: int) -> None:
        self._override("todo_count", value)

    @property
    def skip_count(self) -> int:
        with self._lock:
            return self._skip_count

    @skip_count.setter
    def skip_count(self, value: int) -> None:
        self._override("skip_count", value)

    @property
    def is_passing(self) -> bool:
        """True if no failing result has been counted."""
        with self._lock:
            return self._fail_count == 0

    def statistics(self) -> HistoryStatistics:
        """Get a consistent snapshot of all counters."""
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> HistoryStatistics:
        # caller holds self._lock
        return HistoryStatistics(
            test_count=self._test_count,
            pass_count=self._pass_count,
            fail_count=self._fail_count,
            todo_count=self._todo_count,
            skip_count=self._skip_count,
            result_count=len(self._records),
        )

    def _override(self, counter: str, value: int) -> None:
        """Set a counter directly, e.g. to reset or seed it."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{counter} must be an int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"{counter} must be non-negative, got {value}")

        with self._lock:
            previous = getattr(self, f"_{counter}")
            setattr(self, f"_{counter}", value)

        logger.warning("counter_overridden", counter=counter, previous=previous, value=value)

    # Container protocol

    def __len__(self) -> int:
        return self.result_count

    def __iter__(self) -> Iterator[ResultRecord]:
        return iter(self.results())

    def __repr__(self) -> str:
        stats = self.statistics()
        return (
            f"HistoryStack(tests={stats.test_count}, pass={stats.pass_count}, "
            f"fail={stats.fail_count}, todo={stats.todo_count}, "
            f"skip={stats.skip_count}, stored={stats.result_count})"
        )

"""Data models for test result records and history statistics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ResultRecord(Protocol):
    """
    Capability every record stored in a history must provide.

    The four queries are trusted as-is. They are not required to be
    mutually exclusive: a record may report itself as both todo and fail,
    or as none of the four.
    """

    def is_pass(self) -> bool: ...

    def is_fail(self) -> bool: ...

    def is_todo(self) -> bool: ...

    def is_skip(self) -> bool: ...


class ResultStatus(Enum):
    """Classification of a single test outcome."""

    PASS = "pass"
    FAIL = "fail"
    TODO = "todo"
    SKIP = "skip"


@dataclass(frozen=True)
class TestOutcome:
    """
    A single test outcome with exactly one classification.

    Attributes:
        status: How the test was classified
        name: Test name, if the caller has one
        description: Free-form description or diagnostic
        test_number: Position of the test in the suite, if known
    """

    __test__ = False  # not a pytest test class

    status: ResultStatus
    name: str = ""
    description: str = ""
    test_number: Optional[int] = None

    @classmethod
    def passed(cls, name: str = "", **kwargs) -> "TestOutcome":
        return cls(status=ResultStatus.PASS, name=name, **kwargs)

    @classmethod
    def failed(cls, name: str = "", **kwargs) -> "TestOutcome":
        return cls(status=ResultStatus.FAIL, name=name, **kwargs)

    @classmethod
    def todo(cls, name: str = "", **kwargs) -> "TestOutcome":
        return cls(status=ResultStatus.TODO, name=name, **kwargs)

    @classmethod
    def skipped(cls, name: str = "", **kwargs) -> "TestOutcome":
        return cls(status=ResultStatus.SKIP, name=name, **kwargs)

    def is_pass(self) -> bool:
        return self.status == ResultStatus.PASS

    def is_fail(self) -> bool:
        return self.status == ResultStatus.FAIL

    def is_todo(self) -> bool:
        return self.status == ResultStatus.TODO

    def is_skip(self) -> bool:
        return self.status == ResultStatus.SKIP

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "name": self.name,
            "description": self.description,
            "test_number": self.test_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TestOutcome":
        """Create from dictionary."""
        return cls(
            status=ResultStatus(data["status"]),
            name=data.get("name", ""),
            description=data.get("description", ""),
            test_number=data.get("test_number"),
        )


@dataclass(frozen=True)
class HistoryStatistics:
    """
    Point-in-time snapshot of a history's running counters.

    Attributes:
        test_count: Number of records appended since construction
        pass_count: Appended records classified as pass
        fail_count: Appended records classified as fail
        todo_count: Appended records classified as todo
        skip_count: Appended records classified as skip
        result_count: Records currently stored (may differ from test_count)
    """

    test_count: int = 0
    pass_count: int = 0
    fail_count: int = 0
    todo_count: int = 0
    skip_count: int = 0
    result_count: int = 0

    @property
    def is_passing(self) -> bool:
        """True if no failure had been counted when the snapshot was taken."""
        return self.fail_count == 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "test_count": self.test_count,
            "pass_count": self.pass_count,
            "fail_count": self.fail_count,
            "todo_count": self.todo_count,
            "skip_count": self.skip_count,
            "result_count": self.result_count,
            "is_passing": self.is_passing,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryStatistics":
        """Create from dictionary."""
        return cls(
            test_count=data.get("test_count", 0),
            pass_count=data.get("pass_count", 0),
            fail_count=data.get("fail_count", 0),
            todo_count=data.get("todo_count", 0),
            skip_count=data.get("skip_count", 0),
            result_count=data.get("result_count", 0),
        )

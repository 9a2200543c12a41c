"""Pytest configuration and fixtures for history tests."""

import pytest

from history_stack import HistoryStack, TestOutcome


class FlagRecord:
    """Result record whose four classifications are set independently."""

    def __init__(self, passed=False, failed=False, todo=False, skip=False):
        self.passed = passed
        self.failed = failed
        self.todo = todo
        self.skip = skip

    def is_pass(self):
        return self.passed

    def is_fail(self):
        return self.failed

    def is_todo(self):
        return self.todo

    def is_skip(self):
        return self.skip

    def __repr__(self):
        return (
            f"FlagRecord(passed={self.passed}, failed={self.failed}, "
            f"todo={self.todo}, skip={self.skip})"
        )


@pytest.fixture
def record_factory():
    """Factory for records with arbitrary classification flags.

    Example:
        >>> def test_history(record_factory):
        ...     both = record_factory(failed=True, todo=True)
    """
    def _factory(**flags):
        return FlagRecord(**flags)
    return _factory


@pytest.fixture
def history():
    """A private, empty history."""
    return HistoryStack.create()


@pytest.fixture
def isolated_shared():
    """Clear the shared history for the duration of a test.

    The previous shared instance (if any) is restored afterwards so tests
    never leak state into each other.
    """
    previous = HistoryStack._shared
    HistoryStack._shared = None
    yield
    if previous is not None:
        HistoryStack.set_shared(previous)
    else:
        HistoryStack._shared = None


@pytest.fixture
def mixed_outcomes():
    """Pass, fail, pass, todo."""
    return [
        TestOutcome.passed("first"),
        TestOutcome.failed("second"),
        TestOutcome.passed("third"),
        TestOutcome.todo("fourth"),
    ]

"""Helpers for testing code that uses the application container."""

from __future__ import annotations

import abc
import sys
from typing import Any, TextIO


def _format(message: str, args: tuple[Any, ...]) -> str:
    return message % args if args else message


class TB(abc.ABC):
    """The subset of a test harness that the helpers report through."""

    @abc.abstractmethod
    def log(self, message: str, *args: Any) -> None:
        """Record an informational message, %-formatted with ``args``."""

    @abc.abstractmethod
    def error(self, message: str, *args: Any) -> None:
        """Record an error message, %-formatted with ``args``."""

    @abc.abstractmethod
    def fail_now(self) -> None:
        """Mark the test as failed and stop it."""


class TestFailure(AssertionError):
    """Raised by :class:`PanicT` when a test is failed."""

    __test__ = False


class PanicT(TB):
    """A TB that writes to a stream and raises :class:`TestFailure` on failure.

    Used when no real test harness is available.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self.last_error = ""

    def log(self, message: str, *args: Any) -> None:
        print(_format(message, args), file=self.stream)

    def error(self, message: str, *args: Any) -> None:
        self.last_error = _format(message, args)
        print(self.last_error, file=self.stream)

    def fail_now(self) -> None:
        raise TestFailure(self.last_error or "test lifecycle failed")


class TestPrinter:
    """A printer that forwards formatted messages to a TB's log."""

    __test__ = False

    def __init__(self, tb: TB) -> None:
        self.tb = tb

    def printf(self, message: str, *args: Any) -> None:
        """Log a %-formatted message through the TB."""
        self.tb.log(message, *args)


def new_test_printer(tb: TB) -> TestPrinter:
    """Return a printer that logs to ``tb``."""
    return TestPrinter(tb)
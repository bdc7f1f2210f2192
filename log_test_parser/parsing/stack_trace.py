"""Bounded capture of failed test stack traces."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from log_test_parser.models.run import TestResult

log = logging.getLogger(__name__)

MAX_STACK_TRACE_LINES = 50


@dataclass(kw_only=True)
class StackTraceCapture:
    """Accumulates raw lines into the stack trace of one failed test.

    At most ``limit`` lines are appended after the marker line. When more
    arrive before a boundary closes the capture, the partial trace is
    discarded and the capture ends.
    """

    limit: int = MAX_STACK_TRACE_LINES
    index: int | None = None
    lines_captured: int = 0

    @property
    def active(self) -> bool:
        """Whether lines are currently being captured."""
        return self.index is not None

    def begin(
        self,
        failed_tests: Sequence[TestResult],
        index: int,
        first_line: str | None = None,
    ) -> None:
        """Start capturing into ``failed_tests[index]``.

        Args:
            failed_tests: The failed tests of the current run
            index: Position of the test that owns the trace
            first_line: Line the trace starts with, usually the marker line

        """
        if not 0 <= index < len(failed_tests):
            log.debug("No failed test at index %d to attach a stack trace to", index)
            self.end()
            return
        failed_tests[index].stack_trace = first_line
        self.index = index
        self.lines_captured = 0

    def append(self, failed_tests: Sequence[TestResult], line: str) -> bool:
        """Append a line to the trace being captured.

        Returns:
            False when the capture is not active or the line budget was
            exceeded and the trace discarded, True otherwise

        """
        if self.index is None:
            return False

        test = failed_tests[self.index]
        if self.lines_captured >= self.limit:
            log.debug(
                "Stack trace of '%s' exceeded %d lines, discarding it",
                test.name,
                self.limit,
            )
            test.stack_trace = ""
            self.end()
            return False

        if test.stack_trace is None:
            test.stack_trace = line
        else:
            test.stack_trace = f"{test.stack_trace}\n{line}"
        self.lines_captured += 1
        return True

    def end(self) -> None:
        """Stop capturing."""
        self.index = None
        self.lines_captured = 0

"""States and run bookkeeping of the Mocha grammar."""

from dataclasses import dataclass
from enum import Enum, auto

from log_test_parser.parsing.context import RunContext


class MochaState(Enum):
    """Phases of Mocha console output."""

    AWAITING_RESULTS = auto()
    AWAITING_SUMMARY = auto()
    AWAITING_STACK_TRACES = auto()


@dataclass(kw_only=True)
class MochaContext(RunContext):
    """Run bookkeeping for Mocha output.

    ``last_failed_number`` follows the numbered failures while results are
    listed and restarts at zero when the repeated failures with their stack
    traces are listed after the summary. ``trace_indent`` is the indentation
    of the marker of the trace being captured.
    """

    last_failed_number: int = 0
    stack_traces_expected: int = 0
    trace_indent: int = 0

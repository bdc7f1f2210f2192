"""States and run bookkeeping of the Jest grammar."""

from dataclasses import dataclass
from enum import Enum, auto

from log_test_parser.parsing.context import RunContext


class JestState(Enum):
    """Phases of Jest console output."""

    AWAITING_RUN_START = auto()
    AWAITING_RESULTS = auto()
    AWAITING_STACK_TRACES = auto()
    AWAITING_SUMMARY = auto()


@dataclass(kw_only=True)
class JestContext(RunContext):
    """Run bookkeeping for Jest output.

    ``failed_tests_summary_seen`` is set once the reporter repeats the
    failing tests at the end of the run, after which stack trace markers
    refer to failures that were already recorded.
    """

    verbose: bool = False
    failed_tests_summary_seen: bool = False

"""States and run bookkeeping of the Jasmine grammar."""

from dataclasses import dataclass
from enum import Enum, auto

from log_test_parser.parsing.context import RunContext


class JasmineState(Enum):
    """Phases of Jasmine console output."""

    AWAITING_RUN_START = auto()
    AWAITING_RESULTS = auto()
    AWAITING_SUMMARY = auto()


@dataclass(kw_only=True)
class JasmineContext(RunContext):
    """Run bookkeeping for Jasmine output."""

    failures_section: bool = False
    pending_section: bool = False
    last_failed_number: int = 0
    last_pending_number: int = 0
    suite_errors: int = 0
    time_parsed: bool = False

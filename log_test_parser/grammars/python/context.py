"""States and run bookkeeping of the unittest grammar."""

from dataclasses import dataclass
from enum import Enum, auto

from log_test_parser.parsing.context import RunContext


class PythonState(Enum):
    """Phases of unittest console output."""

    AWAITING_RESULTS = auto()
    AWAITING_FAILED_DETAIL = auto()
    AWAITING_SUMMARY = auto()


@dataclass(kw_only=True)
class PythonContext(RunContext):
    """Run bookkeeping for unittest output.

    ``partial_test_name`` holds a test whose outcome is printed on a later
    line, after output of the test itself.
    """

    partial_test_name: str | None = None

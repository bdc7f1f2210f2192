"""Per-run bookkeeping shared by all grammars."""

from dataclasses import MISSING, dataclass, field, fields

from log_test_parser.models.run import TestRun
from log_test_parser.parsing.stack_trace import StackTraceCapture

UNCONSTRAINED = -1


@dataclass(kw_only=True)
class RunContext:
    """State of the run currently being assembled.

    Grammars subclass this with their own fields. Every field must have a
    default so that ``reinitialize`` can bring the context back to the
    state of a fresh run.
    """

    test_run: TestRun
    current_line_number: int = 0
    lines_within_which_match_is_expected: int = UNCONSTRAINED
    next_expected_match: str | None = None
    summary_seen: bool = False
    stack_trace: StackTraceCapture = field(default_factory=StackTraceCapture)

    def reinitialize(self, test_run: TestRun) -> None:
        """Reset all bookkeeping for ``test_run``, keeping the line number."""
        for f in fields(self):
            if f.name in {"test_run", "current_line_number"}:
                continue
            if f.default is not MISSING:
                setattr(self, f.name, f.default)
            elif f.default_factory is not MISSING:
                setattr(self, f.name, f.default_factory())
        self.test_run = test_run

    def expect_match_within(self, lines: int, hint: str) -> None:
        """Require one of the next ``lines`` lines to match a rule."""
        self.lines_within_which_match_is_expected = lines
        self.next_expected_match = hint

"""State tables that describe a test runner's console output."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from log_test_parser.models.run import TestRun
from log_test_parser.parsing.context import RunContext
from log_test_parser.parsing.patterns import Match, Pattern

log = logging.getLogger(__name__)


class RunControl(Protocol):
    """Operations of the engine that state actions may invoke."""

    @property
    def parser_name(self) -> str:
        """Name of the grammar being parsed, for diagnostics."""
        ...

    def search(self, pattern: Pattern, text: str) -> Match | None:
        """Search ``text`` within the regex time budget of the engine."""
        ...

    def find_all(self, pattern: Pattern, text: str) -> list[Match]:
        """Find every match in ``text`` within the regex time budget."""
        ...

    def reconcile(self) -> None:
        """Cross-check the current run, publish it if worthy and reset."""
        ...

    def refeed(self, line: str) -> None:
        """Match ``line`` again against the rules of the current state."""
        ...

    def tag(self, name: str, value: object = None) -> None:
        """Record a diagnostic telemetry event for the grammar."""
        ...


type Action[S, C] = Callable[[Match, C, RunControl], S]
type NoMatchHook[C] = Callable[[str, C, RunControl], bool]


def expect_match_within_window(
    line: str, context: RunContext, control: RunControl
) -> bool:
    """Count down the line window and reconcile when it runs out.

    Returns:
        True when the run was reconciled and the parser reset

    """
    remaining = context.lines_within_which_match_is_expected
    if remaining == 1:
        log.info(
            "%s: Was expecting %s before line %d, but no matches occurred",
            control.parser_name,
            context.next_expected_match,
            context.current_line_number,
        )
        control.reconcile()
        return True
    if remaining > 1:
        context.lines_within_which_match_is_expected = remaining - 1
    return False


def append_to_stack_trace(
    line: str, context: RunContext, control: RunControl
) -> bool:
    """Count down the line window, then feed the line to an open trace."""
    if expect_match_within_window(line, context, control):
        return True
    if context.stack_trace.active:
        context.stack_trace.append(context.test_run.failed_tests, line)
    return False


@dataclass(frozen=True, kw_only=True)
class Rule[S, C]:
    """A pattern and the action to run when it matches."""

    pattern: Pattern
    action: Action[S, C]


@dataclass(frozen=True, kw_only=True)
class StateRules[S, C]:
    """Ordered candidate rules of one state; the first match wins."""

    rules: Sequence[Rule[S, C]]
    on_no_match: NoMatchHook[C] = expect_match_within_window


@dataclass(frozen=True, kw_only=True)
class Grammar[S: Enum, C: RunContext]:
    """Everything the engine needs to parse one test runner's output."""

    name: str
    version: str = "1.0"
    run_name_prefix: str
    telemetry_area: str
    initial_state: S
    states: Mapping[S, StateRules[S, C]]
    context_factory: Callable[..., C]
    before_publish: Callable[[C, RunControl], None] | None = None

    @property
    def parser_uri(self) -> str:
        """Identity of the parser as 'Name/Version'."""
        return f"{self.name}/{self.version}"

    def new_run(self, test_run_id: int = 1) -> TestRun:
        """Create an empty run attributed to this grammar."""
        return TestRun(
            parser_uri=self.parser_uri,
            run_name_prefix=self.run_name_prefix,
            test_run_id=test_run_id,
        )

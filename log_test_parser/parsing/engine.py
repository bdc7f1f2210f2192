"""Line-driven state machine engine shared by all grammars."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from pydantic import Field

from log_test_parser.models.base import Model
from log_test_parser.models.run import TestResult, TestRun
from log_test_parser.parsing.context import UNCONSTRAINED, RunContext
from log_test_parser.parsing.patterns import DEFAULT_REGEX_TIMEOUT, Match, Pattern
from log_test_parser.parsing.table import Grammar
from log_test_parser.publishers.base import Publisher
from log_test_parser.telemetry import (
    CumulativeTelemetry,
    TelemetryCollector,
    timed_line,
)

log = logging.getLogger(__name__)


class EngineSettings(Model):
    """Tuning of the line parser."""

    regex_timeout: float = Field(
        default=DEFAULT_REGEX_TIMEOUT,
        gt=0,
        description="Seconds a single pattern may spend on one line",
    )
    slow_line_threshold: float = Field(
        default=0.001,
        gt=0,
        description="Seconds after which parsing a line counts as a spike",
    )


@dataclass(kw_only=True)
class LineParser[S: Enum, C: RunContext]:
    """Parses the console output of one test runner, one line at a time.

    Lines are matched against the ordered rules of the active state. The
    first matching rule runs its action, which updates the run context and
    returns the next state. Completed runs are handed to the publisher.

    An instance is not thread safe and must be fed by a single producer
    with increasing line numbers. After ``consume`` raises, the instance
    must be discarded.
    """

    grammar: Grammar[S, C]
    publisher: Publisher
    telemetry: TelemetryCollector = field(default_factory=CumulativeTelemetry)
    settings: EngineSettings = field(default_factory=EngineSettings)
    _state: S = field(init=False)
    _context: C = field(init=False)

    def __post_init__(self) -> None:
        self._context = self.grammar.context_factory(
            test_run=self.grammar.new_run()
        )
        self._state = self.grammar.initial_state
        self.telemetry.add_metric(self.grammar.telemetry_area, "Initialize", True)

    @property
    def parser_name(self) -> str:
        """Name of the grammar being parsed."""
        return self.grammar.name

    @property
    def state(self) -> S:
        """The active state."""
        return self._state

    @property
    def context(self) -> C:
        """Bookkeeping of the run currently being assembled."""
        return self._context

    def consume(self, line: str, line_number: int) -> None:
        """Parse one line of output.

        Args:
            line: The line without its line terminator
            line_number: Position of the line in the stream, increasing

        Raises:
            Exception: Any unexpected fault, after it was logged and tagged

        """
        if not isinstance(line, str):
            log.error(
                "%s: Ignoring invalid input %r at line %d",
                self.parser_name,
                line,
                line_number,
            )
            self.tag("InvalidInput", line_number)
            return

        area = self.grammar.telemetry_area
        with timed_line(
            self.telemetry, area, line_number, self.settings.slow_line_threshold
        ):
            try:
                self._context.current_line_number = line_number
                self._dispatch(line)
            except Exception as e:
                log.exception(
                    "%s: Failed to parse line %d", self.parser_name, line_number
                )
                self.telemetry.add_metric(area, "Exceptions", [str(e)], aggregate=True)
                raise

        self.telemetry.add_metric(area, "TotalLinesParsed", line_number)

    def flush(self) -> None:
        """Signal the end of the input.

        A run that is still being assembled goes through reconciliation, so
        it is published when it is complete enough.
        """
        context = self._context
        if (
            self._state == self.grammar.initial_state
            and not context.test_run.has_results
            and not context.summary_seen
        ):
            log.debug("%s: Nothing to flush at end of input", self.parser_name)
            return

        log.info(
            "%s: End of input after line %d, closing test run %d",
            self.parser_name,
            context.current_line_number,
            context.test_run.test_run_id,
        )
        try:
            self.reconcile()
        except Exception as e:
            log.exception("%s: Failed to flush", self.parser_name)
            self.telemetry.add_metric(
                self.grammar.telemetry_area, "Exceptions", [str(e)], aggregate=True
            )
            raise

    def reconcile(self) -> None:
        """Cross-check the counts of the current run, publish it and reset.

        Count mismatches are reported but never prevent publishing. The run
        is skipped when it carries no summary or no tests at all. The parser
        is reset in every case.
        """
        context = self._context
        test_run = context.test_run
        summary = test_run.summary
        log.info(
            "%s: Attempting to publish test run %d at line %d",
            self.parser_name,
            test_run.test_run_id,
            context.current_line_number,
        )

        self._check_bucket("Passed", test_run.passed_tests, summary.total_passed)
        self._check_bucket("Failed", test_run.failed_tests, summary.total_failed)
        self._check_bucket("Skipped", test_run.skipped_tests, summary.total_skipped)

        if self._is_publishable(context):
            if self.grammar.before_publish is not None:
                self.grammar.before_publish(context, self)
            for test in test_run.failed_tests:
                if test.stack_trace is not None:
                    test.stack_trace = test.stack_trace.rstrip()
            self._publish(test_run)

        self._reset()

    def refeed(self, line: str) -> None:
        """Match ``line`` again against the rules of the current state."""
        self._dispatch(line)

    def tag(self, name: str, value: object = None) -> None:
        """Record a diagnostic event in the grammar's telemetry area."""
        self.telemetry.add_metric(
            self.grammar.telemetry_area, name, [value], aggregate=True
        )

    def search(self, pattern: Pattern, text: str) -> Match | None:
        """Search ``text`` within the regex time budget.

        A pattern that runs out of time is logged, tagged ``RegexTimeout``
        and treated as not matching.
        """
        try:
            return pattern.search(text, timeout=self.settings.regex_timeout)
        except TimeoutError:
            self._regex_timed_out(pattern)
            return None

    def find_all(self, pattern: Pattern, text: str) -> list[Match]:
        """Find every match in ``text`` within the regex time budget.

        Returns:
            The matches in order, or no matches at all when the pattern ran
            out of time

        """
        try:
            return list(pattern.finditer(text, timeout=self.settings.regex_timeout))
        except TimeoutError:
            self._regex_timed_out(pattern)
            return []

    def _regex_timed_out(self, pattern: Pattern) -> None:
        log.warning(
            "%s: Pattern %r timed out on line %d",
            self.parser_name,
            pattern.pattern,
            self._context.current_line_number,
        )
        self.tag("RegexTimeout", pattern.pattern)

    def _dispatch(self, line: str) -> None:
        state_rules = self.grammar.states[self._state]
        for rule in state_rules.rules:
            match = self.search(rule.pattern, line)
            if match is None:
                continue

            self._context.lines_within_which_match_is_expected = UNCONSTRAINED
            self._state = rule.action(match, self._context, self)
            return

        state_rules.on_no_match(line, self._context, self)

    def _check_bucket(
        self, bucket: str, tests: Sequence[TestResult], summary_total: int
    ) -> None:
        run_id = self._context.test_run.test_run_id
        if tests and summary_total == 0:
            log.error(
                "%s: %d %s tests found but no %s summary in test run %d",
                self.parser_name,
                len(tests),
                bucket.lower(),
                bucket.lower(),
                run_id,
            )
            self.tag(f"{bucket}TestCasesFoundButNo{bucket}Summary", run_id)
        elif tests and summary_total != len(tests):
            log.error(
                "%s: Summary reports %d %s tests but %d were found in test run %d",
                self.parser_name,
                summary_total,
                bucket.lower(),
                len(tests),
                run_id,
            )
            self.tag(f"{bucket}SummaryMismatch", run_id)

    def _is_publishable(self, context: C) -> bool:
        test_run = context.test_run
        run_id = test_run.test_run_id
        if not context.summary_seen and not test_run.has_results:
            log.info(
                "%s: No test results or summary in test run %d, not publishing",
                self.parser_name,
                run_id,
            )
            self.tag("NoTestResultsOrSummary", run_id)
            return False
        if not context.summary_seen:
            log.error(
                "%s: Test cases found but no summary in test run %d, not publishing",
                self.parser_name,
                run_id,
            )
            self.tag("TestCasesFoundButNoSummary", run_id)
            return False
        if test_run.summary.total_tests == 0:
            log.error(
                "%s: Summary reports zero tests in test run %d, not publishing",
                self.parser_name,
                run_id,
            )
            self.tag("TotalTestsZero", run_id)
            return False
        return True

    def _publish(self, test_run: TestRun) -> None:
        try:
            self.publisher.publish(test_run)
        except Exception:
            log.exception(
                "%s: Publisher failed for test run %d",
                self.parser_name,
                test_run.test_run_id,
            )
            self.tag("PublishFailed", test_run.test_run_id)
            return

        log.info(
            "%s: Published test run %d with %d passed, %d failed, %d skipped",
            self.parser_name,
            test_run.test_run_id,
            test_run.summary.total_passed,
            test_run.summary.total_failed,
            test_run.summary.total_skipped,
        )

    def _reset(self) -> None:
        next_run = self._context.test_run.next_run()
        self._context.reinitialize(next_run)
        self._state = self.grammar.initial_state
        log.debug(
            "%s: Parser reset, next test run id is %d",
            self.parser_name,
            next_run.test_run_id,
        )

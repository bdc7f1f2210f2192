"""Actions run when a Mocha pattern matches."""

import logging

from log_test_parser.grammars.mocha.context import MochaContext, MochaState
from log_test_parser.models.run import TestOutcome, TestResult, TestRunSummary
from log_test_parser.parsing.durations import to_timedelta
from log_test_parser.parsing.patterns import Match
from log_test_parser.parsing.table import RunControl, expect_match_within_window

log = logging.getLogger(__name__)

NEXT_STACK_TRACE_WINDOW = 50


def _indentation(line: str) -> int:
    return len(line) - len(line.lstrip())


def _update_total(summary: TestRunSummary) -> None:
    summary.total_tests = (
        summary.total_passed + summary.total_failed + summary.total_skipped
    )


def _complete_run(context: MochaContext, control: RunControl, reason: str) -> None:
    log.info(
        "%s: %s at line %d, completing test run %d",
        control.parser_name,
        reason,
        context.current_line_number,
        context.test_run.test_run_id,
    )
    if context.stack_traces_expected:
        control.tag("ExpectedStackTracesNotFound", context.test_run.test_run_id)
    control.reconcile()


def passed_test_case(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Record a passed test."""
    execution_time = None
    if match["time"] is not None:
        execution_time = to_timedelta(match["time"], match["unit"])
    context.test_run.passed_tests.append(
        TestResult(
            name=match["name"],
            outcome=TestOutcome.PASSED,
            execution_time=execution_time,
        )
    )
    return MochaState.AWAITING_RESULTS


def pending_test_case(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Record a pending test."""
    context.test_run.skipped_tests.append(
        TestResult(name=match["name"], outcome=TestOutcome.NOT_EXECUTED)
    )
    return MochaState.AWAITING_RESULTS


def failed_test_case(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Record a numbered failed test.

    Numbers must follow each other from 1. A number that restarts at 1
    starts a new run; any other gap is ignored.
    """
    number = int(match["number"])
    expected = context.last_failed_number + 1
    if number != expected:
        control.tag("UnexpectedFailedTestCaseNumber", context.test_run.test_run_id)
        if number != 1:
            log.error(
                "%s: Expected failed test case number %d but found %d at line %d",
                control.parser_name,
                expected,
                number,
                context.current_line_number,
            )
            return MochaState.AWAITING_RESULTS
        _complete_run(context, control, "Failed test case numbering restarted")

    context.last_failed_number = number
    context.test_run.failed_tests.append(
        TestResult(name=match["name"], outcome=TestOutcome.FAILED)
    )
    return MochaState.AWAITING_RESULTS


def passed_summary(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Read the passed count and run duration."""
    run_summary = context.test_run.summary
    run_summary.total_passed = int(match["passed"])
    run_summary.total_execution_time = to_timedelta(match["time"], match["unit"])
    _update_total(run_summary)
    context.summary_seen = True
    context.last_failed_number = 0

    context.expect_match_within(1, "failed/pending tests summary")
    return MochaState.AWAITING_SUMMARY


def pending_summary(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Read the pending count."""
    run_summary = context.test_run.summary
    run_summary.total_skipped = int(match["pending"])
    _update_total(run_summary)

    context.expect_match_within(1, "failed tests summary")
    return MochaState.AWAITING_SUMMARY


def failed_summary(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Read the failed count, which is how many stack traces follow."""
    run_summary = context.test_run.summary
    run_summary.total_failed = int(match["failed"])
    _update_total(run_summary)
    context.stack_traces_expected = run_summary.total_failed
    return MochaState.AWAITING_STACK_TRACES


def passed_test_case_after_summary(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Complete the run and record the passed test in the next one."""
    _complete_run(context, control, "Passed test case")
    return passed_test_case(match, context, control)


def pending_test_case_after_summary(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Complete the run and record the pending test in the next one."""
    _complete_run(context, control, "Pending test case")
    return pending_test_case(match, context, control)


def failed_test_case_after_summary(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Complete the run and record the failed test in the next one."""
    _complete_run(context, control, "Failed test case")
    return failed_test_case(match, context, control)


def summary_without_test_cases(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Complete the run and read the passed summary of the next one."""
    control.tag("SummaryWithNoTestCases", context.test_run.test_run_id)
    _complete_run(context, control, "Passed summary")
    return passed_summary(match, context, control)


def stack_trace_started(
    match: Match, context: MochaContext, control: RunControl
) -> MochaState:
    """Attach the stack trace that follows to the failure with this number."""
    number = int(match["number"])
    expected = context.last_failed_number + 1
    run_id = context.test_run.test_run_id

    if number == expected and context.stack_traces_expected:
        context.last_failed_number = number
        context.stack_traces_expected -= 1
        context.trace_indent = _indentation(match[0])
        context.stack_trace.begin(context.test_run.failed_tests, number - 1, match[0])
        return MochaState.AWAITING_STACK_TRACES

    if number == 1:
        control.tag("UnexpectedFailedStackTraceNumber", run_id)
        _complete_run(context, control, "Failed test case numbering restarted")
        return failed_test_case(match, context, control)

    if context.stack_trace.active and not context.stack_traces_expected:
        context.stack_trace.append(context.test_run.failed_tests, match[0])
        return MochaState.AWAITING_STACK_TRACES

    log.error(
        "%s: Expected stack trace number %d but found %d at line %d",
        control.parser_name,
        expected,
        number,
        context.current_line_number,
    )
    control.tag("UnexpectedFailedStackTraceNumber", run_id)
    return MochaState.AWAITING_STACK_TRACES


def capture_stack_trace(
    line: str, context: MochaContext, control: RunControl
) -> bool:
    """Append the line to the open stack trace.

    The last expected trace ends at the first non-blank line that is not
    indented deeper than its marker, which completes the run; the line is
    then parsed again for the next run. When a trace overflows, the run is
    complete if it was the last one expected. Otherwise the next trace must
    start within a bounded number of lines.
    """
    if expect_match_within_window(line, context, control):
        return True
    if not context.stack_trace.active:
        return False
    if (
        not context.stack_traces_expected
        and line.strip()
        and _indentation(line) <= context.trace_indent
    ):
        _complete_run(context, control, "Output after the last stack trace")
        control.refeed(line)
        return True
    if context.stack_trace.append(context.test_run.failed_tests, line):
        return False

    if not context.stack_traces_expected:
        _complete_run(context, control, "Last stack trace overflowed")
        return True
    context.expect_match_within(
        NEXT_STACK_TRACE_WINDOW, "next failed test stack trace"
    )
    return False

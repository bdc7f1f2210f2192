"""Actions run when a unittest pattern matches."""

import logging
from datetime import timedelta

from log_test_parser.grammars.python import patterns
from log_test_parser.grammars.python.context import PythonContext, PythonState
from log_test_parser.models.run import TestOutcome, TestResult
from log_test_parser.parsing.durations import to_timedelta
from log_test_parser.parsing.patterns import Match
from log_test_parser.parsing.table import RunControl

log = logging.getLogger(__name__)


def _classify(outcome: str, control: RunControl) -> TestOutcome | None:
    if control.search(patterns.PASSED_OUTCOME, outcome):
        return TestOutcome.PASSED
    if control.search(patterns.SKIPPED_OUTCOME, outcome):
        return TestOutcome.NOT_EXECUTED
    if control.search(patterns.FAILED_OUTCOME, outcome):
        return TestOutcome.FAILED
    return None


def _record(context: PythonContext, name: str, outcome: TestOutcome) -> None:
    # Failures are recorded from their detail lines, which carry the trace.
    test_run = context.test_run
    if outcome is TestOutcome.PASSED:
        test_run.passed_tests.append(TestResult(name=name, outcome=outcome))
    elif outcome is TestOutcome.NOT_EXECUTED:
        test_run.skipped_tests.append(TestResult(name=name, outcome=outcome))


def _record_unexpected_success(context: PythonContext, name: str) -> None:
    # No detail block follows an unexpected success, so it is recorded here.
    context.test_run.failed_tests.append(
        TestResult(name=name, outcome=TestOutcome.FAILED)
    )


def _resolve_partial(context: PythonContext, outcome: TestOutcome) -> PythonState:
    if context.partial_test_name is not None:
        _record(context, context.partial_test_name, outcome)
        context.partial_test_name = None
    return PythonState.AWAITING_RESULTS


def result_line(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Record a test result, or remember it until its outcome is printed."""
    if context.partial_test_name is not None:
        log.debug(
            "%s: No outcome found for '%s' before line %d",
            control.parser_name,
            context.partial_test_name,
            context.current_line_number,
        )
    name = match["name"]
    text = match["outcome"] or ""
    if control.search(patterns.UNEXPECTED_SUCCESS_OUTCOME, text):
        context.partial_test_name = None
        _record_unexpected_success(context, name)
        return PythonState.AWAITING_RESULTS

    outcome = _classify(text, control)
    if outcome is None:
        context.partial_test_name = name
    else:
        context.partial_test_name = None
        _record(context, name, outcome)
    return PythonState.AWAITING_RESULTS


def passed_continuation(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Resolve a pending test result as passed."""
    return _resolve_partial(context, TestOutcome.PASSED)


def skipped_continuation(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Resolve a pending test result as skipped."""
    return _resolve_partial(context, TestOutcome.NOT_EXECUTED)


def failed_continuation(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Resolve a pending test result as failed."""
    return _resolve_partial(context, TestOutcome.FAILED)


def unexpected_success_continuation(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Resolve a pending test result as an unexpected success."""
    if context.partial_test_name is not None:
        _record_unexpected_success(context, context.partial_test_name)
        context.partial_test_name = None
    return PythonState.AWAITING_RESULTS


def failed_detail(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Record the failure that the following detail block describes."""
    if context.stack_trace.active:
        context.stack_trace.append(context.test_run.failed_tests, match[0])
        return PythonState.AWAITING_FAILED_DETAIL

    context.partial_test_name = None
    context.test_run.failed_tests.append(
        TestResult(name=match["name"], outcome=TestOutcome.FAILED)
    )
    return PythonState.AWAITING_FAILED_DETAIL


def result_line_after_failures(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Start a new run when results reappear before the summary."""
    if context.stack_trace.active:
        context.stack_trace.append(context.test_run.failed_tests, match[0])
        return PythonState.AWAITING_FAILED_DETAIL

    log.error(
        "%s: Test result at line %d while reading failure details, the "
        "summary of test run %d was not found",
        control.parser_name,
        context.current_line_number,
        context.test_run.test_run_id,
    )
    control.tag("SummaryNotFound", context.test_run.test_run_id)
    control.reconcile()
    return result_line(match, context, control)


def dash_border(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Open or close the stack trace of the last failure.

    A trace is opened only once, so a discarded trace stays empty.
    """
    failed_tests = context.test_run.failed_tests
    if context.stack_trace.active:
        context.stack_trace.end()
    elif failed_tests and failed_tests[-1].stack_trace is None:
        context.stack_trace.begin(failed_tests, len(failed_tests) - 1)
    return PythonState.AWAITING_FAILED_DETAIL


def equals_border(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Close the stack trace of the last failure."""
    context.stack_trace.end()
    return PythonState.AWAITING_FAILED_DETAIL


def ran_summary(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Read the number of tests and the run duration."""
    context.stack_trace.end()
    if context.partial_test_name is not None:
        log.debug(
            "%s: No outcome found for '%s'",
            control.parser_name,
            context.partial_test_name,
        )
        context.partial_test_name = None

    run_summary = context.test_run.summary
    run_summary.total_tests = int(match["total"])
    run_summary.total_execution_time = to_timedelta(match["seconds"], "s")
    return PythonState.AWAITING_SUMMARY


def outcome_summary(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Read the failure and skip counts, which completes the run.

    Errors and unexpected successes count as failures. Passed tests are
    never printed and are derived from the other counts.
    """
    counts: dict[str, int] = {}
    if match["details"]:
        for count in control.find_all(
            patterns.OUTCOME_SUMMARY_COUNT, match["details"]
        ):
            counts[count["kind"]] = int(count["count"])

    run_summary = context.test_run.summary
    run_summary.total_failed = (
        counts.get("failures", 0)
        + counts.get("errors", 0)
        + counts.get("unexpected successes", 0)
    )
    run_summary.total_skipped = counts.get("skipped", 0)
    run_summary.total_passed = max(
        run_summary.total_tests - run_summary.total_failed - run_summary.total_skipped,
        0,
    )
    context.summary_seen = True
    control.reconcile()
    return PythonState.AWAITING_RESULTS


def blank_line(
    match: Match, context: PythonContext, control: RunControl
) -> PythonState:
    """Skip blank lines between the summary lines."""
    return PythonState.AWAITING_SUMMARY


def outcome_summary_not_found(
    line: str, context: PythonContext, control: RunControl
) -> bool:
    """Drop the run and parse the line as the start of the next one."""
    log.error(
        "%s: Expected the test run outcome at line %d",
        control.parser_name,
        context.current_line_number,
    )
    control.tag("TestOutcomeSummaryNotFound", context.test_run.test_run_id)
    control.reconcile()
    control.refeed(line)
    return True


def before_publish(context: PythonContext, control: RunControl) -> None:
    """Report details of a run about to be published."""
    run_id = context.test_run.test_run_id
    if context.test_run.summary.total_execution_time == timedelta(0):
        log.warning(
            "%s: Total test run time is zero for test run %d",
            control.parser_name,
            run_id,
        )
        control.tag("TotalTestRunTimeZero", run_id)

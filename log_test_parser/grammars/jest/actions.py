"""Actions run when a Jest pattern matches."""

import logging
from datetime import timedelta

from log_test_parser.grammars.jest import patterns
from log_test_parser.grammars.jest.context import JestContext, JestState
from log_test_parser.models.run import TestOutcome, TestResult
from log_test_parser.parsing.durations import to_timedelta
from log_test_parser.parsing.patterns import Match
from log_test_parser.parsing.table import RunControl

log = logging.getLogger(__name__)


def _execution_time(match: Match) -> timedelta | None:
    if match["time"] is None:
        return None
    return to_timedelta(match["time"], match["unit"])


def run_started(match: Match, context: JestContext, control: RunControl) -> JestState:
    """Start reading the results of a test file."""
    log.debug(
        "%s: Results of %s start at line %d",
        control.parser_name,
        match["file"],
        context.current_line_number,
    )
    context.stack_trace.end()
    return JestState.AWAITING_RESULTS


def passed_test_case(
    match: Match, context: JestContext, control: RunControl
) -> JestState:
    """Record a passed test listed by the verbose reporter."""
    context.verbose = True
    context.test_run.passed_tests.append(
        TestResult(
            name=match["name"],
            outcome=TestOutcome.PASSED,
            execution_time=_execution_time(match),
        )
    )
    return JestState.AWAITING_RESULTS


def failed_test_case(
    match: Match, context: JestContext, control: RunControl
) -> JestState:
    """Note a failed test listed by the verbose reporter.

    Failures are recorded from their stack trace markers, which are printed
    in both reporter modes.
    """
    context.verbose = True
    return JestState.AWAITING_RESULTS


def skipped_test_case(
    match: Match, context: JestContext, control: RunControl
) -> JestState:
    """Record a skipped or todo test listed by the verbose reporter."""
    context.verbose = True
    context.test_run.skipped_tests.append(
        TestResult(name=match["name"], outcome=TestOutcome.NOT_EXECUTED)
    )
    return JestState.AWAITING_RESULTS


def dot_status(match: Match, context: JestContext, control: RunControl) -> JestState:
    """Note the progress dots of the default reporter."""
    context.verbose = False
    return JestState.AWAITING_RESULTS


def stack_trace_started(
    match: Match, context: JestContext, control: RunControl
) -> JestState:
    """Record a failed test and start capturing its stack trace.

    Console output blocks use the same marker and are skipped, as are
    markers repeated in the summary of failing tests.
    """
    context.stack_trace.end()
    name = match["name"]
    if context.failed_tests_summary_seen:
        log.debug(
            "%s: Ignoring repeated failure '%s' at line %d",
            control.parser_name,
            name,
            context.current_line_number,
        )
        return JestState.AWAITING_STACK_TRACES
    if name == patterns.CONSOLE_PSEUDO_FAILURE:
        return JestState.AWAITING_STACK_TRACES

    test_run = context.test_run
    test_run.failed_tests.append(TestResult(name=name, outcome=TestOutcome.FAILED))
    context.stack_trace.begin(
        test_run.failed_tests, len(test_run.failed_tests) - 1, match[0]
    )
    return JestState.AWAITING_STACK_TRACES


def failed_tests_summary_started(
    match: Match, context: JestContext, control: RunControl
) -> JestState:
    """Stop recording failures, the reporter only repeats them from here."""
    context.stack_trace.end()
    context.failed_tests_summary_seen = True
    return JestState.AWAITING_STACK_TRACES


def next_test_file(
    match: Match, context: JestContext, control: RunControl
) -> JestState:
    """Leave the stack traces of one test file for the results of the next."""
    if context.failed_tests_summary_seen:
        context.stack_trace.end()
        return JestState.AWAITING_STACK_TRACES
    return run_started(match, context, control)


def summary_started(
    match: Match, context: JestContext, control: RunControl
) -> JestState:
    """Expect the test counts on the next line."""
    context.stack_trace.end()
    context.expect_match_within(1, "tests summary")
    return JestState.AWAITING_SUMMARY


def tests_summary(match: Match, context: JestContext, control: RunControl) -> JestState:
    """Read the test counts, which may be printed in any order."""
    counts: dict[str, int] = {}
    for count in control.find_all(patterns.TESTS_SUMMARY_COUNT, match["counts"]):
        counts[count["kind"]] = counts.get(count["kind"], 0) + int(count["count"])

    run_summary = context.test_run.summary
    run_summary.total_passed = counts.get("passed", 0)
    run_summary.total_failed = counts.get("failed", 0)
    run_summary.total_skipped = (
        counts.get("skipped", 0) + counts.get("pending", 0) + counts.get("todo", 0)
    )
    run_summary.total_tests = counts.get("total", 0)
    context.summary_seen = True

    context.expect_match_within(2, "test run time")
    return JestState.AWAITING_SUMMARY


def run_time(match: Match, context: JestContext, control: RunControl) -> JestState:
    """Read the run duration, which completes the run."""
    context.test_run.summary.total_execution_time = to_timedelta(
        match["time"], match["unit"]
    )
    control.reconcile()
    return JestState.AWAITING_RUN_START


def unexpected_run_start(
    match: Match, context: JestContext, control: RunControl
) -> JestState:
    """Complete the current run because the next one started early."""
    log.error(
        "%s: Test run started at line %d before the summary completed",
        control.parser_name,
        context.current_line_number,
    )
    control.tag("UnexpectedTestRunStart", context.test_run.test_run_id)
    control.reconcile()
    return run_started(match, context, control)


def before_publish(context: JestContext, control: RunControl) -> None:
    """Report details of a run about to be published."""
    run_id = context.test_run.test_run_id
    if context.test_run.summary.total_execution_time == timedelta(0):
        log.warning(
            "%s: Total test run time is zero for test run %d",
            control.parser_name,
            run_id,
        )
        control.tag("TotalTestRunTimeZero", run_id)
    control.tag("VerboseOptionEnabled", context.verbose)

"""Actions run when a Jasmine pattern matches."""

import logging

from log_test_parser.grammars.jasmine.context import JasmineContext, JasmineState
from log_test_parser.models.run import TestOutcome, TestResult
from log_test_parser.parsing.durations import to_timedelta
from log_test_parser.parsing.patterns import Match
from log_test_parser.parsing.table import RunControl

log = logging.getLogger(__name__)

RESULTS_WINDOW = 500
RESULTS_HINT = "failed/pending tests or test run summary"


def run_started(
    match: Match, context: JasmineContext, control: RunControl
) -> JasmineState:
    """Open the results phase."""
    context.expect_match_within(RESULTS_WINDOW, RESULTS_HINT)
    return JasmineState.AWAITING_RESULTS


def run_restarted(
    match: Match, context: JasmineContext, control: RunControl
) -> JasmineState:
    """Close the current run because another one started."""
    log.info(
        "%s: Test run started at line %d before the previous one completed",
        control.parser_name,
        context.current_line_number,
    )
    control.reconcile()
    return run_started(match, context, control)


def failures_started(
    match: Match, context: JasmineContext, control: RunControl
) -> JasmineState:
    """Classify the following numbered test cases as failed."""
    context.stack_trace.end()
    context.failures_section = True
    context.pending_section = False
    return JasmineState.AWAITING_RESULTS


def pending_started(
    match: Match, context: JasmineContext, control: RunControl
) -> JasmineState:
    """Classify the following numbered test cases as pending."""
    context.stack_trace.end()
    context.failures_section = False
    context.pending_section = True
    return JasmineState.AWAITING_RESULTS


def failed_or_pending_test_case(
    match: Match, context: JasmineContext, control: RunControl
) -> JasmineState:
    """Record a numbered failed or pending test case.

    Numbers must follow each other from 1 within a section. A number that
    restarts at 1 starts a new run; any other gap is ignored.
    """
    context.stack_trace.end()
    run_id = context.test_run.test_run_id

    if context.failures_section:
        expected = context.last_failed_number + 1
    elif context.pending_section:
        expected = context.last_pending_number + 1
    else:
        log.debug(
            "%s: Numbered test case at line %d outside of a failures or "
            "pending section",
            control.parser_name,
            context.current_line_number,
        )
        control.tag("FailedPendingTestCaseWithoutStarterMatch", run_id)
        return JasmineState.AWAITING_RESULTS

    number = int(match["number"])
    if number != expected:
        control.tag("UnexpectedTestCaseNumber", run_id)
        if number != 1:
            log.error(
                "%s: Expected test case number %d but found %d at line %d",
                control.parser_name,
                expected,
                number,
                context.current_line_number,
            )
            return JasmineState.AWAITING_RESULTS

        log.info(
            "%s: Test case numbering restarted at line %d, treating it as a "
            "new test run",
            control.parser_name,
            context.current_line_number,
        )
        failures_section = context.failures_section
        control.reconcile()
        context.failures_section = failures_section
        context.pending_section = not failures_section
        context.expect_match_within(RESULTS_WINDOW, RESULTS_HINT)

    test_run = context.test_run
    if context.failures_section:
        context.last_failed_number = number
        test_run.failed_tests.append(
            TestResult(name=match["name"], outcome=TestOutcome.FAILED)
        )
        context.stack_trace.begin(
            test_run.failed_tests, len(test_run.failed_tests) - 1, match[0]
        )
    else:
        context.last_pending_number = number
        test_run.skipped_tests.append(
            TestResult(name=match["name"], outcome=TestOutcome.NOT_EXECUTED)
        )
    return JasmineState.AWAITING_RESULTS


def suite_error(
    match: Match, context: JasmineContext, control: RunControl
) -> JasmineState:
    """Record an error raised outside of a spec as a failure."""
    context.stack_trace.end()
    context.suite_errors += 1
    test_run = context.test_run
    test_run.failed_tests.append(
        TestResult(name=match["name"], outcome=TestOutcome.FAILED)
    )
    context.stack_trace.begin(
        test_run.failed_tests, len(test_run.failed_tests) - 1, match[0]
    )
    return JasmineState.AWAITING_RESULTS


def summary(
    match: Match, context: JasmineContext, control: RunControl
) -> JasmineState:
    """Read the spec counts.

    The printed failure count includes suite errors while the spec count
    does not, so suite errors are added to the total instead of being taken
    from the passed specs.
    """
    context.stack_trace.end()
    total = int(match["total"])
    failed = int(match["failed"])
    skipped = int(match["skipped"] or 0)
    failed_specs = max(failed - context.suite_errors, 0)

    run_summary = context.test_run.summary
    run_summary.total_failed = failed
    run_summary.total_skipped = skipped
    run_summary.total_passed = max(total - failed_specs - skipped, 0)
    run_summary.total_tests = run_summary.total_passed + failed + skipped
    context.summary_seen = True

    context.expect_match_within(1, "test run time")
    return JasmineState.AWAITING_SUMMARY


def run_time(
    match: Match, context: JasmineContext, control: RunControl
) -> JasmineState:
    """Read the run duration, which completes the run."""
    context.test_run.summary.total_execution_time = to_timedelta(
        match["seconds"], "s"
    )
    context.time_parsed = True
    control.reconcile()
    return JasmineState.AWAITING_RUN_START


def before_publish(context: JasmineContext, control: RunControl) -> None:
    """Report incomplete details of a run about to be published."""
    run_id = context.test_run.test_run_id
    if not context.time_parsed:
        log.warning(
            "%s: Test run time not parsed for test run %d",
            control.parser_name,
            run_id,
        )
        control.tag("TotalTestRunTimeNotParsed", run_id)
    if context.suite_errors:
        control.tag("SuiteErrors", context.suite_errors)

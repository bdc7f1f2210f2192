"""State table of the Jasmine grammar."""

from log_test_parser.grammars.jasmine import actions, patterns
from log_test_parser.grammars.jasmine.context import JasmineContext, JasmineState
from log_test_parser.parsing.table import (
    Grammar,
    Rule,
    StateRules,
    append_to_stack_trace,
)

jasmine_grammar = Grammar(
    name="JasmineTestResultParser",
    run_name_prefix="Jasmine",
    telemetry_area="JasmineTestResultParser",
    initial_state=JasmineState.AWAITING_RUN_START,
    context_factory=JasmineContext,
    before_publish=actions.before_publish,
    states={
        JasmineState.AWAITING_RUN_START: StateRules(
            rules=(Rule(pattern=patterns.RUN_START, action=actions.run_started),),
        ),
        JasmineState.AWAITING_RESULTS: StateRules(
            rules=(
                Rule(
                    pattern=patterns.FAILED_OR_PENDING_TEST_CASE,
                    action=actions.failed_or_pending_test_case,
                ),
                Rule(pattern=patterns.FAILURES_START, action=actions.failures_started),
                Rule(pattern=patterns.PENDING_START, action=actions.pending_started),
                Rule(pattern=patterns.SUMMARY, action=actions.summary),
                Rule(pattern=patterns.RUN_START, action=actions.run_restarted),
                Rule(pattern=patterns.SUITE_ERROR, action=actions.suite_error),
            ),
            on_no_match=append_to_stack_trace,
        ),
        JasmineState.AWAITING_SUMMARY: StateRules(
            rules=(
                Rule(pattern=patterns.RUN_TIME, action=actions.run_time),
                Rule(pattern=patterns.RUN_START, action=actions.run_restarted),
            ),
        ),
    },
)

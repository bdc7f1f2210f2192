"""State table of the Jest grammar."""

from log_test_parser.grammars.jest import actions, patterns
from log_test_parser.grammars.jest.context import JestContext, JestState
from log_test_parser.parsing.table import (
    Grammar,
    Rule,
    StateRules,
    append_to_stack_trace,
)

jest_grammar = Grammar(
    name="JestTestResultParser",
    run_name_prefix="Jest",
    telemetry_area="JestTestResultParser",
    initial_state=JestState.AWAITING_RUN_START,
    context_factory=JestContext,
    before_publish=actions.before_publish,
    states={
        JestState.AWAITING_RUN_START: StateRules(
            rules=(Rule(pattern=patterns.RUN_START, action=actions.run_started),),
        ),
        JestState.AWAITING_RESULTS: StateRules(
            rules=(
                Rule(pattern=patterns.FAILED_TEST_CASE, action=actions.failed_test_case),
                Rule(pattern=patterns.PASSED_TEST_CASE, action=actions.passed_test_case),
                Rule(
                    pattern=patterns.SKIPPED_TEST_CASE,
                    action=actions.skipped_test_case,
                ),
                Rule(
                    pattern=patterns.STACK_TRACE_START,
                    action=actions.stack_trace_started,
                ),
                Rule(pattern=patterns.SUMMARY_START, action=actions.summary_started),
                Rule(pattern=patterns.RUN_START, action=actions.run_started),
                Rule(
                    pattern=patterns.FAILED_TESTS_SUMMARY_INDICATOR,
                    action=actions.failed_tests_summary_started,
                ),
                Rule(pattern=patterns.DOT_STATUS, action=actions.dot_status),
            ),
        ),
        JestState.AWAITING_STACK_TRACES: StateRules(
            rules=(
                Rule(
                    pattern=patterns.STACK_TRACE_START,
                    action=actions.stack_trace_started,
                ),
                Rule(pattern=patterns.SUMMARY_START, action=actions.summary_started),
                Rule(pattern=patterns.RUN_START, action=actions.next_test_file),
                Rule(
                    pattern=patterns.FAILED_TESTS_SUMMARY_INDICATOR,
                    action=actions.failed_tests_summary_started,
                ),
            ),
            on_no_match=append_to_stack_trace,
        ),
        JestState.AWAITING_SUMMARY: StateRules(
            rules=(
                Rule(pattern=patterns.TESTS_SUMMARY, action=actions.tests_summary),
                Rule(pattern=patterns.RUN_TIME, action=actions.run_time),
                Rule(pattern=patterns.RUN_START, action=actions.unexpected_run_start),
            ),
        ),
    },
)

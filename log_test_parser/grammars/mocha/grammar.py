"""State table of the Mocha grammar."""

from log_test_parser.grammars.mocha import actions, patterns
from log_test_parser.grammars.mocha.context import MochaContext, MochaState
from log_test_parser.parsing.table import Grammar, Rule, StateRules

mocha_grammar = Grammar(
    name="MochaTestResultParser",
    run_name_prefix="Mocha",
    telemetry_area="MochaTestResultParser",
    initial_state=MochaState.AWAITING_RESULTS,
    context_factory=MochaContext,
    states={
        MochaState.AWAITING_RESULTS: StateRules(
            rules=(
                Rule(pattern=patterns.PASSED_TEST_CASE, action=actions.passed_test_case),
                Rule(pattern=patterns.FAILED_TEST_CASE, action=actions.failed_test_case),
                Rule(
                    pattern=patterns.PENDING_TEST_CASE,
                    action=actions.pending_test_case,
                ),
                Rule(pattern=patterns.PASSED_SUMMARY, action=actions.passed_summary),
            ),
        ),
        MochaState.AWAITING_SUMMARY: StateRules(
            rules=(
                Rule(pattern=patterns.PENDING_SUMMARY, action=actions.pending_summary),
                Rule(pattern=patterns.FAILED_SUMMARY, action=actions.failed_summary),
                Rule(
                    pattern=patterns.PASSED_TEST_CASE,
                    action=actions.passed_test_case_after_summary,
                ),
                Rule(
                    pattern=patterns.FAILED_TEST_CASE,
                    action=actions.failed_test_case_after_summary,
                ),
                Rule(
                    pattern=patterns.PENDING_TEST_CASE,
                    action=actions.pending_test_case_after_summary,
                ),
                Rule(
                    pattern=patterns.PASSED_SUMMARY,
                    action=actions.summary_without_test_cases,
                ),
            ),
        ),
        MochaState.AWAITING_STACK_TRACES: StateRules(
            rules=(
                Rule(
                    pattern=patterns.FAILED_TEST_CASE,
                    action=actions.stack_trace_started,
                ),
                Rule(
                    pattern=patterns.PASSED_TEST_CASE,
                    action=actions.passed_test_case_after_summary,
                ),
                Rule(
                    pattern=patterns.PENDING_TEST_CASE,
                    action=actions.pending_test_case_after_summary,
                ),
                Rule(
                    pattern=patterns.PASSED_SUMMARY,
                    action=actions.summary_without_test_cases,
                ),
            ),
            on_no_match=actions.capture_stack_trace,
        ),
    },
)

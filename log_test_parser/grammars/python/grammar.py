"""State table of the unittest grammar."""

from log_test_parser.grammars.python import actions, patterns
from log_test_parser.grammars.python.context import PythonContext, PythonState
from log_test_parser.parsing.table import (
    Grammar,
    Rule,
    StateRules,
    append_to_stack_trace,
)

python_grammar = Grammar(
    name="Python",
    run_name_prefix="Python",
    telemetry_area="PythonTestResultParser",
    initial_state=PythonState.AWAITING_RESULTS,
    context_factory=PythonContext,
    before_publish=actions.before_publish,
    states={
        PythonState.AWAITING_RESULTS: StateRules(
            rules=(
                Rule(pattern=patterns.TEST_RESULT, action=actions.result_line),
                Rule(
                    pattern=patterns.PASSED_OUTCOME,
                    action=actions.passed_continuation,
                ),
                Rule(
                    pattern=patterns.SKIPPED_OUTCOME,
                    action=actions.skipped_continuation,
                ),
                Rule(
                    pattern=patterns.FAILED_OUTCOME,
                    action=actions.failed_continuation,
                ),
                Rule(
                    pattern=patterns.UNEXPECTED_SUCCESS_OUTCOME,
                    action=actions.unexpected_success_continuation,
                ),
                Rule(pattern=patterns.FAILED_DETAIL, action=actions.failed_detail),
                Rule(pattern=patterns.RAN_SUMMARY, action=actions.ran_summary),
            ),
        ),
        PythonState.AWAITING_FAILED_DETAIL: StateRules(
            rules=(
                Rule(pattern=patterns.FAILED_DETAIL, action=actions.failed_detail),
                Rule(pattern=patterns.RAN_SUMMARY, action=actions.ran_summary),
                Rule(
                    pattern=patterns.TEST_RESULT,
                    action=actions.result_line_after_failures,
                ),
                Rule(pattern=patterns.DASH_BORDER, action=actions.dash_border),
                Rule(pattern=patterns.EQUALS_BORDER, action=actions.equals_border),
            ),
            on_no_match=append_to_stack_trace,
        ),
        PythonState.AWAITING_SUMMARY: StateRules(
            rules=(
                Rule(pattern=patterns.OUTCOME_SUMMARY, action=actions.outcome_summary),
                Rule(pattern=patterns.BLANK, action=actions.blank_line),
            ),
            on_no_match=actions.outcome_summary_not_found,
        ),
    },
)

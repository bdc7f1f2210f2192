"""Tests for the unittest grammar."""

from datetime import timedelta
from unittest.mock import Mock, patch

import pytest

from log_test_parser.grammars.python import PythonState, python_grammar
from log_test_parser.models.run import TestOutcome
from log_test_parser.parsing.engine import EngineSettings
from log_test_parser.testing.parsing import parse_lines
from log_test_parser.testing.python.output import (
    BORDER_LENGTH,
    ZERO_STACK_TRACE,
    run_output,
)

EQUALS = "=" * BORDER_LENGTH
DASHES = "-" * BORDER_LENGTH


def test_publishes_passing_run() -> None:
    """Publishes a single passed test with the run duration."""
    lines = ["test_x (mod) ... ok", "Ran 1 tests in 0.002s", "OK"]

    parsed = parse_lines(python_grammar, lines)

    assert len(parsed.test_runs) == 1
    test_run = parsed.test_runs[0]
    assert test_run.parser_uri == "Python/1.0"
    assert len(test_run.passed_tests) == 1
    assert test_run.summary.total_tests == 1
    assert test_run.summary.total_execution_time == timedelta(milliseconds=2)


class TestFailingRun:
    """Tests for a run with failures, errors and skipped tests."""

    def test_reads_summary_counts(self) -> None:
        """Counts errors as failures and derives the passed count."""
        parsed = parse_lines(python_grammar, run_output())

        summary = parsed.test_runs[0].summary
        assert summary.total_tests == 4
        assert summary.total_passed == 1
        assert summary.total_failed == 2
        assert summary.total_skipped == 1
        assert summary.total_execution_time == timedelta(milliseconds=3)
        assert parsed.parser.state is PythonState.AWAITING_RESULTS

    def test_records_failures_from_details(self) -> None:
        """Records failures in the order their details are printed."""
        parsed = parse_lines(python_grammar, run_output())

        test_run = parsed.test_runs[0]
        assert [t.name for t in test_run.failed_tests] == [
            "test_zero (test_calc.CalcTest)",
            "test_sub (test_calc.CalcTest)",
        ]
        assert all(t.outcome is TestOutcome.FAILED for t in test_run.failed_tests)
        assert test_run.failed_tests[0].stack_trace == ZERO_STACK_TRACE
        assert [t.name for t in test_run.skipped_tests] == [
            "test_divide (test_calc.CalcTest)"
        ]

    def test_tags_zero_run_time(self) -> None:
        """Reports a run whose duration rounds to zero."""
        parsed = parse_lines(python_grammar, run_output(seconds="0.000"))

        assert len(parsed.test_runs) == 1
        assert parsed.metric("TotalTestRunTimeZero") == [1]


class TestOutcomeOnLaterLine:
    """Tests for results whose outcome follows output of the test."""

    def test_resolves_outcome(self) -> None:
        """Records the test once its outcome is printed."""
        lines = [
            "test_slow (mod) ...",
            "printing from the test",
            "ok",
            "Ran 1 test in 0.010s",
            "",
            "OK",
        ]

        parsed = parse_lines(python_grammar, lines)

        assert [t.name for t in parsed.test_runs[0].passed_tests] == [
            "test_slow (mod)"
        ]

    def test_resolves_outcome_at_end_of_output_line(self) -> None:
        """Accepts an outcome printed right after output of the test."""
        lines = [
            "test_slow (mod) ... ",
            "computing ok",
            "Ran 1 test in 0.010s",
            "OK",
        ]

        parsed = parse_lines(python_grammar, lines)

        assert len(parsed.test_runs[0].passed_tests) == 1

    def test_resolves_skipped_outcome(self) -> None:
        """Records a later skipped outcome as skipped."""
        lines = [
            "test_later (mod) ...",
            "skipped 'no network'",
            "Ran 1 test in 0.010s",
            "OK (skipped=1)",
        ]

        parsed = parse_lines(python_grammar, lines)

        test_run = parsed.test_runs[0]
        assert [t.name for t in test_run.skipped_tests] == ["test_later (mod)"]
        assert test_run.summary.total_skipped == 1
        assert test_run.summary.total_passed == 0


def test_counts_expected_failure_as_passed() -> None:
    """Records an expected failure as a passed test."""
    lines = [
        "test_known (mod) ... expected failure",
        "Ran 1 test in 0.001s",
        "",
        "OK (expected failures=1)",
    ]

    parsed = parse_lines(python_grammar, lines)

    test_run = parsed.test_runs[0]
    assert [t.name for t in test_run.passed_tests] == ["test_known (mod)"]
    assert test_run.summary.total_passed == 1


@pytest.mark.parametrize(
    "results",
    [
        ["test_u (mod) ... unexpected success"],
        ["test_u (mod) ...", "printing from the test", "unexpected success"],
    ],
)
def test_counts_unexpected_success_as_failed(results: list[str]) -> None:
    """Records an unexpected success as a failed test."""
    lines = [
        *results,
        "",
        DASHES,
        "Ran 1 test in 0.001s",
        "",
        "FAILED (unexpected successes=1)",
    ]

    parsed = parse_lines(python_grammar, lines)

    test_run = parsed.test_runs[0]
    assert [t.name for t in test_run.failed_tests] == ["test_u (mod)"]
    assert test_run.passed_tests == []
    assert test_run.summary.total_failed == 1
    assert test_run.summary.total_passed == 0
    assert parsed.metric("FailedSummaryMismatch") is None


def test_missing_outcome_summary_starts_next_run() -> None:
    """Drops a run without its outcome line and parses the line again."""
    lines = [
        "test_a (mod) ... ok",
        "Ran 1 test in 0.001s",
        "",
        "test_b (mod) ... ok",
        "Ran 1 test in 0.001s",
        "OK",
    ]

    parsed = parse_lines(python_grammar, lines)

    assert len(parsed.test_runs) == 1
    test_run = parsed.test_runs[0]
    assert test_run.test_run_id == 2
    assert [t.name for t in test_run.passed_tests] == ["test_b (mod)"]
    assert parsed.metric("TestOutcomeSummaryNotFound") == [1]
    assert parsed.metric("TestCasesFoundButNoSummary") == [1]


def test_result_after_failure_details_starts_next_run() -> None:
    """Drops a run whose summary is missing when results reappear."""
    lines = [
        *run_output()[:22],
        "test_again (mod) ... ok",
        "Ran 1 test in 0.001s",
        "",
        "OK",
    ]

    parsed = parse_lines(python_grammar, lines)

    assert [r.test_run_id for r in parsed.test_runs] == [2]
    assert [t.name for t in parsed.test_runs[0].passed_tests] == [
        "test_again (mod)"
    ]
    assert parsed.metric("SummaryNotFound") == [1]


def test_keeps_result_like_lines_in_stack_trace() -> None:
    """Treats lines that look like results as part of an open trace."""
    trace = [
        "Traceback (most recent call last):",
        '  File "test_mod.py", line 3, in test_x',
        "    self.assertIn('a ... b', text)",
        "AssertionError: 'a ... b' not found",
    ]
    lines = [
        "test_x (mod) ... FAIL",
        "",
        EQUALS,
        "FAIL: test_x (mod)",
        DASHES,
        *trace,
        "",
        DASHES,
        "Ran 1 test in 0.001s",
        "",
        "FAILED (failures=1)",
    ]

    parsed = parse_lines(python_grammar, lines)

    assert len(parsed.test_runs) == 1
    assert parsed.test_runs[0].failed_tests[0].stack_trace == "\n".join(trace)
    assert parsed.metric("SummaryNotFound") is None


def test_discards_overflowing_stack_trace() -> None:
    """Empties a trace longer than the line budget."""
    lines = [
        "test_x (mod) ... FAIL",
        "",
        EQUALS,
        "FAIL: test_x (mod)",
        DASHES,
        *[f"  frame {n}" for n in range(51)],
        DASHES,
        "Ran 1 test in 0.001s",
        "",
        "FAILED (failures=1)",
    ]

    parsed = parse_lines(python_grammar, lines)

    assert parsed.test_runs[0].failed_tests[0].stack_trace == ""


def test_reads_non_verbose_output() -> None:
    """Records failures from details when only progress dots are printed."""
    lines = [
        ".F",
        EQUALS,
        "FAIL: test_x (mod)",
        DASHES,
        "Traceback (most recent call last):",
        "AssertionError",
        "",
        DASHES,
        "Ran 2 tests in 0.010s",
        "",
        "FAILED (failures=1)",
    ]

    parsed = parse_lines(python_grammar, lines)

    test_run = parsed.test_runs[0]
    assert test_run.passed_tests == []
    assert [t.name for t in test_run.failed_tests] == ["test_x (mod)"]
    assert test_run.failed_tests[0].stack_trace == (
        "Traceback (most recent call last):\nAssertionError"
    )
    assert test_run.summary.total_passed == 1
    assert test_run.summary.total_execution_time == timedelta(milliseconds=10)


def test_outcome_summary_count_timeout_reads_no_counts() -> None:
    """Reads no failure counts when counting runs out of time."""
    slow_pattern = Mock(pattern="count")
    slow_pattern.finditer.side_effect = TimeoutError

    with patch(
        "log_test_parser.grammars.python.patterns.OUTCOME_SUMMARY_COUNT",
        slow_pattern,
    ):
        parsed = parse_lines(
            python_grammar, run_output(), settings=EngineSettings(regex_timeout=0.5)
        )

    summary = parsed.test_runs[0].summary
    assert summary.total_failed == 0
    assert summary.total_skipped == 0
    assert summary.total_passed == 4
    assert parsed.metric("RegexTimeout") == ["count"]
    slow_pattern.finditer.assert_called_once_with(
        "failures=1, errors=1, skipped=1", timeout=0.5
    )

"""Patterns of the Jest default and verbose reporters."""

from log_test_parser.parsing.patterns import compile_pattern

_DURATION = r"( \((?P<time>[0-9]+(\.[0-9]+)?) ?(?P<unit>ms|s|m|h)\))?"

RUN_START = compile_pattern(r"^\s*(?P<status>FAIL|PASS)\s+(?P<file>\S.*?)\s*$")
PASSED_TEST_CASE = compile_pattern(rf"^\s+(✓|√) (?P<name>.*?){_DURATION}\s*$")
FAILED_TEST_CASE = compile_pattern(rf"^\s+(✕|×) (?P<name>.*?){_DURATION}\s*$")
SKIPPED_TEST_CASE = compile_pattern(r"^\s+○ (skipped |todo )?(?P<name>.+?)\s*$")
DOT_STATUS = compile_pattern(r"^[.F*]+\s*$")
STACK_TRACE_START = compile_pattern(r"^\s*● (?P<name>(.* › )?.+?)\s*$")
FAILED_TESTS_SUMMARY_INDICATOR = compile_pattern(r"Summary of all failing tests\s*$")
SUMMARY_START = compile_pattern(r"^Test Suites: .+")
TESTS_SUMMARY = compile_pattern(r"^Tests:\s+(?P<counts>.*[0-9]+ total)")
TESTS_SUMMARY_COUNT = compile_pattern(
    r"(?P<count>[0-9]+) (?P<kind>failed|passed|skipped|pending|todo|total)"
)
RUN_TIME = compile_pattern(
    r"^Time:\s+(?P<time>[0-9]+(\.[0-9]+)?)\s?(?P<unit>ms|s|m|h)\b"
)

CONSOLE_PSEUDO_FAILURE = "Console"

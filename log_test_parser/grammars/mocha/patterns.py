"""Patterns of the Mocha spec reporter."""

from log_test_parser.parsing.patterns import compile_pattern

PASSED_TEST_CASE = compile_pattern(
    r"^\s+(✓|√|ΓêÜ) (?P<name>.*?)"
    r"( \((?P<time>[1-9][0-9]*)(?P<unit>ms|s|m|h)\))?\s*$"
)
FAILED_TEST_CASE = compile_pattern(r"^\s+(?P<number>[1-9][0-9]*)\) (?P<name>.*?)\s*$")
PENDING_TEST_CASE = compile_pattern(r"^\s+- (?P<name>.*?)\s*$")
PASSED_SUMMARY = compile_pattern(
    r"^\s+(?P<passed>0|[1-9][0-9]*) passing"
    r" \((?P<time>[1-9][0-9]*)(?P<unit>ms|s|m|h)\)\s*$"
)
FAILED_SUMMARY = compile_pattern(r"^\s+(?P<failed>[1-9][0-9]*) failing\s*$")
PENDING_SUMMARY = compile_pattern(r"^\s+(?P<pending>[1-9][0-9]*) pending\s*$")

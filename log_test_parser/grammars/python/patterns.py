"""Patterns of the unittest text runner."""

from log_test_parser.parsing.patterns import compile_pattern

TEST_RESULT = compile_pattern(r"^(?P<name>.+?) \.\.\.(?: (?P<outcome>.*?))?\s*$")
PASSED_OUTCOME = compile_pattern(r"(^|\s)(ok|expected failure)\s*$")
SKIPPED_OUTCOME = compile_pattern(r"^skipped\b")
FAILED_OUTCOME = compile_pattern(r"^(FAIL|ERROR)\s*$")
UNEXPECTED_SUCCESS_OUTCOME = compile_pattern(r"^unexpected success\s*$")
FAILED_DETAIL = compile_pattern(r"^(?P<kind>FAIL|ERROR) ?: ?(?P<name>.+?)\s*$")
DASH_BORDER = compile_pattern(r"^-{70,}\s*$")
EQUALS_BORDER = compile_pattern(r"^={70,}\s*$")
RAN_SUMMARY = compile_pattern(
    r"^Ran (?P<total>[0-9]+) tests? in (?P<seconds>[0-9]+(\.[0-9]+)?)s"
)
OUTCOME_SUMMARY = compile_pattern(
    r"^(?P<result>OK|FAILED)\s*(\((?P<details>.*)\))?\s*$"
)
OUTCOME_SUMMARY_COUNT = compile_pattern(
    r"(?P<kind>failures|errors|skipped|expected failures|unexpected successes)"
    r" ?= ?(?P<count>[0-9]+)"
)
BLANK = compile_pattern(r"^\s*$")

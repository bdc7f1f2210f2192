"""Patterns of the Jasmine console reporter."""

from log_test_parser.parsing.patterns import compile_pattern

RUN_START = compile_pattern(r"^Started\s*$")
FAILURES_START = compile_pattern(r"^Failures:\s*$")
PENDING_START = compile_pattern(r"^Pending:\s*$")
FAILED_OR_PENDING_TEST_CASE = compile_pattern(
    r"^(?P<number>[1-9][0-9]*)\) (?P<name>.+?)\s*$"
)
SUMMARY = compile_pattern(
    r"^(?P<total>[0-9]+) specs?, (?P<failed>[0-9]+) failures?"
    r"(, (?P<skipped>[0-9]+) pending specs?)?"
)
RUN_TIME = compile_pattern(r"^Finished in (?P<seconds>[0-9]+(\.[0-9]+)?) seconds?\s*$")
SUITE_ERROR = compile_pattern(r"^Suite error: (?P<name>.+?)\s*$")

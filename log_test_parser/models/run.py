"""Models for test runs recovered from console output."""

from datetime import timedelta
from enum import StrEnum

from pydantic import Field, PositiveInt, computed_field, field_validator

from log_test_parser.models.base import MutableModel


class TestOutcome(StrEnum):
    """Outcome of a single test case."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    NOT_EXECUTED = "not_executed"
    UNKNOWN = "unknown"


class TestResult(MutableModel):
    """A single test case seen in the output.

    The stack trace is extended while the trace lines are being read, so
    this model is not frozen.
    """

    __test__ = False

    name: str
    outcome: TestOutcome
    stack_trace: str | None = None
    execution_time: timedelta | None = None


class TestRunSummary(MutableModel):
    """Totals printed by the test runner.

    Counts are filled in as summary lines are read and are only
    authoritative once the run is published.
    """

    __test__ = False

    total_tests: int = Field(default=0, ge=0)
    total_passed: int = Field(default=0, ge=0)
    total_failed: int = Field(default=0, ge=0)
    total_skipped: int = Field(default=0, ge=0)
    total_execution_time: timedelta = timedelta(0)


class TestRun(MutableModel):
    """A test run under construction or ready for publishing."""

    __test__ = False

    parser_uri: str = Field(..., description="Parser identity as 'Name/Version'")
    run_name_prefix: str
    test_run_id: PositiveInt
    passed_tests: list[TestResult] = Field(default_factory=list)
    failed_tests: list[TestResult] = Field(default_factory=list)
    skipped_tests: list[TestResult] = Field(default_factory=list)
    summary: TestRunSummary = Field(default_factory=TestRunSummary)

    @field_validator("parser_uri")
    @classmethod
    def _check_parser_uri(cls, value: str) -> str:
        parts = value.split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(
                f"Parser uri '{value}' must be of the form 'Name/Version'"
            )
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def name(self) -> str:
        """Display name of the run."""
        return (
            f"{self.run_name_prefix} test run {self.test_run_id}"
            " - automatically inferred results"
        )

    @property
    def has_results(self) -> bool:
        """Whether any individual test case was recorded."""
        return bool(self.passed_tests or self.failed_tests or self.skipped_tests)

    def next_run(self) -> "TestRun":
        """Create the empty run that follows this one."""
        return TestRun(
            parser_uri=self.parser_uri,
            run_name_prefix=self.run_name_prefix,
            test_run_id=self.test_run_id + 1,
        )

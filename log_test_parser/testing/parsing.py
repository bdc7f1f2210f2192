"""Helpers for feeding console output to a parser in tests."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from log_test_parser.models.run import TestRun
from log_test_parser.parsing.engine import EngineSettings, LineParser
from log_test_parser.parsing.table import Grammar
from log_test_parser.publishers.memory import InMemoryPublisher
from log_test_parser.telemetry import CumulativeTelemetry


@dataclass(frozen=True, kw_only=True)
class ParsedOutput:
    """Runs and diagnostics produced from one stream of lines."""

    parser: LineParser[Any, Any]
    publisher: InMemoryPublisher
    telemetry: CumulativeTelemetry

    @property
    def test_runs(self) -> Sequence[TestRun]:
        """Published runs, in order."""
        return self.publisher.test_runs

    def metric(self, name: str) -> Any:
        """Return a metric recorded in the grammar's telemetry area."""
        return self.telemetry.get(self.parser.grammar.telemetry_area, name)


def parse_lines(
    grammar: Grammar[Any, Any],
    lines: Iterable[str],
    *,
    flush: bool = False,
    settings: EngineSettings | None = None,
) -> ParsedOutput:
    """Feed ``lines`` to a new parser, numbering them from 1."""
    publisher = InMemoryPublisher()
    telemetry = CumulativeTelemetry()
    parser = LineParser(
        grammar=grammar,
        publisher=publisher,
        telemetry=telemetry,
        settings=settings or EngineSettings(),
    )

    for line_number, line in enumerate(lines, start=1):
        parser.consume(line, line_number)
    if flush:
        parser.flush()

    return ParsedOutput(parser=parser, publisher=publisher, telemetry=telemetry)

"""CLI entry point for recovering test runs from console output."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from log_test_parser.grammars.loading import available_grammars, load_grammar
from log_test_parser.models.run import TestRun
from log_test_parser.parsing.engine import EngineSettings, LineParser
from log_test_parser.parsing.patterns import DEFAULT_REGEX_TIMEOUT
from log_test_parser.publishers.loading import load_publisher_manifest
from log_test_parser.publishers.memory import FanOutPublisher, InMemoryPublisher
from log_test_parser.telemetry import CumulativeTelemetry

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
}


def log_runs_summary(log: logging.Logger, test_runs: Sequence[TestRun]) -> None:
    """Log a formatted summary of the published test runs."""
    log.info("=" * 80)
    log.info("Test Runs Summary:")
    log.info("=" * 80)

    if not test_runs:
        log.info("No test runs found")

    for test_run in test_runs:
        summary = test_run.summary
        status = "failed" if summary.total_failed else "passed"
        log.info(
            "%s %s: %d passed, %d failed, %d skipped (%.3fs)",
            STATUS_SYMBOLS[status],
            test_run.name,
            summary.total_passed,
            summary.total_failed,
            summary.total_skipped,
            summary.total_execution_time.total_seconds(),
        )
        for test in test_run.failed_tests:
            log.info("  Failed: %s", test.name)


def log_telemetry(log: logging.Logger, telemetry: CumulativeTelemetry) -> None:
    """Log the collected parser diagnostics."""
    for area, metrics in telemetry.snapshot().items():
        for name, value in sorted(metrics.items()):
            log.debug("%s.%s = %s", area, name, value)


async def run(
    parser_keys: Sequence[str],
    publisher_key: str,
    publisher_config_json: str,
    lines: Iterable[str],
    settings: EngineSettings | None = None,
) -> int:
    """Parse console output and publish the test runs found in it.

    Every line is fed to one parser per grammar.

    Returns:
        1 when a published run has failed tests, 0 otherwise

    """
    log = logging.getLogger("log_test_parser")
    settings = settings or EngineSettings()

    grammars = [load_grammar(key) for key in parser_keys]
    log.info("Parsing with: %s", ", ".join(g.parser_uri for g in grammars))

    log.info("Loading publisher: %s", publisher_key)
    manifest = load_publisher_manifest(publisher_key)

    config_dict = json.loads(publisher_config_json)
    config = manifest.config_cls(**config_dict)

    telemetry = CumulativeTelemetry()
    recorder = InMemoryPublisher()

    async with manifest.publisher_factory(config) as publisher:
        fan_out = FanOutPublisher(publishers=(recorder, publisher))
        parsers = [
            LineParser(
                grammar=grammar,
                publisher=fan_out,
                telemetry=telemetry,
                settings=settings,
            )
            for grammar in grammars
        ]

        line_count = 0
        for line_count, line in enumerate(lines, start=1):
            text = line.rstrip("\r\n")
            for parser in parsers:
                parser.consume(text, line_count)

        for parser in parsers:
            parser.flush()

        log.info("Parsed %d line(s)", line_count)

    log_runs_summary(log, recorder.test_runs)
    log_telemetry(log, telemetry)

    has_failures = any(
        test_run.summary.total_failed or test_run.failed_tests
        for test_run in recorder.test_runs
    )

    return 1 if has_failures else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Recover test runs from test runner console output"
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Console output to parse (defaults to standard input)",
    )
    parser.add_argument(
        "--parser",
        action="append",
        dest="parsers",
        help="Grammar key (jasmine, jest, mocha, python), repeatable; "
        "defaults to all registered grammars",
    )
    parser.add_argument(
        "--publisher",
        default="stdout",
        help="Publisher key (stdout, http)",
    )
    parser.add_argument(
        "--publisher-config",
        default="{}",
        help="JSON configuration for the publisher",
    )
    parser.add_argument(
        "--regex-timeout",
        type=float,
        default=DEFAULT_REGEX_TIMEOUT,
        help="Seconds a single pattern may spend on one line",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    settings = EngineSettings(regex_timeout=args.regex_timeout)
    parser_keys = args.parsers or available_grammars()

    if args.input is None:
        exit_code = asyncio.run(
            run(
                parser_keys=parser_keys,
                publisher_key=args.publisher,
                publisher_config_json=args.publisher_config,
                lines=sys.stdin,
                settings=settings,
            )
        )
    else:
        with args.input.open(encoding="utf-8", errors="replace") as lines:
            exit_code = asyncio.run(
                run(
                    parser_keys=parser_keys,
                    publisher_key=args.publisher,
                    publisher_config_json=args.publisher_config,
                    lines=lines,
                    settings=settings,
                )
            )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()

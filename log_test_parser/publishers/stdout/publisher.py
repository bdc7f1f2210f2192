"""Publisher writing test runs to standard output."""

import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TextIO

from log_test_parser.models.run import TestRun
from log_test_parser.publishers.base import Publisher
from log_test_parser.publishers.stdout.config import StdoutPublisherConfig


@dataclass(frozen=True, kw_only=True)
class StdoutPublisher(Publisher):
    """Writes each test run as a JSON document."""

    config: StdoutPublisherConfig
    stream: TextIO = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: StdoutPublisherConfig
    ) -> AsyncGenerator["StdoutPublisher", None]:
        """Create publisher writing to the current standard output."""
        publisher = cls(config=config, stream=sys.stdout)
        try:
            yield publisher
        finally:
            publisher.stream.flush()

    def publish(self, test_run: TestRun) -> None:
        """Write the run."""
        self.stream.write(test_run.model_dump_json(indent=self.config.indent))
        self.stream.write("\n")

"""Publishers keeping runs in memory or forwarding them."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from log_test_parser.models.run import TestRun
from log_test_parser.publishers.base import Publisher


@dataclass(kw_only=True)
class InMemoryPublisher(Publisher):
    """Collects published runs in order."""

    test_runs: list[TestRun] = field(default_factory=list)

    def publish(self, test_run: TestRun) -> None:
        """Store the run."""
        self.test_runs.append(test_run)


@dataclass(frozen=True, kw_only=True)
class FanOutPublisher(Publisher):
    """Hands each run to several publishers in order."""

    publishers: Sequence[Publisher]

    def publish(self, test_run: TestRun) -> None:
        """Publish the run to every publisher."""
        for publisher in self.publishers:
            publisher.publish(test_run)

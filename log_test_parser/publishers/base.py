"""Abstract base class for test run publishers."""

from abc import ABC, abstractmethod

from log_test_parser.models.run import TestRun


class Publisher(ABC):
    """Receives test runs once the parser considers them complete."""

    @abstractmethod
    def publish(self, test_run: TestRun) -> None:
        """Accept a completed test run.

        Called synchronously from the parser, so implementations must not
        block on I/O. Failures are handled and logged by the publisher.

        Args:
            test_run: The run, owned by the publisher from now on

        """

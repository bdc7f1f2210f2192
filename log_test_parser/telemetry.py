"""Telemetry collection for parser diagnostics."""

import logging
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Protocol

log = logging.getLogger(__name__)


class TelemetryCollector(Protocol):
    """Sink for diagnostic metrics."""

    def add_metric(
        self, area: str, name: str, value: Any, aggregate: bool = False
    ) -> None:
        """Record a metric, merging it with earlier values when aggregating."""
        ...


@dataclass
class CumulativeTelemetry:
    """In-memory telemetry that accumulates metrics per area.

    When aggregating, lists are extended and numbers are summed. Any other
    value replaces what was recorded before.
    """

    metrics: dict[str, dict[str, Any]] = field(default_factory=dict)

    def add_metric(
        self, area: str, name: str, value: Any, aggregate: bool = False
    ) -> None:
        """Record a metric."""
        area_metrics = self.metrics.setdefault(area, {})
        current = area_metrics.get(name)

        if aggregate and isinstance(current, list):
            current.extend(value if isinstance(value, list) else [value])
        elif aggregate and _is_number(current) and _is_number(value):
            area_metrics[name] = current + value
        elif isinstance(value, list):
            area_metrics[name] = list(value)
        else:
            area_metrics[name] = value

    def get(self, area: str, name: str, default: Any = None) -> Any:
        """Return a recorded metric."""
        return self.metrics.get(area, {}).get(name, default)

    def snapshot(self) -> Mapping[str, Mapping[str, Any]]:
        """Return a copy of all recorded metrics."""
        return {area: dict(metrics) for area, metrics in self.metrics.items()}


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


@contextmanager
def timed_line(
    telemetry: TelemetryCollector,
    area: str,
    line_number: int,
    threshold: float,
) -> Iterator[None]:
    """Record how long the enclosed block took to parse one line.

    The elapsed time in milliseconds is summed into ``ParseTime``. Lines
    slower than ``threshold`` seconds are counted in ``Spikes``.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        telemetry.add_metric(area, "ParseTime", elapsed * 1000, aggregate=True)
        if elapsed > threshold:
            telemetry.add_metric(area, "Spikes", 1, aggregate=True)
            log.debug(
                "%s: Parsing line %d took %.3f ms", area, line_number, elapsed * 1000
            )

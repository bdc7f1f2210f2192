"""Conversion of printed durations."""

from collections.abc import Mapping
from datetime import timedelta

UNIT_TO_TIMEDELTA_ARGUMENT: Mapping[str, str] = {
    "ms": "milliseconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
}


def to_timedelta(value: str, unit: str) -> timedelta:
    """Convert a printed amount and unit to a duration.

    Args:
        value: Numeric text such as "2", "1.25" or "0.002"
        unit: One of "ms", "s", "m" or "h"

    Returns:
        The duration

    Raises:
        KeyError: If the unit is not known
        ValueError: If the amount is not numeric

    """
    return timedelta(**{UNIT_TO_TIMEDELTA_ARGUMENT[unit]: float(value)})

"""Tests for duration conversion."""

from datetime import timedelta

import pytest

from log_test_parser.parsing.durations import to_timedelta


@pytest.mark.parametrize(
    ("value", "unit", "expected"),
    [
        ("350", "ms", timedelta(milliseconds=350)),
        ("0.002", "s", timedelta(milliseconds=2)),
        ("1.5", "s", timedelta(milliseconds=1500)),
        ("2", "m", timedelta(minutes=2)),
        ("1", "h", timedelta(hours=1)),
    ],
)
def test_converts_each_unit(value: str, unit: str, expected: timedelta) -> None:
    """Converts amounts in every supported unit."""
    assert to_timedelta(value, unit) == expected


def test_raises_for_unknown_unit() -> None:
    """Raises KeyError for units that are not supported."""
    with pytest.raises(KeyError):
        to_timedelta("1", "d")

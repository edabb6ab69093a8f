"""Unit tests for duration parsing."""

import pytest

from ochub_loadtest.utils.durations import format_seconds, parse_duration
from ochub_loadtest.utils.errors import ConfigurationError


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("10s", 10),
        ("2m", 120),
        ("1m30s", 90),
        ("1h", 3600),
        ("500ms", 0.5),
        ("0s", 0),
        ("2.5s", 2.5),
        ("45", 45),
        (3, 3),
        (0.25, 0.25),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == pytest.approx(expected)


@pytest.mark.unit
@pytest.mark.parametrize("value", ["", "ten seconds", "10x", "1m30", "-5s", -1, True, "s", float("nan")])
def test_parse_duration_invalid(value):
    with pytest.raises(ConfigurationError):
        parse_duration(value)


@pytest.mark.unit
def test_format_seconds():
    assert format_seconds(0) == "0s"
    assert format_seconds(4) == "4s"
    assert format_seconds(4.0) == "4s"
    assert format_seconds(1.5) == "1.5s"

import pytest

from kphtracker.utils.formatting import (
    format_duration_minutes,
    format_estimated_time,
    format_gp,
    format_kph,
    format_percentage,
)


@pytest.mark.parametrize(
    "kph, expected",
    [(0.0, "0"), (-3.0, "0"), (12.0, "12"), (12.34, "12.3"), (1234.5, "1,234.5")],
)
def test_format_kph(kph, expected):
    assert format_kph(kph) == expected


@pytest.mark.parametrize(
    "gp, expected",
    [(999, "999"), (1_000, "1K"), (12_345, "12.3K"), (1_500_000, "1.5M"), (2_000_000, "2M")],
)
def test_format_gp(gp, expected):
    assert format_gp(gp) == expected


def test_format_duration_minutes():
    assert format_duration_minutes(45) == "45m"
    assert format_duration_minutes(60) == "1h 0m"
    assert format_duration_minutes(125) == "2h 5m"


def test_format_estimated_time():
    assert format_estimated_time(0.5) == "30m"
    assert format_estimated_time(2.25) == "2h 15m"
    assert format_estimated_time(0.999) == "1h 0m"
    assert format_estimated_time(1.999) == "2h 0m"


def test_format_percentage():
    assert format_percentage(60.0) == "60.0%"

"""Unit tests for TTML time expressions."""

import pytest

from multisub.core.time import Time
from multisub.core.time_expression import (
    ClockTime,
    Metric,
    OffsetTime,
    format_clock_time,
    parse_time_expression,
)


class TestClockTime:
    """Test cases for clock-time expressions."""

    def test_plain_clock_time(self):
        """Should parse hours, minutes and seconds."""
        expr = parse_time_expression("01:02:03")

        assert expr == ClockTime(hours=1, minutes=2, seconds_field=3)
        assert expr.seconds == 3723.0

    def test_fraction_is_decimal(self):
        """Should read the fraction as decimal digits of a second."""
        assert parse_time_expression("00:00:01.5").seconds == pytest.approx(1.5)
        assert parse_time_expression("00:00:01.050").seconds == pytest.approx(1.05)

    def test_frames_have_no_seconds_value(self):
        """Should report no seconds value when frames are used."""
        expr = parse_time_expression("00:00:10:12.1")

        assert expr == ClockTime(
            hours=0, minutes=0, seconds_field=10, frames=12, sub_frames=1
        )
        assert expr.seconds is None
        assert expr.to_time() == Time(second=10)

    def test_to_time(self):
        """Should convert to a Time value."""
        assert parse_time_expression("00:01:02.250").to_time() == Time(
            minute=1, second=2, millisecond=250
        )

    def test_format_clock_time(self):
        """Should render a Time as a clock-time string."""
        assert format_clock_time(Time(hour=2, second=5, millisecond=7)) == (
            "02:00:05.007"
        )


class TestOffsetTime:
    """Test cases for offset-time expressions."""

    @pytest.mark.parametrize(
        ("value", "seconds"),
        [
            ("2h", 7200.0),
            ("1.5m", 90.0),
            ("3.25s", 3.25),
            ("250ms", 0.25),
        ],
    )
    def test_metric_offsets(self, value, seconds):
        """Should convert h, m, s and ms offsets to seconds."""
        assert parse_time_expression(value).seconds == pytest.approx(seconds)

    @pytest.mark.parametrize("value", ["25f", "10000t"])
    def test_frames_and_ticks_are_unsupported(self, value):
        """Should return no seconds value for frames and ticks."""
        expr = parse_time_expression(value)

        assert isinstance(expr, OffsetTime)
        assert expr.metric in (Metric.FRAMES, Metric.TICKS)
        assert expr.seconds is None
        assert expr.to_time() is None


class TestParseTimeExpression:
    """Test cases for unrecognised input."""

    @pytest.mark.parametrize("value", [None, "", "abc", "1:2:3", "10x"])
    def test_returns_none_for_invalid_values(self, value):
        """Should return None when the value is not a time expression."""
        assert parse_time_expression(value) is None

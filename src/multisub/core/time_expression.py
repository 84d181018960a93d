"""TTML time expressions (clock-time and offset-time)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from multisub.core.time import Time

_CLOCK_TIME = re.compile(
    r"(\d{2,}):(\d{2}):(\d{2})(?:\.(\d+)|:(\d{2,})(?:\.(\d+))?)?"
)
_OFFSET_TIME = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s|f|t)")


class Metric(StrEnum):
    """Unit of an offset-time expression."""

    HOURS = "h"
    MINUTES = "m"
    SECONDS = "s"
    MILLISECONDS = "ms"
    FRAMES = "f"
    TICKS = "t"


_METRIC_SECONDS = {
    Metric.HOURS: 3600.0,
    Metric.MINUTES: 60.0,
    Metric.SECONDS: 1.0,
    Metric.MILLISECONDS: 0.001,
}


@dataclass(frozen=True)
class ClockTime:
    """Absolute ``hours:minutes:seconds`` time.

    ``fraction`` keeps the decimal digits after the seconds field, so
    ``"5"`` means half a second and ``"05"`` means fifty milliseconds.
    """

    hours: int
    minutes: int
    seconds_field: int
    fraction: str | None = None
    frames: int | None = None
    sub_frames: int | None = None

    @property
    def seconds(self) -> float | None:
        """Total seconds, or None when the time is expressed in frames."""
        if self.frames is not None or self.sub_frames is not None:
            return None
        total = self.hours * 3600 + self.minutes * 60 + self.seconds_field
        if self.fraction:
            total += float(f"0.{self.fraction}")
        return float(total)

    def to_time(self) -> Time:
        seconds = self.seconds
        if seconds is None:
            # Frame rate is unknown here, so frames are dropped
            seconds = self.hours * 3600 + self.minutes * 60 + self.seconds_field
        return Time.from_seconds(seconds)


@dataclass(frozen=True)
class OffsetTime:
    """Relative time such as ``1.5s`` or ``250ms``."""

    value: float
    metric: Metric

    @property
    def seconds(self) -> float | None:
        """Seconds value, or None for frame and tick metrics."""
        factor = _METRIC_SECONDS.get(self.metric)
        if factor is None:
            return None
        return self.value * factor

    def to_time(self) -> Time | None:
        seconds = self.seconds
        return None if seconds is None else Time.from_seconds(seconds)


TimeExpression = ClockTime | OffsetTime


def parse_time_expression(value: str | None) -> TimeExpression | None:
    """Parse a TTML ``begin``/``end``/``dur`` attribute value.

    Args:
        value: Attribute value, may be None when the attribute is absent

    Returns:
        ClockTime or OffsetTime, or None when the value is not a time expression
    """
    if value is None:
        return None
    value = value.strip()

    if match := _CLOCK_TIME.fullmatch(value):
        hours, minutes, seconds, fraction, frames, sub_frames = match.groups()
        return ClockTime(
            hours=int(hours),
            minutes=int(minutes),
            seconds_field=int(seconds),
            fraction=fraction,
            frames=int(frames) if frames is not None else None,
            sub_frames=int(sub_frames) if sub_frames is not None else None,
        )

    if match := _OFFSET_TIME.fullmatch(value):
        number, metric = match.groups()
        return OffsetTime(value=float(number), metric=Metric(metric))

    return None


def format_clock_time(time: Time) -> str:
    """Render a Time as a TTML clock-time with millisecond fraction."""
    return time.format(".")

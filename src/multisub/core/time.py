"""Point-in-time value used for cue boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from functools import total_ordering


@total_ordering
@dataclass(frozen=True, eq=False)
class Time:
    """Immutable time value with millisecond resolution.

    The canonical form is the total number of seconds. Equality and ordering
    go through the millisecond-rounded canonical value, never the individual
    fields.

    Attributes:
        hour: Hours, unbounded
        minute: Minutes, 0-59
        second: Seconds, 0-59
        millisecond: Milliseconds, 0-999
    """

    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def __post_init__(self) -> None:
        """Validate field ranges."""
        if min(self.hour, self.minute, self.second, self.millisecond) < 0:
            raise ValueError(f"Time fields must be non-negative, got {self!r}")
        if self.minute >= 60:
            raise ValueError(f"Minute must be less than 60, got {self.minute}")
        if self.second >= 60:
            raise ValueError(f"Second must be less than 60, got {self.second}")
        if self.millisecond >= 1000:
            raise ValueError(
                f"Millisecond must be less than 1000, got {self.millisecond}"
            )

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> Time:
        """Build a Time from a whole number of milliseconds."""
        if milliseconds < 0:
            raise ValueError(f"Time cannot be negative, got {milliseconds}ms")
        total_seconds, millisecond = divmod(milliseconds, 1000)
        total_minutes, second = divmod(total_seconds, 60)
        hour, minute = divmod(total_minutes, 60)
        return cls(hour=hour, minute=minute, second=second, millisecond=millisecond)

    @classmethod
    def from_seconds(cls, seconds: float) -> Time:
        """Build a Time from fractional seconds, rounded to the millisecond.

        Args:
            seconds: Non-negative number of seconds

        Returns:
            Time whose fields reproduce ``seconds`` within half a millisecond

        Raises:
            ValueError: If ``seconds`` is negative
        """
        if seconds < 0:
            raise ValueError(f"Time cannot be negative, got {seconds}s")
        return cls.from_milliseconds(round(seconds * 1000))

    @classmethod
    def from_timedelta(cls, value: timedelta) -> Time:
        return cls.from_seconds(value.total_seconds())

    @property
    def total_milliseconds(self) -> int:
        return (
            (self.hour * 3600 + self.minute * 60 + self.second) * 1000
            + self.millisecond
        )

    @property
    def seconds(self) -> float:
        """Canonical fractional-seconds value."""
        return self.total_milliseconds / 1000

    def as_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.total_milliseconds)

    def shifted(self, by: float) -> Time:
        """Return this time moved by ``by`` seconds, clamped at zero."""
        return Time.from_seconds(max(0.0, self.seconds + by))

    def format(self, separator: str = ".") -> str:
        """Render as ``HH:MM:SS<separator>mmm``."""
        return (
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
            f"{separator}{self.millisecond:03d}"
        )

    @property
    def text(self) -> str:
        return self.format(".")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.total_milliseconds == other.total_milliseconds

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.total_milliseconds < other.total_milliseconds

    def __hash__(self) -> int:
        return hash(self.total_milliseconds)

    def __str__(self) -> str:
        return self.text

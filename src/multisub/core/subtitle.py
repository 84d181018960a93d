"""Subtitle domain models."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from typing import NamedTuple

from multisub.core.time import Time


def _as_time(value: Time | float) -> Time:
    if isinstance(value, Time):
        return value
    return Time.from_seconds(value)


@dataclass(frozen=True)
class Cue:
    """Single timed text span.

    Cues are not validated on construction: zero-length and inverted cues
    from real-world files stay representable. Use ``is_valid_time`` to audit.
    Times may be given as ``Time`` values or as float seconds.
    """

    start_time: Time
    end_time: Time
    text: str = ""
    identifier: str | None = None
    position: int | None = None
    speaker: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_time", _as_time(self.start_time))
        object.__setattr__(self, "end_time", _as_time(self.end_time))

    @classmethod
    def with_duration(
        cls,
        start_time: Time | float,
        duration: float,
        text: str = "",
        *,
        identifier: str | None = None,
        position: int | None = None,
        speaker: str | None = None,
    ) -> Cue:
        """Create a cue from a start time and a duration in seconds."""
        start = _as_time(start_time)
        return cls(
            start_time=start,
            end_time=Time.from_seconds(start.seconds + duration),
            text=text,
            identifier=identifier,
            position=position,
            speaker=speaker,
        )

    @property
    def start_seconds(self) -> float:
        return self.start_time.seconds

    @property
    def end_seconds(self) -> float:
        return self.end_time.seconds

    @property
    def duration(self) -> float:
        """Duration in seconds, negative for inverted cues."""
        return (
            self.end_time.total_milliseconds - self.start_time.total_milliseconds
        ) / 1000

    @property
    def is_valid_time(self) -> bool:
        return self.start_seconds >= 0 and self.duration > 0

    @property
    def is_zero_length(self) -> bool:
        return self.start_time == self.end_time

    def contains(self, seconds: float) -> bool:
        """Return True if ``seconds`` lies within the cue, both ends inclusive."""
        return self.start_seconds <= seconds <= self.end_seconds

    def time_shifting(self, by: float) -> Cue:
        """Return a copy moved by ``by`` seconds.

        The start is clamped at zero and the end is clamped so it never
        precedes the (clamped) start.
        """
        start = self.start_time.shifted(by)
        end = max(self.end_time.shifted(by), start)
        return replace(self, start_time=start, end_time=end)

    def inserting(self, duration: float, at: float) -> Cue:
        """Return a copy adjusted for ``duration`` seconds inserted at ``at``.

        A cue containing ``at`` is stretched, a cue starting after ``at`` is
        moved, and a cue entirely before ``at`` is returned unchanged.
        """
        if self.contains(at):
            end = max(self.end_time.shifted(duration), self.start_time)
            return replace(self, end_time=end)
        if self.start_seconds > at:
            return self.time_shifting(duration)
        return self


class CueType(NamedTuple):
    """Where a point in time falls relative to the cues of a track."""

    index: int
    is_inside_cue: bool


@dataclass(frozen=True)
class Subtitles:
    """Collection of cues, always ordered by start time."""

    cues: tuple[Cue, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # sorted() is stable, so cues sharing a start time keep input order
        ordered = tuple(sorted(self.cues, key=lambda cue: cue.start_time))
        object.__setattr__(self, "cues", ordered)

    @classmethod
    def from_cues(cls, cues: Iterable[Cue]) -> Subtitles:
        return cls(cues=tuple(cues))

    def __len__(self) -> int:
        """Return number of cues."""
        return len(self.cues)

    def __iter__(self) -> Iterator[Cue]:
        """Iterate over cues in start-time order."""
        return iter(self.cues)

    def __getitem__(self, index: int) -> Cue:
        """Get cue by index (0-based)."""
        return self.cues[index]

    def first_cue_index_containing(self, seconds: float) -> int | None:
        for index, cue in enumerate(self.cues):
            if cue.contains(seconds):
                return index
        return None

    def first_cue_containing(self, seconds: float) -> Cue | None:
        """Return the first cue whose span contains ``seconds``, if any."""
        index = self.first_cue_index_containing(seconds)
        return None if index is None else self.cues[index]

    def next_cue_index(self, seconds: float) -> int | None:
        """Locate the next cue after a gap.

        Args:
            seconds: Point in time to look from

        Returns:
            0 when ``seconds`` is before the first cue, otherwise the index of
            the first cue starting after ``seconds`` whose predecessor has
            already ended. None when ``seconds`` is inside a cue or after the
            last one.
        """
        if not self.cues or self.first_cue_index_containing(seconds) is not None:
            return None
        if seconds < self.cues[0].start_seconds:
            return 0
        for index in range(1, len(self.cues)):
            previous, current = self.cues[index - 1], self.cues[index]
            if previous.end_seconds <= seconds < current.start_seconds:
                return index
        return None

    def cue_type(self, seconds: float) -> CueType | None:
        """Classify ``seconds`` as inside a cue or in the gap before one."""
        index = self.first_cue_index_containing(seconds)
        if index is not None:
            return CueType(index=index, is_inside_cue=True)
        index = self.next_cue_index(seconds)
        if index is not None:
            return CueType(index=index, is_inside_cue=False)
        return None

    def cue_index_for_position(self, position: int) -> int | None:
        for index, cue in enumerate(self.cues):
            if cue.position == position:
                return index
        return None

    def indexes_of_invalid_cues(self) -> list[int]:
        return [i for i, cue in enumerate(self.cues) if not cue.is_valid_time]

    def removing_invalid_cues(self) -> Subtitles:
        """Return a copy without zero-length, inverted or negative-start cues."""
        return Subtitles.from_cues(cue for cue in self.cues if cue.is_valid_time)

    def cues_of_zero_length(self) -> list[Cue]:
        return [cue for cue in self.cues if cue.is_zero_length]

    @property
    def unique_speakers(self) -> set[str]:
        return {cue.speaker for cue in self.cues if cue.speaker}

    def time_shifting(self, by: float, at: float | None = None) -> Subtitles:
        """Re-time the track.

        Args:
            by: Signed number of seconds to insert (or remove when negative)
            at: Insertion point in seconds. When omitted every cue is shifted.

        Returns:
            New Subtitles with the adjusted cues
        """
        if at is None:
            return Subtitles.from_cues(cue.time_shifting(by) for cue in self.cues)
        return Subtitles.from_cues(cue.inserting(by, at=at) for cue in self.cues)

    def position_sorted(self) -> Subtitles:
        """Return a copy where cues sharing a start time are ordered by position.

        Start-time order is a structural guarantee of this type, so position
        only breaks ties. Cues without a position sort first.
        """
        ordered = sorted(
            self.cues,
            key=lambda cue: (cue.start_time, cue.position or 0),
        )
        return Subtitles.from_cues(ordered)

    def start_time_sorted(self) -> Subtitles:
        return Subtitles.from_cues(self.cues)

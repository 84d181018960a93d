"""SRT (SubRip) format parser and serializer."""

import re
from enum import Enum, auto

from multisub.core.errors import (
    InvalidFileError,
    InvalidPositionError,
    InvalidTimeError,
    StartTimeAfterEndTimeError,
    UnexpectedEndOfCueError,
)
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import split_lines
from multisub.core.time import Time
from multisub.formats.base import SubtitleCoder

_TIMING = re.compile(
    r"(\d+):(\d{1,2}):(\d{1,2}),(\d{3})\s*-->\s*(\d+):(\d{2}):(\d{1,2}),(\d{3})"
)


class _State(Enum):
    BLANK = auto()
    POSITION = auto()
    TEXT = auto()


def _parse_timing(line: str, line_number: int) -> tuple[Time, Time]:
    match = _TIMING.search(line)
    if not match:
        raise InvalidTimeError(line_number, detail=line)

    fields = [int(group) for group in match.groups()]
    try:
        start = Time(*fields[:4])
        end = Time(*fields[4:])
    except ValueError as e:
        raise InvalidTimeError(line_number, detail=line) from e

    if start > end:
        raise StartTimeAfterEndTimeError(line_number)
    return start, end


def _make_cue(position: int, start: Time, end: Time, text_lines: list[str]) -> Cue:
    return Cue(
        start_time=start,
        end_time=end,
        text="\n".join(text_lines),
        position=position,
    )


def parse_srt(content: str) -> Subtitles:
    """Parse SRT format string into a Subtitles value.

    Each block is a position line, a timing line and zero or more text
    lines, terminated by a blank line or the end of the content. Empty
    cue text is accepted since it occurs in real-world files.

    Args:
        content: SRT format string content

    Returns:
        Subtitles containing the parsed cues

    Raises:
        InvalidFileError: If a blank line interrupts a block before its text
        InvalidPositionError: If a position line is not an integer
        InvalidTimeError: If a timing line is malformed
        StartTimeAfterEndTimeError: If a cue ends before it starts
        UnexpectedEndOfCueError: If the content ends right after a position
    """
    cues: list[Cue] = []
    state = _State.BLANK
    position = 0
    start = end = Time()
    text_lines: list[str] = []
    line_number = 0

    for line_number, raw_line in enumerate(split_lines(content), start=1):
        line = raw_line.strip()

        if not line:
            if state is _State.TEXT:
                cues.append(_make_cue(position, start, end, text_lines))
                text_lines = []
                state = _State.BLANK
            elif state is _State.POSITION:
                raise InvalidFileError(
                    "Blank line between cue position and timing", line=line_number
                )
            continue

        if state is _State.BLANK:
            try:
                position = int(line)
            except ValueError as e:
                raise InvalidPositionError(line_number) from e
            state = _State.POSITION
        elif state is _State.POSITION:
            start, end = _parse_timing(line, line_number)
            state = _State.TEXT
        else:
            text_lines.append(line)

    if state is _State.POSITION:
        raise UnexpectedEndOfCueError(line_number)
    if state is _State.TEXT:
        cues.append(_make_cue(position, start, end, text_lines))

    return Subtitles.from_cues(cues)


def serialize_srt(subtitles: Subtitles) -> str:
    """Serialize Subtitles to SRT format string.

    Cues without a stored position are numbered one after the previous cue.

    Args:
        subtitles: Subtitles to serialize

    Returns:
        SRT format string
    """
    blocks = []
    position = 0

    for cue in subtitles:
        position = cue.position if cue.position is not None else position + 1
        timing = f"{cue.start_time.format(',')} --> {cue.end_time.format(',')}"
        blocks.append(f"{position}\n{timing}\n{cue.text}\n")

    return "\n".join(blocks)


class SRTCoder(SubtitleCoder):
    """SubRip coder."""

    extensions = ("srt",)

    def decode(self, content: str) -> Subtitles:
        return parse_srt(content)

    def encode(self, subtitles: Subtitles) -> str:
        return serialize_srt(subtitles)

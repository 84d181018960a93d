"""SBV (SubViewer / YouTube) format parser and serializer."""

import re

from multisub.core.errors import (
    InvalidTimeError,
    MissingTextError,
    StartTimeAfterEndTimeError,
    UnexpectedEOFError,
)
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import split_lines
from multisub.core.time import Time
from multisub.formats.base import SubtitleCoder

_TIMING = re.compile(
    r"^(\d+):(\d{1,2}):(\d{1,2})\.(\d{3}),(\d+):(\d{2}):(\d{1,2})\.(\d{3})$"
)


def _parse_timing(line: str, line_number: int) -> tuple[Time, Time]:
    match = _TIMING.match(line.strip())
    if not match:
        raise InvalidTimeError(line_number, detail=line)

    fields = [int(group) for group in match.groups()]
    try:
        start, end = Time(*fields[:4]), Time(*fields[4:])
    except ValueError as e:
        raise InvalidTimeError(line_number, detail=line) from e

    if start > end:
        raise StartTimeAfterEndTimeError(line_number)
    return start, end


def parse_sbv(content: str) -> Subtitles:
    """Parse SBV content into a Subtitles value.

    Every block is a ``H:MM:SS.mmm,H:MM:SS.mmm`` line followed by one or
    more text lines. Cues are numbered from 1 in file order.

    Args:
        content: SBV format string content

    Returns:
        Subtitles containing the parsed cues

    Raises:
        InvalidTimeError: If a timing line is malformed or has no text
        StartTimeAfterEndTimeError: If a cue ends before it starts
        UnexpectedEOFError: If the content ends right after a timing line
    """
    lines = split_lines(content)
    cues: list[Cue] = []
    index = 0

    while index < len(lines):
        if not lines[index].strip():
            index += 1
            continue

        start, end = _parse_timing(lines[index], index + 1)
        index += 1
        if index == len(lines):
            raise UnexpectedEOFError("Timing line without text at end of file")

        text_lines = []
        while index < len(lines) and lines[index].strip():
            text_lines.append(lines[index])
            index += 1
        if not text_lines:
            raise InvalidTimeError(index + 1, detail="timing line without text")

        cues.append(
            Cue(
                start_time=start,
                end_time=end,
                text="\n".join(text_lines),
                position=len(cues) + 1,
            )
        )

    return Subtitles.from_cues(cues)


def serialize_sbv(subtitles: Subtitles) -> str:
    """Serialize Subtitles to SBV format string.

    Raises:
        MissingTextError: If a cue has empty text, which SBV cannot represent
    """
    blocks = []
    for index, cue in enumerate(subtitles):
        if not cue.text:
            raise MissingTextError(index)
        timing = f"{cue.start_time.text},{cue.end_time.text}"
        blocks.append(f"{timing}\n{cue.text}\n")
    return "\n".join(blocks)


class SBVCoder(SubtitleCoder):
    """SubViewer coder."""

    extensions = ("sbv",)

    def decode(self, content: str) -> Subtitles:
        return parse_sbv(content)

    def encode(self, subtitles: Subtitles) -> str:
        return serialize_sbv(subtitles)

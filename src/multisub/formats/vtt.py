"""WebVTT format parser and serializer."""

import re

import structlog

from multisub.core.errors import InvalidFileError, InvalidTimeError
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import split_lines
from multisub.core.time import Time
from multisub.formats.base import SubtitleCoder

logger = structlog.get_logger()

_TIMESTAMP = r"(?:(\d+):)?(\d+):(\d+)[.,](\d{3})"
_TIMING = re.compile(rf"{_TIMESTAMP}\s*-->\s*{_TIMESTAMP}")
_VOICE_TAG = re.compile(r"<v[^ >]* ([^>]*)>")
_VOICE_CLOSE = "</v>"
_SKIPPED_BLOCKS = ("NOTE", "STYLE", "REGION")

Section = list[tuple[int, str]]


def _timestamp(hour: str | None, minute: str, second: str, millis: str) -> Time:
    return Time(
        hour=int(hour or 0),
        minute=int(minute),
        second=int(second),
        millisecond=int(millis),
    )


def _parse_timing(line: str, line_number: int) -> tuple[Time, Time] | None:
    """Parse a ``start --> end [settings]`` line, or return None if it is not one."""
    match = _TIMING.search(line)
    if not match:
        return None
    groups = match.groups()
    try:
        return _timestamp(*groups[:4]), _timestamp(*groups[4:])
    except ValueError as e:
        raise InvalidTimeError(line_number, detail=line) from e


def _split_sections(lines: list[str]) -> list[Section]:
    sections: list[Section] = []
    current: Section = []
    for line_number, line in enumerate(lines, start=1):
        # Only truly empty lines separate blocks; whitespace-only lines are content
        if line == "":
            if current:
                sections.append(current)
                current = []
        else:
            current.append((line_number, line))
    if current:
        sections.append(current)
    return sections


def _extract_speaker(text: str) -> tuple[str, str | None]:
    """Move a single leading ``<v Name>`` voice tag into a speaker value.

    Text carrying several voice tags is left untouched.
    """
    matches = list(_VOICE_TAG.finditer(text))
    if len(matches) != 1:
        return text, None
    match = matches[0]
    speaker = match.group(1).strip()
    text = text[: match.start()] + text[match.end() :]
    return text.replace(_VOICE_CLOSE, ""), speaker or None


def _parse_section(section: Section) -> list[Cue]:
    first_number, first_line = section[0]
    if "WEBVTT" in first_line or first_line.startswith(_SKIPPED_BLOCKS):
        return []

    cues: list[Cue] = []
    identifier: str | None = None
    index = 0

    timing = _parse_timing(first_line, first_number)
    if timing is None:
        identifier = first_line
        index = 1
        if index >= len(section):
            logger.debug("vtt_block_without_timing", line=first_number)
            return []
        line_number, line = section[index]
        timing = _parse_timing(line, line_number)
        if timing is None:
            raise InvalidTimeError(line_number, detail=line)
    index += 1

    text_lines: list[str] = []
    for line_number, line in section[index:]:
        next_timing = _parse_timing(line, line_number)
        if next_timing is None:
            text_lines.append(line)
            continue
        # Several cues packed into one block without blank separators
        cues.append(_make_cue(timing, text_lines, identifier))
        timing, text_lines, identifier = next_timing, [], None

    cues.append(_make_cue(timing, text_lines, identifier))
    return cues


def _make_cue(
    timing: tuple[Time, Time], text_lines: list[str], identifier: str | None
) -> Cue:
    text, speaker = _extract_speaker("\n".join(text_lines))
    return Cue(
        start_time=timing[0],
        end_time=timing[1],
        text=text,
        identifier=identifier,
        speaker=speaker,
    )


def parse_vtt(content: str) -> Subtitles:
    """Parse WebVTT content into a Subtitles value.

    Args:
        content: WebVTT format string content

    Returns:
        Subtitles containing the parsed cues

    Raises:
        InvalidFileError: If the content does not start with a WEBVTT header
        InvalidTimeError: If a cue identifier is not followed by a timing line
    """
    lines = split_lines(content)
    if not lines or "WEBVTT" not in lines[0]:
        raise InvalidFileError("Missing WEBVTT header", line=1)

    cues: list[Cue] = []
    for section in _split_sections(lines):
        cues.extend(_parse_section(section))
    return Subtitles.from_cues(cues)


def serialize_vtt(subtitles: Subtitles) -> str:
    """Serialize Subtitles to WebVTT format string.

    Args:
        subtitles: Subtitles to serialize

    Returns:
        WebVTT format string
    """
    blocks = ["WEBVTT\n"]
    for cue in subtitles:
        lines = []
        if cue.identifier:
            lines.append(cue.identifier)
        lines.append(f"{cue.start_time.text} --> {cue.end_time.text}")
        text = cue.text
        if cue.speaker:
            speaker = cue.speaker.replace("<", ".").replace(">", ".")
            text = f"<v {speaker}>{text}"
        lines.append(text)
        blocks.append("\n".join(lines) + "\n")
    return "\n".join(blocks)


class VTTCoder(SubtitleCoder):
    """WebVTT coder."""

    extensions = ("vtt",)

    def decode(self, content: str) -> Subtitles:
        return parse_vtt(content)

    def encode(self, subtitles: Subtitles) -> str:
        return serialize_vtt(subtitles)

"""MicroDVD (frame-based SUB) format parser."""

import re

import structlog

from multisub.core.errors import InvalidFileError, InvalidTimeError
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import split_lines
from multisub.core.time import Time
from multisub.formats.base import SubtitleDecoder

logger = structlog.get_logger()

DEFAULT_FRAME_RATE = 24.0

_LINE = re.compile(r"^\{(\d+)\}\{(\d*)\}(.*)$")
_STYLE_GROUP = re.compile(r"\{[^}]*\}")
_FRAME_RATE_LINE = re.compile(r"^\{1\}\{1\}(\d+(?:\.\d+)?)$")


def _strip_styles(component: str) -> str:
    """Keep the text after the last ``{...}`` group of a line component."""
    return _STYLE_GROUP.split(component)[-1].strip()


def parse_microdvd(content: str, frame_rate: float = DEFAULT_FRAME_RATE) -> Subtitles:
    """Parse MicroDVD content into a Subtitles value.

    Lines have the form ``{start}{end}{style}text|text``. Frame numbers are
    divided by ``frame_rate`` to give seconds. A first cue of the form
    ``{1}{1}23.976`` declares the frame rate and overrides ``frame_rate``.

    Args:
        content: MicroDVD format string content
        frame_rate: Frames per second used when the file declares none

    Returns:
        Subtitles containing the parsed cues

    Raises:
        ValueError: If ``frame_rate`` is not positive
        InvalidFileError: If a non-blank line is not a MicroDVD cue, or the
            declared frame rate is zero
        InvalidTimeError: If a cue's end frame is missing
    """
    if frame_rate <= 0:
        raise ValueError(f"Frame rate must be positive, got {frame_rate}")

    cues = []
    for line_number, raw_line in enumerate(split_lines(content), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if not cues and (declared := _FRAME_RATE_LINE.match(line)):
            frame_rate = float(declared.group(1))
            if frame_rate <= 0:
                raise InvalidFileError(
                    f"Declared frame rate must be positive, got {frame_rate}",
                    line=line_number,
                )
            logger.debug("microdvd_frame_rate_declared", frame_rate=frame_rate)
            continue

        match = _LINE.match(line)
        if not match:
            raise InvalidFileError("Line is not a MicroDVD cue", line=line_number)
        start_frame, end_frame, body = match.groups()
        if not end_frame:
            raise InvalidTimeError(line_number, detail=line)

        text = "\n".join(_strip_styles(part) for part in body.split("|"))
        if not text.strip():
            continue

        cues.append(
            Cue(
                start_time=Time.from_seconds(int(start_frame) / frame_rate),
                end_time=Time.from_seconds(int(end_frame) / frame_rate),
                text=text,
            )
        )

    return Subtitles.from_cues(cues)


class MicroDVDDecoder(SubtitleDecoder):
    """MicroDVD decoder."""

    extensions = ("sub",)

    def __init__(self, frame_rate: float = DEFAULT_FRAME_RATE) -> None:
        if frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {frame_rate}")
        self.frame_rate = frame_rate

    def decode(self, content: str) -> Subtitles:
        return parse_microdvd(content, self.frame_rate)

"""LRC (lyrics) format parser and serializer."""

from enum import StrEnum

from multisub.core.errors import TimeTooLargeToExportError
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import split_lines
from multisub.core.timeparsing import parse_lrc_tags
from multisub.formats.base import SubtitleCoder

MAX_EXPORT_MINUTES = 99


class LRCTimeFormat(StrEnum):
    """Sub-second precision written in LRC time tags."""

    HUNDREDTHS = "hundredths"
    MILLISECONDS = "milliseconds"


def parse_lrc(content: str) -> Subtitles:
    """Parse LRC content into zero-length cues.

    A line may start with several time tags, in which case the same lyric
    is emitted once per tag. Lines without a time tag, such as ``[ar:...]``
    metadata, are ignored.

    Args:
        content: LRC format string content

    Returns:
        Subtitles with one zero-length cue per time tag

    Raises:
        InvalidTimeError: If a time tag has a seconds field of 60 or more
    """
    cues = []
    for line_number, line in enumerate(split_lines(content), start=1):
        times, text = parse_lrc_tags(line.strip(), line_number)
        cues.extend(Cue(start_time=time, end_time=time, text=text) for time in times)
    return Subtitles.from_cues(cues)


def _format_tag(cue: Cue, time_format: LRCTimeFormat) -> str:
    start = cue.start_time
    minutes = start.hour * 60 + start.minute
    if minutes > MAX_EXPORT_MINUTES:
        raise TimeTooLargeToExportError(cue)
    if time_format is LRCTimeFormat.MILLISECONDS:
        return f"[{minutes:02d}:{start.second:02d}.{start.millisecond:03d}]"
    return f"[{minutes:02d}:{start.second:02d}.{start.millisecond // 10:02d}]"


def serialize_lrc(
    subtitles: Subtitles, time_format: LRCTimeFormat = LRCTimeFormat.HUNDREDTHS
) -> str:
    """Serialize Subtitles to LRC format string.

    Only start times are written; LRC has no notion of an end time.

    Args:
        subtitles: Subtitles to serialize
        time_format: Write hundredths (``[mm:ss.xx]``) or milliseconds
            (``[mm:ss.xxx]``)

    Returns:
        LRC format string

    Raises:
        TimeTooLargeToExportError: If a cue starts at or after 100 minutes
    """
    return "".join(
        f"{_format_tag(cue, time_format)}{cue.text}\n" for cue in subtitles
    )


class LRCCoder(SubtitleCoder):
    """LRC coder."""

    extensions = ("lrc",)

    def __init__(
        self, time_format: LRCTimeFormat | str = LRCTimeFormat.HUNDREDTHS
    ) -> None:
        self.time_format = LRCTimeFormat(time_format)

    def decode(self, content: str) -> Subtitles:
        return parse_lrc(content)

    def encode(self, subtitles: Subtitles) -> str:
        return serialize_lrc(subtitles, self.time_format)

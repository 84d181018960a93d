"""Core subtitle model, time grammars and errors."""

from multisub.core.errors import (
    CoderDoesNotSupportEncodingError,
    InvalidEncodingError,
    InvalidFileError,
    InvalidPositionError,
    InvalidTimeError,
    MissingTextError,
    StartTimeAfterEndTimeError,
    SubtitleError,
    TimeTooLargeToExportError,
    UnexpectedEndOfCueError,
    UnexpectedEOFError,
    UnsupportedFileTypeError,
)
from multisub.core.subtitle import Cue, CueType, Subtitles
from multisub.core.time import Time
from multisub.core.time_expression import (
    ClockTime,
    Metric,
    OffsetTime,
    parse_time_expression,
)
from multisub.core.timeparsing import parse_common_time, parse_lrc_tags

__all__ = [
    "ClockTime",
    "CoderDoesNotSupportEncodingError",
    "Cue",
    "CueType",
    "InvalidEncodingError",
    "InvalidFileError",
    "InvalidPositionError",
    "InvalidTimeError",
    "Metric",
    "MissingTextError",
    "OffsetTime",
    "StartTimeAfterEndTimeError",
    "SubtitleError",
    "Subtitles",
    "Time",
    "TimeTooLargeToExportError",
    "UnexpectedEOFError",
    "UnexpectedEndOfCueError",
    "UnsupportedFileTypeError",
    "parse_common_time",
    "parse_lrc_tags",
    "parse_time_expression",
]

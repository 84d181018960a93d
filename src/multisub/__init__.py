"""Decode, inspect, re-time and re-encode subtitle files across formats."""

from multisub.core import (
    Cue,
    CueType,
    SubtitleError,
    Subtitles,
    Time,
)
from multisub.formats import (
    SubtitleFormatRegistry,
    decode,
    decode_bytes,
    encode,
    encode_bytes,
    get_registry,
)

__all__ = [
    "Cue",
    "CueType",
    "SubtitleError",
    "SubtitleFormatRegistry",
    "Subtitles",
    "Time",
    "decode",
    "decode_bytes",
    "encode",
    "encode_bytes",
    "get_registry",
]

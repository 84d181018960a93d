"""Subtitle format coders."""

from multisub.formats.ass import ASSDecoder, SSADecoder, parse_ass
from multisub.formats.base import SubtitleCoder, SubtitleDecoder, SubtitleEncoder
from multisub.formats.csv import CSVCoder, CSVField, CSVRowDiagnostic
from multisub.formats.json import JSONCoder, parse_json, serialize_json
from multisub.formats.lrc import LRCCoder, LRCTimeFormat, parse_lrc, serialize_lrc
from multisub.formats.microdvd import MicroDVDDecoder, parse_microdvd
from multisub.formats.podcast_index import (
    PodcastIndexCoder,
    parse_podcast_index,
    serialize_podcast_index,
)
from multisub.formats.registry import (
    SubtitleFormatRegistry,
    decode,
    decode_bytes,
    encode,
    encode_bytes,
    get_registry,
)
from multisub.formats.sbv import SBVCoder, parse_sbv, serialize_sbv
from multisub.formats.srt import SRTCoder, parse_srt, serialize_srt
from multisub.formats.ttml import TTMLCoder, parse_ttml, serialize_ttml
from multisub.formats.vtt import VTTCoder, parse_vtt, serialize_vtt

__all__ = [
    "ASSDecoder",
    "CSVCoder",
    "CSVField",
    "CSVRowDiagnostic",
    "JSONCoder",
    "LRCCoder",
    "LRCTimeFormat",
    "MicroDVDDecoder",
    "PodcastIndexCoder",
    "SBVCoder",
    "SRTCoder",
    "SSADecoder",
    "SubtitleCoder",
    "SubtitleDecoder",
    "SubtitleEncoder",
    "SubtitleFormatRegistry",
    "TTMLCoder",
    "VTTCoder",
    "decode",
    "decode_bytes",
    "encode",
    "encode_bytes",
    "get_registry",
    "parse_ass",
    "parse_json",
    "parse_lrc",
    "parse_microdvd",
    "parse_podcast_index",
    "parse_sbv",
    "parse_srt",
    "parse_ttml",
    "parse_vtt",
    "serialize_json",
    "serialize_lrc",
    "serialize_podcast_index",
    "serialize_sbv",
    "serialize_srt",
    "serialize_ttml",
    "serialize_vtt",
]

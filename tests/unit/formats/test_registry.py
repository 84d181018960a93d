"""Unit tests for the format registry and decode/encode facade."""

import pytest

from multisub.core.errors import (
    CoderDoesNotSupportEncodingError,
    InvalidEncodingError,
    UnsupportedFileTypeError,
)
from multisub.formats.ass import ASSDecoder
from multisub.formats.csv import CSVCoder
from multisub.formats.lrc import LRCCoder, LRCTimeFormat
from multisub.formats.microdvd import MicroDVDDecoder
from multisub.formats.registry import (
    SubtitleFormatRegistry,
    decode,
    decode_bytes,
    encode,
    encode_bytes,
    get_registry,
)
from multisub.formats.srt import SRTCoder
from multisub.formats.vtt import VTTCoder


@pytest.fixture
def registry() -> SubtitleFormatRegistry:
    registry = SubtitleFormatRegistry()
    registry.register_coder(SRTCoder)
    registry.register_coder(ASSDecoder)
    return registry


class TestSubtitleFormatRegistry:
    """Test cases for SubtitleFormatRegistry."""

    @pytest.mark.parametrize("extension", ["srt", "SRT", ".srt", " .Srt "])
    def test_lookup_is_case_insensitive(self, registry, extension):
        """Test that identifiers are normalized before lookup."""
        assert isinstance(registry.create_coder(extension), SRTCoder)
        assert extension in registry

    def test_unknown_format_raises_error(self, registry):
        """Test that an unregistered identifier raises error."""
        with pytest.raises(UnsupportedFileTypeError, match="docx") as exc_info:
            registry.create_coder("docx")

        assert exc_info.value.extension == "docx"

    def test_decode_only_format_cannot_encode(self, registry):
        """Test that requesting an encoder for a decoder raises error."""
        assert isinstance(registry.create_coder("ass"), ASSDecoder)
        assert registry.supports_encoding("srt")
        assert not registry.supports_encoding("ass")

        with pytest.raises(CoderDoesNotSupportEncodingError):
            registry.create_encoder("ass")

    def test_register_replaces_existing(self, registry):
        """Test that registering an identifier again replaces the factory."""
        registry.register("srt", VTTCoder)

        assert isinstance(registry.create_coder("srt"), VTTCoder)

    def test_register_empty_identifier_raises_error(self, registry):
        """Test that an empty identifier is rejected."""
        with pytest.raises(ValueError):
            registry.register(".", SRTCoder)

    def test_enumerate_formats(self, registry):
        """Test listing registered identifiers."""
        assert registry.enumerate_formats() == ["ass", "srt"]
        assert 42 not in registry


class TestDefaultRegistry:
    """Test cases for the built-in registry."""

    def test_all_formats_registered(self):
        """Test that every built-in format is available."""
        assert get_registry().enumerate_formats() == [
            "ass",
            "csv",
            "json",
            "lrc",
            "podcast-json",
            "sbv",
            "srt",
            "ssa",
            "sub",
            "ttml",
            "vtt",
        ]

    def test_microdvd_is_decode_only(self):
        """Test that MicroDVD cannot be encoded."""
        assert isinstance(get_registry().create_coder("sub"), MicroDVDDecoder)
        assert not get_registry().supports_encoding("sub")

    def test_configurable_coders_follow_settings(
        self, monkeypatch, clear_settings_cache
    ):
        """Test that coder defaults are read from settings at creation."""
        monkeypatch.setenv("MULTISUB_LRC_TIME_FORMAT", "milliseconds")
        monkeypatch.setenv("MULTISUB_CSV_DELIMITER", ";")
        monkeypatch.setenv("MULTISUB_MICRODVD_FRAME_RATE", "25")

        lrc = get_registry().create_coder("lrc")
        csv_coder = get_registry().create_coder("csv")
        microdvd = get_registry().create_coder("sub")

        assert isinstance(lrc, LRCCoder)
        assert lrc.time_format is LRCTimeFormat.MILLISECONDS
        assert isinstance(csv_coder, CSVCoder)
        assert csv_coder.delimiter == ";"
        assert isinstance(microdvd, MicroDVDDecoder)
        assert microdvd.frame_rate == 25.0


class TestFacade:
    """Test cases for the module-level decode and encode helpers."""

    def test_decode_and_encode(self, sample_srt_content, clear_settings_cache):
        """Test converting between formats through the facade."""
        subtitles = decode(sample_srt_content, ".SRT")

        result = encode(subtitles, "vtt")

        assert result.startswith("WEBVTT\n\n00:00:01.000 --> 00:00:04.000\n")

    def test_bytes_use_default_encoding(
        self, monkeypatch, sample_subtitles, clear_settings_cache
    ):
        """Test that byte helpers default to the configured encoding."""
        monkeypatch.setenv("MULTISUB_DEFAULT_ENCODING", "utf-16")

        data = encode_bytes(sample_subtitles, "srt")

        assert data.startswith(b"\xff\xfe") or data.startswith(b"\xfe\xff")
        assert decode_bytes(data, "srt") == sample_subtitles

    def test_unknown_encoding_with_empty_data_raises_error(self):
        """Test that a bad codec name is reported even for empty input."""
        with pytest.raises(InvalidEncodingError):
            decode_bytes(b"", "srt", "no-such-codec")

    def test_encode_decode_only_format_raises_error(self, sample_subtitles):
        """Test that encoding to a decode-only format raises error."""
        with pytest.raises(CoderDoesNotSupportEncodingError):
            encode(sample_subtitles, "ssa")

    def test_unknown_format_raises_error(self):
        """Test that the facade reports unknown formats."""
        with pytest.raises(UnsupportedFileTypeError):
            decode("", "doc")

"""Unit tests for MicroDVD parser."""

import pytest

from multisub.core.errors import InvalidFileError, InvalidTimeError
from multisub.core.time import Time
from multisub.formats.microdvd import MicroDVDDecoder, parse_microdvd


class TestParseMicroDVD:
    """Test cases for MicroDVD parsing."""

    def test_default_frame_rate(self):
        """Test converting frames with the default 24 fps."""
        result = parse_microdvd("{24}{48}Hello\n")

        assert result[0].start_time == Time(second=1)
        assert result[0].end_time == Time(second=2)

    def test_declared_frame_rate_overrides_argument(self):
        """Test that a leading {1}{1}fps line sets the frame rate."""
        content = """{1}{1}25
{25}{50}Hello|World
{75}{100}{y:i}Italic
"""
        result = parse_microdvd(content, frame_rate=30.0)

        assert len(result) == 2
        assert result[0].text == "Hello\nWorld"
        assert result[0].end_time == Time(second=2)
        assert result[1].start_time == Time(second=3)
        assert result[1].text == "Italic"

    def test_style_groups_are_removed_per_line(self):
        """Test that style groups are stripped from each text line."""
        result = parse_microdvd("{0}{24}{c:$0000FF}Red|{y:b}Bold\n")

        assert result[0].text == "Red\nBold"

    def test_blank_and_empty_text_lines_are_skipped(self):
        """Test that blank lines and cues with no text are ignored."""
        result = parse_microdvd("\n{0}{24}{y:i}\n\n{24}{48}Text\n")

        assert [cue.text for cue in result] == ["Text"]

    def test_missing_end_frame_raises_error(self):
        """Test that an empty end frame raises error."""
        with pytest.raises(InvalidTimeError) as exc_info:
            parse_microdvd("{24}{48}ok\n{10}{}Text\n")

        assert exc_info.value.line == 2

    def test_non_cue_line_raises_error(self):
        """Test that text outside the frame syntax raises error."""
        with pytest.raises(InvalidFileError):
            parse_microdvd("1\n00:00:01,000 --> 00:00:02,000\nSRT\n")

    @pytest.mark.parametrize("declared", ["0", "0.0"])
    def test_declared_zero_frame_rate_raises_error(self, declared):
        """Test that a {1}{1}0 frame-rate line raises error."""
        with pytest.raises(InvalidFileError, match="frame rate") as exc_info:
            parse_microdvd(f"\n{{1}}{{1}}{declared}\n{{10}}{{20}}Text\n")

        assert exc_info.value.line == 2

    def test_non_positive_frame_rate_raises_error(self):
        """Test that a zero frame rate is rejected."""
        with pytest.raises(ValueError, match="Frame rate"):
            parse_microdvd("{0}{1}x", frame_rate=0)


class TestMicroDVDDecoder:
    """Test cases for the MicroDVD decoder."""

    def test_decoder_uses_configured_frame_rate(self):
        """Test that the decoder converts frames with its frame rate."""
        decoder = MicroDVDDecoder(frame_rate=10.0)

        result = decoder.decode("{10}{25}Ten fps\n")

        assert result[0].end_time == Time(second=2, millisecond=500)

    def test_invalid_frame_rate_raises_error(self):
        """Test that a negative frame rate is rejected."""
        with pytest.raises(ValueError):
            MicroDVDDecoder(frame_rate=-1)

"""Unit tests for SBV parser and serializer."""

import pytest

from multisub.core.errors import (
    InvalidTimeError,
    MissingTextError,
    StartTimeAfterEndTimeError,
    UnexpectedEOFError,
)
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.time import Time
from multisub.formats.sbv import SBVCoder, parse_sbv, serialize_sbv

SAMPLE_SBV = """0:00:00.599,0:00:04.160
>> ALICE: Hi, my name is Alice Miller and this is John Brown

0:00:04.160,0:00:06.770
>> JOHN: and we're the owners of Miller Bakery.

0:00:06.770,0:00:10.880
>> ALICE: Today we'll be teaching you how to make
our famous chocolate chip cookies!
"""


class TestParseSBV:
    """Test cases for SBV parsing."""

    def test_parse_blocks(self):
        """Test parsing several blocks with multi-line text."""
        result = parse_sbv(SAMPLE_SBV)

        assert len(result) == 3
        assert result[0].start_time == Time(millisecond=599)
        assert result[0].end_time == Time(second=4, millisecond=160)
        assert result[2].text == (
            ">> ALICE: Today we'll be teaching you how to make\n"
            "our famous chocolate chip cookies!"
        )
        assert [cue.position for cue in result] == [1, 2, 3]

    def test_missing_text_at_end_of_file_raises_error(self):
        """Test that a timing line at EOF raises error."""
        content = """0:00:00.599,0:00:04.160
Hi

0:00:04.160,0:00:06.770"""
        with pytest.raises(UnexpectedEOFError):
            parse_sbv(content)

    def test_missing_text_before_blank_raises_error(self):
        """Test that a timing line followed by a blank line raises error."""
        content = """0:00:00.599,0:00:04.160

0:00:04.160,0:00:06.770
Hi
"""
        with pytest.raises(InvalidTimeError):
            parse_sbv(content)

    @pytest.mark.parametrize(
        "timing",
        [
            "0:00:00,599,0:00:04,160",
            "0:00:00.59,0:00:04.160",
            "0:00:00.599 --> 0:00:04.160",
        ],
    )
    def test_strict_timing_format(self, timing):
        """Test that timings outside the strict SBV form raise error."""
        with pytest.raises(InvalidTimeError):
            parse_sbv(f"{timing}\nText\n")

    def test_start_after_end_raises_error(self):
        """Test that start time after end time raises error."""
        with pytest.raises(StartTimeAfterEndTimeError):
            parse_sbv("0:00:05.000,0:00:04.000\nText\n")


class TestSerializeSBV:
    """Test cases for SBV serialization."""

    def test_serialize(self):
        """Test writing timing and text blocks."""
        subtitles = Subtitles.from_cues(
            [
                Cue(start_time=1.0, end_time=3.0, text="Hello"),
                Cue(start_time=4.0, end_time=6.0, text="Two\nlines"),
            ]
        )

        assert serialize_sbv(subtitles) == (
            "00:00:01.000,00:00:03.000\nHello\n\n"
            "00:00:04.000,00:00:06.000\nTwo\nlines\n"
        )

    def test_empty_text_raises_error(self):
        """Test that a cue without text cannot be written."""
        subtitles = Subtitles.from_cues(
            [
                Cue(start_time=1.0, end_time=3.0, text="Hello"),
                Cue(start_time=4.0, end_time=6.0, text=""),
            ]
        )

        with pytest.raises(MissingTextError) as exc_info:
            serialize_sbv(subtitles)

        assert exc_info.value.index == 1


class TestSBVCoder:
    """Test cases for the SBV coder."""

    def test_round_trip(self):
        """Test decode -> encode -> decode stability."""
        coder = SBVCoder()
        decoded = coder.decode(SAMPLE_SBV)

        assert coder.decode(coder.encode(decoded)) == decoded

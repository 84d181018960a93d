"""Pytest configuration and shared fixtures."""

from collections.abc import Generator

import pytest

from multisub.core.subtitle import Cue, Subtitles
from multisub.utils.config import get_settings


@pytest.fixture
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the get_settings LRU cache before and after a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_srt_content() -> str:
    """Return sample SRT content for testing."""
    return """1
00:00:01,000 --> 00:00:04,000
Hello, this is a test.

2
00:00:05,000 --> 00:00:08,000
This is the second subtitle.

3
00:00:09,000 --> 00:00:12,000
And this is the third one.
"""


@pytest.fixture
def sample_vtt_content() -> str:
    """Return sample WebVTT content with an identifier and a speaker."""
    return """WEBVTT

intro
00:00:01.000 --> 00:00:04.000
<v Alice>Hello, this is a test.

00:00:05.000 --> 00:00:08.000
This is the second subtitle.
"""


@pytest.fixture
def sample_subtitles() -> Subtitles:
    """Return three cues matching sample_srt_content."""
    return Subtitles.from_cues(
        [
            Cue(
                start_time=1.0,
                end_time=4.0,
                text="Hello, this is a test.",
                position=1,
            ),
            Cue(
                start_time=5.0,
                end_time=8.0,
                text="This is the second subtitle.",
                position=2,
            ),
            Cue(
                start_time=9.0,
                end_time=12.0,
                text="And this is the third one.",
                position=3,
            ),
        ]
    )

"""Pytest configuration and shared fixtures for integration tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from multisub.core.subtitle import Cue, Subtitles
from multisub.utils.config import get_settings

# ---------------------------------------------------------------------------
# Autouse fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the get_settings LRU cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Subtitle fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def dialogue() -> Subtitles:
    """Return a short two-speaker dialogue with multi-line text."""
    return Subtitles.from_cues(
        [
            Cue(
                start_time=0.5,
                end_time=2.25,
                text="Good morning.",
                speaker="Alice",
            ),
            Cue(
                start_time=2.5,
                end_time=5.0,
                text="Morning! Did you bring\nthe cookies?",
                speaker="Bob",
            ),
            Cue(
                start_time=61.04,
                end_time=63.5,
                text="Of course, & some milk.",
                speaker="Alice",
            ),
        ]
    )


# ---------------------------------------------------------------------------
# Content fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def ass_content() -> str:
    """Return an ASS script with the same dialogue."""
    return """[Script Info]
ScriptType: v4.00+

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:00.50,0:00:02.25,Default,Alice,0,0,0,,Good morning.
Dialogue: 0,0:00:02.50,0:00:05.00,Default,Bob,0,0,0,,Morning! Did you bring
Dialogue: 0,0:01:01.04,0:01:03.50,Default,Alice,0,0,0,,Of course, & some milk.
"""


@pytest.fixture
def srt_file(tmp_path: Path) -> Path:
    """Write a latin-1 encoded SRT file and return its path."""
    path = tmp_path / "episode.srt"
    path.write_bytes(
        "1\n00:00:01,000 --> 00:00:02,000\nCafé crème\n".encode("latin-1")
    )
    return path

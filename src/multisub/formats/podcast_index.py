"""Podcast-Index JSON transcript format.

See https://github.com/Podcastindex-org/podcast-namespace/blob/main/transcripts/transcripts.md
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from multisub.core.errors import InvalidFileError
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import strip_bom
from multisub.formats.base import SubtitleCoder

TRANSCRIPT_VERSION = "1.0.0"


class Segment(BaseModel):
    """One transcript segment with times in seconds."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    speaker: str | None = None
    start_time: float = Field(ge=0)
    end_time: float = Field(ge=0)
    body: str = ""


class Transcript(BaseModel):
    """Podcast-Index transcript document."""

    version: str = TRANSCRIPT_VERSION
    segments: list[Segment] = []


def parse_podcast_index(content: str) -> Subtitles:
    """Parse a Podcast-Index transcript into a Subtitles value.

    Each segment becomes a cue starting at ``startTime`` and lasting
    ``endTime - startTime``. An empty speaker is treated as no speaker.

    Raises:
        InvalidFileError: If the content does not match the transcript schema
    """
    try:
        transcript = Transcript.model_validate_json(strip_bom(content))
    except ValidationError as e:
        raise InvalidFileError(f"Invalid Podcast-Index transcript: {e}") from e

    return Subtitles.from_cues(
        Cue.with_duration(
            segment.start_time,
            segment.end_time - segment.start_time,
            segment.body,
            speaker=segment.speaker or None,
        )
        for segment in transcript.segments
    )


def serialize_podcast_index(subtitles: Subtitles) -> str:
    transcript = Transcript(
        segments=[
            Segment(
                speaker=cue.speaker,
                start_time=cue.start_seconds,
                end_time=cue.end_seconds,
                body=cue.text,
            )
            for cue in subtitles
        ]
    )
    return transcript.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class PodcastIndexCoder(SubtitleCoder):
    """Podcast-Index JSON transcript coder."""

    extensions = ("podcast-json",)

    def decode(self, content: str) -> Subtitles:
        return parse_podcast_index(content)

    def encode(self, subtitles: Subtitles) -> str:
        return serialize_podcast_index(subtitles)

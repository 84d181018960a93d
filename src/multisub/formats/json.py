"""Native JSON schema mirroring the cue model."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from multisub.core.errors import InvalidFileError
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import strip_bom
from multisub.core.time import Time
from multisub.formats.base import SubtitleCoder


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeSchema(_CamelModel):
    """Serialized Time."""

    hour: int = Field(default=0, ge=0)
    minute: int = Field(default=0, ge=0, lt=60)
    second: int = Field(default=0, ge=0, lt=60)
    millisecond: int = Field(default=0, ge=0, lt=1000)

    @classmethod
    def from_time(cls, time: Time) -> Self:
        return cls(
            hour=time.hour,
            minute=time.minute,
            second=time.second,
            millisecond=time.millisecond,
        )

    def to_time(self) -> Time:
        return Time(
            hour=self.hour,
            minute=self.minute,
            second=self.second,
            millisecond=self.millisecond,
        )


class CueSchema(_CamelModel):
    """Serialized Cue."""

    identifier: str | None = None
    position: int | None = None
    start_time: TimeSchema
    end_time: TimeSchema
    text: str = ""
    speaker: str | None = None


class SubtitlesSchema(_CamelModel):
    """Top-level native JSON document."""

    cues: list[CueSchema] = []


def parse_json(content: str) -> Subtitles:
    """Parse a native JSON document into a Subtitles value.

    Raises:
        InvalidFileError: If the content is not valid JSON or does not match
            the schema
    """
    try:
        document = SubtitlesSchema.model_validate_json(strip_bom(content))
    except ValidationError as e:
        raise InvalidFileError(f"Invalid subtitles JSON: {e}") from e

    return Subtitles.from_cues(
        Cue(
            start_time=cue.start_time.to_time(),
            end_time=cue.end_time.to_time(),
            text=cue.text,
            identifier=cue.identifier,
            position=cue.position,
            speaker=cue.speaker,
        )
        for cue in document.cues
    )


def serialize_json(subtitles: Subtitles) -> str:
    """Serialize Subtitles to the native JSON schema.

    Optional cue attributes that are unset are omitted.
    """
    document = SubtitlesSchema(
        cues=[
            CueSchema(
                identifier=cue.identifier,
                position=cue.position,
                start_time=TimeSchema.from_time(cue.start_time),
                end_time=TimeSchema.from_time(cue.end_time),
                text=cue.text,
                speaker=cue.speaker,
            )
            for cue in subtitles
        ]
    )
    return document.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class JSONCoder(SubtitleCoder):
    """Native JSON coder."""

    extensions = ("json",)

    def decode(self, content: str) -> Subtitles:
        return parse_json(content)

    def encode(self, subtitles: Subtitles) -> str:
        return serialize_json(subtitles)

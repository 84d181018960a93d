"""SSA / ASS (SubStation Alpha) format parser."""

import re
from enum import StrEnum

import structlog

from multisub.core.errors import InvalidFileError
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import split_lines
from multisub.core.timeparsing import parse_common_time
from multisub.formats.base import SubtitleDecoder

logger = structlog.get_logger()

_SECTION_HEADER = re.compile(r"^\s*\[([^\]]+)\]\s*$")
_SETTING = re.compile(r"^([^:]+):(.*)$")

EVENTS_SECTION = "Events"
SUPPORTED_SCRIPT_TYPE_PREFIX = "v4.00"


class DialogueField(StrEnum):
    """Field names allowed in an ``[Events]`` Format line."""

    MARKED = "Marked"
    LAYER = "Layer"
    START = "Start"
    END = "End"
    STYLE = "Style"
    NAME = "Name"
    ACTOR = "Actor"
    MARGIN_L = "MarginL"
    MARGIN_R = "MarginR"
    MARGIN_V = "MarginV"
    EFFECT = "Effect"
    TEXT = "Text"
    UNKNOWN = "Unknown"


_SPEAKER_FIELDS = (DialogueField.NAME, DialogueField.ACTOR)


def _parse_format(value: str) -> list[DialogueField]:
    fields = []
    for name in value.split(","):
        name = name.strip()
        try:
            fields.append(DialogueField(name))
        except ValueError:
            fields.append(DialogueField.UNKNOWN)
    return fields


def _parse_dialogue(
    fields: list[DialogueField], value: str, line_number: int
) -> Cue:
    """Map one Dialogue line onto a cue using the active Format fields.

    The Text field swallows every remaining component, so commas inside
    dialogue text are preserved.
    """
    if not fields:
        raise InvalidFileError(
            "Dialogue line before Format line", line=line_number
        )
    if DialogueField.TEXT not in fields:
        raise InvalidFileError("Format line has no Text field", line=line_number)

    text_index = fields.index(DialogueField.TEXT)
    components = value.split(",", text_index)
    if len(components) <= text_index:
        raise InvalidFileError(
            f"Dialogue has {len(components)} fields, expected {len(fields)}",
            line=line_number,
        )

    values = {
        field: component.strip()
        for field, component in zip(fields[:text_index], components, strict=False)
    }
    if DialogueField.START not in values or DialogueField.END not in values:
        raise InvalidFileError(
            "Format line has no Start or End field", line=line_number
        )

    speaker = next((values[f] for f in _SPEAKER_FIELDS if values.get(f)), None)
    return Cue(
        start_time=parse_common_time(values[DialogueField.START], line_number),
        end_time=parse_common_time(values[DialogueField.END], line_number),
        text=components[text_index].strip(),
        speaker=speaker,
    )


def parse_ass(content: str) -> Subtitles:
    """Parse SubStation Alpha (v4) or Advanced SSA (v4+) content.

    Only the ``[Events]`` section is interpreted; styles and script info
    other than ScriptType are ignored.

    Args:
        content: SSA or ASS format string content

    Returns:
        Subtitles containing one cue per Dialogue line

    Raises:
        InvalidFileError: If the script type is unsupported or a Dialogue
            line does not fit the Format line
        InvalidTimeError: If a Start or End field is malformed
    """
    cues: list[Cue] = []
    fields: list[DialogueField] = []
    section = ""

    for line_number, line in enumerate(split_lines(content), start=1):
        if not line.strip() or line.lstrip().startswith(";"):
            continue

        if header := _SECTION_HEADER.match(line):
            section = header.group(1).strip()
            continue

        setting = _SETTING.match(line)
        if not setting:
            continue
        key, value = setting.group(1).strip(), setting.group(2).strip()

        if key == "ScriptType" and not value.startswith(SUPPORTED_SCRIPT_TYPE_PREFIX):
            raise InvalidFileError(
                f"Unsupported script type '{value}'", line=line_number
            )

        if section != EVENTS_SECTION:
            continue
        if key == "Format":
            fields = _parse_format(value)
        elif key == "Dialogue":
            cues.append(_parse_dialogue(fields, value, line_number))

    logger.debug("ass_events_parsed", cue_count=len(cues), field_count=len(fields))
    return Subtitles.from_cues(cues)


class SSADecoder(SubtitleDecoder):
    """SubStation Alpha v4 decoder."""

    extensions = ("ssa",)

    def decode(self, content: str) -> Subtitles:
        return parse_ass(content)


class ASSDecoder(SSADecoder):
    """Advanced SubStation Alpha v4+ decoder."""

    extensions = ("ass",)

"""CSV subtitle parser and serializer with a configurable column layout."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterator, Sequence
from enum import StrEnum
from typing import NamedTuple

import structlog

from multisub.core.errors import InvalidTimeError
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import strip_bom
from multisub.core.time import Time
from multisub.core.timeparsing import parse_common_time
from multisub.formats.base import SubtitleCoder

logger = structlog.get_logger()


class CSVField(StrEnum):
    """Cue attribute carried by a CSV column."""

    IDENTIFIER = "identifier"
    POSITION = "position"
    START_TIME = "start_time"
    START_TIME_IN_SECONDS = "start_time_in_seconds"
    END_TIME = "end_time"
    END_TIME_IN_SECONDS = "end_time_in_seconds"
    DURATION_IN_SECONDS = "duration_in_seconds"
    SPEAKER = "speaker"
    TEXT = "text"
    IGNORE = "ignore"


DEFAULT_FIELDS = (
    CSVField.POSITION,
    CSVField.START_TIME,
    CSVField.END_TIME,
    CSVField.TEXT,
)

HEADER_TITLES = {
    CSVField.IDENTIFIER: "Identifier",
    CSVField.POSITION: "No.",
    CSVField.START_TIME: "Timecode In",
    CSVField.START_TIME_IN_SECONDS: "Start (s)",
    CSVField.END_TIME: "Timecode Out",
    CSVField.END_TIME_IN_SECONDS: "End (s)",
    CSVField.DURATION_IN_SECONDS: "Duration (s)",
    CSVField.SPEAKER: "Speaker",
    CSVField.TEXT: "Subtitle",
    CSVField.IGNORE: "",
}


class CSVRowDiagnostic(NamedTuple):
    """A row that was skipped during decoding."""

    row: int
    reason: str


class _SkipRow(Exception):
    """Internal signal that the current row cannot produce a cue."""


def _read_rows(reader: Iterator[list[str]]) -> Iterator[list[str] | csv.Error]:
    """Yield parsed rows, or the error for a row the reader rejected.

    The reader resets its state on every call, so iteration resumes at the
    next physical line after an error.
    """
    while True:
        try:
            yield next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            yield e


def _seconds(value: str, row: int) -> Time:
    try:
        return Time.from_seconds(float(value))
    except (ValueError, OverflowError) as e:
        raise InvalidTimeError(row, detail=value) from e


class CSVCoder(SubtitleCoder):
    """CSV coder.

    Args:
        fields: Column layout, one CSVField per column
        delimiter: Field separator
        quote_char: Character used to quote fields
        escape_char: Escape character, or None to rely on doubled quotes
        comment_char: Rows whose first field starts with this are ignored
        header_line_count: Number of leading rows to skip unconditionally
        include_header: Write a header row when encoding
    """

    extensions = ("csv",)

    def __init__(
        self,
        fields: Sequence[CSVField | str] = DEFAULT_FIELDS,
        *,
        delimiter: str = ",",
        quote_char: str = '"',
        escape_char: str | None = None,
        comment_char: str | None = None,
        header_line_count: int = 0,
        include_header: bool = True,
    ) -> None:
        self.fields = tuple(CSVField(f) for f in fields)
        if not self.fields:
            raise ValueError("At least one CSV field is required")
        if header_line_count < 0:
            raise ValueError("header_line_count cannot be negative")
        self.delimiter = delimiter
        self.quote_char = quote_char
        self.escape_char = escape_char
        self.comment_char = comment_char
        self.header_line_count = header_line_count
        self.include_header = include_header

    @property
    def header(self) -> list[str]:
        return [HEADER_TITLES[f] for f in self.fields]

    def decode(self, content: str) -> Subtitles:
        subtitles, diagnostics = self.decode_with_diagnostics(content)
        for diagnostic in diagnostics:
            logger.warning(
                "csv_row_skipped", row=diagnostic.row, reason=diagnostic.reason
            )
        return subtitles

    def decode_with_diagnostics(
        self, content: str
    ) -> tuple[Subtitles, list[CSVRowDiagnostic]]:
        """Decode CSV content, reporting the rows that were skipped.

        Malformed rows never abort the decode. Blank rows, comment rows and
        rows repeating the header titles are skipped without a diagnostic.

        Args:
            content: CSV text

        Returns:
            The decoded Subtitles and one diagnostic per rejected row
        """
        reader = csv.reader(
            io.StringIO(strip_bom(content), newline=""),
            delimiter=self.delimiter,
            quotechar=self.quote_char,
            escapechar=self.escape_char,
            skipinitialspace=True,
        )
        header = [title.casefold() for title in self.header]
        cues: list[Cue] = []
        diagnostics: list[CSVRowDiagnostic] = []

        for row_number, row in enumerate(_read_rows(reader), start=1):
            if row_number <= self.header_line_count:
                continue
            if isinstance(row, csv.Error):
                diagnostics.append(CSVRowDiagnostic(row=row_number, reason=str(row)))
                continue
            values = [value.strip() for value in row]
            if not any(values):
                continue
            if self.comment_char and values[0].startswith(self.comment_char):
                continue
            if [v.casefold() for v in values[: len(header)]] == header:
                continue
            try:
                cues.append(self._row_to_cue(values, row_number))
            except (_SkipRow, InvalidTimeError) as e:
                diagnostics.append(CSVRowDiagnostic(row=row_number, reason=str(e)))

        return Subtitles.from_cues(cues), diagnostics

    def _row_to_cue(self, values: list[str], row: int) -> Cue:
        if len(values) < len(self.fields):
            raise _SkipRow(
                f"expected {len(self.fields)} columns, got {len(values)}"
            )

        start: Time | None = None
        end: Time | None = None
        duration: float | None = None
        position: int | None = None
        attributes: dict[str, str] = {}

        # Columns beyond the declared fields are ignored
        for field, value in zip(self.fields, values, strict=False):
            match field:
                case CSVField.START_TIME:
                    start = parse_common_time(value, row)
                case CSVField.START_TIME_IN_SECONDS:
                    start = _seconds(value, row)
                case CSVField.END_TIME:
                    end = parse_common_time(value, row)
                case CSVField.END_TIME_IN_SECONDS:
                    end = _seconds(value, row)
                case CSVField.DURATION_IN_SECONDS:
                    try:
                        duration = float(value)
                    except ValueError as e:
                        raise _SkipRow(f"invalid duration '{value}'") from e
                case CSVField.POSITION:
                    try:
                        position = int(value)
                    except ValueError as e:
                        raise _SkipRow(f"invalid position '{value}'") from e
                case CSVField.IDENTIFIER | CSVField.SPEAKER | CSVField.TEXT:
                    attributes[field.value] = value

        if start is None:
            raise _SkipRow("no start time column")
        if end is None and duration is not None:
            end = Time.from_seconds(max(0.0, start.seconds + duration))
        if end is None:
            raise _SkipRow("no end time or duration column")

        return Cue(
            start_time=start,
            end_time=end,
            text=attributes.get("text", ""),
            identifier=attributes.get("identifier") or None,
            position=position,
            speaker=attributes.get("speaker") or None,
        )

    def _cell(self, cue: Cue, field: CSVField, index: int) -> str:
        match field:
            case CSVField.IDENTIFIER:
                return cue.identifier or ""
            case CSVField.POSITION:
                return str(cue.position if cue.position is not None else index + 1)
            case CSVField.START_TIME:
                return cue.start_time.format(":")
            case CSVField.START_TIME_IN_SECONDS:
                return f"{cue.start_seconds:.3f}"
            case CSVField.END_TIME:
                return cue.end_time.format(":")
            case CSVField.END_TIME_IN_SECONDS:
                return f"{cue.end_seconds:.3f}"
            case CSVField.DURATION_IN_SECONDS:
                return f"{cue.duration:.3f}"
            case CSVField.SPEAKER:
                return cue.speaker or ""
            case CSVField.TEXT:
                return cue.text
            case _:
                return ""

    def encode(self, subtitles: Subtitles) -> str:
        buffer = io.StringIO()
        writer = csv.writer(
            buffer,
            delimiter=self.delimiter,
            quotechar=self.quote_char,
            escapechar=self.escape_char,
            lineterminator="\n",
        )
        if self.include_header:
            writer.writerow(self.header)
        for index, cue in enumerate(subtitles):
            writer.writerow([self._cell(cue, f, index) for f in self.fields])
        return buffer.getvalue()

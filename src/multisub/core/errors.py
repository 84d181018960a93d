"""Subtitle codec error hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from multisub.core.subtitle import Cue


class SubtitleError(Exception):
    """Base codec error with a stable code and an optional line index."""

    def __init__(
        self,
        *,
        code: str,
        message: str,
        line: int | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.line = line
        super().__init__(message)


class UnsupportedFileTypeError(SubtitleError):
    """Raised when no coder is registered for a format identifier."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(
            code="unsupported_file_type",
            message=f"Unsupported subtitle format '{extension}'",
        )


class InvalidFileError(SubtitleError):
    """Raised when the overall structure of the content is malformed."""

    def __init__(
        self, message: str = "Invalid file", *, line: int | None = None
    ) -> None:
        super().__init__(code="invalid_file", message=message, line=line)


class UnexpectedEOFError(SubtitleError):
    """Raised when the content ends in the middle of a construct."""

    def __init__(self, message: str = "Unexpected end of file") -> None:
        super().__init__(code="unexpected_eof", message=message)


class InvalidEncodingError(SubtitleError):
    """Raised when bytes cannot be decoded from, or text encoded to, an encoding."""

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(
            code="invalid_encoding",
            message=f"Content is not valid in encoding '{encoding}'",
        )


class InvalidPositionError(SubtitleError):
    """Raised when a cue position field is not an integer."""

    def __init__(self, line: int) -> None:
        super().__init__(
            code="invalid_position",
            message=f"Line {line}: invalid cue position",
            line=line,
        )


class InvalidTimeError(SubtitleError):
    """Raised when a time field cannot be parsed."""

    def __init__(self, line: int, *, detail: str | None = None) -> None:
        message = f"Line {line}: invalid time"
        if detail:
            message = f"{message} '{detail}'"
        super().__init__(code="invalid_time", message=message, line=line)


class StartTimeAfterEndTimeError(SubtitleError):
    """Raised when a cue's start time comes after its end time."""

    def __init__(self, line: int) -> None:
        super().__init__(
            code="start_time_after_end_time",
            message=f"Line {line}: start time is after end time",
            line=line,
        )


class MissingTextError(SubtitleError):
    """Raised when a format requires cue text and the cue has none."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(
            code="missing_text",
            message=f"Cue {index}: text is required",
        )


class UnexpectedEndOfCueError(SubtitleError):
    """Raised when a cue block ends before all its required lines were read."""

    def __init__(self, line: int) -> None:
        super().__init__(
            code="unexpected_end_of_cue",
            message=f"Line {line}: unexpected end of cue",
            line=line,
        )


class CoderDoesNotSupportEncodingError(SubtitleError):
    """Raised when encoding is requested from a decode-only format."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(
            code="coder_does_not_support_encoding",
            message=f"Format '{extension}' does not support encoding",
        )


class TimeTooLargeToExportError(SubtitleError):
    """Raised when a cue time cannot be represented in the target format."""

    def __init__(self, cue: Cue) -> None:
        self.cue = cue
        super().__init__(
            code="time_too_large_to_export",
            message=f"Time {cue.start_time.text} is too large to export",
        )

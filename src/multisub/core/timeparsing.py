"""Shared time grammars used by the line-based coders."""

import re

from multisub.core.errors import InvalidTimeError
from multisub.core.time import Time

_COMMON_TIME = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2})[,.:](\d{2,3})$")
_LRC_TAG = re.compile(r"\[(\d{2,}):(\d{2})\.(\d{2,3})\]")


def parse_common_time(value: str, line: int = 0) -> Time:
    """Parse a time in the common ``H:MM:SS<sep>mmm`` notation.

    Supported forms:

    - ``12345``: a bare integer, in milliseconds
    - ``h:m:s,mmm`` where the separator is ``,``, ``.`` or ``:``
    - ``h:m:s.cc`` where a two digit fraction is in hundredths

    Args:
        value: Time string to parse
        line: Line or row index reported on failure

    Returns:
        Parsed Time

    Raises:
        InvalidTimeError: If the string matches none of the supported forms
    """
    value = value.strip()
    if value.isdigit():
        return Time.from_milliseconds(int(value))

    match = _COMMON_TIME.match(value)
    if not match:
        raise InvalidTimeError(line, detail=value)

    hour, minute, second, fraction = match.groups()
    millisecond = int(fraction) * (10 if len(fraction) == 2 else 1)
    try:
        return Time(
            hour=int(hour),
            minute=int(minute),
            second=int(second),
            millisecond=millisecond,
        )
    except ValueError as e:
        raise InvalidTimeError(line, detail=value) from e


def lrc_tag_time(minutes: str, seconds: str, fraction: str) -> Time:
    """Build a Time from the captured fields of an LRC ``[mm:ss.xx]`` tag.

    Minutes beyond 59 fold into hours, and a two digit fraction is in
    hundredths of a second.
    """
    hour, minute = divmod(int(minutes), 60)
    millisecond = int(fraction) * (10 if len(fraction) == 2 else 1)
    return Time(
        hour=hour, minute=minute, second=int(seconds), millisecond=millisecond
    )


def parse_lrc_tags(line: str, index: int = 0) -> tuple[list[Time], str]:
    """Consume every leading LRC time tag on a line.

    Args:
        line: Raw LRC line
        index: Line index reported on failure

    Returns:
        The tag times in order of appearance, and the remaining text

    Raises:
        InvalidTimeError: If a tag has an out-of-range seconds field
    """
    times: list[Time] = []
    position = 0
    while match := _LRC_TAG.match(line, position):
        try:
            times.append(lrc_tag_time(*match.groups()))
        except ValueError as e:
            raise InvalidTimeError(index, detail=match.group(0)) from e
        position = match.end()
    return times, line[position:].strip()

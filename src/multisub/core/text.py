"""Text helpers shared by the format coders."""

from xml.sax.saxutils import escape

BOM = "\ufeff"

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def strip_bom(content: str) -> str:
    """Remove a leading byte-order mark, if present."""
    return content[1:] if content.startswith(BOM) else content


def split_lines(content: str) -> list[str]:
    """Split content into lines on CR, LF or CRLF.

    A CRLF pair ends a single line, and a trailing line break does not
    produce an empty final line.

    Args:
        content: Text to split

    Returns:
        Lines without their line terminators
    """
    return strip_bom(content).splitlines()


def xml_escape(text: str) -> str:
    """Escape text for use in XML element content or attribute values."""
    return escape(text, _XML_ENTITIES)

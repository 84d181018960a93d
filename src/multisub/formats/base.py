"""Coder capabilities shared by every subtitle format."""

import codecs
from abc import ABC, abstractmethod
from typing import ClassVar

from multisub.core.errors import InvalidEncodingError
from multisub.core.subtitle import Subtitles


class SubtitleDecoder(ABC):
    """Capability to read one subtitle format.

    Subclasses implement ``decode`` over already-decoded text and strip a
    leading BOM before matching their grammar.
    """

    extensions: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def decode(self, content: str) -> Subtitles:
        """Parse subtitle text into a Subtitles value."""

    def decode_bytes(self, data: bytes, encoding: str = "utf-8") -> Subtitles:
        """Decode raw bytes in ``encoding`` and parse them.

        Raises:
            InvalidEncodingError: If ``data`` is not valid in ``encoding``
        """
        try:
            codecs.lookup(encoding)
            content = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise InvalidEncodingError(encoding) from e
        return self.decode(content)


class SubtitleEncoder(ABC):
    """Capability to write one subtitle format."""

    @abstractmethod
    def encode(self, subtitles: Subtitles) -> str:
        """Serialize a Subtitles value to text."""

    def encode_bytes(self, subtitles: Subtitles, encoding: str = "utf-8") -> bytes:
        """Serialize and encode to bytes.

        Raises:
            InvalidEncodingError: If the text cannot be represented in ``encoding``
        """
        content = self.encode(subtitles)
        try:
            codecs.lookup(encoding)
            return content.encode(encoding)
        except (UnicodeEncodeError, LookupError) as e:
            raise InvalidEncodingError(encoding) from e


class SubtitleCoder(SubtitleDecoder, SubtitleEncoder):
    """Format that can be both read and written."""

"""Format registry and the decode/encode facade."""

from collections.abc import Callable
from functools import lru_cache

import structlog

from multisub.core.errors import (
    CoderDoesNotSupportEncodingError,
    UnsupportedFileTypeError,
)
from multisub.core.subtitle import Subtitles
from multisub.formats.ass import ASSDecoder, SSADecoder
from multisub.formats.base import SubtitleDecoder, SubtitleEncoder
from multisub.formats.csv import CSVCoder
from multisub.formats.json import JSONCoder
from multisub.formats.lrc import LRCCoder
from multisub.formats.microdvd import MicroDVDDecoder
from multisub.formats.podcast_index import PodcastIndexCoder
from multisub.formats.sbv import SBVCoder
from multisub.formats.srt import SRTCoder
from multisub.formats.ttml import TTMLCoder
from multisub.formats.vtt import VTTCoder
from multisub.utils.config import get_settings

logger = structlog.get_logger()

CoderFactory = Callable[[], SubtitleDecoder]


def _normalize(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


class SubtitleFormatRegistry:
    """Case-insensitive lookup from format identifier to coder factory.

    Identifiers are file extensions; a leading dot is ignored. Registering an
    identifier that already exists replaces the previous factory.
    """

    def __init__(self) -> None:
        self._factories: dict[str, CoderFactory] = {}

    def register(self, extension: str, factory: CoderFactory) -> None:
        """Register a factory producing coders for ``extension``."""
        key = _normalize(extension)
        if not key:
            raise ValueError("Format identifier cannot be empty")
        self._factories[key] = factory

    def register_coder(self, coder_class: type[SubtitleDecoder]) -> None:
        """Register a coder class under each of its declared extensions."""
        for extension in coder_class.extensions:
            self.register(extension, coder_class)

    def create_coder(self, extension: str) -> SubtitleDecoder:
        """Instantiate the coder for ``extension``.

        Raises:
            UnsupportedFileTypeError: If no coder is registered for it
        """
        factory = self._factories.get(_normalize(extension))
        if factory is None:
            raise UnsupportedFileTypeError(extension)
        return factory()

    def create_encoder(self, extension: str) -> SubtitleEncoder:
        """Instantiate the coder for ``extension``, requiring encode support.

        Raises:
            UnsupportedFileTypeError: If no coder is registered for it
            CoderDoesNotSupportEncodingError: If the format is decode-only
        """
        coder = self.create_coder(extension)
        if not isinstance(coder, SubtitleEncoder):
            raise CoderDoesNotSupportEncodingError(extension)
        return coder

    def supports_encoding(self, extension: str) -> bool:
        return isinstance(self.create_coder(extension), SubtitleEncoder)

    def enumerate_formats(self) -> list[str]:
        """List all registered format identifiers."""
        return sorted(self._factories)

    def __contains__(self, extension: object) -> bool:
        return isinstance(extension, str) and _normalize(extension) in self._factories


def _lrc_coder() -> LRCCoder:
    return LRCCoder(time_format=get_settings().lrc_time_format)


def _csv_coder() -> CSVCoder:
    return CSVCoder(delimiter=get_settings().csv_delimiter)


def _microdvd_decoder() -> MicroDVDDecoder:
    return MicroDVDDecoder(frame_rate=get_settings().microdvd_frame_rate)


@lru_cache
def get_registry() -> SubtitleFormatRegistry:
    """Get the shared registry holding every built-in format.

    Configurable coders read their defaults from settings each time one is
    created, so the cached registry follows ``get_settings.cache_clear()``.
    """
    registry = SubtitleFormatRegistry()
    for coder_class in (
        SRTCoder,
        VTTCoder,
        SBVCoder,
        SSADecoder,
        ASSDecoder,
        TTMLCoder,
        JSONCoder,
        PodcastIndexCoder,
    ):
        registry.register_coder(coder_class)
    registry.register("lrc", _lrc_coder)
    registry.register("csv", _csv_coder)
    registry.register("sub", _microdvd_decoder)
    return registry


def decode(content: str, extension: str) -> Subtitles:
    """Decode subtitle text in the format named by ``extension``.

    Args:
        content: Subtitle file content
        extension: Format identifier such as "srt" or ".VTT"

    Returns:
        Decoded Subtitles

    Raises:
        UnsupportedFileTypeError: If the format is unknown
        SubtitleError: If the content is malformed for the format
    """
    subtitles = get_registry().create_coder(extension).decode(content)
    logger.debug("subtitles_decoded", format=extension, cue_count=len(subtitles))
    return subtitles


def decode_bytes(
    data: bytes, extension: str, encoding: str | None = None
) -> Subtitles:
    """Decode raw subtitle bytes.

    Args:
        data: File content as bytes
        extension: Format identifier
        encoding: Text encoding of ``data``. Defaults to the
            ``default_encoding`` setting.

    Raises:
        UnsupportedFileTypeError: If the format is unknown
        InvalidEncodingError: If ``data`` is not valid in ``encoding``
        SubtitleError: If the content is malformed for the format
    """
    encoding = encoding or get_settings().default_encoding
    coder = get_registry().create_coder(extension)
    subtitles = coder.decode_bytes(data, encoding)
    logger.debug(
        "subtitles_decoded",
        format=extension,
        encoding=encoding,
        cue_count=len(subtitles),
    )
    return subtitles


def encode(subtitles: Subtitles, extension: str) -> str:
    """Encode Subtitles as text in the format named by ``extension``.

    Raises:
        UnsupportedFileTypeError: If the format is unknown
        CoderDoesNotSupportEncodingError: If the format is decode-only
        SubtitleError: If the cues cannot be represented in the format
    """
    content = get_registry().create_encoder(extension).encode(subtitles)
    logger.debug("subtitles_encoded", format=extension, cue_count=len(subtitles))
    return content


def encode_bytes(
    subtitles: Subtitles, extension: str, encoding: str | None = None
) -> bytes:
    """Encode Subtitles to bytes.

    Raises:
        UnsupportedFileTypeError: If the format is unknown
        CoderDoesNotSupportEncodingError: If the format is decode-only
        InvalidEncodingError: If the text cannot be represented in ``encoding``
    """
    encoding = encoding or get_settings().default_encoding
    data = get_registry().create_encoder(extension).encode_bytes(subtitles, encoding)
    logger.debug(
        "subtitles_encoded",
        format=extension,
        encoding=encoding,
        cue_count=len(subtitles),
    )
    return data

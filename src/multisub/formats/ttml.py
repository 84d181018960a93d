"""TTML (Timed Text Markup Language) format parser and serializer."""

from __future__ import annotations

import xml.sax
from dataclasses import dataclass, field
from xml.sax.handler import ContentHandler, feature_namespaces
from xml.sax.xmlreader import AttributesNSImpl

import structlog

from multisub.core.errors import InvalidFileError
from multisub.core.subtitle import Cue, Subtitles
from multisub.core.text import strip_bom, xml_escape
from multisub.core.time import Time
from multisub.core.time_expression import format_clock_time, parse_time_expression
from multisub.formats.base import SubtitleCoder

logger = structlog.get_logger()

TTML_NAMESPACE = "http://www.w3.org/ns/ttml"
LEGACY_TTML_NAMESPACE = "http://www.w3.org/2006/10/ttaf1"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

_TIMED_ELEMENTS = frozenset({"p", "span", "div"})

_DOCUMENT_HEAD = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    f'<tt xmlns="{TTML_NAMESPACE}" '
    'xmlns:tts="http://www.w3.org/ns/ttml#styling" '
    'xmlns:ttp="http://www.w3.org/ns/ttml#parameter" '
    'xml:lang="en" ttp:timeBase="media">\n'
    "  <body>\n"
    "    <div>\n"
)
_DOCUMENT_TAIL = "    </div>\n  </body>\n</tt>\n"


@dataclass
class _Candidate:
    """Timed element whose text is being collected."""

    begin: str
    end: str | None
    dur: str | None
    identifier: str | None
    chunks: list[str] = field(default_factory=list)
    has_timed_children: bool = False

    @property
    def text(self) -> str:
        lines = (line.strip() for line in "".join(self.chunks).splitlines())
        return "\n".join(line for line in lines if line)


class _TTMLHandler(ContentHandler):
    """Collects timed ``p``/``span``/``div`` elements inside ``body``."""

    def __init__(self) -> None:
        super().__init__()
        self.candidates: list[_Candidate] = []
        self._open: list[_Candidate | None] = []
        self._body_depth = 0
        self._seen_root = False

    def startElementNS(
        self, name: tuple[str | None, str], qname: str | None, attrs: AttributesNSImpl
    ) -> None:
        uri, local = name
        if not self._seen_root:
            self._seen_root = True
            if local != "tt" or uri not in (TTML_NAMESPACE, LEGACY_TTML_NAMESPACE):
                raise InvalidFileError(
                    f"Root element must be <tt> in namespace {TTML_NAMESPACE}"
                )

        if local == "body":
            self._body_depth += 1
            return
        if self._body_depth == 0:
            return

        if local == "br":
            if current := self._current():
                current.chunks.append("\n")
            return

        begin = attrs.get((None, "begin"))
        if local in _TIMED_ELEMENTS and begin is not None:
            if current := self._current():
                current.has_timed_children = True
            self._open.append(
                _Candidate(
                    begin=begin,
                    end=attrs.get((None, "end")),
                    dur=attrs.get((None, "dur")),
                    identifier=attrs.get((XML_NAMESPACE, "id")),
                )
            )
        elif local in _TIMED_ELEMENTS:
            self._open.append(None)

    def endElementNS(self, name: tuple[str | None, str], qname: str | None) -> None:
        local = name[1]
        if local == "body":
            self._body_depth -= 1
            return
        if self._body_depth == 0 or local not in _TIMED_ELEMENTS or not self._open:
            return

        candidate = self._open.pop()
        if candidate is None:
            return
        # A container whose timed children carried all the text adds nothing
        if candidate.has_timed_children and not candidate.text:
            return
        self.candidates.append(candidate)

    def characters(self, content: str) -> None:
        if current := self._current():
            current.chunks.append(content)

    def _current(self) -> _Candidate | None:
        for candidate in reversed(self._open):
            if candidate is not None:
                return candidate
        return None


def _to_cue(candidate: _Candidate) -> Cue | None:
    begin_expr = parse_time_expression(candidate.begin)
    begin = begin_expr.to_time() if begin_expr else None
    if begin is None:
        return None

    ends: list[Time] = []
    if end_expr := parse_time_expression(candidate.end):
        if (end := end_expr.to_time()) is not None:
            ends.append(end)
    if dur_expr := parse_time_expression(candidate.dur):
        if (duration := dur_expr.to_time()) is not None:
            ends.append(Time.from_seconds(begin.seconds + duration.seconds))
    if not ends:
        return None

    return Cue(
        start_time=begin,
        # Earliest of end and begin + dur, rather than letting dur override end
        end_time=min(ends),
        text=candidate.text,
        identifier=candidate.identifier,
    )


def parse_ttml(content: str) -> Subtitles:
    """Parse a TTML document into a Subtitles value.

    A cue is produced for each ``p``, ``span`` or ``div`` inside ``body``
    that has a ``begin`` attribute and either ``end`` or ``dur``. When both
    are present the earlier end wins. ``<br/>`` becomes a line break and
    whitespace-only lines are dropped.

    Args:
        content: TTML document

    Returns:
        Subtitles containing the timed elements

    Raises:
        InvalidFileError: If the XML is malformed, the root is not a TTML
            ``tt`` element, or no timed text is found
    """
    handler = _TTMLHandler()
    parser = xml.sax.make_parser()
    parser.setFeature(feature_namespaces, True)
    parser.setContentHandler(handler)
    try:
        parser.feed(strip_bom(content))
        parser.close()
    except xml.sax.SAXParseException as e:
        raise InvalidFileError(
            f"Malformed TTML document: {e.getMessage()}", line=e.getLineNumber()
        ) from e

    cues = []
    for candidate in handler.candidates:
        cue = _to_cue(candidate)
        if cue is None:
            logger.debug(
                "ttml_element_skipped", begin=candidate.begin, end=candidate.end
            )
            continue
        cues.append(cue)

    if not cues:
        raise InvalidFileError("No timed text found in TTML document")
    return Subtitles.from_cues(cues)


def serialize_ttml(subtitles: Subtitles) -> str:
    """Serialize Subtitles to a minimal TTML document.

    Args:
        subtitles: Subtitles to serialize

    Returns:
        TTML document with one ``p`` element per cue
    """
    paragraphs = []
    for cue in subtitles:
        attributes = ""
        if cue.identifier:
            attributes += f' xml:id="{xml_escape(cue.identifier)}"'
        attributes += f' begin="{format_clock_time(cue.start_time)}"'
        attributes += f' end="{format_clock_time(cue.end_time)}"'
        text = "<br/>".join(xml_escape(line) for line in cue.text.split("\n"))
        paragraphs.append(f"      <p{attributes}>{text}</p>\n")
    return _DOCUMENT_HEAD + "".join(paragraphs) + _DOCUMENT_TAIL


class TTMLCoder(SubtitleCoder):
    """TTML coder."""

    extensions = ("ttml",)

    def decode(self, content: str) -> Subtitles:
        return parse_ttml(content)

    def encode(self, subtitles: Subtitles) -> str:
        return serialize_ttml(subtitles)

"""
Tag-stream reader over defusedxml.

Both parsers walk documents as a flat sequence of ``start``/``end`` events
instead of building and querying a tree. ``iter_events`` hides the
defusedxml plumbing and turns every failure into a ``ParseError`` that
carries the byte offset at which parsing stopped.
"""

from __future__ import annotations

import io
import re
from typing import Iterator, Optional, Tuple
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError as XMLParseError
from defusedxml.ElementTree import iterparse

from stig_mapper.exceptions import ParseError
from stig_mapper.xml.schema import Sch

# Text is already decoded, so any declared encoding is replaced with UTF-8
_DECL_ENCODING = re.compile(r"""^(\s*<\?xml[^>]*?\bencoding\s*=\s*)(["'])[^"']*\2""")

Event = Tuple[str, str, Element]


def _to_utf8(text: str) -> bytes:
    if text.startswith("\ufeff"):
        text = text[1:]
    text = _DECL_ENCODING.sub(r'\1"UTF-8"', text, count=1)
    return text.encode("utf-8")


def _byte_offset(data: bytes, line: int, column: int) -> int:
    """Translate an expat (line, column) position into a byte offset.

    expat counts columns in characters, so the column is measured over the
    decoded line.
    """
    start = 0
    for _ in range(max(line, 1) - 1):
        nl = data.find(b"\n", start)
        if nl < 0:
            return len(data)
        start = nl + 1
    end = data.find(b"\n", start)
    text = data[start:end if end >= 0 else len(data)].decode("utf-8", errors="replace")
    return start + len(text[:column].encode("utf-8"))


def iter_events(text: str, source: Optional[str] = None) -> Iterator[Event]:
    """
    Yield ``(event, tag, element)`` for every start and end tag in ``text``.

    ``tag`` has any namespace stripped. Element text is complete only on
    the ``end`` event. Consumers may ``clear()`` elements they are done with.

    Args:
        text: Complete XML document
        source: Name used in error context (usually the file name)

    Raises:
        ParseError: On malformed XML (``offset``, ``line`` and ``column`` set)
                    or on DTD/entity constructs refused by defusedxml
    """
    data = _to_utf8(text)
    name = source or "<string>"
    try:
        for event, elem in iterparse(io.BytesIO(data), events=("start", "end")):
            yield event, Sch.strip_ns(elem.tag), elem
    except XMLParseError as exc:
        line, column = getattr(exc, "position", (0, 0))
        raise ParseError(
            f"XML parse failed: {exc}",
            {
                "source": name,
                "offset": _byte_offset(data, line, column),
                "line": line,
                "column": column,
            },
        ) from exc
    except DefusedXmlException as exc:
        raise ParseError(
            f"Refused unsafe XML construct: {exc}",
            {"source": name, "offset": None},
        ) from exc

"""Bridge from lxml's streaming target parser to an Assembler tree.

WHY: The assembler is driven by open/close/text events. lxml's
XMLParser(target=...) is a push parser: fed arbitrary byte chunks, it
calls start/end/data on a target object as soon as it can, which is
exactly the event stream the assembler expects.

HOW: MarkupReader is the lxml target. On the first start event it asks
the wiring callable for the root assembler (the shape is only known once
the root tag and its attributes are seen), then forwards every event.
Syntax errors raised by lxml are routed through the assembler's
on_parser_error so they surface as MarkupError.

RULES:
- wiring(name, attrs) is called exactly once per document
- A document whose root is the ERROR tag raises APIError without wiring
- Entity resolution and network access are disabled
- close() returns the delivered product of the root assembler
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from lxml import etree

from nationscript.config import ERROR_TAG
from nationscript.core.assembler import Assembler
from nationscript.errors import MarkupError, NSError

logger = logging.getLogger(__name__)

Wiring = Callable[[str, dict[str, str]], Assembler | None]


class MarkupReader:
    """Feeds an incrementally parsed document into an assembler tree."""

    def __init__(self, wiring: Wiring) -> None:
        if not callable(wiring):
            raise TypeError(f"Invalid shape wiring: {wiring!r}")
        self._wiring = wiring
        self._assembler: Assembler | None = None
        self._parser = etree.XMLParser(
            target=_ParserTarget(self),
            resolve_entities=False,
            no_network=True,
            huge_tree=True,
        )

    @property
    def assembler(self) -> Assembler | None:
        return self._assembler

    def feed(self, chunk: bytes | str) -> None:
        try:
            self._parser.feed(chunk)
        except etree.XMLSyntaxError as err:
            self._fail(err)

    def close(self) -> Any:
        """End the document and return the root assembler's product."""
        try:
            self._parser.close()
        except etree.XMLSyntaxError as err:
            self._fail(err)
        if self._assembler is None:
            raise MarkupError("Document contained no elements")
        if not self._assembler.finalized:
            raise MarkupError("Document ended before its root tag closed")
        return self._assembler.deliver()

    def _fail(self, err: Exception) -> None:
        if self._assembler is None:
            raise MarkupError(f"Markup reader encountered error: {err}") from err
        self._assembler.on_parser_error(err)

    def _open(self, tag: str, attrs: dict[str, str]) -> None:
        if self._assembler is None:
            self._assembler = self._wire(tag, attrs)
        self._assembler.on_open(tag, attrs)

    def _close(self, tag: str) -> None:
        self._assembler.on_close(tag)

    def _text(self, text: str) -> None:
        if self._assembler is not None:
            self._assembler.on_text(text)

    def _wire(self, tag: str, attrs: dict[str, str]) -> Assembler:
        if tag == ERROR_TAG:
            return Assembler()
        assembler = self._wiring(tag, attrs)
        if assembler is None:
            raise NSError(f"No response shape matching tag: {tag}")
        logger.debug("Wired %s for root tag %s", type(assembler).__name__, tag)
        return assembler


class _ParserTarget:
    """lxml target interface; lxml calls these as the document streams in."""

    def __init__(self, reader: MarkupReader) -> None:
        self._reader = reader

    def start(self, tag: str, attrib: dict[str, str]) -> None:
        self._reader._open(tag, dict(attrib))

    def end(self, tag: str) -> None:
        self._reader._close(tag)

    def data(self, text: str) -> None:
        self._reader._text(text)

    def close(self) -> None:
        return None


def assemble(document: bytes | str | Iterable[bytes | str], wiring: Wiring) -> Any:
    """Parse a whole in-memory document (or an iterable of chunks)."""
    reader = MarkupReader(wiring)
    if isinstance(document, (bytes, str)):
        reader.feed(document)
    else:
        for chunk in document:
            reader.feed(chunk)
    return reader.close()

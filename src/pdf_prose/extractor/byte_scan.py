"""Byte-pattern scan: last-resort extraction from raw string literals.

Treats the buffer as a binary string and pulls out every PDF literal string
(text enclosed in balanced, unescaped parentheses) without parsing any PDF
objects. Works on malformed documents the structural parsers reject, as
long as their content streams are not compressed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from pdf_prose.config.settings import ExtractionSettings
from pdf_prose.extractor.types import ExtractionCandidate, StrategyId

logger = logging.getLogger(__name__)

_OPEN, _CLOSE, _BACKSLASH = ord("("), ord(")"), ord("\\")

_ESCAPE = re.compile(rb"\\(.)", re.DOTALL)
_ALPHA = re.compile(r"[A-Za-z]")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7e\n]")
_WHITESPACE = re.compile(r"\s+")

_ESCAPED_WHITESPACE = {b"n": b" ", b"r": b" ", b"t": b" ", b"b": b" ", b"f": b" "}


def _iter_literals(buffer: bytes) -> Iterator[bytes]:
    """Yield the body of each top-level literal string in *buffer*.

    Unescaped parentheses nest, so ``(f(x) value)`` is one literal. A
    backslash always consumes the following byte. When a literal is never
    closed, scanning resumes just after its opening parenthesis.
    """
    pos = 0
    end = len(buffer)
    while pos < end:
        depth = 0
        start = pos
        i = pos
        while i < end:
            byte = buffer[i]
            if byte == _BACKSLASH:
                i += 2
                continue
            if byte == _OPEN:
                if depth == 0:
                    start = i + 1
                depth += 1
            elif byte == _CLOSE and depth:
                depth -= 1
                if depth == 0:
                    yield buffer[start:i]
            i += 1
        if depth == 0:
            return
        pos = start


def _unescape(raw: bytes) -> bytes:
    return _ESCAPE.sub(lambda m: _ESCAPED_WHITESPACE.get(m.group(1), m.group(1)), raw)


def extract_byte_scan(
    buffer: bytes, settings: ExtractionSettings
) -> ExtractionCandidate:
    """Collect literal runs longer than 2 chars that contain a letter."""
    runs = []
    for literal in _iter_literals(buffer):
        run = _unescape(literal).decode("latin-1")
        if len(run) > 2 and _ALPHA.search(run):
            runs.append(run)

    text = _NON_PRINTABLE.sub(" ", " ".join(runs))
    text = _WHITESPACE.sub(" ", text).strip()

    logger.info(
        "Byte scan found %d literal runs (%d chars)", len(runs), len(text)
    )

    return ExtractionCandidate(
        text=text,
        page_count=1,
        strategy_id=StrategyId.BYTE_SCAN,
        extracted_page_count=1,
    )

"""Structural text-layer extraction using PyMuPDF.

First strategy in rank order. Opens the document's page tree and walks each
page's text spans -- the strings emitted by the page's text-showing
operators -- joining spans with a single space and pages with a blank line.
Only the first ``max_pages`` pages are processed to bound cost on large
documents.

A page that fails to parse is skipped and recorded as a
``PageExtractionWarning``; the strategy only fails when every processed page
fails.
"""

from __future__ import annotations

import logging
import threading

import pymupdf

from pdf_prose.config.settings import ExtractionSettings
from pdf_prose.extractor.errors import StrategyError
from pdf_prose.extractor.text import normalize_text
from pdf_prose.extractor.types import (
    ExtractionCandidate,
    PageExtractionWarning,
    StrategyId,
)

logger = logging.getLogger(__name__)

_TEXT_BLOCK = 0

# PyMuPDF is not thread-safe; timed-out attempts may still be running
_PYMUPDF_LOCK = threading.Lock()


def _page_text(page: pymupdf.Page) -> str:
    """Join the non-blank text spans of *page* in content order."""
    spans: list[str] = []
    for block in page.get_text("dict")["blocks"]:
        if block.get("type") != _TEXT_BLOCK:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "").strip()
                if text:
                    spans.append(text)
    return " ".join(spans)


def extract_structural(
    buffer: bytes, settings: ExtractionSettings
) -> ExtractionCandidate:
    """Extract text from *buffer* by walking each page's text layer.

    Args:
        buffer: Raw PDF bytes.
        settings: Extraction configuration (``max_pages``).

    Returns:
        ExtractionCandidate with normalized text, the document's total page
        count, and ``extracted_page_count = min(total, max_pages)``.

    Raises:
        StrategyError: If the document is encrypted, has no pages, or every
            processed page failed to parse.
        pymupdf.FileDataError: If the buffer cannot be opened as a PDF.
    """
    with _PYMUPDF_LOCK:
        doc = pymupdf.open(stream=buffer, filetype="pdf")
        try:
            if doc.needs_pass:
                raise StrategyError("encrypted")

            page_count = doc.page_count
            if page_count == 0:
                raise StrategyError("PDF contains no pages")

            max_pages = min(page_count, settings.max_pages)
            page_texts: list[str] = []
            page_warnings: list[PageExtractionWarning] = []

            for index in range(max_pages):
                try:
                    text = _page_text(doc.load_page(index))
                except Exception as e:
                    logger.warning("Failed to extract page %d: %s", index + 1, e)
                    page_warnings.append(PageExtractionWarning(index + 1, str(e)))
                    continue
                if text.strip():
                    page_texts.append(text)
        finally:
            doc.close()

    if len(page_warnings) == max_pages:
        raise StrategyError(f"all {max_pages} processed pages failed to parse")

    text = normalize_text("\n\n".join(page_texts))

    logger.info(
        "Structural extraction produced %d chars from %d/%d pages",
        len(text),
        max_pages,
        page_count,
    )

    return ExtractionCandidate(
        text=text,
        page_count=page_count,
        strategy_id=StrategyId.STRUCTURAL,
        extracted_page_count=max_pages,
        page_warnings=page_warnings,
    )

"""Heuristic stream-decoder extraction using pdfplumber.

Second strategy in rank order. Hands each page to pdfminer's content-stream
decoder through ``pdfplumber.Page.extract_text`` and takes its reconstructed
text as-is, without walking individual text spans. Faster and lower fidelity
than the structural strategy, and tolerant of documents whose span-level
layout PyMuPDF cannot reconcile.
"""

from __future__ import annotations

import io
import logging

import pdfplumber

from pdf_prose.config.settings import ExtractionSettings
from pdf_prose.extractor.errors import StrategyError
from pdf_prose.extractor.text import normalize_text
from pdf_prose.extractor.types import ExtractionCandidate, StrategyId

logger = logging.getLogger(__name__)


def extract_stream_decoder(
    buffer: bytes, settings: ExtractionSettings
) -> ExtractionCandidate:
    """Extract text from *buffer* with pdfminer's decoder.

    The total page count comes from the document's page tree; only the
    first ``max_pages`` pages are decoded.

    Raises:
        StrategyError: If the document has no pages.
        pdfminer.pdfparser.PDFSyntaxError: If the buffer is not a parseable PDF.
    """
    with pdfplumber.open(io.BytesIO(buffer)) as pdf:
        page_count = len(pdf.pages)
        if page_count == 0:
            raise StrategyError("PDF contains no pages")

        max_pages = min(page_count, settings.max_pages)
        page_texts = [page.extract_text() or "" for page in pdf.pages[:max_pages]]

    text = normalize_text("\n\n".join(t for t in page_texts if t.strip()))

    logger.info(
        "Stream decoder produced %d chars from %d/%d pages",
        len(text),
        max_pages,
        page_count,
    )

    return ExtractionCandidate(
        text=text,
        page_count=page_count,
        strategy_id=StrategyId.STREAM_DECODER,
        extracted_page_count=max_pages,
    )

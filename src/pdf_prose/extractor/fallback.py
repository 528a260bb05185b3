"""Fallback strategy: always fails, never fabricates content."""

from __future__ import annotations

from pdf_prose.config.settings import ExtractionSettings
from pdf_prose.extractor.errors import StrategyError
from pdf_prose.extractor.types import ExtractionCandidate


def extract_fallback(
    buffer: bytes, settings: ExtractionSettings
) -> ExtractionCandidate:
    """Raise StrategyError so the run ends with a labeled final failure."""
    raise StrategyError(
        f"no readable text could be extracted from {len(buffer)} byte document "
        "(it may be scanned, image-only, encrypted, or corrupted)"
    )

"""Batch extraction over PDF files with per-file error tolerance.

Reads each PDF from disk, runs the ranked extraction pipeline on its bytes,
and collects the success or error response for every file. One file's
failure does not block others -- the batch continues to the next file.

Public API:
    extract_document(buffer, settings)       -> ExtractionResult
    extract_files(paths, extraction_settings) -> ExtractionBatchResult
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pdf_prose.config.settings import ExtractionSettings
from pdf_prose.extractor.errors import (
    ExhaustedError,
    ExtractionError,
    OversizedInputError,
    StrategyError,
)
from pdf_prose.extractor.guard import check_length
from pdf_prose.extractor.response import build_error_response, build_response
from pdf_prose.extractor.service import extract_document
from pdf_prose.extractor.types import ExtractionResult, QualityTier, StrategyId

logger = logging.getLogger(__name__)

__all__ = [
    "ExhaustedError",
    "ExtractionBatchResult",
    "ExtractionError",
    "ExtractionResult",
    "OversizedInputError",
    "QualityTier",
    "StrategyError",
    "StrategyId",
    "extract_document",
    "extract_files",
]


@dataclass
class ExtractionBatchResult:
    """Aggregated outcome of extracting text from multiple PDF files.

    Attributes:
        files_attempted: Number of paths processed.
        files_succeeded: Files with an accepted extraction.
        files_failed: Files that were unreadable, oversized, or exhausted.
        responses: Response dict per path (success or error shape).
        diagnostics: Structural report per exhausted file.
        errors: One summary line per failed file.
    """

    files_attempted: int = 0
    files_succeeded: int = 0
    files_failed: int = 0
    responses: dict[str, dict] = field(default_factory=dict)
    diagnostics: dict[str, dict] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


def extract_files(
    paths: list[Path],
    extraction_settings: ExtractionSettings,
) -> ExtractionBatchResult:
    """Extract text from each PDF in *paths*.

    Args:
        paths: PDF files to read.
        extraction_settings: Extraction configuration.

    Returns:
        ExtractionBatchResult with a response for every path.
    """
    batch = ExtractionBatchResult()

    for idx, pdf_path in enumerate(paths, start=1):
        batch.files_attempted += 1
        key = str(pdf_path)

        try:
            check_length(
                pdf_path.stat().st_size, extraction_settings.max_file_size_bytes
            )
            buffer = pdf_path.read_bytes()
        except OversizedInputError as e:
            batch.files_failed += 1
            batch.responses[key] = build_error_response(e)
            batch.errors.append(f"{pdf_path.name}: {e}")
            continue
        except OSError as e:
            logger.warning("Cannot read %s: %s", pdf_path.name, e)
            batch.files_failed += 1
            batch.responses[key] = build_error_response(ExtractionError(str(e)))
            batch.errors.append(f"{pdf_path.name}: {e}")
            continue

        logger.info(
            "Extracting file %d/%d: %s (%.2f MB)",
            idx,
            len(paths),
            pdf_path.name,
            len(buffer) / (1024 * 1024),
        )

        try:
            result = extract_document(buffer, extraction_settings)
        except ExtractionError as e:
            batch.files_failed += 1
            batch.responses[key] = build_error_response(e)
            if isinstance(e, ExhaustedError) and e.diagnostics is not None:
                batch.diagnostics[key] = e.diagnostics.to_dict()
            batch.errors.append(f"{pdf_path.name}: {e}")
            logger.warning("Failed to extract %s: %s", pdf_path.name, e)
            continue

        batch.files_succeeded += 1
        batch.responses[key] = build_response(result, len(buffer))

    logger.info(
        "Extraction batch complete: %d attempted, %d succeeded, %d failed",
        batch.files_attempted,
        batch.files_succeeded,
        batch.files_failed,
    )

    return batch

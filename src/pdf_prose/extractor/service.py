"""Per-document PDF text extraction service with ranked fallback.

Orchestrates the extraction pipeline for a single in-memory PDF:

1. **structural** -- PyMuPDF text-layer walk (highest fidelity).
2. **stream_decoder** -- pdfplumber / pdfminer content-stream decoding.
3. **byte_scan** -- raw literal-string scan, independent of PDF parsing.
4. **fallback** -- always fails, producing the final labeled failure.

The resource guard runs once before any strategy. Each strategy is followed
by the quality validator; the first accepted candidate wins. Strategies that
raise, time out, or produce rejected text are recorded as
``StrategyFailure`` entries and the next strategy is tried. When every
strategy fails, ``ExhaustedError`` is raised with the ordered failures and a
structural diagnostic report of the input.

Every state transition is reported as a ``PipelineEvent`` to the module
logger and to an optional listener callable.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence

from pdf_prose.config.settings import ExtractionSettings
from pdf_prose.extractor.byte_scan import extract_byte_scan
from pdf_prose.extractor.diagnostics import diagnose
from pdf_prose.extractor.errors import ExhaustedError, StrategyError
from pdf_prose.extractor.fallback import extract_fallback
from pdf_prose.extractor.guard import check_size
from pdf_prose.extractor.quality import QualityThresholds, validate
from pdf_prose.extractor.stream_decoder import extract_stream_decoder
from pdf_prose.extractor.structural import extract_structural
from pdf_prose.extractor.text import count_words
from pdf_prose.extractor.types import (
    ExtractionCandidate,
    ExtractionResult,
    PipelineEvent,
    PipelineState,
    QualityTier,
    StrategyFailure,
    StrategyId,
)

logger = logging.getLogger(__name__)

__all__ = [
    "STRATEGIES",
    "EventListener",
    "Strategy",
    "extract_document",
]

Strategy = Callable[[bytes, ExtractionSettings], ExtractionCandidate]
EventListener = Callable[[PipelineEvent], None]

# Fixed rank order; never reordered or skipped except on failure
STRATEGIES: tuple[tuple[StrategyId, Strategy], ...] = (
    (StrategyId.STRUCTURAL, extract_structural),
    (StrategyId.STREAM_DECODER, extract_stream_decoder),
    (StrategyId.BYTE_SCAN, extract_byte_scan),
    (StrategyId.FALLBACK, extract_fallback),
)

_LOG_LEVELS = {
    PipelineState.PENDING: logging.DEBUG,
    PipelineState.TRYING: logging.INFO,
    PipelineState.ACCEPTED: logging.INFO,
    PipelineState.EXHAUSTED: logging.ERROR,
}


def _emit(event: PipelineEvent, listener: EventListener | None) -> None:
    strategy = event.strategy_id.value if event.strategy_id else None
    logger.log(
        _LOG_LEVELS[event.state],
        "Extraction %s (strategy=%s, attempt=%s)%s",
        event.state.value,
        strategy,
        event.attempt,
        f": {event.reason}" if event.reason else "",
        extra={
            "event": "pipeline_transition",
            "state": event.state.value,
            "strategy": strategy,
            "duration_seconds": event.duration_seconds,
        },
    )
    if listener is not None:
        listener(event)


def _run_attempt(
    strategy: Strategy,
    buffer: bytes,
    settings: ExtractionSettings,
) -> ExtractionCandidate:
    """Run one strategy under the configured wall-clock budget.

    The attempt runs on a daemon thread. Threads cannot be killed, so on
    timeout the worker is abandoned: it keeps running in the background but
    never holds up interpreter exit. PyMuPDF is not thread-safe, so the
    structural strategy serializes its calls on a module lock; a later
    structural attempt waits behind an abandoned one and times out in turn.
    """
    timeout = settings.strategy_timeout_seconds
    if not timeout:
        return strategy(buffer, settings)

    outcome: dict[str, object] = {}

    def work() -> None:
        try:
            outcome["candidate"] = strategy(buffer, settings)
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=work, name="pdf-strategy", daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        raise StrategyError(f"timed out after {timeout:g}s")
    if "error" in outcome:
        raise outcome["error"]
    if "candidate" not in outcome:
        raise StrategyError("worker exited without a result")
    return outcome["candidate"]


def _rejection_reason(text: str, thresholds: QualityThresholds) -> str | None:
    """Why *text* cannot be accepted, or None when it can.

    Acceptance needs strictly more than ``min_chars`` characters on top of a
    passing verdict from the validator.
    """
    if len(text) <= thresholds.min_chars:
        return (
            f"text too short ({len(text)} chars, need more than "
            f"{thresholds.min_chars})"
        )
    return validate(text, thresholds).reason


def _quality_tier(
    strategy_id: StrategyId, word_count: int, settings: ExtractionSettings
) -> QualityTier:
    if strategy_id is StrategyId.FALLBACK:
        return QualityTier.LOW
    if word_count > settings.high_quality_word_count:
        return QualityTier.HIGH
    return QualityTier.MEDIUM


def extract_document(
    buffer: bytes,
    settings: ExtractionSettings | None = None,
    listener: EventListener | None = None,
    strategies: Sequence[tuple[StrategyId, Strategy]] = STRATEGIES,
) -> ExtractionResult:
    """Extract clean text from a PDF buffer using ranked fallback.

    Args:
        buffer: Raw PDF bytes. Never mutated.
        settings: Extraction configuration; loaded from YAML/env when omitted.
        listener: Optional callable receiving each ``PipelineEvent``.
        strategies: Ranked strategy table (defaults to ``STRATEGIES``).

    Returns:
        ExtractionResult built from the first accepted candidate.

    Raises:
        OversizedInputError: If the buffer exceeds ``max_file_size_bytes``;
            no strategy is attempted.
        ExhaustedError: If every strategy failed or produced rejected text.
    """
    if settings is None:
        settings = ExtractionSettings()

    _emit(PipelineEvent(PipelineState.PENDING), listener)
    check_size(buffer, settings.max_file_size_bytes)

    thresholds = QualityThresholds.from_settings(settings)
    failures: list[StrategyFailure] = []
    duration: float | None = None

    for attempt, (strategy_id, strategy) in enumerate(strategies):
        _emit(
            PipelineEvent(
                PipelineState.TRYING,
                strategy_id=strategy_id,
                attempt=attempt,
                reason=failures[-1].error if failures else None,
                duration_seconds=duration,
            ),
            listener,
        )

        started = time.monotonic()
        try:
            candidate = _run_attempt(strategy, buffer, settings)
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.warning(
                "Strategy %s raised %s: %s",
                strategy_id.value,
                type(e).__name__,
                reason,
            )
        else:
            reason = _rejection_reason(candidate.text, thresholds)
            if reason is not None:
                logger.warning(
                    "Strategy %s returned poor quality text: %s",
                    strategy_id.value,
                    reason,
                )
        duration = time.monotonic() - started

        if reason is not None:
            failures.append(
                StrategyFailure(strategy_id, f"{strategy_id.value}: {reason}")
            )
            continue

        text = candidate.text
        word_count = count_words(text)
        result = ExtractionResult(
            text=text,
            page_count=candidate.page_count,
            strategy_id=candidate.strategy_id,
            extracted_page_count=candidate.extracted_page_count,
            word_count=word_count,
            character_count=len(text),
            quality_tier=_quality_tier(candidate.strategy_id, word_count, settings),
        )
        _emit(
            PipelineEvent(
                PipelineState.ACCEPTED,
                strategy_id=strategy_id,
                attempt=attempt,
                duration_seconds=duration,
            ),
            listener,
        )
        logger.info(
            "Extraction succeeded via %s: %d chars, %d words, %d/%d pages",
            strategy_id.value,
            result.character_count,
            result.word_count,
            result.extracted_page_count,
            result.page_count,
        )
        return result

    exhausted = ExhaustedError(failures, diagnostics=diagnose(buffer))
    _emit(
        PipelineEvent(
            PipelineState.EXHAUSTED,
            strategy_id=failures[-1].strategy_id if failures else None,
            attempt=len(failures) - 1 if failures else None,
            reason=str(exhausted),
            duration_seconds=duration,
        ),
        listener,
    )
    raise exhausted

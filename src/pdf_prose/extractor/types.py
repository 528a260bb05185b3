"""Shared types for the extraction pipeline.

Defines the strategy and quality enums plus the candidate, verdict, failure
and result records passed between the strategies, the quality validator and
the orchestration service.
"""

from dataclasses import dataclass, field
from enum import Enum


class StrategyId(Enum):
    """Extraction strategy identifiers, declared in rank order."""

    STRUCTURAL = "structural"
    STREAM_DECODER = "stream_decoder"
    BYTE_SCAN = "byte_scan"
    FALLBACK = "fallback"


class QualityTier(Enum):
    """Coarse usefulness classification of an accepted extraction."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PipelineState(Enum):
    """Orchestrator states reported on each transition event."""

    PENDING = "pending"
    TRYING = "trying"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class PageExtractionWarning:
    """A single page that could not be parsed by the structural strategy.

    Attributes:
        page_number: 1-based page number.
        error: Error description from the underlying parser.
    """

    page_number: int
    error: str


@dataclass
class ExtractionCandidate:
    """Text produced by exactly one strategy invocation, pending validation.

    Attributes:
        text: Normalized extracted text.
        page_count: Total page count reported by the strategy.
        strategy_id: Which strategy produced this candidate.
        extracted_page_count: Pages actually processed (<= page_count).
        page_warnings: Pages skipped because they failed to parse.
    """

    text: str
    page_count: int
    strategy_id: StrategyId
    extracted_page_count: int
    page_warnings: list[PageExtractionWarning] = field(default_factory=list)


@dataclass(frozen=True)
class QualityVerdict:
    """Outcome of the text quality validator.

    Attributes:
        accepted: Whether the text passed every check.
        reason: Description of the first failing check (None when accepted).
    """

    accepted: bool
    reason: str | None = None


@dataclass(frozen=True)
class StrategyFailure:
    """A strategy that raised, timed out, or produced rejected text."""

    strategy_id: StrategyId
    error: str


@dataclass(frozen=True)
class ExtractionResult:
    """Final accepted extraction returned to the caller.

    Attributes:
        text: Accepted, normalized extracted text.
        page_count: Total page count reported by the winning strategy.
        strategy_id: Strategy that produced the accepted text.
        extracted_page_count: Pages actually processed.
        word_count: Whitespace-delimited non-empty tokens in ``text``.
        character_count: ``len(text)``.
        quality_tier: HIGH, MEDIUM, or LOW.
    """

    text: str
    page_count: int
    strategy_id: StrategyId
    extracted_page_count: int
    word_count: int
    character_count: int
    quality_tier: QualityTier


@dataclass(frozen=True)
class PipelineEvent:
    """Structured diagnostic event emitted on each orchestrator transition.

    For ``trying`` and ``exhausted`` events, ``reason`` and
    ``duration_seconds`` describe the attempt that was just abandoned (both
    None on the first attempt). For ``accepted`` they describe the winner.

    Attributes:
        state: State entered by the transition.
        strategy_id: Strategy being tried, accepted, or last attempted.
        attempt: 0-based index of the strategy in rank order.
        reason: Failure or rejection reason of the previous attempt.
        duration_seconds: Wall-clock time of the previous or winning attempt.
    """

    state: PipelineState
    strategy_id: StrategyId | None = None
    attempt: int | None = None
    reason: str | None = None
    duration_seconds: float | None = None

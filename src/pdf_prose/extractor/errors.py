"""Exception hierarchy for the extraction pipeline.

Only ``OversizedInputError`` and ``ExhaustedError`` ever reach the caller.
``StrategyError`` is raised inside strategies and converted by the
orchestration service into a ``StrategyFailure`` record.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pdf_prose.extractor.diagnostics import DiagnosticReport
    from pdf_prose.extractor.types import StrategyFailure


class ExtractionError(Exception):
    """Base class for all extraction pipeline errors."""


class OversizedInputError(ExtractionError):
    """Raised when the input buffer exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            f"PDF file too large ({size / (1024 * 1024):.1f}MB, "
            f"max {limit / (1024 * 1024):.0f}MB)"
        )


class StrategyError(ExtractionError):
    """Raised by a strategy that cannot produce a candidate."""


class ExhaustedError(ExtractionError):
    """Raised when every strategy failed or produced rejected text.

    Attributes:
        failures: Ordered failure records, one per attempted strategy.
        diagnostics: Byte-level structural report of the input, if computed.
    """

    def __init__(
        self,
        failures: list[StrategyFailure],
        diagnostics: DiagnosticReport | None = None,
    ) -> None:
        self.failures = list(failures)
        self.diagnostics = diagnostics
        last = self.failures[-1].error if self.failures else "no strategies attempted"
        super().__init__(f"All PDF extraction methods failed. Last error: {last}")

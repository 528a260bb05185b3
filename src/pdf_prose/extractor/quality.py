"""Text quality validation for extraction candidates.

Decides whether a strategy's output is prose-like enough to return, or
whether the next strategy in rank order should be tried. The validator only
judges text; it never normalizes or mutates it.

Checks, evaluated in order (the first failing check determines the reason):

1. Minimum length.
2. Structural artifacts: PDF syntax (object/stream delimiters, xref tables,
   font/filter/catalog declarations) or renderer signatures leaked into the
   text. A single match rejects the whole candidate.
3. Printable ratio: share of printable ASCII characters (plus newline,
   carriage return and tab).
4. Minimum word count.
5. Average word length within ``[min_avg_word_length, max_avg_word_length)``.
6. At least one purely alphabetic word of ``min_alpha_word_length`` letters,
   which stops numeric or symbol noise that slips past the ratio check.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pdf_prose.config.settings import ExtractionSettings
from pdf_prose.extractor.types import QualityVerdict

ARTIFACT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"Skia/PDF", re.IGNORECASE),  # Chromium / Google Docs renderer
    re.compile(r"Google Docs Renderer", re.IGNORECASE),
    re.compile(r"endstream", re.IGNORECASE),
    re.compile(r"endobj", re.IGNORECASE),
    re.compile(r"/Type.*/Font", re.IGNORECASE),
    re.compile(r"/Filter.*/FlateDecode", re.IGNORECASE),
    re.compile(r"/Length\s+\d+", re.IGNORECASE),
    re.compile(r"%%PDF-", re.IGNORECASE),
    re.compile(r"startxref", re.IGNORECASE),
    re.compile(r"xref\s+\d+", re.IGNORECASE),
    re.compile(r"/Root\s+\d+", re.IGNORECASE),
    re.compile(r"/Info\s+\d+", re.IGNORECASE),
    re.compile(r"/Catalog", re.IGNORECASE),
    re.compile(r">>.*<<.*>>"),  # dictionary delimiters
)

_NON_PRINTABLE = re.compile(r"[^\x20-\x7e\n\r\t]")
_ALPHA_WORD = re.compile(r"[A-Za-z]+")


@dataclass(frozen=True)
class QualityThresholds:
    """Named thresholds for the validator; defaults match ExtractionSettings."""

    min_chars: int = 20
    min_printable_ratio: float = 0.70
    min_words: int = 5
    min_avg_word_length: float = 2.0
    max_avg_word_length: float = 30.0
    min_alpha_word_length: int = 3

    @classmethod
    def from_settings(cls, settings: ExtractionSettings) -> QualityThresholds:
        return cls(
            min_chars=settings.min_chars,
            min_printable_ratio=settings.min_printable_ratio,
            min_words=settings.min_words,
            min_avg_word_length=settings.min_avg_word_length,
            max_avg_word_length=settings.max_avg_word_length,
            min_alpha_word_length=settings.min_alpha_word_length,
        )


def find_artifact(text: str) -> re.Pattern[str] | None:
    """Return the first structural-artifact pattern found in *text*, if any."""
    for pattern in ARTIFACT_PATTERNS:
        if pattern.search(text):
            return pattern
    return None


def printable_ratio(text: str) -> float:
    """Fraction of *text* made of printable ASCII, newline, CR or tab."""
    if not text:
        return 0.0
    return 1 - len(_NON_PRINTABLE.findall(text)) / len(text)


def validate(
    text: str,
    thresholds: QualityThresholds = QualityThresholds(),
) -> QualityVerdict:
    """Classify *text* as acceptable prose or not.

    Args:
        text: Candidate text produced by a strategy.
        thresholds: Validator thresholds (defaults: 20 chars, 0.70 printable
            ratio, 5 words, average word length in [2, 30), 3-letter word).

    Returns:
        QualityVerdict with ``accepted=True``, or ``accepted=False`` and the
        reason of the first failing check.
    """
    # Check 1: Minimum length
    if len(text) < thresholds.min_chars:
        return QualityVerdict(
            False,
            f"text too short ({len(text)} chars < {thresholds.min_chars})",
        )

    # Check 2: Structural artifacts
    artifact = find_artifact(text)
    if artifact is not None:
        return QualityVerdict(
            False, f"text contains PDF artifacts ({artifact.pattern})"
        )

    # Check 3: Printable ratio
    ratio = printable_ratio(text)
    if ratio < thresholds.min_printable_ratio:
        return QualityVerdict(
            False,
            f"too many non-printable characters ({ratio:.0%} printable "
            f"< {thresholds.min_printable_ratio:.0%})",
        )

    # Check 4: Word count
    words = text.split()
    if not words or len(words) < thresholds.min_words:
        return QualityVerdict(
            False, f"too few words ({len(words)} < {thresholds.min_words})"
        )

    # Check 5: Average word length
    average = sum(len(word) for word in words) / len(words)
    if not thresholds.min_avg_word_length <= average < thresholds.max_avg_word_length:
        return QualityVerdict(
            False, f"unusual word structure (average length {average:.1f})"
        )

    # Check 6: At least one real alphabetic word
    if not any(
        len(word) >= thresholds.min_alpha_word_length and _ALPHA_WORD.fullmatch(word)
        for word in words
    ):
        return QualityVerdict(False, "no recognizable alphabetic words found")

    return QualityVerdict(True)

"""Whitespace normalization and word counting shared by the strategies."""

import re

_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_BLANK_LINE_RUNS = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs and triple-or-more newlines, then strip.

    Horizontal whitespace (spaces, tabs, carriage returns, form feeds)
    collapses to a single space. Newlines survive so that page breaks remain
    blank lines, but three or more in a row collapse to exactly two.
    """
    text = _HORIZONTAL_WS.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _BLANK_LINE_RUNS.sub("\n\n", text)
    return text.strip()


def count_words(text: str) -> int:
    """Number of whitespace-delimited non-empty tokens."""
    return len(text.split())

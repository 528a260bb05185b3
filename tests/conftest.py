"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit tests.

Fixtures:
    - make_pdf: Factory building an in-memory PDF from per-page text
    - settings: Extraction settings with the default thresholds
    - prose_pdf: Two-page PDF with ordinary English prose

PDFs are generated with PyMuPDF at test time so no binary fixtures are
checked in.
"""

from collections.abc import Callable

import pymupdf
import pytest

from pdf_prose.config.settings import ExtractionSettings

PROSE_PAGE_ONE = (
    "Experienced software engineer with a background in distributed systems "
    "and data pipelines. Led a team of five developers building payment "
    "services for retail customers."
)
PROSE_PAGE_TWO = (
    "Education includes a degree in computer science from a state university. "
    "Skills cover Python, SQL, and cloud infrastructure automation."
)


def build_pdf(pages: list[str]) -> bytes:
    """Create a PDF whose pages contain the given text (empty string = blank page)."""
    doc = pymupdf.open()
    for text in pages:
        page = doc.new_page()
        if text:
            rc = page.insert_textbox(
                pymupdf.Rect(72, 72, 540, 770), text, fontsize=11
            )
            assert rc >= 0, "test text does not fit on the page"
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def make_pdf() -> Callable[[list[str]], bytes]:
    """Return the in-memory PDF factory.

    Returns:
        Callable taking a list of page texts and returning PDF bytes.
    """
    return build_pdf


@pytest.fixture
def settings() -> ExtractionSettings:
    """Return extraction settings with default thresholds.

    Returns:
        ExtractionSettings initialised from code defaults.
    """
    return ExtractionSettings()


@pytest.fixture
def prose_pdf() -> bytes:
    """Return a well-formed two-page PDF containing real prose.

    Returns:
        PDF bytes.
    """
    return build_pdf([PROSE_PAGE_ONE, PROSE_PAGE_TWO])

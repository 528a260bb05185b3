"""Byte-level structural diagnostics for PDFs that fail extraction.

Cheap checks that need no PDF parser: header signature, encryption marker,
EOF marker, cross-reference and trailer presence, page tree presence, and a
count of text-object (``BT`` ... ``ET``) operators. The report is attached to
``ExhaustedError`` so a total failure says *why* the file was unreadable.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field

_HEAD_BYTES = 4096
_TAIL_BYTES = 1024
_BEGIN_TEXT = re.compile(rb"(?<![A-Za-z])BT(?![A-Za-z])")


@dataclass
class DiagnosticReport:
    """Structural findings about a PDF buffer.

    Attributes:
        file_size: Buffer length in bytes.
        header: First 8 bytes decoded as ASCII (for display).
        has_pdf_signature: Buffer starts with ``%PDF-``.
        encrypted: ``/Encrypt`` appears in the first 4 KiB.
        has_eof_marker: ``%%EOF`` appears in the last 1 KiB.
        has_xref: ``xref`` appears in the first 4 KiB or last 1 KiB.
        has_startxref: ``startxref`` appears in the last 1 KiB.
        has_trailer: ``trailer`` appears in the last 1 KiB.
        has_pages: ``/Pages`` appears anywhere in the buffer.
        text_block_count: Number of uncompressed ``BT`` operators found.
        problems: Human-readable problem list.
        suggestions: Remediation hints for the end user.
    """

    file_size: int
    header: str
    has_pdf_signature: bool
    encrypted: bool
    has_eof_marker: bool
    has_xref: bool
    has_startxref: bool
    has_trailer: bool
    has_pages: bool
    text_block_count: int
    problems: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def diagnose(buffer: bytes) -> DiagnosticReport:
    """Inspect *buffer* and report structural problems."""
    head = buffer[:_HEAD_BYTES]
    tail = buffer[-_TAIL_BYTES:]

    report = DiagnosticReport(
        file_size=len(buffer),
        header=buffer[:8].decode("ascii", errors="replace"),
        has_pdf_signature=buffer.startswith(b"%PDF-"),
        encrypted=b"/Encrypt" in head,
        has_eof_marker=b"%%EOF" in tail,
        has_xref=b"xref" in head or b"xref" in tail,
        has_startxref=b"startxref" in tail,
        has_trailer=b"trailer" in tail,
        has_pages=b"/Pages" in buffer,
        text_block_count=len(_BEGIN_TEXT.findall(buffer)),
    )

    if not report.has_pdf_signature:
        report.problems.append("Invalid PDF signature")
        report.suggestions.append("File does not appear to be a valid PDF")
        report.suggestions.append(
            "Ensure the file extension matches the actual file type"
        )
    if report.encrypted:
        report.problems.append("PDF is encrypted")
        report.suggestions.append("Remove password protection from the PDF")
    if not report.has_eof_marker:
        report.problems.append("Missing EOF marker")
        report.suggestions.append(
            "PDF may be truncated or corrupted - try re-exporting it"
        )
    if not report.has_xref:
        report.problems.append("Missing xref table")
    if not report.has_pages:
        report.problems.append("No pages structure found")
    if report.has_pages and report.text_block_count == 0:
        report.suggestions.append(
            "PDF may contain only images without text; OCR is not supported"
        )

    return report

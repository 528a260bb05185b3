"""Smoke test: end-to-end extraction over generated documents.

Runs the full pipeline (guard, four strategies, validator, response
serialization) against a small set of documents covering each outcome:

- A well-formed multi-page resume (accepted via the structural strategy)
- A header/trailer-only skeleton (exhausted)
- A corrupted file holding raw literals (accepted via the byte scan)
- An 11 MiB buffer (rejected by the size guard before any strategy)

Usage:
    uv run python -m tests.smoke.test_extraction_smoke

Evidence is written to logs/smoke/smoke_evidence.json.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import pymupdf

from pdf_prose.config.settings import ExtractionSettings
from pdf_prose.extractor import extract_document
from pdf_prose.extractor.errors import ExhaustedError, OversizedInputError
from pdf_prose.extractor.response import build_error_response, build_response
from pdf_prose.extractor.types import PipelineEvent
from pdf_prose.logging import setup_logging

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SMOKE_LOG_DIR = "logs/smoke"

logger = logging.getLogger(__name__)

RESUME_PAGES = [
    "Jordan Example. Data engineer with six years of experience building "
    "batch and streaming pipelines for retail analytics teams.",
    "Experience: designed ingestion services handling forty million events "
    "per day, migrated reporting workloads to a columnar warehouse.",
    "Education: bachelor of science in statistics. Skills: Python, SQL, "
    "orchestration tooling, and data quality monitoring.",
]

SKELETON = (
    b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n"
    b"trailer\n<< /Size 2 /Root 1 0 R >>\nstartxref\n9\n%%EOF\n"
)

CORRUPTED = (
    b"%PDF-1.4 truncated upload\n"
    b"(Hello World)(Another Chunk)(recovered from a damaged export)\n"
)


@dataclass
class CaseEvidence:
    """Outcome of one smoke case."""

    name: str
    expected: str
    outcome: str = ""
    method: str = ""
    words: int = 0
    pages: int = 0
    states: list[str] = field(default_factory=list)
    response: dict = field(default_factory=dict)
    passed: bool = False


@dataclass
class SmokeEvidence:
    """Structured evidence collected during the smoke run."""

    start_time: str = ""
    end_time: str = ""
    cases: list[CaseEvidence] = field(default_factory=list)
    passed: bool = False
    failure_reasons: list[str] = field(default_factory=list)


def _build_resume_pdf() -> bytes:
    doc = pymupdf.open()
    for text in RESUME_PAGES:
        page = doc.new_page()
        page.insert_textbox(pymupdf.Rect(72, 72, 540, 770), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


def _run_case(
    name: str,
    buffer: bytes,
    expected: str,
    settings: ExtractionSettings,
) -> CaseEvidence:
    """Run one document through the pipeline and record what happened."""
    case = CaseEvidence(name=name, expected=expected)
    events: list[PipelineEvent] = []

    try:
        result = extract_document(buffer, settings, listener=events.append)
    except OversizedInputError as e:
        case.outcome = "oversized"
        case.response = build_error_response(e)
    except ExhaustedError as e:
        case.outcome = "exhausted"
        case.response = build_error_response(e)
    else:
        case.outcome = f"accepted:{result.strategy_id.value}"
        case.method = result.strategy_id.value
        case.words = result.word_count
        case.pages = result.page_count
        case.response = build_response(result, len(buffer))

    case.states = [event.state.value for event in events]
    case.passed = case.outcome == expected
    return case


def run_smoke_test() -> SmokeEvidence:
    evidence = SmokeEvidence(start_time=datetime.now(timezone.utc).isoformat())
    setup_logging(log_dir=str(PROJECT_ROOT / SMOKE_LOG_DIR))
    settings = ExtractionSettings()

    cases = [
        ("resume", _build_resume_pdf(), "accepted:structural"),
        ("skeleton", SKELETON, "exhausted"),
        ("corrupted", CORRUPTED, "accepted:byte_scan"),
        ("oversized", os.urandom(11 * 1024 * 1024), "oversized"),
    ]

    try:
        for name, buffer, expected in cases:
            print(f"[Case] {name} ({len(buffer)} bytes), expecting {expected}")
            case = _run_case(name, buffer, expected, settings)
            evidence.cases.append(case)
            print(f"  -> {case.outcome} (states: {', '.join(case.states)})")
            if not case.passed:
                evidence.failure_reasons.append(
                    f"{name}: expected {expected}, got {case.outcome}"
                )

        # Idempotence: the same buffer twice gives identical responses
        resume = cases[0][1]
        first = build_response(extract_document(resume, settings), len(resume))
        second = build_response(extract_document(resume, settings), len(resume))
        if first != second:
            evidence.failure_reasons.append("resume: repeated runs differ")
    except Exception as exc:
        logger.exception("Smoke test aborted with unexpected error")
        evidence.failure_reasons.append(f"Unexpected error: {exc}")
    finally:
        evidence.end_time = datetime.now(timezone.utc).isoformat()

    evidence.passed = not evidence.failure_reasons
    return evidence


def main():
    evidence = run_smoke_test()

    print()
    print("=" * 60)
    if evidence.passed:
        print("RESULT: PASS")
    else:
        print("RESULT: FAIL")
        for reason in evidence.failure_reasons:
            print(f"  - {reason}")
    print("=" * 60)
    print()

    print("Evidence Summary:")
    for case in evidence.cases:
        print(
            f"  {case.name:<12} {case.outcome:<24} "
            f"words={case.words:<4} pages={case.pages}"
        )
    print()

    log_dir = PROJECT_ROOT / SMOKE_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    evidence_path = log_dir / "smoke_evidence.json"
    with open(evidence_path, "w") as f:
        json.dump(asdict(evidence), f, indent=2)
    print(f"Full evidence saved to: {evidence_path}")
    print(f"Smoke log:              {log_dir / 'extraction.log'}")

    return 0 if evidence.passed else 1


if __name__ == "__main__":
    sys.exit(main())

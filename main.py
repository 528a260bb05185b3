"""PDF prose extractor -- command-line entry point.

Startup sequence:
    1. Load extraction and pipeline configuration
    2. Setup logging (must happen before any code that logs)
    3. Log the effective extraction limits
    4. Extract every PDF named on the command line
    5. Print the response JSON to stdout; exit 1 if any file failed

Usage:
    python main.py resume.pdf [other.pdf ...]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pdf_prose.config import load_all_settings
from pdf_prose.extractor import extract_files
from pdf_prose.logging import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the extraction pipeline over the given PDF files."""
    parser = argparse.ArgumentParser(description="Extract clean text from PDFs.")
    parser.add_argument("pdfs", nargs="+", type=Path, help="PDF files to extract")
    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="include structural diagnostics for files that fail extraction",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log DEBUG output to the console",
    )
    args = parser.parse_args(argv)

    # 1. Load configuration; nothing logs while settings are built
    extraction, pipeline = load_all_settings()

    # 2. Setup logging BEFORE anything else logs
    log_path = setup_logging(pipeline, verbose=args.verbose)

    logger.info("PDF prose extractor starting (log file: %s)", log_path)

    # 3. Effective limits
    logger.info(
        "Config loaded -- extraction: max_file_size=%d, max_pages=%d, "
        "timeout=%ss, min_words=%d",
        extraction.max_file_size_bytes,
        extraction.max_pages,
        extraction.strategy_timeout_seconds,
        extraction.min_words,
    )

    # 4. Extract
    batch = extract_files(args.pdfs, extraction)

    # 5. Report
    output: dict = {"results": batch.responses}
    if args.diagnostics and batch.diagnostics:
        output["diagnostics"] = batch.diagnostics
    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")

    logger.info("Run complete")
    return 1 if batch.files_failed else 0


if __name__ == "__main__":
    sys.exit(main())

"""Resource guard: reject oversized input before any parsing."""

from __future__ import annotations

import logging

from pdf_prose.extractor.errors import OversizedInputError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MiB


def check_length(size: int, max_bytes: int = MAX_FILE_SIZE) -> None:
    """Raise OversizedInputError if *size* bytes exceeds *max_bytes*.

    Used on ``stat()`` sizes so oversized files are rejected before they are
    read into memory.
    """
    if size > max_bytes:
        logger.warning(
            "Rejected oversized input: %d bytes > %d byte limit",
            size,
            max_bytes,
        )
        raise OversizedInputError(size, max_bytes)


def check_size(buffer: bytes, max_bytes: int = MAX_FILE_SIZE) -> None:
    """Raise OversizedInputError if *buffer* is larger than *max_bytes*.

    Args:
        buffer: Raw PDF bytes.
        max_bytes: Inclusive upper bound on the buffer length.

    Raises:
        OversizedInputError: If ``len(buffer) > max_bytes``.
    """
    check_length(len(buffer), max_bytes)

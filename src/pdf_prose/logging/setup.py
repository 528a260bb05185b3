"""Logging setup for extraction runs.

Two handlers are attached to the root logger:
    1. RotatingFileHandler -- one JSON object per line, DEBUG and up, rotated
       per ``PipelineSettings.log_max_bytes`` / ``log_backup_count``
    2. StreamHandler on stderr -- text at ``console_level``; stdout stays
       reserved for the response JSON printed by ``main.py``

Pipeline transitions are logged with ``event``, ``state``, ``strategy`` and
``duration_seconds`` extras, which the JSON formatter writes as top-level
fields next to a static ``app`` field.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from pdf_prose.config.settings import PipelineSettings

APP_NAME = "pdf_prose"


def _json_formatter() -> JsonFormatter:
    return JsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "component",
        },
        static_fields={"app": APP_NAME},
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def setup_logging(
    settings: PipelineSettings | None = None,
    log_dir: str | None = None,
    verbose: bool = False,
) -> Path:
    """Attach the JSON file handler and the stderr console handler.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output.

    Args:
        settings: Logging configuration; loaded from YAML/env when omitted.
        log_dir: Overrides ``settings.log_dir`` (used by the smoke run).
        verbose: Lower the console handler to DEBUG.

    Returns:
        Path of the JSON log file.
    """
    if settings is None:
        settings = PipelineSettings()

    directory = Path(log_dir or settings.log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / settings.log_file_name

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        filename=str(log_path),
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(_json_formatter())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else settings.console_level)
    console_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    return log_path

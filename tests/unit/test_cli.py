"""Unit tests for logging setup, settings loading, and the CLI entry point."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import pytest_check as check

import main
from pdf_prose.config import ExtractionSettings, PipelineSettings, load_all_settings
from pdf_prose.logging import setup_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Put the root logger's handlers and level back after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def _json_lines(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines() if line]


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
    """Tests for the JSON file and console handlers."""

    def test_writes_json_with_extras(self, tmp_path: Path) -> None:
        """Records land in the JSON file with renamed and extra fields."""
        log_path = setup_logging(PipelineSettings(log_dir=str(tmp_path)))

        logging.getLogger("pdf_prose.test").info(
            "Extraction %s",
            "trying",
            extra={"state": "trying", "strategy": "byte_scan"},
        )
        for handler in logging.getLogger().handlers:
            handler.flush()

        check.equal(log_path, tmp_path / "extraction.log")
        record = _json_lines(log_path)[-1]
        check.equal(record["message"], "Extraction trying")
        check.equal(record["level"], "INFO")
        check.equal(record["component"], "pdf_prose.test")
        check.equal(record["app"], "pdf_prose")
        check.equal(record["state"], "trying")
        check.equal(record["strategy"], "byte_scan")

    def test_console_level_follows_settings_and_verbose(self, tmp_path: Path) -> None:
        """Console handler uses console_level unless verbose is set."""
        settings = PipelineSettings(log_dir=str(tmp_path), console_level="WARNING")

        setup_logging(settings)
        console = [
            h for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        check.equal([h.level for h in console], [logging.WARNING])

        setup_logging(settings, verbose=True)
        console = [
            h for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        check.equal([h.level for h in console], [logging.DEBUG])

    def test_log_dir_argument_overrides_settings(self, tmp_path: Path) -> None:
        """An explicit log_dir wins over the configured one."""
        settings = PipelineSettings(log_dir=str(tmp_path / "configured"))

        log_path = setup_logging(settings, log_dir=str(tmp_path / "override"))

        check.equal(log_path.parent, tmp_path / "override")
        check.is_true(log_path.parent.is_dir())


def test_load_all_settings_returns_both(monkeypatch: pytest.MonkeyPatch) -> None:
    """Extraction and pipeline settings are loaded together with env overrides."""
    monkeypatch.setenv("EXTRACTION_MAX_PAGES", "7")
    monkeypatch.setenv("PIPELINE_LOG_FILE_NAME", "run.log")

    extraction, pipeline = load_all_settings()

    check.is_instance(extraction, ExtractionSettings)
    check.is_instance(pipeline, PipelineSettings)
    check.equal(extraction.max_pages, 7)
    check.equal(pipeline.log_file_name, "run.log")


@pytest.mark.usefixtures("restore_root_logger")
class TestMain:
    """Tests for the command-line entry point."""

    def test_prints_responses_and_exit_code(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        prose_pdf: bytes,
    ) -> None:
        """Response JSON goes to stdout; a failed file gives exit code 1."""
        monkeypatch.setenv("PIPELINE_LOG_DIR", str(tmp_path / "logs"))
        good = tmp_path / "good.pdf"
        good.write_bytes(prose_pdf)
        missing = tmp_path / "missing.pdf"

        code = main.main([str(good), str(missing), "--diagnostics"])

        output = json.loads(capsys.readouterr().out)
        check.equal(code, 1)
        check.equal(output["results"][str(good)]["info"]["method"], "structural")
        check.equal(
            output["results"][str(missing)]["error"], "Failed to extract text from PDF"
        )
        check.is_true((tmp_path / "logs" / "extraction.log").exists())

    def test_all_succeeded_exits_zero(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        prose_pdf: bytes,
    ) -> None:
        """Exit code is 0 when every file is extracted."""
        monkeypatch.setenv("PIPELINE_LOG_DIR", str(tmp_path / "logs"))
        good = tmp_path / "good.pdf"
        good.write_bytes(prose_pdf)

        check.equal(main.main([str(good)]), 0)

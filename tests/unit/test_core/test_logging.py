"""Unit tests for logging configuration."""

import io
import json
from pathlib import Path

from loguru import logger

from reverse_api.core.logging import setup_logging


def _json_lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_does_not_raise(self) -> None:
        """setup_logging with valid log level does not raise."""
        setup_logging("DEBUG")
        setup_logging("INFO")
        setup_logging("WARNING")

    def test_setup_logging_case_insensitive(self) -> None:
        """setup_logging accepts case-insensitive log levels."""
        setup_logging("info")
        setup_logging("debug")

    def test_setup_logging_with_log_dir(self, tmp_path: Path) -> None:
        """A log_dir adds a file sink that receives records."""
        log_dir = tmp_path / "logs"
        setup_logging("INFO", log_dir=str(log_dir))
        logger.info("file sink check")
        # Reconfiguring removes and closes the file sink
        setup_logging("INFO")

        log_file = log_dir / "reverse-api.log"
        assert log_file.exists()
        assert "file sink check" in log_file.read_text()


class TestStructuredRecords:
    """Records bound with json_output go to the JSON sink only."""

    def test_bound_record_is_serialized(self) -> None:
        stream = io.StringIO()
        setup_logging("DEBUG", sink=stream)

        logger.bind(json_output=True, matches=2).info("matched boundaries")
        setup_logging("INFO")

        records = _json_lines(stream.getvalue())
        assert len(records) == 1
        assert records[0]["record"]["message"] == "matched boundaries"
        assert records[0]["record"]["extra"]["matches"] == 2
        assert all(line.startswith("{") for line in stream.getvalue().splitlines())

    def test_unbound_record_is_text(self) -> None:
        stream = io.StringIO()
        setup_logging("DEBUG", sink=stream)

        logger.info("plain startup message")
        setup_logging("INFO")

        output = stream.getvalue()
        assert _json_lines(output) == []
        assert "plain startup message" in output
        assert " | INFO " in output

    def test_json_logs_serializes_everything(self) -> None:
        stream = io.StringIO()
        setup_logging("DEBUG", json_logs=True, sink=stream)

        logger.info("plain startup message")
        logger.bind(json_output=True).info("structured message")
        setup_logging("INFO")

        messages = [r["record"]["message"] for r in _json_lines(stream.getvalue())]
        assert messages == ["plain startup message", "structured message"]

    def test_level_applies_to_structured_sink(self) -> None:
        stream = io.StringIO()
        setup_logging("WARNING", sink=stream)

        logger.bind(json_output=True).debug("below threshold")
        setup_logging("INFO")

        assert stream.getvalue() == ""

"""Tests for the enhanced logging setup and the docs generator that uses it."""

import json
import logging

import pytest

from config import enhanced_logging
from config.enhanced_logging import (
    MAX_MSG_LENGTH,
    ColoredFormatter,
    PlainFormatter,
    get_log_directory,
    log_execution_time,
    setup_logger,
)
from scripts import generate_services_docs


@pytest.fixture
def restore_root_logger(monkeypatch):
    """Drop the handlers setup_logger installs and restore the root level."""
    root = logging.getLogger()
    level = root.level
    monkeypatch.setattr(enhanced_logging, "_root_logger_initialized", False)
    yield root
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (ColoredFormatter, PlainFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _record(msg, level=logging.INFO):
    return logging.LogRecord("test", level, __file__, 10, msg, None, None)


class TestFormatters:
    """Test log record formatting."""

    def test_plain_formatter_has_no_colors(self):
        output = PlainFormatter().format(_record("hello"))
        assert "hello" in output
        assert "[I]" in output
        assert "\033[" not in output

    def test_colored_formatter_drops_colors_without_tty(self):
        formatter = ColoredFormatter(use_colors=True, stream=None)
        formatter.use_colors = False
        assert "\033[" not in formatter.format(_record("hello"))

    def test_long_messages_are_truncated(self):
        output = PlainFormatter().format(_record("x" * (MAX_MSG_LENGTH + 50)))
        assert output.endswith("...")
        assert "x" * MAX_MSG_LENGTH not in output


class TestSetupLogger:
    """Test root logger configuration."""

    def test_log_directory_from_argument(self, tmp_path):
        assert get_log_directory(str(tmp_path)) == tmp_path

    def test_log_directory_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_PATH", str(tmp_path))
        assert get_log_directory() == tmp_path

    def test_console_only_by_default(self, restore_root_logger, monkeypatch):
        monkeypatch.delenv("LOG_TO_FILE", raising=False)
        root = setup_logger(level="DEBUG", force=True)

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ColoredFormatter)

    def test_file_logging(self, restore_root_logger, tmp_path):
        root = setup_logger(level=logging.INFO, log_to_file=True, log_path=str(tmp_path), force=True)
        logging.getLogger("googleauth.test").info("written to file")

        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        file_handlers[0].flush()

        log_files = list(tmp_path.glob("*/googleauth_*.log"))
        assert len(log_files) == 1
        assert "written to file" in log_files[0].read_text()

    def test_setup_is_idempotent(self, restore_root_logger):
        first = setup_logger(level="INFO", log_to_file=False, force=True)
        handler_count = len(first.handlers)
        second = setup_logger(level="DEBUG")

        assert second is first
        assert len(second.handlers) == handler_count
        assert second.level == logging.INFO


class TestLogExecutionTime:
    """Test the timing decorator."""

    def test_returns_result(self, caplog):
        @log_execution_time
        def add(a, b):
            return a + b

        with caplog.at_level(logging.DEBUG):
            assert add(1, 2) == 3
        assert "Completed add" in caplog.text

    def test_logs_and_reraises(self, caplog):
        @log_execution_time
        def boom():
            raise RuntimeError("bad")

        with pytest.raises(RuntimeError):
            boom()
        assert "Failed boom" in caplog.text


class TestGenerateServicesDocs:
    """Test the documentation generator script."""

    def test_markdown_to_stdout(self, restore_root_logger, capsys):
        assert generate_services_docs.main([]) == 0
        out = capsys.readouterr().out

        assert out.startswith("| Service | User | APIs | Scopes | Notes |")
        assert "| keep | no |" in out

    def test_user_only_markdown(self):
        content = generate_services_docs.render_services_doc(user_only=True)
        assert "| gmail | yes |" in content
        assert "| keep |" not in content
        assert "| groups |" not in content

    def test_json_output_file(self, restore_root_logger, tmp_path):
        output = tmp_path / "docs" / "services.json"
        assert generate_services_docs.main(["--json", "--output", str(output)]) == 0

        data = json.loads(output.read_text())
        assert [item["service"] for item in data][:3] == ["gmail", "calendar", "drive"]
        assert "apis" in data[0]
        assert "note" not in data[0]

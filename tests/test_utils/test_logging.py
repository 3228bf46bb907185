"""Tests for structured logging configuration."""

import json
import logging

import pytest
import structlog

from content_api.utils.logging import configure_logging, flush_logging, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """[P1] JSON mode writes one JSON object per event to stdout."""
        configure_logging(level="INFO", json_output=True)

        get_logger("tests.logging").info("something_happened", channel_id="abc")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "something_happened"
        assert record["channel_id"] == "abc"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filters_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING", json_output=True)

        log = get_logger("tests.logging")
        log.info("hidden_event")
        log.warning("shown_event")

        out = capsys.readouterr().out
        assert "hidden_event" not in out
        assert "shown_event" in out

    def test_stdlib_records_share_the_handler(self, capsys: pytest.CaptureFixture[str]) -> None:
        """[P1] Third-party stdlib loggers render through the same formatter."""
        configure_logging(level="INFO", json_output=True)

        logging.getLogger("uvicorn.error").info("server started")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "server started"
        assert record["logger"] == "uvicorn.error"

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging()
        configure_logging(json_output=False)

        assert len(logging.getLogger().handlers) == 1

    def test_critical_with_exception(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO", json_output=True)

        try:
            raise ValueError("bad settings")
        except ValueError:
            get_logger("tests.logging").critical("startup_failed", exc_info=True)

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["level"] == "critical"
        assert "ValueError: bad settings" in record["exception"]


class TestFlushLogging:
    def test_flush_shuts_down_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Handlers are flushed through logging.shutdown."""
        calls: list[bool] = []
        monkeypatch.setattr(logging, "shutdown", lambda: calls.append(True))

        flush_logging()

        assert calls == [True]

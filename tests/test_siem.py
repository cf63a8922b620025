"""Tests for logging setup and SIEM lookup events."""

import json
import logging

import pytest

from core import siem


@pytest.fixture
def fresh_logging(monkeypatch):
    """Let configure_logging run again and drop any handlers it adds."""
    monkeypatch.setattr(siem, "_logging_configured", False)
    siem_logger = logging.getLogger(siem.SIEM_LOGGER_NAME)
    before = list(siem_logger.handlers)
    yield
    for handler in siem_logger.handlers[:]:
        if handler not in before:
            siem_logger.removeHandler(handler)
            handler.close()


class TestConfigureLogging:
    """Test one-time logging configuration."""

    def test_app_factory_configures_logging(self, fresh_logging, tmp_path):
        """Serving via ``uvicorn api.main:app`` gets the same setup as main()."""
        from api.main import create_app

        create_app(static_dir=str(tmp_path))
        assert siem._logging_configured

    def test_event_written_to_file(self, fresh_logging, tmp_path):
        log_file = tmp_path / "logs" / "siem_events.jsonl"
        siem.configure_logging(level="INFO", siem_log_file=str(log_file))
        siem.log_siem_event("hash_lookup", "FOUND", source_ip="10.0.0.5", details={"prefix": "5baa6"})

        for handler in logging.getLogger(siem.SIEM_LOGGER_NAME).handlers:
            handler.flush()

        event = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert event["event_type"] == "hash_lookup"
        assert event["status"] == "FOUND"
        assert event["ip_address"] == "10.0.0.5"
        assert event["details"] == {"prefix": "5baa6"}

    def test_configure_only_once(self, fresh_logging, tmp_path):
        siem.configure_logging(siem_log_file=str(tmp_path / "a.jsonl"))
        siem.configure_logging(siem_log_file=str(tmp_path / "b.jsonl"))
        assert not (tmp_path / "b.jsonl").exists()


class TestSiemEvent:
    """Test event schema."""

    def test_event_fields(self):
        event = siem.build_siem_event("password_lookup", "NOT_FOUND")
        assert event["source"] == "pwned_range_check"
        assert event["ip_address"] == "127.0.0.1"
        assert "details" not in event

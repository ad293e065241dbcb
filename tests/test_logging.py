"""
Tests for setup_logging.
"""
import logging
from logging.handlers import RotatingFileHandler

import pytest
import structlog

from splp.config import settings
from splp.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    before_handlers = list(root.handlers)
    before_level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in before_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(before_level)
    structlog.reset_defaults()


def test_stream_handler_only_by_default(monkeypatch):
    monkeypatch.setattr(settings, "log_to_file", False)

    handlers = setup_logging("validator", level=logging.DEBUG)

    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert handlers[0] in logging.getLogger().handlers
    assert logging.getLogger().level == logging.DEBUG


def test_handlers_attached_when_root_already_configured(monkeypatch, tmp_path):
    """An existing root handler must not stop the file handler from being attached."""
    monkeypatch.setattr(settings, "log_to_file", True)
    monkeypatch.setattr(settings, "log_dir", tmp_path)
    root = logging.getLogger()
    root.addHandler(logging.NullHandler())

    handlers = setup_logging("validator")

    assert all(handler in root.handlers for handler in handlers)


def test_file_handler_receives_records(monkeypatch, tmp_path):
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(settings, "log_to_file", True)
    monkeypatch.setattr(settings, "log_dir", log_dir)

    handlers = setup_logging("validator")
    logging.getLogger("splp.tests").warning("stdlib_line_marker")
    structlog.get_logger("splp.tests").warning("structlog_event_marker", phase="INIT")
    for handler in handlers:
        handler.flush()

    assert any(isinstance(h, RotatingFileHandler) for h in handlers)
    content = (log_dir / "validator.log").read_text()
    assert "stdlib_line_marker" in content
    assert "structlog_event_marker" in content
    assert '"phase": "INIT"' in content


def test_repeated_setup_replaces_previous_handlers(monkeypatch):
    monkeypatch.setattr(settings, "log_to_file", False)

    first = setup_logging("validator")
    second = setup_logging("validator")

    root = logging.getLogger()
    assert first[0] not in root.handlers
    assert second[0] in root.handlers


def test_structlog_configured(monkeypatch):
    monkeypatch.setattr(settings, "log_to_file", False)

    setup_logging()

    assert structlog.is_configured()

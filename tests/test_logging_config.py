"""
Tests for setup_logging.
"""
import logging
import logging.handlers

import pytest

from inventory.core.logging_config import setup_logging


@pytest.fixture
def restore_logging():
    """dictConfig changes global state; put the configured loggers back afterwards"""
    names = ["", "inventory", "uvicorn", "uvicorn.error", "uvicorn.access"]
    saved = {}
    for name in names:
        logger = logging.getLogger(name)
        saved[name] = (logger.handlers[:], logger.level, logger.propagate)
    yield
    for name, (handlers, level, propagate) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate


class TestSetupLogging:

    def test_creates_log_file(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

        setup_logging(logging.DEBUG)
        logging.getLogger("inventory.test").info("hello")

        app = logging.getLogger("inventory")
        assert app.level == logging.DEBUG
        assert app.propagate is False
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in app.handlers)
        assert (tmp_path / "logs" / "inventory.log").exists()

    def test_level_from_environment(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_DIR", str(tmp_path))
        monkeypatch.setenv("LOG_LEVEL", "warning")

        setup_logging()

        assert logging.getLogger("inventory").level == logging.WARNING

    def test_json_format(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_DIR", str(tmp_path))
        monkeypatch.setenv("LOG_FORMAT", "json")

        setup_logging()

        formatter = logging.getLogger("inventory").handlers[0].formatter
        assert type(formatter).__name__ == "JsonFormatter"

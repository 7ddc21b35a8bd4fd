import logging
import logging.handlers

import pytest

from inventory_dashboard import logger as logger_module
from inventory_dashboard import settings
from inventory_dashboard.logger import setup_logger


@pytest.fixture
def log_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(settings, "LOG_FILENAME", "test.log")
    monkeypatch.setattr(settings, "LOG_MAX_BYTES", 1024)
    monkeypatch.setattr(settings, "LOG_BACKUP_COUNT", 1)
    return tmp_path / "logs" / "test.log"


@pytest.fixture
def fresh_logger(request):
    name = f"dashboard-test.{request.node.name}"
    yield name
    log = logging.getLogger(name)
    for handler in list(log.handlers):
        handler.close()
        log.removeHandler(handler)


class TestSetupLogger:
    def test_file_location_and_rotation_come_from_settings(self, log_settings, fresh_logger):
        log = setup_logger(fresh_logger, "INFO")
        log.info("hello")

        file_handler = next(
            h for h in log.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        )
        assert logger_module.log_file_path() == log_settings
        assert file_handler.maxBytes == 1024
        assert file_handler.backupCount == 1
        file_handler.flush()
        assert "INFO - hello" in log_settings.read_text()

    def test_level_defaults_to_settings(self, log_settings, fresh_logger, monkeypatch):
        monkeypatch.setattr(settings, "LOG_LEVEL", "warning")
        assert setup_logger(fresh_logger).level == logging.WARNING

    def test_unknown_level_name_falls_back_to_info(self, log_settings, fresh_logger):
        assert setup_logger(fresh_logger, "chatty").level == logging.INFO

    def test_numeric_level(self, log_settings, fresh_logger):
        assert setup_logger(fresh_logger, logging.DEBUG).level == logging.DEBUG

    def test_debug_console_shows_origin(self, log_settings, fresh_logger):
        log = setup_logger(fresh_logger, logging.DEBUG)
        console = next(h for h in log.handlers if type(h) is logging.StreamHandler)
        assert console.formatter._fmt == logger_module.DEBUG_CONSOLE_FORMAT

    def test_second_call_adds_no_handlers(self, log_settings, fresh_logger):
        setup_logger(fresh_logger)
        assert len(setup_logger(fresh_logger).handlers) == 2

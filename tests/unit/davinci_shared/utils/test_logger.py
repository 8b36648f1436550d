# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)

import logging
import sys
from logging.handlers import TimedRotatingFileHandler

import pytest

from davinci_shared.utils.config import Settings
from davinci_shared.utils.logger import get_logger, setup_logger


@pytest.fixture
def logger_name(request):
    name = f"davinci_shared.tests.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_console_goes_to_stderr(logger_name):
    logger = setup_logger(logger_name)
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr


def test_setup_is_idempotent(logger_name):
    setup_logger(logger_name)
    logger = setup_logger(logger_name)
    assert len(logger.handlers) == 1


def test_file_output_rotates_daily(logger_name, tmp_path):
    logger = setup_logger(logger_name, with_console=False, log_dir=tmp_path / "logs", backup_days=3)
    logger.info("cpu quota unavailable")

    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, TimedRotatingFileHandler)
    assert handler.when == "MIDNIGHT"
    assert handler.backupCount == 3

    content = (tmp_path / "logs" / f"{logger_name}.log").read_text(encoding="utf-8")
    assert "| INFO |" in content
    assert content.rstrip().endswith("cpu quota unavailable")


def test_get_logger_from_settings(logger_name, tmp_path):
    settings = Settings(LOG_LEVEL="debug", LOG_DIR=str(tmp_path), LOG_TO_CONSOLE=False, LOG_BACKUP_DAYS=2)
    logger = get_logger(logger_name, settings)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.handlers[0].backupCount == 2


def test_library_is_silent_by_default():
    import davinci_shared

    handlers = logging.getLogger(davinci_shared.__name__).handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)

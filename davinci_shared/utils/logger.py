# davinci_shared/utils/logger.py
# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str,
    *,
    with_console: bool = True,
    level: Union[int, str, None] = None,
    log_dir: Union[str, Path, None] = None,
    backup_days: int = 7,
) -> logging.Logger:
    """Configure a named logger.

    Console output goes to stderr. With ``log_dir`` set, records also go to
    ``<log_dir>/<name>.log``, rotated at midnight and kept for ``backup_days``.
    Calling it again replaces the handlers instead of stacking them.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if with_console:
        # stdout belongs to the demo output.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_dir:
        target_dir = Path(log_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            target_dir / f"{name}.log",
            when="midnight",
            backupCount=max(0, int(backup_days)),
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger


def get_logger(name: str, settings: Optional[object] = None) -> logging.Logger:
    """Return a logger configured from settings (loaded lazily if omitted)."""
    if settings is None:
        from .config import get_settings

        settings = get_settings()
    return setup_logger(
        name,
        with_console=settings.LOG_TO_CONSOLE,
        level=settings.LOG_LEVEL.upper(),
        log_dir=settings.LOG_DIR,
        backup_days=settings.LOG_BACKUP_DAYS,
    )

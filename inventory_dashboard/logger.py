import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from . import settings

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# At DEBUG the console also shows where each line came from
DEBUG_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def log_file_path() -> Path:
    return settings.LOG_DIR / settings.LOG_FILENAME


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    fmt = DEBUG_CONSOLE_FORMAT if level <= logging.DEBUG else "%(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(level: int) -> logging.Handler:
    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logger(name: str = None, log_level: int | str = None) -> logging.Logger:
    """
    Attaches a stdout handler and a rotating file handler to the named logger.
    Level, log directory, file name and rotation all come from settings unless
    a level is passed. Calling it again for a configured logger is a no-op.
    """
    level = log_level or settings.LOG_LEVEL
    if isinstance(level, str):
        # getLevelName maps a known name to its number, and anything else to a string
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Only our own handlers count; pytest and uvicorn add theirs to the root
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler(level))
    logger.addHandler(_file_handler(level))
    return logger

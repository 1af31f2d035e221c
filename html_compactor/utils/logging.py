import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from html_compactor.config import settings

_LOG_FORMAT = "%(asctime)s | %(name)-28s | %(levelname)-7s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# File handler is shared across all loggers (created once)
_file_handler: RotatingFileHandler | None = None


def _get_file_handler(log_dir: str) -> RotatingFileHandler:
    global _file_handler
    if _file_handler is None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        _file_handler = RotatingFileHandler(
            path / "compactor.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB per file
            backupCount=5,
            encoding="utf-8",
        )
        _file_handler.setLevel(logging.DEBUG)
        _file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    return _file_handler


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        # Console handler: respects the configured log level
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(settings.log_level.upper())
        console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(console_handler)

        # File handler: only when a log directory is configured, always DEBUG
        if settings.log_dir:
            logger.addHandler(_get_file_handler(settings.log_dir))

    logger.setLevel(logging.DEBUG)
    return logger

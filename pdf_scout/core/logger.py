"""
Logging setup for PDF Scout.

Records go to stdout and, when a logs directory is configured, to a
size-rotated file. The PDF libraries log a line for every malformed
object they meet, so their loggers are held at WARNING unless the
application itself runs at DEBUG.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List


LOG_FILENAME = "pdf_scout.log"

LIBRARY_LOGGERS = ("pdfminer", "pdfplumber", "pypdf")

_logger_initialized = False


def _build_handlers(
    formatter: logging.Formatter,
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            logs_directory / LOG_FILENAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> None:
    """
    Configure the root logger once per process.

    Args:
        log_level: Level name; unknown names fall back to INFO.
        log_format: Format string for every handler.
        logs_directory: Where the rotating log file goes. None disables it.
        max_file_size_mb: Size at which the log file rotates.
        backup_count: Rotated files kept.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    level = getattr(logging, str(log_level).upper(), None)
    if not isinstance(level, int):
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter(log_format)
    for handler in _build_handlers(formatter, logs_directory, max_file_size_mb, backup_count):
        root_logger.addHandler(handler)

    library_level = logging.DEBUG if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    _logger_initialized = True


def _setup_from_config() -> None:
    from .config_loader import get_config

    config = get_config()
    setup_logging(
        log_level=config.logging.level,
        log_format=config.logging.format,
        logs_directory=config.paths.logs_directory,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger, configuring logging on first use.

    Settings come from config.json; without a loadable config, logging
    goes to the console only.

    Args:
        name: Logger name, typically __name__ of the calling module.
    """
    if not _logger_initialized:
        try:
            _setup_from_config()
        except Exception:
            setup_logging()

    return logging.getLogger(name)

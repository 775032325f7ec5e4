"""
Logging setup for the platform and its command line.
"""

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

PACKAGE_LOGGER = "coursefiles"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings.

    Attributes:
        level: Minimum severity name.
        console: Whether to log to stderr.
        log_file: Optional path of a rotating log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


def get_level(name: str) -> int:
    return _LEVEL_MAP.get(name.upper(), logging.INFO)


def setup_logging(config: LoggingConfig) -> logging.Logger:
    """Configure the package logger; calling it again replaces its handlers."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(get_level(config.level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if config.console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(config.console_fmt, config.datefmt))
        logger.addHandler(console)

    if config.log_file:
        file_handler = RotatingFileHandler(config.log_file, maxBytes=config.max_bytes,
                                           backupCount=config.backup_count, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(config.file_fmt, config.datefmt))
        logger.addHandler(file_handler)

    return logger

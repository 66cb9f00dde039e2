import logging
from logging import Logger
from logging.handlers import RotatingFileHandler
import os
from typing import Optional

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str, log_file: Optional[str] = None, level: str = "INFO") -> Logger:
    """
    Set up a logger for `name`. Level can be set via LOG_LEVEL env or parameter.

    Logs go to a rotating file when LOG_FILE (or `log_file`) is given, to
    stderr otherwise. Only adds a handler once per logger name; the level is
    (re)applied on each call.
    """
    logger = logging.getLogger(name)

    log_level_str = os.getenv("LOG_LEVEL", level).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    if not logger.handlers:
        log_file = log_file or os.getenv("LOG_FILE")
        if log_file:
            handler = RotatingFileHandler(
                log_file,
                maxBytes=2 * 1024 * 1024,
                backupCount=2,
                encoding="utf-8",
            )
        else:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(log_level)
    return logger


def get_logger(name: str) -> Logger:
    """Library-side logger: a child of the package logger, no handler of its own."""
    return logging.getLogger(name)

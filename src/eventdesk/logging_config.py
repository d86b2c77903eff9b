"""Logging setup for EventDesk: INFO/DEBUG on stdout, WARNING and above on stderr"""

import logging
import sys
from typing import Optional

from eventdesk.config import config

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"

# Library loggers that are only interesting when debugging
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "redis", "httpx")


class MaxLevelFilter(logging.Filter):
    """Pass only records below ``max_level``"""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record):
        return record.levelno < self.max_level


def _handler(stream, level: int, formatter: logging.Formatter, max_level=None):
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    if max_level is not None:
        handler.addFilter(MaxLevelFilter(max_level))
    handler.setFormatter(formatter)
    return handler


def resolve_level(name: Optional[str]) -> int:
    """Map a level name such as ``"debug"`` to its value, INFO when unknown"""
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level_name: Optional[str] = None) -> None:
    """
    Install the stdout/stderr handlers on the root logger.

    Args:
        level_name: overrides ``LOG_LEVEL`` from the application config
    """
    level = resolve_level(level_name or config.get("log_level"))
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Drop handlers installed by any earlier setup
    root_logger.handlers.clear()
    root_logger.addHandler(
        _handler(sys.stdout, logging.DEBUG, formatter, max_level=logging.WARNING)
    )
    root_logger.addHandler(_handler(sys.stderr, logging.WARNING, formatter))

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

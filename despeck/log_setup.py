"""Console logging with individually enabled levels."""

from __future__ import annotations

import logging
import sys
from typing import Iterable

LOGGER_NAME = "despeck"

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "verbose": VERBOSE,
    "warning": logging.WARNING,
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
}

_SHORT_FORMAT = "[%(levelname)s] %(message)s"
_LONG_FORMAT = "[%(levelname)s] %(filename)s:%(lineno)d %(message)s"


class _LevelFilter(logging.Filter):
    """Lets through only records whose level is in an explicit set."""

    def __init__(self, levels: Iterable[int]) -> None:
        super().__init__()
        self.levels = frozenset(levels)

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno in self.levels


class _LevelFormatter(logging.Formatter):
    """Short format for info and verbose, file and line for the rest."""

    def __init__(self) -> None:
        super().__init__()
        self._short = logging.Formatter(_SHORT_FORMAT)
        self._long = logging.Formatter(_LONG_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno in (logging.INFO, VERBOSE):
            return self._short.format(record)
        return self._long.format(record)


class _ConsoleHandler(logging.StreamHandler):
    """Handler installed by :func:`logging_setup`."""


def logging_setup(enabled_log_levels: Iterable[str]) -> logging.Logger:
    """Configure the package logger to print only the named levels to stdout.

    Known names are ``debug``, ``info``, ``verbose``, ``warning``, ``fatal``
    and ``error``. Calling it again replaces the previous configuration.
    """
    levels = []
    for name in enabled_log_levels:
        try:
            levels.append(LOG_LEVELS[name])
        except KeyError:
            raise ValueError(f"unknown log level {name!r}") from None

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, _ConsoleHandler):
            logger.removeHandler(handler)

    handler = _ConsoleHandler(sys.stdout)
    handler.addFilter(_LevelFilter(levels))
    handler.setFormatter(_LevelFormatter())
    logger.addHandler(handler)
    logger.setLevel(1)
    logger.propagate = False
    return logger
"""Leveled logging with a process-wide instance."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    NOTICE = 3
    WARNING = 4
    ERROR = 5


_STD_LEVELS = {
    LogLevel.TRACE: 5,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.NOTICE: 25,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

_logger = logging.getLogger("felixcore")

Sink = Callable[[LogLevel, str], None]


def _default_sink(level: LogLevel, message: str) -> None:
    _logger.log(_STD_LEVELS[level], message.rstrip("\n"))


class Log:
    """Filters messages by level and hands the rest to a sink."""

    def __init__(self, sink: Sink | None = None) -> None:
        self.level = LogLevel.INFO
        self.sink: Sink = sink if sink is not None else _default_sink

    def set_log_level(self, level: LogLevel) -> None:
        self.level = LogLevel(level)

    def log(self, level: LogLevel, message: str) -> None:
        if level >= self.level:
            self.sink(LogLevel(level), message)


_INSTANCE = Log()


def instance() -> Log:
    """Return the process-wide log."""
    return _INSTANCE


def log_message(level: LogLevel, *args: object) -> None:
    """Concatenate ``args`` into one line and send it to the shared log."""
    message = "".join(str(arg) for arg in args) + "\n"
    _INSTANCE.log(level, message)
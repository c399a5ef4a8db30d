"""Loggers writing to files or the console, and an asynchronous wrapper."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Union

from relaychat.gochan import GoChan


class LogLevel(Enum):
    ERR = auto()
    WARNING = auto()
    MESSAGE = auto()
    INFO = auto()
    UNKNOWN = auto()
    CUSTOM = auto()


_TAGS = {
    LogLevel.ERR: "[ERROR]",
    LogLevel.WARNING: "[WARNING]",
    LogLevel.MESSAGE: "[MESSAGE]",
    LogLevel.INFO: "[INFO]",
}


def format_message(msg: str, level: LogLevel = LogLevel.MESSAGE, prefix: str = "") -> str:
    """Return ``msg`` tagged for ``level``; CUSTOM uses ``prefix`` as the tag."""
    if level is LogLevel.CUSTOM:
        return f"{prefix} {msg}"
    return f"{_TAGS.get(level, '[UNKNOWN]')} {msg}"


class Logger(ABC):
    """Base class for all loggers."""

    @abstractmethod
    def log(self, msg: str, level: LogLevel = LogLevel.MESSAGE, prefix: str = "") -> None:
        """Record one message."""


class FileLogger(Logger):
    """Appends each message as a line to a file; raises OSError if it cannot."""

    def __init__(self, filename: Union[str, Path]) -> None:
        self.filename = Path(filename)

    def log(self, msg: str, level: LogLevel = LogLevel.MESSAGE, prefix: str = "") -> None:
        with self.filename.open("a", encoding="utf-8") as out:
            out.write(format_message(msg, level, prefix) + "\n")


class ConsoleLogger(Logger):
    """Prints messages to standard output."""

    def log(self, msg: str, level: LogLevel = LogLevel.MESSAGE, prefix: str = "") -> None:
        print(format_message(msg, level, prefix) + msg, flush=True)


@dataclass(frozen=True)
class _Entry:
    msg: str
    level: LogLevel
    prefix: str


class AsyncLogger(Logger):
    """Hands messages to a background thread that forwards them to another logger."""

    _QUEUE_SIZE = 10

    def __init__(self, wrapped: Logger) -> None:
        self.wrapped = wrapped
        self._chan: GoChan[_Entry] = GoChan(self._QUEUE_SIZE)
        self._worker = threading.Thread(target=self._run, name="async-logger", daemon=True)
        self._worker.start()

    def _run(self) -> None:
        for entry in self._chan:
            try:
                self.wrapped.log(entry.msg, entry.level, entry.prefix)
            except OSError:
                continue

    def log(self, msg: str, level: LogLevel = LogLevel.MESSAGE, prefix: str = "") -> None:
        """Queue a message; once closed, log it directly instead."""
        if not self._chan.send(_Entry(msg, level, prefix)):
            self.wrapped.log(msg, level, prefix)

    def close(self) -> None:
        """Stop accepting queued messages and wait until all queued ones are written."""
        self._chan.close()
        if self._worker.is_alive() and self._worker is not threading.current_thread():
            self._worker.join()

    def __enter__(self) -> "AsyncLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
"""Logging interface used by the driver and a few ready-made loggers."""

from __future__ import annotations

import itertools
import sys
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, TextIO

# Component names passed as the ``name`` argument to logger methods.
BOLT3 = "bolt3"
BOLT4 = "bolt4"
DRIVER = "driver"
POOL = "pool"
ROUTER = "router"
SESSION = "session"

_id_counter = itertools.count(1)
_id_lock = threading.Lock()


def new_id() -> str:
    """Return a new, process-wide unique component id."""
    with _id_lock:
        return str(next(_id_counter))


def _format(msg: str, args: tuple) -> str:
    return msg % args if args else msg


class Logger(ABC):
    """Receives log events from driver components.

    Every method takes the component ``name`` (for example ``"router"``) and
    the ``log_id`` of the instance doing the logging.
    """

    @abstractmethod
    def error(self, name: str, log_id: str, err: BaseException) -> None:
        """Report an error, which may or may not lead to a retry."""

    @abstractmethod
    def warn(self, name: str, log_id: str, msg: str, *args: object) -> None:
        """Report a warning; ``msg`` is %-formatted with ``args``."""

    @abstractmethod
    def info(self, name: str, log_id: str, msg: str, *args: object) -> None:
        """Report an informational event."""

    @abstractmethod
    def debug(self, name: str, log_id: str, msg: str, *args: object) -> None:
        """Report a debug event."""


@dataclass
class Console(Logger):
    """Logger writing to the console; every level is off by default.

    Errors go to ``error_stream`` (standard error when unset), everything
    else to ``stream`` (standard output when unset).
    """

    errors: bool = False
    infos: bool = False
    warns: bool = False
    debugs: bool = False
    stream: TextIO | None = None
    error_stream: TextIO | None = None
    clock: Callable[[], datetime] = field(default=datetime.now)

    def _timestamp(self) -> str:
        now = self.clock()
        return f"{now:%Y-%m-%d %H:%M:%S}.{now.microsecond // 1000:03d}"

    def _write(self, target: TextIO, level: str, name: str, log_id: str, text: str) -> None:
        target.write(f"{self._timestamp()}  {level}  [{name} {log_id}] {text}\n")

    def error(self, name: str, log_id: str, err: BaseException) -> None:
        if self.errors:
            self._write(self.error_stream or sys.stderr, "ERROR", name, log_id, str(err))

    def info(self, name: str, log_id: str, msg: str, *args: object) -> None:
        if self.infos:
            self._write(self.stream or sys.stdout, " INFO", name, log_id, _format(msg, args))

    def warn(self, name: str, log_id: str, msg: str, *args: object) -> None:
        if self.warns:
            self._write(self.stream or sys.stdout, " WARN", name, log_id, _format(msg, args))

    def debug(self, name: str, log_id: str, msg: str, *args: object) -> None:
        if self.debugs:
            self._write(self.stream or sys.stdout, "DEBUG", name, log_id, _format(msg, args))


class Void(Logger):
    """Logger that discards every event."""

    def error(self, name: str, log_id: str, err: BaseException) -> None:
        pass

    def info(self, name: str, log_id: str, msg: str, *args: object) -> None:
        pass

    def warn(self, name: str, log_id: str, msg: str, *args: object) -> None:
        pass

    def debug(self, name: str, log_id: str, msg: str, *args: object) -> None:
        pass


@dataclass
class StreamLog(Logger):
    """Logger handing every event, as one line, to ``write_line``."""

    write_line: Callable[[str], object]

    def _emit(self, name: str, log_id: str, text: str) -> None:
        self.write_line(f"[{name} {log_id}] {text}")

    def error(self, name: str, log_id: str, err: BaseException) -> None:
        self._emit(name, log_id, str(err))

    def warn(self, name: str, log_id: str, msg: str, *args: object) -> None:
        self._emit(name, log_id, _format(msg, args))

    def info(self, name: str, log_id: str, msg: str, *args: object) -> None:
        self._emit(name, log_id, _format(msg, args))

    def debug(self, name: str, log_id: str, msg: str, *args: object) -> None:
        self._emit(name, log_id, _format(msg, args))
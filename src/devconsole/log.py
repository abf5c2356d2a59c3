from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

SEVERITY_NORMAL = "normal"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


def severity_for_level(levelno: int) -> str:
    if int(levelno) >= logging.ERROR:
        return SEVERITY_ERROR
    if int(levelno) >= logging.WARNING:
        return SEVERITY_WARNING
    return SEVERITY_NORMAL


@dataclass
class LogEntry:
    ts: float
    severity: str
    message: str

    def format(self) -> str:
        stamp = time.strftime("%H:%M:%S", time.localtime(self.ts))
        return f"[{stamp}]  {self.message}"


class LogBuffer:
    """
    Bounded console log feed (oldest entries evicted first).

    Listeners are notified after every change so a view can redraw; listener
    failures must never break logging.
    """

    def __init__(self, *, max_entries: int = 75) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=max(1, int(max_entries)))
        self._listeners: list[Callable[[], None]] = []

    @property
    def capacity(self) -> int:
        return int(self._entries.maxlen or 0)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def lines(self) -> list[str]:
        return [e.format() for e in self._entries]

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def append(self, message: str, *, severity: str = SEVERITY_NORMAL, ts: float | None = None) -> LogEntry:
        entry = LogEntry(ts=float(time.time() if ts is None else ts), severity=str(severity), message=str(message))
        self._entries.append(entry)
        self._notify()
        return entry

    def clear(self) -> None:
        self._entries.clear()
        self._notify()

    def _notify(self) -> None:
        for it in list(self._listeners):
            try:
                it()
            except Exception:
                pass


class ConsoleLogHandler(logging.Handler):
    """Forward log records into a `LogBuffer`, tagged with a severity."""

    def __init__(self, buffer: LogBuffer, *, level: int = logging.NOTSET) -> None:
        super().__init__(level=level)
        self._buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                msg = f"{msg} ({type(record.exc_info[1]).__name__}: {record.exc_info[1]})"
            self._buffer.append(msg, severity=severity_for_level(record.levelno), ts=record.created)
        except Exception:
            self.handleError(record)

"""Domain value objects describing log records and their severities."""

from __future__ import annotations

from .events import EventId
from .levels import LogLevel, coerce_level
from .records import LogRecord, render_exception
from .state import ORIGINAL_FORMAT_KEY, capture_state

__all__ = [
    "EventId",
    "LogLevel",
    "LogRecord",
    "ORIGINAL_FORMAT_KEY",
    "capture_state",
    "coerce_level",
    "render_exception",
]

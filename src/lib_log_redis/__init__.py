"""Redis list sink for structured logging.

Public surface:

* :class:`RedisLoggerProvider` – owns the connection and hands out emitters.
* :class:`RedisLogger` – per-category emitter (``is_enabled``/``begin_scope``/``log``).
* :func:`add_redis` / :class:`RedisLogHandler` – stdlib :mod:`logging` integration.
* :class:`LogLevel`, :class:`EventId`, :class:`LogRecord` – domain values.
"""

from __future__ import annotations

from .domain import EventId, LogLevel, LogRecord
from .emitter import NoOpScope, RedisLogger
from .errors import ProviderDisposedError
from .handler import RedisLogHandler, add_redis
from .provider import RedisLoggerProvider

__all__ = [
    "EventId",
    "LogLevel",
    "LogRecord",
    "NoOpScope",
    "ProviderDisposedError",
    "RedisLogHandler",
    "RedisLogger",
    "RedisLoggerProvider",
    "add_redis",
]

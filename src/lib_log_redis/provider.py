"""Sink provider owning the Redis connection and the per-category emitter registry.

Purpose
-------
Hold exactly one store connection, the destination list key and the minimum
severity, hand out one :class:`~lib_log_redis.emitter.RedisLogger` per category
and expose the single write primitive every emitter uses.

Contents
--------
* :class:`RedisLoggerProvider` – lifecycle (connect once, tear down once),
  atomic get-or-create of emitters, fire-and-forget ``write``.
* :func:`_require_text` – constructor argument validation.

System Role
-----------
The provider is the only object that touches the connection. Emitters call
:meth:`RedisLoggerProvider.write`, which silently drops payloads after
:meth:`RedisLoggerProvider.teardown`.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from lib_log_redis.adapters.clock import SystemClock
from lib_log_redis.adapters.redis_factory import DEFAULT_CONNECTION_FACTORY
from lib_log_redis.application.ports import ClockPort, ConnectionFactoryPort, ConnectionPort
from lib_log_redis.domain.levels import LogLevel, coerce_level
from lib_log_redis.emitter import RedisLogger
from lib_log_redis.errors import ProviderDisposedError

LOGGER = logging.getLogger(__name__)


def _require_text(value: Any, argument: str) -> str:
    """Return ``value`` when it is a non-blank string, else raise ``ValueError``."""
    if value is None:
        raise ValueError(f"{argument} is required")
    if not isinstance(value, str):
        raise TypeError(f"{argument} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError(f"{argument} must not be blank")
    return value


class RedisLoggerProvider:
    """Create category emitters that push JSON records onto one Redis list.

    Parameters
    ----------
    connection:
        Connection descriptor handed to ``connection_factory``.
    list_key:
        Redis list receiving one JSON document per accepted logging call.
    minimum_level:
        Lowest severity that is forwarded; defaults to :attr:`LogLevel.TRACE`.
    connection_factory:
        Replacement for :data:`DEFAULT_CONNECTION_FACTORY`, mainly for tests.
    clock:
        Source of record timestamps; defaults to :class:`SystemClock`.

    Raises
    ------
    ValueError
        When ``connection`` or ``list_key`` is missing or blank.
    Exception
        Whatever ``connection_factory.connect`` raises; it is not caught.

    Examples
    --------
    >>> class MemoryConnection:
    ...     def __init__(self):
    ...         self.lists = {}
    ...     def rpush(self, name, *values):
    ...         self.lists.setdefault(name, []).extend(values)
    ...     def close(self):
    ...         pass
    >>> class MemoryFactory:
    ...     def __init__(self):
    ...         self.connection = MemoryConnection()
    ...     def connect(self, descriptor):
    ...         return self.connection
    >>> factory = MemoryFactory()
    >>> provider = RedisLoggerProvider("localhost:6379", "logs", connection_factory=factory)
    >>> provider.get_or_create_emitter("App") is provider.get_or_create_emitter("App")
    True
    >>> provider.write(b"{}")
    >>> factory.connection.lists["logs"]
    [b'{}']
    >>> provider.teardown()
    """

    def __init__(
        self,
        connection: str,
        list_key: str,
        minimum_level: str | int | LogLevel = LogLevel.TRACE,
        connection_factory: ConnectionFactoryPort | None = None,
        *,
        clock: ClockPort | None = None,
    ) -> None:
        descriptor = _require_text(connection, "connection")
        self._list_key = _require_text(list_key, "list_key")
        self._minimum_level = coerce_level(minimum_level)
        self._clock: ClockPort = clock or SystemClock()
        self._emitters: dict[str, RedisLogger] = {}
        self._lock = threading.Lock()
        self._disposed = False
        factory = connection_factory or DEFAULT_CONNECTION_FACTORY
        self._connection: ConnectionPort = factory.connect(descriptor)
        LOGGER.debug("Redis log sink ready for list %r (minimum level %s)", self._list_key, self._minimum_level.label)

    @property
    def list_key(self) -> str:
        return self._list_key

    @property
    def minimum_level(self) -> LogLevel:
        return self._minimum_level

    @property
    def clock(self) -> ClockPort:
        return self._clock

    @property
    def disposed(self) -> bool:
        return self._disposed

    def get_or_create_emitter(self, category: str) -> RedisLogger:
        """Return the emitter cached for ``category``, creating it on first use.

        Raises
        ------
        ProviderDisposedError
            After :meth:`teardown`.
        """
        with self._lock:
            if self._disposed:
                raise ProviderDisposedError(type(self).__name__)
            emitter = self._emitters.get(category)
            if emitter is None:
                emitter = RedisLogger(self, category)
                self._emitters[category] = emitter
            return emitter

    def write(self, payload: bytes) -> None:
        """Right-push ``payload`` onto the destination list; no-op once torn down."""
        if self._disposed:
            return
        self._connection.rpush(self._list_key, payload)

    def teardown(self) -> None:
        """Release the connection once and forget all emitters; later calls do nothing."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._emitters.clear()
        LOGGER.debug("Closing redis log sink for list %r", self._list_key)
        self._connection.close()

    def __enter__(self) -> "RedisLoggerProvider":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.teardown()


__all__ = ["RedisLoggerProvider"]

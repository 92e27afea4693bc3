"""Bridge from the stdlib :mod:`logging` front end to the Redis sink.

Purpose
-------
Let applications that log through :mod:`logging` install the sink with one
call, the way hosts register logger providers with their logging builder.

Contents
--------
* :class:`RedisLogHandler` – :class:`logging.Handler` feeding emitters.
* :func:`add_redis` – build a provider and attach an owning handler.

System Role
-----------
Translates :class:`logging.LogRecord` objects into the emitter call contract:
logger name -> category, ``levelno`` -> :class:`LogLevel`, ``msg`` -> the
``{OriginalFormat}`` sentinel, mapping args plus ``extra`` fields -> state.
Records from this package's own loggers and from the ``redis`` client library are
ignored; both log while a record is being written and must not loop back.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from lib_log_redis.application.ports import ClockPort, ConnectionFactoryPort
from lib_log_redis.domain.events import EventId
from lib_log_redis.domain.levels import LogLevel
from lib_log_redis.domain.state import ORIGINAL_FORMAT_KEY
from lib_log_redis.errors import ProviderDisposedError
from lib_log_redis.provider import RedisLoggerProvider

_IGNORED_LOGGERS = (__name__.partition(".")[0], "redis")
# Our own diagnostics and the redis client's; both fire while a record is written.
_EVENT_ATTRS = frozenset({"event_id", "event_name"})
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
# Attributes every LogRecord carries; anything else arrived through ``extra``.


def _state_pairs(record: logging.LogRecord) -> list[tuple[str, Any]]:
    pairs: list[tuple[str, Any]] = [(ORIGINAL_FORMAT_KEY, str(record.msg))]
    if isinstance(record.args, Mapping):
        pairs.extend((str(key), value) for key, value in record.args.items())
    for key, value in vars(record).items():
        if key in _STANDARD_ATTRS or key in _EVENT_ATTRS:
            continue
        pairs.append((key, value))
    return pairs


def _event_id(record: logging.LogRecord) -> EventId:
    event = EventId.coerce(getattr(record, "event_id", None))
    name = getattr(record, "event_name", None)
    return EventId(event.id, str(name)) if name is not None else event


class RedisLogHandler(logging.Handler):
    """Forward :mod:`logging` records to a :class:`RedisLoggerProvider`.

    Parameters
    ----------
    provider:
        Provider supplying one emitter per logger name.
    level:
        Standard handler threshold; the provider's minimum level still applies.
    owns_provider:
        When ``True`` :meth:`close` also tears the provider down.

    Examples
    --------
    >>> import logging
    >>> class MemoryConnection:
    ...     def __init__(self):
    ...         self.payloads = []
    ...     def rpush(self, name, *values):
    ...         self.payloads.extend(values)
    ...     def close(self):
    ...         pass
    >>> connection = MemoryConnection()
    >>> class Factory:
    ...     def connect(self, descriptor):
    ...         return connection
    >>> provider = RedisLoggerProvider("localhost", "logs", connection_factory=Factory())
    >>> handler = RedisLogHandler(provider, owns_provider=True)
    >>> log = logging.getLogger("doctest.redis")
    >>> log.addHandler(handler)
    >>> log.warning("disk %(pct)d%% full", {"pct": 93})
    >>> b'"state":{"pct":93}' in connection.payloads[0]
    True
    >>> log.removeHandler(handler)
    >>> handler.close()
    """

    def __init__(
        self,
        provider: RedisLoggerProvider,
        *,
        level: int = logging.NOTSET,
        owns_provider: bool = False,
    ) -> None:
        super().__init__(level)
        self._provider = provider
        self._owns_provider = owns_provider

    @property
    def provider(self) -> RedisLoggerProvider:
        return self._provider

    def emit(self, record: logging.LogRecord) -> None:
        if _is_ignored(record.name):
            return
        try:
            emitter = self._provider.get_or_create_emitter(record.name)
        except ProviderDisposedError:
            return
        try:
            exception = record.exc_info[1] if record.exc_info else None
            emitter.log(
                LogLevel.from_python_level(record.levelno),
                _event_id(record),
                _state_pairs(record),
                exception,
                lambda _state, _exc: self._render(record),
            )
        except Exception:
            self.handleError(record)

    def _render(self, record: logging.LogRecord) -> str:
        if self.formatter is not None:
            return self.format(record)
        return record.getMessage()

    def close(self) -> None:
        try:
            if self._owns_provider:
                self._provider.teardown()
        finally:
            super().close()


def _is_ignored(name: str) -> bool:
    return any(name == prefix or name.startswith(prefix + ".") for prefix in _IGNORED_LOGGERS)


def add_redis(
    logger: logging.Logger | str | None,
    connection: str,
    list_key: str,
    *,
    minimum_level: str | int | LogLevel = LogLevel.TRACE,
    connection_factory: ConnectionFactoryPort | None = None,
    clock: ClockPort | None = None,
) -> RedisLogHandler:
    """Attach a Redis sink to ``logger`` and return the installed handler.

    ``logger`` may be a :class:`logging.Logger` or a logger name (``""`` for
    the root logger). The handler owns its provider, so closing the handler
    (or :func:`logging.shutdown`) releases the connection.

    Raises
    ------
    ValueError
        When ``logger`` is ``None`` or ``connection``/``list_key`` is missing
        or blank.
    """

    if logger is None:
        raise ValueError("logger is required")
    target = logging.getLogger(logger) if isinstance(logger, str) else logger
    provider = RedisLoggerProvider(
        connection,
        list_key,
        minimum_level,
        connection_factory,
        clock=clock,
    )
    handler = RedisLogHandler(provider, owns_provider=True)
    target.addHandler(handler)
    return handler


__all__ = ["RedisLogHandler", "add_redis"]

"""Per-category emitter implementing the structured-logging call contract.

Purpose
-------
Gate each call on severity, turn the loosely-typed arguments (level, event id,
state, exception, formatter) into a :class:`LogRecord` and hand its JSON bytes
to the owning provider without ever raising into the caller.

Contents
--------
* :class:`NoOpScope` – releasable scope handle that carries no data.
* :class:`RedisLogger` – the emitter, created only by
  :meth:`RedisLoggerProvider.get_or_create_emitter`.

System Role
-----------
Runs inline on the caller's thread. The only blocking step is the provider's
write; failures there are discarded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from lib_log_redis.domain.events import EventId
from lib_log_redis.domain.levels import LogLevel
from lib_log_redis.domain.records import LogRecord, render_exception
from lib_log_redis.domain.state import capture_state

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from lib_log_redis.provider import RedisLoggerProvider

Formatter = Callable[[Any, BaseException | None], str | None]


class NoOpScope:
    """Scope handle whose release does nothing."""

    def close(self) -> None:
        return None

    def __enter__(self) -> "NoOpScope":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        return None


_NO_OP_SCOPE = NoOpScope()


class RedisLogger:
    """Emit records for one category through a :class:`RedisLoggerProvider`."""

    def __init__(self, provider: RedisLoggerProvider, category: str) -> None:
        if provider is None:
            raise ValueError("provider is required")
        if category is None:
            raise ValueError("category is required")
        self._provider = provider
        self._category = category

    @property
    def category(self) -> str:
        return self._category

    def is_enabled(self, level: LogLevel) -> bool:
        """Return ``True`` when ``level`` passes the provider threshold; ``NONE`` never does."""
        if level == LogLevel.NONE:
            return False
        return level >= self._provider.minimum_level

    def begin_scope(self, state: Any) -> NoOpScope:
        """Return a scope handle; this sink does not enrich records with scopes."""
        return _NO_OP_SCOPE

    def log(
        self,
        level: LogLevel,
        event_id: EventId | int | None,
        state: Any,
        exception: BaseException | None,
        formatter: Formatter,
    ) -> None:
        """Build, serialise and push one record for this call.

        Parameters
        ----------
        level:
            Severity of the call; disabled levels return before any work.
        event_id:
            :class:`EventId`, bare ``int`` or ``None``.
        state:
            Key/value pairs, a mapping or any object; see
            :func:`~lib_log_redis.domain.state.capture_state`.
        exception:
            Optional error rendered into the ``exception`` field.
        formatter:
            ``formatter(state, exception)`` producing the message.

        Raises
        ------
        TypeError
            When ``formatter`` is not callable. Store and serialisation errors
            are swallowed.
        """
        if not self.is_enabled(level):
            return
        if not callable(formatter):
            raise TypeError("formatter must be callable")

        message = formatter(state, exception)
        if not message and exception is None:
            return

        try:
            event = EventId.coerce(event_id)
            record = LogRecord(
                timestamp=self._provider.clock.now(),
                level=LogLevel(level),
                category=self._category,
                event_id=event.id if event.id != 0 else None,
                event_name=event.name,
                message=message,
                exception=render_exception(exception) if exception is not None else None,
                state=capture_state(state),
            )
            self._provider.write(record.to_bytes())
        except Exception:  # noqa: BLE001 - logging must never fail the caller
            pass

    def __repr__(self) -> str:
        return f"RedisLogger(category={self._category!r})"


__all__ = ["NoOpScope", "RedisLogger"]

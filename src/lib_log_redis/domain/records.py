"""Wire record pushed onto the destination list for every accepted logging call.

Purpose
-------
Provide an immutable, serialisable representation of one logging call whose
JSON shape is fixed: lower-camel-case field names, absent values omitted.

Contents
--------
* :class:`LogRecord` dataclass with ``to_dict``/``to_json``/``to_bytes``.
* ``render_exception`` helper producing the textual exception rendering.
* ``_ensure_aware`` timestamp validation.

System Role
-----------
Built by :class:`lib_log_redis.emitter.RedisLogger` and never mutated
afterwards; serialisation lives here so the emitter stays a thin orchestrator.
"""

from __future__ import annotations

import json
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def render_exception(exc: BaseException) -> str:
    """Return type, message, traceback and chained causes of ``exc`` as one string.

    Examples
    --------
    >>> render_exception(ValueError("boom"))
    'ValueError: boom'
    """

    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip("\n")


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Normalised log record as stored on the Redis list.

    Attributes
    ----------
    timestamp:
        Emission time in timezone-aware UTC.
    level:
        Severity of the call; :attr:`LogLevel.NONE` is rejected.
    category:
        Name of the emitter that produced the record.
    event_id:
        Non-zero event id, or ``None``.
    event_name:
        Optional event name, independent of ``event_id``.
    message:
        Formatter output.
    exception:
        Rendered exception text, see :func:`render_exception`.
    state:
        Captured structured state (mapping) or its textual rendering.
    """

    timestamp: datetime
    level: LogLevel
    category: str
    event_id: int | None = None
    event_name: str | None = None
    message: str | None = None
    exception: str | None = None
    state: dict[str, Any] | str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if self.level is LogLevel.NONE:
            raise ValueError("LogLevel.NONE cannot be attached to a record")
        if isinstance(self.state, dict):
            object.__setattr__(self, "state", dict(self.state))

    def to_dict(self) -> dict[str, Any]:
        """Return the wire mapping, leaving out fields whose value is ``None``."""

        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.label,
            "category": self.category,
        }
        optional = (
            ("eventId", self.event_id),
            ("eventName", self.event_name),
            ("message", self.message),
            ("exception", self.exception),
            ("state", self.state),
        )
        for key, value in optional:
            if value is not None:
                data[key] = value
        return data

    def to_json(self) -> str:
        """Serialise to compact JSON; unsupported state values are rendered with ``str``."""

        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"), default=str)

    def to_bytes(self) -> bytes:
        """Return the UTF-8 payload handed to the provider's write path."""

        return self.to_json().encode("utf-8")


__all__ = ["LogRecord", "render_exception"]

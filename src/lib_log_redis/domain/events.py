"""Event identifier value object attached to individual logging calls."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class EventId:
    """Numeric event id with an optional symbolic name.

    ``id == 0`` means "no id"; ``name`` is carried independently of ``id``.
    """

    id: int = 0
    name: str | None = None

    @classmethod
    def coerce(cls, value: "EventId | int | None") -> "EventId":
        """Accept the loose shapes callers pass for the event id.

        Examples
        --------
        >>> EventId.coerce(7)
        EventId(id=7, name=None)
        >>> EventId.coerce(None)
        EventId(id=0, name=None)
        """

        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(id=value)
        raise TypeError(f"event_id must be an EventId or int, got {type(value).__name__}")


__all__ = ["EventId"]

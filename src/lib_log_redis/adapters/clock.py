"""System clock adapter returning timezone-aware UTC timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

from lib_log_redis.application.ports.time import ClockPort


class SystemClock(ClockPort):
    """Concrete clock port backed by :func:`datetime.now`."""

    def now(self) -> datetime:
        """Return the current UTC timestamp with timezone info."""
        return datetime.now(timezone.utc)


__all__ = ["SystemClock"]

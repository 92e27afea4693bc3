"""Normalisation of the ``state`` payload supplied with a logging call.

Structured-logging front ends hand the sink either key/value pairs produced
from a message template or an arbitrary object. Pairs become a mapping with
the template sentinel removed; anything else is rendered as text.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

ORIGINAL_FORMAT_KEY = "{OriginalFormat}"


def capture_state(state: Any) -> dict[str, Any] | str | None:
    """Return the normalised state for a :class:`~lib_log_redis.domain.records.LogRecord`.

    Repeated keys resolve last-occurrence-wins.

    Examples
    --------
    >>> capture_state([("{OriginalFormat}", "User {userId}"), ("userId", 42)])
    {'userId': 42}
    >>> capture_state(None) is None
    True
    >>> capture_state(3.5)
    '3.5'
    """

    if state is None:
        return None
    if isinstance(state, Mapping):
        return _strip_sentinel(state.items())
    if isinstance(state, Iterable) and not isinstance(state, (str, bytes, bytearray)):
        pairs = state if isinstance(state, (list, tuple)) else list(state)
        if _is_pair_sequence(pairs):
            return _strip_sentinel(pairs)
    return str(state)


def _is_pair_sequence(items: Iterable[Any]) -> bool:
    for item in items:
        if not (isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str)):
            return False
    return True


def _strip_sentinel(pairs: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in pairs if key != ORIGINAL_FORMAT_KEY}


__all__ = ["ORIGINAL_FORMAT_KEY", "capture_state"]

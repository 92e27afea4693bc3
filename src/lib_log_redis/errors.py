"""Exceptions raised by the sink's public surface."""

from __future__ import annotations


class ProviderDisposedError(RuntimeError):
    """Raised when a torn-down provider is asked for a new emitter."""

    def __init__(self, name: str = "RedisLoggerProvider") -> None:
        super().__init__(f"Cannot access a disposed object: {name}")
        self.object_name = name


__all__ = ["ProviderDisposedError"]

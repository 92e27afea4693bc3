"""Ports describing the store connection and the factory producing it.

Purpose
-------
Isolate the provider from the concrete Redis client so tests can substitute an
in-memory connection without the provider noticing.

Contents
--------
* :class:`ConnectionPort` – right-push plus close.
* :class:`ConnectionFactoryPort` – turns a descriptor string into a connection.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConnectionPort(Protocol):
    """Handle to the remote list store."""

    def rpush(self, name: str, *values: Any) -> Any:
        """Append ``values`` to the right end of the list ``name``."""

    def close(self) -> None:
        """Release the underlying network resources."""


@runtime_checkable
class ConnectionFactoryPort(Protocol):
    """Create a :class:`ConnectionPort` from a connection descriptor."""

    def connect(self, descriptor: str) -> ConnectionPort: ...


__all__ = ["ConnectionFactoryPort", "ConnectionPort"]

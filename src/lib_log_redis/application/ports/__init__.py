"""Protocols the provider and emitters depend on."""

from __future__ import annotations

from .connection import ConnectionFactoryPort, ConnectionPort
from .time import ClockPort

__all__ = ["ClockPort", "ConnectionFactoryPort", "ConnectionPort"]

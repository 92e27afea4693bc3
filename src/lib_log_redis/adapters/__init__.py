"""Concrete adapters for the store connection and the clock."""

from __future__ import annotations

from .clock import SystemClock
from .redis_factory import DEFAULT_CONNECTION_FACTORY, RedisConnectionFactory, parse_descriptor

__all__ = ["DEFAULT_CONNECTION_FACTORY", "RedisConnectionFactory", "SystemClock", "parse_descriptor"]

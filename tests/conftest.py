from __future__ import annotations

from typing import Callable

import pytest

from lib_log_redis.domain.levels import LogLevel
from lib_log_redis.emitter import RedisLogger
from lib_log_redis.provider import RedisLoggerProvider
from tests.fakes import FakeConnection, FakeFactory, FixedClock


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def factory(connection: FakeConnection) -> FakeFactory:
    return FakeFactory(connection)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def provider_factory(factory: FakeFactory, clock: FixedClock) -> Callable[..., RedisLoggerProvider]:
    created: list[RedisLoggerProvider] = []

    def _build(minimum_level: LogLevel = LogLevel.INFORMATION) -> RedisLoggerProvider:
        provider = RedisLoggerProvider("localhost:6379", "logs", minimum_level, factory, clock=clock)
        created.append(provider)
        return provider

    yield _build
    for provider in created:
        provider.teardown()


@pytest.fixture
def provider(provider_factory: Callable[..., RedisLoggerProvider]) -> RedisLoggerProvider:
    return provider_factory(LogLevel.INFORMATION)


@pytest.fixture
def emitter(provider: RedisLoggerProvider) -> RedisLogger:
    return provider.get_or_create_emitter("App")

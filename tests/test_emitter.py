from __future__ import annotations

import json
from typing import Any, Callable

import pytest

from lib_log_redis.domain.events import EventId
from lib_log_redis.domain.levels import LogLevel
from lib_log_redis.domain.state import ORIGINAL_FORMAT_KEY
from lib_log_redis.emitter import NoOpScope, RedisLogger
from lib_log_redis.provider import RedisLoggerProvider
from tests.fakes import FakeConnection, FakeFactory, FixedClock


def _text(message: str | None) -> Callable[[Any, BaseException | None], str | None]:
    return lambda _state, _exc: message


ENABLED_LEVELS = [LogLevel.INFORMATION, LogLevel.WARNING, LogLevel.ERROR, LogLevel.CRITICAL]
DISABLED_LEVELS = [LogLevel.TRACE, LogLevel.DEBUG, LogLevel.NONE]


@pytest.mark.parametrize("level", ENABLED_LEVELS)
def test_levels_at_or_above_minimum_are_enabled(emitter: RedisLogger, level: LogLevel) -> None:
    assert emitter.is_enabled(level) is True


@pytest.mark.parametrize("level", DISABLED_LEVELS)
def test_levels_below_minimum_and_none_are_disabled(emitter: RedisLogger, level: LogLevel) -> None:
    assert emitter.is_enabled(level) is False


def test_none_is_disabled_even_with_allow_all_threshold(provider_factory: Callable[..., RedisLoggerProvider]) -> None:
    emitter = provider_factory(LogLevel.TRACE).get_or_create_emitter("App")

    assert emitter.is_enabled(LogLevel.TRACE) is True
    assert emitter.is_enabled(LogLevel.NONE) is False


@pytest.mark.parametrize("level", ENABLED_LEVELS)
def test_enabled_level_writes_exactly_once(emitter: RedisLogger, connection: FakeConnection, level: LogLevel) -> None:
    emitter.log(level, 0, "state", None, _text("message"))

    assert connection.push_count == 1
    assert connection.records()[0]["level"] == level.label


@pytest.mark.parametrize("level", DISABLED_LEVELS)
def test_disabled_level_writes_nothing_and_skips_formatter(
    emitter: RedisLogger, connection: FakeConnection, level: LogLevel
) -> None:
    calls: list[Any] = []

    def formatter(state: Any, exc: BaseException | None) -> str:
        calls.append(state)
        return "message"

    emitter.log(level, 1, "state", None, formatter)

    assert connection.push_count == 0
    assert calls == []


def test_information_scenario_produces_expected_record(
    emitter: RedisLogger, connection: FakeConnection, clock: FixedClock
) -> None:
    emitter.log(LogLevel.INFORMATION, 0, "hello", None, _text("hello"))

    (record,) = connection.records()
    assert record == {
        "timestamp": clock.moment.isoformat(),
        "level": "Information",
        "category": "App",
        "message": "hello",
        "state": "hello",
    }
    assert "eventId" not in record
    assert "exception" not in record


def test_debug_scenario_is_filtered(emitter: RedisLogger, connection: FakeConnection) -> None:
    emitter.log(LogLevel.DEBUG, 0, "hello", None, _text("hello"))

    assert connection.push_count == 0


def test_error_scenario_carries_event_and_exception(emitter: RedisLogger, connection: FakeConnection) -> None:
    try:
        raise ValueError("Sample argument error")
    except ValueError as exc:
        error = exc

    emitter.log(LogLevel.ERROR, EventId(7, "Boom"), None, error, _text("failed"))

    (record,) = connection.records()
    assert record["level"] == "Error"
    assert record["eventId"] == 7
    assert record["eventName"] == "Boom"
    assert record["message"] == "failed"
    assert "ValueError" in record["exception"]
    assert "Sample argument error" in record["exception"]
    assert "Traceback" in record["exception"]
    assert "state" not in record


def test_sentinel_key_is_stripped_from_state(emitter: RedisLogger, connection: FakeConnection) -> None:
    state = [(ORIGINAL_FORMAT_KEY, "tmpl"), ("userId", 42)]

    emitter.log(LogLevel.INFORMATION, 0, state, None, _text("User 42"))

    (record,) = connection.records()
    assert record["state"] == {"userId": 42}
    assert ORIGINAL_FORMAT_KEY not in connection.lists["logs"][0].decode("utf-8")


def test_absent_optionals_are_omitted_not_null(emitter: RedisLogger, connection: FakeConnection) -> None:
    emitter.log(LogLevel.WARNING, None, None, None, _text("only message"))

    payload = connection.lists["logs"][0].decode("utf-8")
    assert "null" not in payload
    assert set(json.loads(payload)) == {"timestamp", "level", "category", "message"}


def test_event_name_without_id_is_kept(emitter: RedisLogger, connection: FakeConnection) -> None:
    emitter.log(LogLevel.WARNING, EventId(0, "NamedOnly"), None, None, _text("x"))

    (record,) = connection.records()
    assert "eventId" not in record
    assert record["eventName"] == "NamedOnly"


@pytest.mark.parametrize("message", ["", None])
def test_empty_message_without_exception_writes_nothing(
    emitter: RedisLogger, connection: FakeConnection, message: str | None
) -> None:
    emitter.log(LogLevel.ERROR, 3, "state", None, _text(message))

    assert connection.push_count == 0


@pytest.mark.parametrize("message, kept", [(None, False), ("", True)])
def test_empty_message_with_exception_is_written(
    emitter: RedisLogger, connection: FakeConnection, message: str | None, kept: bool
) -> None:
    emitter.log(LogLevel.ERROR, 0, None, RuntimeError("boom"), _text(message))

    (record,) = connection.records()
    assert ("message" in record) is kept
    assert record.get("message", "") == ""
    assert record["exception"] == "RuntimeError: boom"


def test_formatter_receives_state_and_exception(emitter: RedisLogger) -> None:
    seen: list[tuple[Any, BaseException | None]] = []
    error = KeyError("k")

    def formatter(state: Any, exc: BaseException | None) -> str:
        seen.append((state, exc))
        return "formatted"

    emitter.log(LogLevel.CRITICAL, 0, {"a": 1}, error, formatter)

    assert seen == [({"a": 1}, error)]


@pytest.mark.parametrize("formatter", [None, "not callable"])
def test_missing_formatter_is_a_caller_error(emitter: RedisLogger, formatter: Any) -> None:
    with pytest.raises(TypeError, match="formatter"):
        emitter.log(LogLevel.INFORMATION, 42, "state", None, formatter)


def test_missing_formatter_is_ignored_when_level_disabled(emitter: RedisLogger) -> None:
    emitter.log(LogLevel.DEBUG, 42, "state", None, None)  # type: ignore[arg-type]


def test_write_failures_are_swallowed(clock: FixedClock) -> None:
    broken = FakeConnection(push_error=ConnectionError("store unavailable"))
    provider = RedisLoggerProvider("localhost", "logs", connection_factory=FakeFactory(broken), clock=clock)
    emitter = provider.get_or_create_emitter("App")

    emitter.log(LogLevel.CRITICAL, 1, "state", None, _text("will be lost"))

    provider.teardown()


def test_unserialisable_state_does_not_escape(emitter: RedisLogger, connection: FakeConnection) -> None:
    class Unprintable:
        def __str__(self) -> str:
            raise RuntimeError("cannot render")

    emitter.log(LogLevel.INFORMATION, 0, [("thing", Unprintable())], None, _text("x"))

    assert connection.push_count == 0


def test_log_after_teardown_writes_nothing_and_does_not_raise(
    provider: RedisLoggerProvider, emitter: RedisLogger, connection: FakeConnection
) -> None:
    provider.teardown()

    emitter.log(LogLevel.INFORMATION, 1, "state", None, _text("message"))

    assert connection.push_count == 0


def test_begin_scope_returns_releasable_no_op(emitter: RedisLogger, connection: FakeConnection) -> None:
    scope = emitter.begin_scope({"requestId": "abc"})

    with scope as entered:
        emitter.log(LogLevel.INFORMATION, 0, None, None, _text("inside"))
    scope.close()

    assert isinstance(scope, NoOpScope)
    assert entered is scope
    assert "requestId" not in connection.lists["logs"][0].decode("utf-8")


def test_emitter_requires_category(provider: RedisLoggerProvider) -> None:
    with pytest.raises(ValueError, match="category"):
        RedisLogger(provider, None)  # type: ignore[arg-type]

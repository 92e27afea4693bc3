"""Environment-driven configuration for hosts installing the Redis sink.

Purpose
-------
Resolve the sink's three settings (connection descriptor, list key, minimum
level) from explicit arguments, process environment and an optional ``.env``
file, then build a provider from them.

Contents
--------
* :class:`SinkSettings` – frozen settings record with :meth:`SinkSettings.from_env`.
* :func:`build_provider` – construct a :class:`RedisLoggerProvider`.
* :func:`should_use_dotenv` / :func:`enable_dotenv` – ``python-dotenv`` toggles.

System Role
-----------
Outer configuration shell used by the CLI and by hosts; the provider itself
never reads the environment.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from lib_log_redis.application.ports import ConnectionFactoryPort
from lib_log_redis.domain.levels import LogLevel, coerce_level
from lib_log_redis.provider import RedisLoggerProvider

CONNECTION_ENV_VAR = "LOG_REDIS_CONNECTION"
LIST_KEY_ENV_VAR = "LOG_REDIS_LIST_KEY"
MIN_LEVEL_ENV_VAR = "LOG_REDIS_MIN_LEVEL"
DOTENV_ENV_VAR = "LOG_REDIS_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOCK = threading.Lock()
_DOTENV_LOADED: Path | None = None
_DOTENV_ATTEMPTED = False


@dataclass(slots=True, frozen=True)
class SinkSettings:
    """Resolved sink configuration."""

    connection: str
    list_key: str
    minimum_level: LogLevel = LogLevel.TRACE

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        connection: str | None = None,
        list_key: str | None = None,
        minimum_level: str | int | LogLevel | None = None,
    ) -> "SinkSettings":
        """Merge explicit arguments over ``LOG_REDIS_*`` environment variables.

        Raises
        ------
        ValueError
            When neither source supplies a connection or list key, or the
            level name is unknown.

        Examples
        --------
        >>> SinkSettings.from_env({"LOG_REDIS_CONNECTION": "cache:6379", "LOG_REDIS_LIST_KEY": "logs"})
        SinkSettings(connection='cache:6379', list_key='logs', minimum_level=<LogLevel.TRACE: 0>)
        """

        env = os.environ if environ is None else environ
        resolved_connection = connection if connection is not None else env.get(CONNECTION_ENV_VAR)
        resolved_key = list_key if list_key is not None else env.get(LIST_KEY_ENV_VAR)
        if not resolved_connection or not resolved_connection.strip():
            raise ValueError(f"connection is required (argument or {CONNECTION_ENV_VAR})")
        if not resolved_key or not resolved_key.strip():
            raise ValueError(f"list_key is required (argument or {LIST_KEY_ENV_VAR})")
        raw_level = minimum_level if minimum_level is not None else env.get(MIN_LEVEL_ENV_VAR)
        level = coerce_level(raw_level) if raw_level not in (None, "") else LogLevel.TRACE
        return cls(connection=resolved_connection, list_key=resolved_key, minimum_level=level)


def build_provider(
    settings: SinkSettings,
    connection_factory: ConnectionFactoryPort | None = None,
) -> RedisLoggerProvider:
    """Construct a provider from ``settings``; connection errors propagate."""

    return RedisLoggerProvider(
        settings.connection,
        settings.list_key,
        settings.minimum_level,
        connection_factory,
    )


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is enabled; an explicit flag beats the environment toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    lowered = env_value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY or not lowered:
        return False
    raise ValueError(f"{DOTENV_ENV_VAR} expects a boolean, got {env_value!r}")


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` (searching upwards from the working directory) once per process.

    Existing environment variables are never overridden. Returns the resolved
    path that was loaded, or ``None`` when no file was found.
    """

    global _DOTENV_ATTEMPTED, _DOTENV_LOADED
    with _DOTENV_LOCK:
        if _DOTENV_ATTEMPTED:
            return _DOTENV_LOADED
        _DOTENV_ATTEMPTED = True
        found = find_dotenv(usecwd=True)
        if not found:
            return None
        candidate = Path(found).resolve()
        load_dotenv(candidate, override=False)
        _DOTENV_LOADED = candidate
        return candidate


def _reset_dotenv_state_for_testing() -> None:
    """Forget previous :func:`enable_dotenv` calls."""

    global _DOTENV_ATTEMPTED, _DOTENV_LOADED
    with _DOTENV_LOCK:
        _DOTENV_ATTEMPTED = False
        _DOTENV_LOADED = None


__all__ = [
    "CONNECTION_ENV_VAR",
    "DOTENV_ENV_VAR",
    "LIST_KEY_ENV_VAR",
    "MIN_LEVEL_ENV_VAR",
    "SinkSettings",
    "build_provider",
    "enable_dotenv",
    "should_use_dotenv",
]

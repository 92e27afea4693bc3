"""Ordered severity scale shared by the provider, the emitters and the wire format.

Purpose
-------
Model the seven-step severity enumeration (``Trace`` through ``None``) with the
helpers needed to translate between wire labels, configuration strings and the
numeric levels of the stdlib :mod:`logging` module.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
* :func:`coerce_level` accepting the loosely-typed configuration inputs.

System Role
-----------
``LogLevel.NONE`` is a filter sentinel only: emitters treat it as always
disabled and it never appears on a serialised record.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    """Enumerated severities ordered from most verbose to the ``NONE`` sentinel."""

    TRACE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    NONE = 6

    @property
    def label(self) -> str:
        """Return the capitalised name written into the ``level`` field."""

        return _LABEL_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` number closest to this level."""

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging number, flooring custom levels to the next lower band."""

        if level >= logging.CRITICAL:
            return cls.CRITICAL
        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.WARNING
        if level >= logging.INFO:
            return cls.INFORMATION
        if level >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


_LABEL_TABLE = {
    LogLevel.TRACE: "Trace",
    LogLevel.DEBUG: "Debug",
    LogLevel.INFORMATION: "Information",
    LogLevel.WARNING: "Warning",
    LogLevel.ERROR: "Error",
    LogLevel.CRITICAL: "Critical",
    LogLevel.NONE: "None",
}

_PYTHON_LEVELS = {
    LogLevel.TRACE: 5,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFORMATION: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.NONE: logging.CRITICAL + 10,
}

_ALIASES = {
    "INFO": "INFORMATION",
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
    "OFF": "NONE",
}


def coerce_level(value: str | int | LogLevel) -> LogLevel:
    """Normalise ``value`` into a :class:`LogLevel`.

    Examples
    --------
    >>> coerce_level("info") is LogLevel.INFORMATION
    True
    >>> coerce_level(40) is LogLevel.ERROR
    True
    """

    if isinstance(value, LogLevel):
        return value
    if isinstance(value, str):
        return LogLevel.from_name(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return LogLevel.from_python_level(value)
    raise TypeError(f"Cannot interpret {value!r} as a log level")


__all__ = ["LogLevel", "coerce_level"]

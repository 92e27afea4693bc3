"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from importlib import metadata as _metadata
from typing import Callable

name = "lib_log_redis"
title = "Push structured log records onto a Redis list"
shell_command = "lib_log_redis"
homepage = "https://github.com/bitranox/lib_log_redis"
author = "bitranox"
author_email = "bitranox@gmail.com"


def _resolve_version() -> str:
    try:
        return _metadata.version(name)
    except _metadata.PackageNotFoundError:  # pragma: no cover - editable checkouts without metadata
        return "0.0.0+unknown"


version = _resolve_version()


def print_info(writer: Callable[[str], None]) -> None:
    """Emit the metadata banner through ``writer`` one line at a time."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")

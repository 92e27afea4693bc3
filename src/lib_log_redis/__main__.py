"""``python -m lib_log_redis`` entry point delegating to :func:`lib_log_redis.cli.main`."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())

"""Hammer a Redis log sink from several threads and report what arrived.

Run with ``python scripts/stresstest.py --connection localhost:6379``. The
destination list is deleted before and after the run.
"""

from __future__ import annotations

import threading
import time
import uuid

import click
from rich.console import Console
from rich.table import Table

from lib_log_redis import EventId, LogLevel, RedisLoggerProvider
from lib_log_redis.adapters.redis_factory import DEFAULT_CONNECTION_FACTORY


def _worker(provider: RedisLoggerProvider, category: str, count: int, start: threading.Event) -> None:
    emitter = provider.get_or_create_emitter(category)
    start.wait()
    for index in range(count):
        emitter.log(
            LogLevel.INFORMATION,
            EventId(index + 1, "stress"),
            [("{OriginalFormat}", "tick {index}"), ("index", index)],
            None,
            lambda _state, _exc, i=index: f"tick {i}",
        )


def _run(provider: RedisLoggerProvider, threads: int, messages: int, categories: int) -> float:
    start = threading.Event()
    workers = [
        threading.Thread(target=_worker, args=(provider, f"Stress{n % categories}", messages, start))
        for n in range(threads)
    ]
    for worker in workers:
        worker.start()
    began = time.perf_counter()
    start.set()
    for worker in workers:
        worker.join()
    return time.perf_counter() - began


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--connection", default="localhost:6379", show_default=True, help="Redis connection descriptor.")
@click.option("--threads", default=8, show_default=True, help="Number of logging threads.")
@click.option("--messages", default=1000, show_default=True, help="Messages per thread.")
@click.option("--categories", default=4, show_default=True, help="Distinct categories shared by the threads.")
def main(connection: str, threads: int, messages: int, categories: int) -> None:
    """Log ``threads * messages`` records concurrently and verify the list length."""

    console = Console()
    list_key = f"lib_log_redis:stress:{uuid.uuid4().hex}"
    # Same descriptor parsing as the sink, so options like password and ssl apply here too.
    client = DEFAULT_CONNECTION_FACTORY.connect(connection)
    try:
        client.delete(list_key)
        provider = RedisLoggerProvider(connection, list_key)
        try:
            elapsed = _run(provider, threads, messages, categories)
        finally:
            provider.teardown()
        stored = client.llen(list_key)
    finally:
        client.delete(list_key)
        client.close()

    expected = threads * messages
    table = Table(title="lib_log_redis stresstest")
    table.add_column("metric")
    table.add_column("value", justify="right")
    table.add_row("expected", str(expected))
    table.add_row("stored", str(stored))
    table.add_row("seconds", f"{elapsed:.2f}")
    table.add_row("records/s", f"{expected / elapsed:,.0f}" if elapsed else "n/a")
    console.print(table)
    if stored != expected:
        raise click.ClickException(f"{expected - stored} records missing")


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    main()

"""Click command group for smoke-testing a Redis log sink from the shell.

Purpose
-------
Provide ``lib_log_redis info`` (metadata banner) and ``lib_log_redis send``
(push one record through the real provider/emitter path) so operators can check
connectivity and the wire format without writing code.

System Role
-----------
Presentation layer only: configuration comes from :mod:`lib_log_redis.config`,
records flow through :class:`RedisLoggerProvider` exactly as in applications.
"""

from __future__ import annotations

import os
from typing import Any, Sequence

import click
from rich.console import Console

from . import __init__conf__
from . import config as config_module
from .application.ports import ConnectionFactoryPort, ConnectionPort
from .adapters.redis_factory import DEFAULT_CONNECTION_FACTORY
from .domain.events import EventId
from .domain.levels import LogLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LEVEL_CHOICES = [level.label for level in LogLevel if level is not LogLevel.NONE]


class _EchoConnection:
    """Delegate pushes to the real connection and remember the payloads."""

    def __init__(self, inner: ConnectionPort) -> None:
        self._inner = inner
        self.pushed: list[bytes] = []

    def rpush(self, name: str, *values: Any) -> Any:
        result = self._inner.rpush(name, *values)
        self.pushed.extend(values)
        return result

    def close(self) -> None:
        self._inner.close()


class _EchoFactory:
    def __init__(self, inner: ConnectionFactoryPort) -> None:
        self._inner = inner
        self.connection: _EchoConnection | None = None

    def connect(self, descriptor: str) -> _EchoConnection:
        self.connection = _EchoConnection(self._inner.connect(descriptor))
        return self.connection


def summary_info() -> str:
    """Return the metadata banner printed by ``info``."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load a nearby .env before reading LOG_REDIS_* variables (default: ${config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None) -> None:
    """Push structured log records onto a Redis list."""

    ctx.ensure_object(dict)
    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.option("--connection", help=f"Connection descriptor (default: ${config_module.CONNECTION_ENV_VAR}).")
@click.option("--key", "list_key", help=f"Destination list key (default: ${config_module.LIST_KEY_ENV_VAR}).")
@click.option(
    "--min-level",
    help=f"Minimum level of the sink (default: ${config_module.MIN_LEVEL_ENV_VAR} or Trace).",
)
@click.option(
    "--level",
    type=click.Choice(_LEVEL_CHOICES, case_sensitive=False),
    default="Information",
    show_default=True,
    help="Severity of the record to send.",
)
@click.option("--category", default=__init__conf__.shell_command, show_default=True, help="Category of the record.")
@click.option("--event-id", type=int, default=0, show_default=True, help="Event id; 0 omits the field.")
@click.option("--event-name", default=None, help="Optional event name.")
@click.pass_context
def cli_send(
    ctx: click.Context,
    message: str,
    connection: str | None,
    list_key: str | None,
    min_level: str | None,
    level: str,
    category: str,
    event_id: int,
    event_name: str | None,
) -> None:
    """Send MESSAGE as one record and print the JSON that was pushed."""

    try:
        settings = config_module.SinkSettings.from_env(
            connection=connection,
            list_key=list_key,
            minimum_level=min_level,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    factory = _EchoFactory(ctx.obj.get("connection_factory") or DEFAULT_CONNECTION_FACTORY)
    try:
        provider = config_module.build_provider(settings, factory)
    except Exception as exc:
        raise click.ClickException(f"Cannot connect to {settings.connection}: {exc}") from exc

    console = Console(soft_wrap=True)
    severity = LogLevel.from_name(level)
    with provider:
        emitter = provider.get_or_create_emitter(category)
        if not emitter.is_enabled(severity):
            console.print(f"{severity.label} is below the sink minimum {settings.minimum_level.label}; nothing sent")
            return
        emitter.log(severity, EventId(event_id, event_name), None, None, lambda _state, _exc: message)
        pushed = factory.connection.pushed if factory.connection is not None else []
    if not pushed:
        raise click.ClickException(f"Record was not accepted by {settings.connection}")
    console.print(f"pushed to [bold]{settings.list_key}[/bold]:")
    console.print_json(pushed[-1].decode("utf-8"))


def main(argv: Sequence[str] | None = None, *, connection_factory: ConnectionFactoryPort | None = None) -> int:
    """Run the command group and translate Click errors into an exit code.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).
    connection_factory:
        Replacement factory used by ``send``; tests pass an in-memory fake.
    """

    args = list(argv) if argv is not None else None
    try:
        cli.main(args=args, standalone_mode=False, obj={"connection_factory": connection_factory})
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Exit as exit_:
        return exit_.exit_code
    return 0


__all__ = ["cli", "main", "summary_info"]

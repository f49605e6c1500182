"""Command-line interface for the runtime administration client.

This module provides a thin command-line wrapper around ``ControlClient``:
- Global connection options (socket path, deadline, reconnect policy)
- One command per common administrative operation
- Error reporting for unreachable sockets and malformed responses

The CLI is built using Typer. Raw proxy answers are echoed unchanged; only
``stat`` is rendered as a table.

Example:
    # Run from command line:
    $ airtraffic --socket /var/run/haproxy.sock stat --type servers
    $ airtraffic set-weight be1 srv1 50 --relative
"""

import enum
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from airtraffic import __version__
from airtraffic.cmd.show_stat import show_stats
from airtraffic.core.control import (
    ControlClient,
    FallibleSelector,
    ProxySelector,
    ReconnectPolicy,
    ServerSelector,
    StatableFilter,
    Weight,
)
from airtraffic.core.exceptions import ControlError, TransportError
from airtraffic.core.utils.log_config import configure_logging
from airtraffic.core.utils.utils import (
    DEFAULT_SOCKET_PATH,
    DEFAULT_TIMEOUT,
    SOCKET_ENV_VAR,
    TIMEOUT_ENV_VAR,
)

console = Console()
app = typer.Typer(help="Control a running load balancer through its admin socket")


class StatType(str, enum.Enum):
    """Choices for ``stat --type``."""

    frontends = "frontends"
    backends = "backends"
    servers = "servers"
    any = "any"

    def to_filter(self) -> StatableFilter:
        return StatableFilter[self.name.upper()]


@dataclass
class Settings:
    """Connection settings shared by all commands."""

    socket: str = DEFAULT_SOCKET_PATH
    timeout: float | None = DEFAULT_TIMEOUT
    reconnect: ReconnectPolicy = ReconnectPolicy.PER_COMMAND
    newline: bool = False


@contextmanager
def open_client(ctx: typer.Context) -> Iterator[ControlClient]:
    """Connect with the global settings, reporting failures and exiting 1."""
    settings: Settings = ctx.obj or Settings()
    try:
        with ControlClient.connect(
            settings.socket,
            timeout=settings.timeout,
            reconnect=settings.reconnect,
            append_newline=settings.newline,
        ) as client:
            yield client
    except TransportError as e:
        logger.error(f"Transport error: {e}")
        console.print(f"[red]Cannot talk to {escape(settings.socket)}: {escape(str(e))}")
        raise typer.Exit(code=1) from e
    except ControlError as e:
        logger.error(f"Control error: {e}")
        console.print(f"[red]Error: {escape(str(e))}")
        raise typer.Exit(code=1) from e


def echo(response: str) -> None:
    console.print(response.rstrip("\n"), markup=False, highlight=False)


@app.callback()
def main(
    ctx: typer.Context,
    socket: str = typer.Option(
        DEFAULT_SOCKET_PATH, "--socket", "-s", envvar=SOCKET_ENV_VAR, help="Control socket path"
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT,
        "--timeout",
        envvar=TIMEOUT_ENV_VAR,
        min=0,
        help="Per-command deadline in seconds (0 waits forever)",
    ),
    reconnect: ReconnectPolicy = typer.Option(
        ReconnectPolicy.PER_COMMAND, "--reconnect", help="Connection reuse policy"
    ),
    newline: bool = typer.Option(
        default=False,
        help="Terminate commands with a newline after the semicolon",
    ),
    debug: bool = typer.Option(
        default=False,
        help="Enable debug logging",
    ),
    log_file: Path | None = typer.Option(None, "--log-file", help="Also log to this file"),
):
    """Control a running load balancer through its admin socket."""
    configure_logging("DEBUG" if debug else "WARNING", log_file)
    logger.debug(f"airtraffic v{__version__} using {socket}")
    ctx.obj = Settings(
        socket=socket,
        timeout=timeout or None,
        reconnect=reconnect,
        newline=newline,
    )


@app.command()
def version():
    """Show version information."""
    console.print(f"[cyan]airtraffic v{__version__}[/cyan]")


@app.command()
def info(ctx: typer.Context):
    """Show process information."""
    with open_client(ctx) as client:
        echo(client.info())


@app.command()
def stat(
    ctx: typer.Context,
    proxy: str | None = typer.Option(None, "--proxy", "-p", help="Proxy name (default: any)"),
    type_: StatType = typer.Option(StatType.any, "--type", "-t", help="Kind of objects"),
    server: str | None = typer.Option(None, "--server", help="Server name (default: any)"),
):
    """Show the statistics table."""
    proxy_selector = ProxySelector.id(proxy) if proxy is not None else ProxySelector.ANY
    server_selector = ServerSelector.id(server) if server is not None else ServerSelector.ANY
    with open_client(ctx) as client:
        show_stats(client.stat(proxy_selector, type_.to_filter(), server_selector))


@app.command()
def errors(
    ctx: typer.Context,
    proxy: str | None = typer.Argument(None, help="Proxy name (default: all)"),
):
    """Show captured protocol errors."""
    fallible = FallibleSelector.id(proxy) if proxy is not None else FallibleSelector.ANY
    with open_client(ctx) as client:
        echo(client.errors(fallible))


@app.command(name="get-weight")
def get_weight(ctx: typer.Context, backend: str, server: str):
    """Show a server's current and initial weight."""
    with open_client(ctx) as client:
        echo(client.get_weight(backend, server))


@app.command(name="set-weight")
def set_weight(
    ctx: typer.Context,
    backend: str,
    server: str,
    value: int = typer.Argument(..., help="Weight (0-256, or 0-100 with --relative)"),
    relative: bool = typer.Option(default=False, help="Percentage of the configured weight"),
):
    """Change a server's weight."""
    weight = Weight.relative(value) if relative else Weight.absolute(value)
    with open_client(ctx) as client:
        echo(client.set_weight(backend, server, weight))
    logger.info(f"Set weight of {backend}/{server} to {weight}")


@app.command(name="enable-server")
def enable_server(ctx: typer.Context, backend: str, server: str):
    """Take a server out of maintenance mode."""
    with open_client(ctx) as client:
        echo(client.enable_server(backend, server))


@app.command(name="disable-server")
def disable_server(ctx: typer.Context, backend: str, server: str):
    """Put a server into maintenance mode."""
    with open_client(ctx) as client:
        echo(client.disable_server(backend, server))


def run() -> None:
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()

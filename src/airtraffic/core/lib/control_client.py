"""Client for the load balancer's runtime administration socket.

``ControlClient`` exposes one method per administrative command. Each method
renders its arguments, assembles the command line and runs a single
request/response exchange over the owned transport:

- The command is the verb followed by space-separated tokens and a ``;``
- The request is written in full before anything is read
- The response is everything up to end of stream, returned as text

Only ``stat`` post-processes the response, decoding it into ``StatsRecord``
values. All other commands return the proxy's raw answer.

Any transport failure raises ``TransportError`` and leaves the client
unusable; construct a new one to continue. Nothing is retried or cached.

Example:
    with ControlClient.connect("/var/run/haproxy.sock") as client:
        client.set_weight("be1", "srv1", Weight.relative(50))
        for record in client.stat(statable=StatableFilter.SERVERS):
            print(record.field("svname"), record["status"])
"""

from loguru import logger

from airtraffic.core.exceptions import TransportError
from airtraffic.core.utils.utils import (
    COMMAND_TERMINATOR,
    DEFAULT_TIMEOUT,
    ENCODING,
    NEWLINE,
    require_unsigned,
)

from .params import (
    FallibleSelector,
    ProxySelector,
    ServerSelector,
    StatableFilter,
    Weight,
    render_statable,
)
from .stats import StatsRecord, decode_stats
from .transport import ReconnectPolicy, Transport, UnixSocketTransport


def _target(backend: str, server: str) -> str:
    return f"{backend}/{server}"


class ControlClient:
    """Runtime administration client bound to one transport."""

    def __init__(self, transport: Transport, *, append_newline: bool = False) -> None:
        """Wrap an open transport.

        Args:
            transport: Connected transport, owned by the client from now on
            append_newline: Send ``\\n`` after the ``;`` terminator
        """
        self._transport = transport
        self.append_newline = append_newline
        self._broken: TransportError | None = None

    @classmethod
    def connect(
        cls,
        path: str,
        timeout: float | None = DEFAULT_TIMEOUT,
        reconnect: ReconnectPolicy = ReconnectPolicy.PER_COMMAND,
        *,
        append_newline: bool = False,
    ) -> "ControlClient":
        """Open the control socket at ``path`` and return a client for it.

        Raises:
            TransportError: If the socket cannot be reached
        """
        transport = UnixSocketTransport(path, timeout=timeout, reconnect=reconnect)
        return cls(transport, append_newline=append_newline)

    def render(self, command: str) -> str:
        """Frame a command for the wire."""
        line = f"{command}{COMMAND_TERMINATOR}"
        if self.append_newline:
            line += NEWLINE
        return line

    def request(self, command: str) -> str:
        """Send one command and return the proxy's full response.

        Args:
            command: Verb and arguments, without the terminator

        Returns:
            str: Response text

        Raises:
            TransportError: If the exchange fails or the client is unusable
        """
        if self._broken is not None:
            raise TransportError(
                f"client is unusable after an earlier failure: {self._broken}", self._broken
            )

        line = self.render(command)
        logger.debug(f"-> {line!r}")
        try:
            raw = self._transport.request(line.encode(ENCODING))
        except TransportError as e:
            self._fail(e)
            raise
        except OSError as e:
            error = TransportError(f"request {command!r} failed: {e}", e)
            self._fail(error)
            raise error from e
        response = raw.decode(ENCODING, errors="replace")
        logger.debug(f"<- {len(raw)} bytes for {command!r}")
        return response

    def _fail(self, error: TransportError) -> None:
        self._broken = error
        self.close()

    @property
    def usable(self) -> bool:
        return self._broken is None

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "ControlClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Information

    def info(self) -> str:
        return self.request("show info")

    def sess(self, id: str | None = None) -> str:
        """Dump all sessions, or the one with the given id."""
        return self.request(f"show sess {id if id is not None else ''}")

    def errors(self, fallible: FallibleSelector = FallibleSelector.ANY) -> str:
        """Show captured protocol errors, for one proxy or all of them."""
        return self.request(f"show errors {fallible.render()}")

    def stat(
        self,
        proxy: ProxySelector = ProxySelector.ANY,
        statable: StatableFilter | int = StatableFilter.ANY,
        server: ServerSelector = ServerSelector.ANY,
    ) -> list[StatsRecord]:
        """Query the statistics table.

        Args:
            proxy: Proxy to report, or any
            statable: Kind of objects to report; a bitwise OR of the concrete
                filters is passed through as its integer value
            server: Server to report, or any

        Returns:
            list[StatsRecord]: Decoded rows in the order the proxy sent them

        Raises:
            TransportError: If the exchange fails
            ProtocolDecodeError: If the response has no header
        """
        response = self.request(
            f"show stat {proxy.render()} {render_statable(statable)} {server.render()}"
        )
        return decode_stats(response)

    # Sessions

    def shutdown_session(self, id: str) -> str:
        return self.request(f"shutdown session {id}")

    def shutdown_sessions(self, backend: str, server: str) -> str:
        """Terminate every session attached to a server."""
        return self.request(f"shutdown sessions {_target(backend, server)}")

    # Maps

    def map_get(self, name: str, key: str) -> str:
        return self.request(f"get map {name} {key}")

    def map_set(self, name: str, key: str, value: str) -> str:
        return self.request(f"set map {name} {key} {value}")

    def map_clear(self, name: str) -> str:
        return self.request(f"clear map {name}")

    # Servers and agents

    def disable_agent(self, backend: str, server: str) -> str:
        return self.request(f"disable agent {_target(backend, server)}")

    def enable_agent(self, backend: str, server: str) -> str:
        return self.request(f"enable agent {_target(backend, server)}")

    def disable_server(self, backend: str, server: str) -> str:
        """Put a server into maintenance mode."""
        return self.request(f"disable server {_target(backend, server)}")

    def enable_server(self, backend: str, server: str) -> str:
        return self.request(f"enable server {_target(backend, server)}")

    def get_weight(self, backend: str, server: str) -> str:
        """Current and initial weight of a server, as reported by the proxy."""
        return self.request(f"get weight {_target(backend, server)}")

    def set_weight(self, backend: str, server: str, weight: Weight) -> str:
        """Change a server's weight.

        Args:
            backend: Backend name
            server: Server name
            weight: ``Weight.absolute`` or ``Weight.relative`` value
        """
        return self.request(f"set weight {_target(backend, server)} {weight.render()}")

    # Frontends

    def disable_frontend(self, name: str) -> str:
        return self.request(f"disable frontend {name}")

    def enable_frontend(self, name: str) -> str:
        return self.request(f"enable frontend {name}")

    def shutdown_frontend(self, name: str) -> str:
        """Stop a frontend and release its listening ports."""
        return self.request(f"shutdown frontend {name}")

    def max_frontend_connections(self, name: str, max: int) -> str:
        limit = require_unsigned(max, "max")
        return self.request(f"set maxconn frontend {name} {limit}")

    # Global limits

    def max_global_connections(self, max: int) -> str:
        limit = require_unsigned(max, "max")
        return self.request(f"set maxconn global {limit}")

    def rate_limit_global_connections(self, max: int) -> str:
        limit = require_unsigned(max, "max")
        return self.request(f"set rate-limit connections global {limit}")

    def rate_limit_global_http_compression(self, max: int) -> str:
        limit = require_unsigned(max, "max")
        return self.request(f"set rate-limit http-compression global {limit}")

    def rate_limit_global_sessions(self, max: int, ssl: bool = False) -> str:
        """Limit the global session rate, or the SSL session rate with ``ssl``."""
        limit = require_unsigned(max, "max")
        prefix = "ssl_" if ssl else ""
        return self.request(f"set rate-limit {prefix}sessions global {limit}")


__all__ = ["ControlClient"]

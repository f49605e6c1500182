"""Byte transport for the control socket.

The runtime administration protocol has no length framing: a request is
written in full, then the response is everything the peer sends until it
closes its side of the stream. ``Transport`` is the narrow capability the
client needs for that exchange, so tests and alternative endpoints can stand
in for the real socket.

``UnixSocketTransport`` implements it over a filesystem-path stream socket:
- Connects eagerly so an unreachable proxy is reported at construction
- Bounds every command, write and read together, with one deadline
- Either reuses one connection for all commands or reconnects per command
- Wraps every socket failure in ``TransportError`` and becomes unusable after

Example:
    with UnixSocketTransport("/var/run/haproxy.sock", timeout=2.0) as transport:
        raw = transport.request(b"show info;")
"""

import contextlib
import enum
import socket
import time
from typing import Protocol

from loguru import logger

from airtraffic.core.exceptions import TransportError
from airtraffic.core.utils.utils import DEFAULT_TIMEOUT, RECV_CHUNK_SIZE


class Transport(Protocol):
    """Duplex byte stream answering one request at a time."""

    def request(self, payload: bytes) -> bytes:
        """Write ``payload`` fully, then read until end of stream."""
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


class ReconnectPolicy(str, enum.Enum):
    """When the transport opens a new connection.

    ``PERSISTENT`` keeps the first connection for every command; once the peer
    has closed it, further commands fail with ``TransportError``.
    ``PER_COMMAND`` opens a fresh connection for each command after the first,
    as the proxy closes the socket once it has answered in non-interactive
    mode.
    """

    PERSISTENT = "persistent"
    PER_COMMAND = "per-command"



class UnixSocketTransport:
    """Transport over a UNIX domain stream socket."""

    def __init__(
        self,
        path: str,
        timeout: float | None = DEFAULT_TIMEOUT,
        reconnect: ReconnectPolicy = ReconnectPolicy.PER_COMMAND,
    ) -> None:
        """Connect to the control socket.

        Args:
            path: Filesystem path of the socket
            timeout: Deadline in seconds for a whole command (write and read),
                None to block
            reconnect: Connection reuse policy

        Raises:
            ValueError: If the timeout is negative
            TransportError: If the socket cannot be reached
        """
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout must not be negative, got {timeout}")
        self.path = path
        self.timeout = timeout
        self.reconnect = ReconnectPolicy(reconnect)
        self._closed = False
        self._peer_closed = False
        self._sock: socket.socket | None = self._open()

    def _open(self) -> socket.socket:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(self.timeout)
            sock.connect(self.path)
        except OSError as e:
            sock.close()
            logger.error(f"Failed to connect to control socket {self.path}: {e}")
            raise TransportError(f"failed to connect to {self.path}: {e}", e) from e
        logger.debug(f"Connected to control socket {self.path}")
        return sock

    def _remaining(self, deadline: float | None) -> float | None:
        if deadline is None:
            return None
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TimeoutError(f"no complete response within {self.timeout}s")
        return remaining

    def _exchange(self, sock: socket.socket, payload: bytes) -> bytes:
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        sock.settimeout(self._remaining(deadline))
        sock.sendall(payload)
        chunks = []
        while True:
            sock.settimeout(self._remaining(deadline))
            chunk = sock.recv(RECV_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)

    def request(self, payload: bytes) -> bytes:
        """Send one request and return the full response.

        The whole exchange, write and read to end of stream, must finish
        within ``timeout`` seconds.

        Raises:
            TransportError: On any socket failure, including the deadline
                expiring or the peer having closed a persistent connection;
                the transport is closed afterwards
        """
        if self._closed:
            raise TransportError(f"transport to {self.path} is closed")

        if self._peer_closed:
            self.close()
            raise TransportError(f"peer closed the persistent connection to {self.path}")

        if self._sock is None:
            try:
                self._sock = self._open()
            except TransportError:
                self.close()
                raise

        try:
            response = self._exchange(self._sock, payload)
        except OSError as e:
            logger.error(f"Control socket {self.path} failed: {e}")
            self.close()
            raise TransportError(f"request to {self.path} failed: {e}", e) from e

        if self.reconnect is ReconnectPolicy.PER_COMMAND:
            self._release()
        else:
            # end of stream was read, nothing more can arrive on this socket
            self._peer_closed = True
        return response

    def _release(self) -> None:
        if self._sock is not None:
            with contextlib.suppress(OSError):
                self._sock.close()
            self._sock = None

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        self._release()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "UnixSocketTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["ReconnectPolicy", "Transport", "UnixSocketTransport"]

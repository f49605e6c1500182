"""Custom exceptions for the control client.

This module defines the exceptions raised by the command protocol layer:
- Transport failures (connect refused, broken pipe, reset, timeout)
- Malformed ``show stat`` payloads
- Lookups of columns missing from a statistics record

Nothing in the library retries after one of these errors. Reconnect-and-resend
policies belong to the caller.

Example:
    try:
        client = ControlClient.connect("/var/run/haproxy.sock")
    except TransportError as e:
        console.print(f"[red]Cannot reach the proxy: {e}")
"""


class ControlError(Exception):
    """Base exception for control client errors."""


class TransportError(ControlError):
    """Raised when the control connection cannot be established or used.

    Attributes:
        cause: The underlying exception, if any
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ProtocolDecodeError(ControlError, ValueError):
    """Raised when a response cannot be decoded into records."""


class FieldAccessError(ControlError, KeyError):
    """Raised when a statistics record has no such column."""

    def __init__(self, field: str) -> None:
        super().__init__(field)
        self.field = field

    def __str__(self) -> str:
        return f"no such stats column: {self.field!r}"

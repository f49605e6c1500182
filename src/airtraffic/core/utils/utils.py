"""Common constants for the control protocol."""

from typing import Final

# Wire framing
COMMAND_TERMINATOR: Final = ";"
NEWLINE: Final = "\n"
ENCODING: Final = "utf-8"

# Transport defaults
DEFAULT_SOCKET_PATH: Final = "/var/run/haproxy.sock"
DEFAULT_TIMEOUT: Final = 5.0  # seconds per command
RECV_CHUNK_SIZE: Final = 65536  # bytes

# Environment variables read by the CLI
SOCKET_ENV_VAR: Final = "AIRTRAFFIC_SOCKET"
TIMEOUT_ENV_VAR: Final = "AIRTRAFFIC_TIMEOUT"


def require_unsigned(value: int, what: str) -> int:
    """Validate a numeric command argument.

    Args:
        value: Limit to forward to the proxy
        what: Argument name used in the error message

    Returns:
        int: The value unchanged

    Raises:
        TypeError: If the value is not an integer
        ValueError: If the value is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{what} must not be negative, got {value}")
    return value

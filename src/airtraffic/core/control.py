"""Public entry point for the runtime administration client.

This module exposes the pieces a caller needs to drive a running proxy through
its control socket, keeping the transport and decoding details in ``lib``:
- ``ControlClient`` with one method per administrative command
- Typed command parameters (weights, selectors, statistics filters)
- Decoded statistics records

Example:
    from airtraffic.core.control import ControlClient, StatableFilter

    with ControlClient.connect("/var/run/haproxy.sock") as client:
        backends = client.stat(statable=StatableFilter.BACKENDS)

Attributes:
    __all__ (list): List of public components exposed by this module
"""

from .lib import (
    ControlClient,
    FallibleSelector,
    ProxySelector,
    ReconnectPolicy,
    ServerSelector,
    StatableFilter,
    StatsRecord,
    Weight,
)

__all__ = [
    "ControlClient",
    "FallibleSelector",
    "ProxySelector",
    "ReconnectPolicy",
    "ServerSelector",
    "StatableFilter",
    "StatsRecord",
    "Weight",
]

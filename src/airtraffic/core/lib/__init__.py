"""Core control protocol components."""

from .control_client import ControlClient
from .params import (
    FallibleSelector,
    ProxySelector,
    ServerSelector,
    StatableFilter,
    Weight,
    render_statable,
)
from .stats import STAT_COLUMNS, StatsRecord, decode_stats
from .transport import ReconnectPolicy, Transport, UnixSocketTransport

__all__ = [
    "ControlClient",
    "decode_stats",
    "FallibleSelector",
    "ProxySelector",
    "ReconnectPolicy",
    "render_statable",
    "ServerSelector",
    "STAT_COLUMNS",
    "StatableFilter",
    "StatsRecord",
    "Transport",
    "UnixSocketTransport",
    "Weight",
]

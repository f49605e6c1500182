"""Client for the runtime administration socket of a load balancer."""

import pathlib
import sys

from loguru import logger

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


def get_version() -> str:
    """Read version from pyproject.toml."""
    current_dir = pathlib.Path(__file__).parent
    for parent in [current_dir] + list(current_dir.parents):
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            with pyproject_path.open("rb") as f:
                pyproject_data = tomllib.load(f)
            project = pyproject_data.get("project", {})
            if project.get("name") == "airtraffic":
                return project["version"]

    # Fallback version if file not found
    return "0.0.0"


__version__ = get_version()

# Library stays quiet until the application calls configure_logging()
logger.disable("airtraffic")

from airtraffic.core.control import (  # noqa: E402
    ControlClient,
    FallibleSelector,
    ProxySelector,
    ReconnectPolicy,
    ServerSelector,
    StatableFilter,
    StatsRecord,
    Weight,
)
from airtraffic.core.exceptions import (  # noqa: E402
    ControlError,
    FieldAccessError,
    ProtocolDecodeError,
    TransportError,
)

__all__ = [
    "ControlClient",
    "ControlError",
    "FallibleSelector",
    "FieldAccessError",
    "ProtocolDecodeError",
    "ProxySelector",
    "ReconnectPolicy",
    "ServerSelector",
    "StatableFilter",
    "StatsRecord",
    "TransportError",
    "Weight",
    "__version__",
]

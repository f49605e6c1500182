"""Utility functions and helpers."""

from airtraffic.core.utils.log_config import configure_logging
from airtraffic.core.utils.utils import require_unsigned

__all__ = ["configure_logging", "require_unsigned"]

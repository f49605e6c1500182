"""Typed command parameters for the runtime administration protocol.

Each value here renders itself into the exact token a command expects:
- ``Weight`` normalizes server weights (absolute 0-256 or relative 0-100%)
- ``ProxySelector``/``ServerSelector`` name a target or match any with ``-1``
- ``FallibleSelector`` names a proxy for ``show errors`` or omits it entirely
- ``StatableFilter`` scopes ``show stat`` to frontends, backends or servers

Example:
    Weight.relative(150).render()            # "100%"
    ProxySelector.id("be1").render()         # "be1"
    ServerSelector.ANY.render()              # "-1"
    StatableFilter.BACKENDS.render()         # "2"
"""

import enum
from dataclasses import dataclass
from typing import ClassVar, Final

# Weight bounds
MAX_ABSOLUTE_WEIGHT: Final = 256
MAX_RELATIVE_WEIGHT: Final = 100

# Selector sentinels
ANY_TOKEN: Final = "-1"
SHOW_ALL_ERRORS_TOKEN: Final = ""


def _clamp(value: int, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"weight must be an integer, got {type(value).__name__}")
    return max(0, min(value, upper))


@dataclass(frozen=True)
class Weight:
    """Load-balancing weight for a server, already normalized for the wire.

    Attributes:
        value: Rendered token, digits optionally followed by ``%``
    """

    value: str

    @classmethod
    def absolute(cls, value: int) -> "Weight":
        """Weight expressed as an absolute value from 0 to 256.

        Out-of-range input is clamped, never rejected.
        """
        return cls(str(_clamp(value, MAX_ABSOLUTE_WEIGHT)))

    @classmethod
    def relative(cls, value: int) -> "Weight":
        """Weight expressed as a percentage of the configured one, from 0 to 100."""
        return cls(f"{_clamp(value, MAX_RELATIVE_WEIGHT)}%")

    @property
    def is_relative(self) -> bool:
        return self.value.endswith("%")

    def render(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class _Selector:
    """Either a named target or the wildcard sentinel."""

    name: str | None = None

    any_token: ClassVar[str] = ANY_TOKEN

    @classmethod
    def id(cls, name: str):
        """Select a specific target by name. Names are forwarded verbatim."""
        return cls(name)

    @classmethod
    def parse(cls, token: str):
        """Inverse of ``render``: the sentinel maps back to the wildcard."""
        if token == cls.any_token:
            return cls()
        return cls(token)

    @property
    def is_any(self) -> bool:
        return self.name is None

    def render(self) -> str:
        return self.any_token if self.name is None else self.name

    def __str__(self) -> str:
        return self.render()


class ProxySelector(_Selector):
    """Proxy argument of ``show stat``."""


class ServerSelector(_Selector):
    """Server argument of ``show stat``."""


class FallibleSelector(_Selector):
    """Proxy argument of ``show errors``; the wildcard renders as nothing."""

    any_token: ClassVar[str] = SHOW_ALL_ERRORS_TOKEN


ProxySelector.ANY = ProxySelector()
ServerSelector.ANY = ServerSelector()
FallibleSelector.ANY = FallibleSelector()


class StatableFilter(enum.IntEnum):
    """Kinds of proxy objects reported by ``show stat``.

    The concrete members are distinct bits; ``ANY`` is a sentinel rather than
    their union.
    """

    FRONTENDS = 1
    BACKENDS = 2
    SERVERS = 4
    ANY = -1

    def render(self) -> str:
        return str(int(self))


def render_statable(statable: int) -> str:
    """Render a filter, or a bitwise OR of filters such as ``FRONTENDS | SERVERS``.

    Raises:
        TypeError: If the value is not an integer
    """
    if isinstance(statable, bool) or not isinstance(statable, int):
        raise TypeError(f"statable must be an integer, got {type(statable).__name__}")
    return str(int(statable))


__all__ = [
    "ANY_TOKEN",
    "FallibleSelector",
    "MAX_ABSOLUTE_WEIGHT",
    "MAX_RELATIVE_WEIGHT",
    "ProxySelector",
    "render_statable",
    "ServerSelector",
    "StatableFilter",
    "Weight",
]

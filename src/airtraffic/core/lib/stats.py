"""Decoding of ``show stat`` responses.

The proxy answers ``show stat`` with a CSV-like table: one header line naming
the columns, then one line per frontend, backend or server. This module turns
that payload into ``StatsRecord`` values keyed by the literal header text.

Decoding rules:
- The first line is the header. The historical ``# `` prefix stays part of the
  first column's name (``"# pxname"``).
- Each following line is split on ``,`` and paired positionally with the
  header. Pairing stops at the shorter of the two, so short rows keep only
  their leading columns and surplus cells are dropped.
- Lines end at ``\\n`` only (a trailing ``\\r`` is dropped), so other line
  separators inside a cell stay part of that cell.
- Blank lines produce no record.
- A response without a header raises ``ProtocolDecodeError``.

Example:
    records = decode_stats("# pxname,svname,status\\nweb1,srv1,UP\\n")
    records[0]["svname"]        # "srv1"
    records[0].field("pxname")  # "web1"
"""

from collections.abc import Iterator, Mapping
from typing import Final

from loguru import logger

from airtraffic.core.exceptions import FieldAccessError, ProtocolDecodeError

FIELD_SEPARATOR: Final = ","
LINE_SEPARATOR: Final = "\n"

# Accessor name -> literal column name as printed by the proxy
STAT_COLUMNS: Final[dict[str, str]] = {
    "pxname": "# pxname",
    "svname": "svname",
    "qcur": "qcur",
    "qmax": "qmax",
    "scur": "scur",
    "smax": "smax",
    "slim": "slim",
    "slot": "slot",
    "stot": "stot",
    "bin": "bin",
    "bout": "bout",
    "dreq": "dreq",
    "dresp": "dresp",
    "ereq": "ereq",
    "econ": "econ",
    "eresp": "eresp",
    "wretr": "wretr",
    "wredis": "wredis",
    "status": "status",
    "weight": "weight",
    "act": "act",
    "bck": "bck",
    "chkfail": "chkfail",
    "chkdown": "chkdown",
    "lastchg": "lastchg",
    "downtime": "downtime",
    "qlimit": "qlimit",
    "pid": "pid",
    "iid": "iid",
    "sid": "sid",
    "throttle": "throttle",
    "lbtot": "lbtot",
    "tracked": "tracked",
    "typ": "type",
    "rate": "rate",
    "rate_lim": "rate_lim",
    "rate_max": "rate_max",
    "check_status": "check_status",
    "check_duration": "check_duration",
    "hrsp_1xx": "hrsp_1xx",
    "hrsp_2xx": "hrsp_2xx",
    "hrsp_3xx": "hrsp_3xx",
    "hrsp_4xx": "hrsp_4xx",
    "hrsp_5xx": "hrsp_5xx",
    "hrsp_other": "hrsp_other",
    "hanafail": "hanafail",
    "req_rate": "req_rate",
    "req_rate_max": "req_rate_max",
    "req_tot": "req_tot",
    "cli_abrt": "cli_abrt",
    "srv_abrt": "srv_abrt",
}


class StatsRecord(Mapping[str, str]):
    """One decoded row of the statistics table.

    Indexing with a column that the row does not carry raises
    ``FieldAccessError``; it never returns a default. Use ``get`` for an
    explicit optional lookup.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str]) -> None:
        self._data = dict(data)

    def __getitem__(self, name: str) -> str:
        try:
            return self._data[name]
        except KeyError:
            raise FieldAccessError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"StatsRecord({self._data!r})"

    def field(self, accessor: str) -> str:
        """Look up a column by accessor name (see ``STAT_COLUMNS``).

        Args:
            accessor: Short name such as ``pxname`` or ``typ``; unknown names
                are used as the column name directly

        Returns:
            str: Cell value

        Raises:
            FieldAccessError: If the row has no such column
        """
        return self[STAT_COLUMNS.get(accessor, accessor)]

    def get_int(self, accessor: str) -> int | None:
        """Numeric cell value, or None for an empty cell."""
        value = self.field(accessor)
        if value == "":
            return None
        return int(value)


def _parse_header(line: str) -> list[str]:
    if not line.strip():
        raise ProtocolDecodeError("malformed response: missing stats header")
    return line.split(FIELD_SEPARATOR)


def decode_stats(text: str) -> list[StatsRecord]:
    """Decode a ``show stat`` response into records, in row order.

    Args:
        text: Raw response text

    Returns:
        list[StatsRecord]: One record per non-blank data line

    Raises:
        ProtocolDecodeError: If the response has no header line
    """
    if not text:
        raise ProtocolDecodeError("malformed response: empty stats payload")
    lines = [line.removesuffix("\r") for line in text.split(LINE_SEPARATOR)]

    names = _parse_header(lines[0])
    records = [
        StatsRecord(dict(zip(names, line.split(FIELD_SEPARATOR))))
        for line in lines[1:]
        if line.strip()
    ]
    logger.debug(f"Decoded {len(records)} stats records with {len(names)} columns")
    return records


__all__ = ["FIELD_SEPARATOR", "STAT_COLUMNS", "StatsRecord", "decode_stats"]

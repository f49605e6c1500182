"""Tests for the statistics decoder and records."""

import pytest

from airtraffic.core.exceptions import FieldAccessError, ProtocolDecodeError
from airtraffic.core.lib.stats import STAT_COLUMNS, StatsRecord, decode_stats


def test_decodes_single_row_by_header_name():
    records = decode_stats("# pxname,svname,status\nweb1,srv1,UP")
    assert len(records) == 1
    record = records[0]
    assert record["# pxname"] == "web1"
    assert record["svname"] == "srv1"
    assert record["status"] == "UP"


def test_rows_keep_input_order():
    records = decode_stats("# pxname,svname\nweb1,srv1\nweb2,srv2\n")
    assert [r["# pxname"] for r in records] == ["web1", "web2"]


def test_short_row_keeps_overlapping_columns():
    record = decode_stats("# pxname,svname,status\nweb1,srv1")[0]
    assert dict(record) == {"# pxname": "web1", "svname": "srv1"}
    with pytest.raises(FieldAccessError):
        record["status"]


def test_long_row_drops_surplus_cells():
    record = decode_stats("# pxname,svname\nweb1,srv1,UP,extra")[0]
    assert dict(record) == {"# pxname": "web1", "svname": "srv1"}


def test_row_without_commas_is_single_column():
    record = decode_stats("# pxname,svname\nlonely")[0]
    assert dict(record) == {"# pxname": "lonely"}


def test_blank_lines_produce_no_records():
    records = decode_stats("# pxname,svname\nweb1,srv1\n\n  \nweb2,srv2\n\n")
    assert len(records) == 2


def test_header_only_yields_no_records():
    assert decode_stats("# pxname,svname\n") == []


@pytest.mark.parametrize("text", ["", "\n", "   \nweb1,srv1"])
def test_missing_header_is_malformed(text):
    with pytest.raises(ProtocolDecodeError, match="malformed response"):
        decode_stats(text)


def test_decodes_proxy_style_table(stat_response):
    records = decode_stats(stat_response)
    assert [(r.field("pxname"), r.field("svname")) for r in records] == [
        ("web", "FRONTEND"),
        ("app", "srv1"),
        ("app", "srv2"),
        ("app", "BACKEND"),
    ]
    # trailing comma in the header yields an empty column name, kept verbatim
    assert records[1][""] == ""


def test_missing_field_raises_field_access_error():
    record = StatsRecord({"svname": "srv1"})
    with pytest.raises(FieldAccessError) as excinfo:
        record["weight"]
    assert excinfo.value.field == "weight"
    assert isinstance(excinfo.value, KeyError)


def test_get_is_the_optional_lookup():
    record = StatsRecord({"svname": "srv1"})
    assert record.get("weight") is None
    assert record.get("weight", "-") == "-"
    assert "svname" in record
    assert "weight" not in record


def test_field_resolves_accessor_names():
    record = StatsRecord({"# pxname": "app", "type": "2", "scur": "7"})
    assert record.field("pxname") == "app"
    assert record.field("typ") == "2"
    assert record.field("scur") == "7"
    assert record.field("# pxname") == "app"
    with pytest.raises(FieldAccessError):
        record.field("svname")


def test_get_int():
    record = StatsRecord({"scur": "7", "qcur": "", "status": "UP"})
    assert record.get_int("scur") == 7
    assert record.get_int("qcur") is None
    with pytest.raises(ValueError):
        record.get_int("status")
    with pytest.raises(FieldAccessError):
        record.get_int("weight")


def test_record_copies_input():
    data = {"svname": "srv1"}
    record = StatsRecord(data)
    data["svname"] = "changed"
    assert record["svname"] == "srv1"
    with pytest.raises(TypeError):
        record["svname"] = "x"


def test_column_table_covers_known_columns():
    for accessor in ("pxname", "svname", "status", "weight", "hrsp_5xx", "srv_abrt", "typ"):
        assert accessor in STAT_COLUMNS
    assert STAT_COLUMNS["pxname"] == "# pxname"
    assert STAT_COLUMNS["typ"] == "type"
    assert STAT_COLUMNS["slot"] == "slot"


def test_unicode_line_separator_stays_in_cell():
    records = decode_stats("# pxname,svname,last_chk\napp,srv1,agent says\u2028evil,FAKE\n")
    assert len(records) == 1
    assert records[0]["last_chk"] == "agent says\u2028evil"


def test_crlf_line_endings():
    records = decode_stats("# pxname,svname,status\r\nweb1,srv1,UP\r\nweb1,srv2,DOWN\r\n")
    assert [r["status"] for r in records] == ["UP", "DOWN"]

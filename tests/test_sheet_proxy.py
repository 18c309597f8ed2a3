import pytest

from leave_tracker.core.exceptions import SheetProxyError
from leave_tracker.services.sheet_proxy import build_tab, find_container, quote_sheet_name, tab_range

CONTAINER_VALUES = [
    [" Container Number ", "Shipping Line", "ETA Date", "", "Status"],
    ["MSCU1234567", "MSC", "2026-11-02", "ignored", "On vessel"],
    ["MAEU7654321", "Maersk", "2026-11-10"],
    ["mscu1234567 ", " cma ", "2026-12-01", "", "At port"],
]


def _grid(row_data, row_metadata=None):
    return {"sheets": [{"data": [{"rowData": row_data, "rowMetadata": row_metadata or []}]}]}


def _row(*values):
    return {"values": [{"formattedValue": v} if v is not None else {} for v in values]}


def test_find_container_maps_header_to_fields():
    result = find_container(CONTAINER_VALUES, " mscu1234567 ")
    assert result == {
        "ContainerNumber": "MSCU1234567",
        "ShippingLine": "MSC",
        "ETADate": "2026-11-02",
        "Status": "On vessel",
    }


def test_find_container_filters_by_line():
    result = find_container(CONTAINER_VALUES, "MSCU1234567", line="CMA")
    assert result["Status"] == "At port"


def test_find_container_pads_short_rows():
    result = find_container(CONTAINER_VALUES, "MAEU7654321")
    assert result["Status"] == ""


def test_find_container_not_found():
    with pytest.raises(SheetProxyError) as exc_info:
        find_container(CONTAINER_VALUES, "MSCU1234567", line="MAERSK")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Container not found"


def test_find_container_empty_sheet():
    with pytest.raises(SheetProxyError) as exc_info:
        find_container([], "MSCU1234567")
    assert exc_info.value.message == "No data in sheet"


@pytest.mark.parametrize("name,expected", [
    ("Acme", "'Acme'"),
    ("Acme Freight", "'Acme Freight'"),
    ("O'Neil's", "'O''Neil''s'"),
])
def test_quote_sheet_name(name, expected):
    assert quote_sheet_name(name) == expected


def test_tab_range():
    assert tab_range("O'Neil") == "'O''Neil'!A1:Z1000"


def test_build_tab_uses_row_two_as_header_and_skips_hidden_rows():
    grid = _grid(
        [
            _row("Customer portal: Acme"),
            _row("Container", "Vessel", "ETA"),
            _row("MSCU1", "Ever Given", "02 Nov"),
            _row("MSCU2", "Hidden", "03 Nov"),
            _row("MSCU3", None),
            _row("MSCU4", "A", "B", "extra"),
        ],
        row_metadata=[{}, {}, {}, {"hiddenByUser": True}, {"hiddenByUser": False}],
    )
    assert build_tab(grid) == {
        "header": ["Container", "Vessel", "ETA"],
        "rows": [
            ["MSCU1", "Ever Given", "02 Nov"],
            ["MSCU3", "", ""],
            ["MSCU4", "A", "B"],
        ],
    }


def test_build_tab_rows_without_values():
    grid = _grid([_row("title"), _row("A", "B"), {}])
    assert build_tab(grid)["rows"] == [["", ""]]


@pytest.mark.parametrize("grid,message", [
    ({}, "No data in this tab"),
    ({"sheets": []}, "No data in this tab"),
    (_grid([]), "No data in this tab"),
    (_grid([_row("only a title")]), "Row 2 (header row) not found in this tab"),
    (_grid([_row("title"), {}]), "Row 2 (header row) is empty in this tab"),
])
def test_build_tab_errors(grid, message):
    with pytest.raises(SheetProxyError) as exc_info:
        build_tab(grid)
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == message

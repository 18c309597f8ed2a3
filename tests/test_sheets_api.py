import pytest

from leave_tracker.services.sheet_proxy import TAB_FIELDS
from leave_tracker.services.sheets_client import SheetsClientError


def test_containers_requires_number(client, fake_sheets):
    response = client.get("/api/containers", params={"number": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing container number"}
    assert fake_sheets.calls == []


def test_containers_lookup(client, fake_sheets):
    fake_sheets.values = [
        ["Container No", "Line", "Status"],
        ["TGHU1111111", "ONE", "Discharged"],
        ["TGHU1111111", "HAPAG", "Loaded"],
    ]
    response = client.get("/api/containers", params={"number": "tghu1111111", "line": "hapag"})
    assert response.status_code == 200
    assert response.json() == {"ContainerNo": "TGHU1111111", "Line": "HAPAG", "Status": "Loaded"}
    assert fake_sheets.calls == [("values", "Sheet1!A1:Z1000")]


def test_containers_not_found(client, fake_sheets):
    fake_sheets.values = [["Container No"], ["TGHU1111111"]]
    response = client.get("/api/containers", params={"number": "XXXX"})
    assert response.status_code == 404
    assert response.json() == {"error": "Container not found"}


def test_containers_empty_sheet(client, fake_sheets):
    response = client.get("/api/containers", params={"number": "TGHU1111111"})
    assert response.status_code == 404
    assert response.json() == {"error": "No data in sheet"}


def test_containers_upstream_failure(client, fake_sheets):
    fake_sheets.error = SheetsClientError("boom")
    response = client.get("/api/containers", params={"number": "TGHU1111111"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to read Google Sheet"}


def test_tab_requires_sheet(client, fake_sheets):
    response = client.get("/api/tab")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing sheet/tab name"}
    assert fake_sheets.calls == []


def test_tab_returns_header_and_visible_rows(client, fake_sheets):
    fake_sheets.grid = {"sheets": [{"data": [{
        "rowMetadata": [{}, {}, {"hiddenByUser": True}, {}],
        "rowData": [
            {"values": [{"formattedValue": "Acme Freight"}]},
            {"values": [{"formattedValue": "Container"}, {"formattedValue": "ETA"}]},
            {"values": [{"formattedValue": "HIDDEN1"}, {"formattedValue": "01 Nov"}]},
            {"values": [{"formattedValue": "SHOWN1"}]},
        ],
    }]}]}
    response = client.get("/api/tab", params={"sheet": " Acme's Tab "})
    assert response.status_code == 200
    assert response.json() == {"header": ["Container", "ETA"], "rows": [["SHOWN1", ""]]}
    assert fake_sheets.calls == [("grid", "'Acme''s Tab'!A1:Z1000", TAB_FIELDS)]


@pytest.mark.parametrize("grid,message", [
    ({}, "No data in this tab"),
    ({"sheets": [{"data": [{"rowData": [{"values": []}]}]}]}, "Row 2 (header row) not found in this tab"),
])
def test_tab_missing_data(client, fake_sheets, grid, message):
    fake_sheets.grid = grid
    response = client.get("/api/tab", params={"sheet": "Acme"})
    assert response.status_code == 404
    assert response.json() == {"error": message}


def test_tab_upstream_failure(client, fake_sheets):
    fake_sheets.error = SheetsClientError("quota exceeded")
    response = client.get("/api/tab", params={"sheet": "Acme"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to read requested tab"}

"""Reshaping of spreadsheet reads into the JSON served by the container-tracking endpoints."""
import re
from typing import Any, Dict, List, Sequence

from leave_tracker.core.exceptions import SheetProxyError

# Row 2 holds the column headers in every customer tab
TAB_HEADER_ROW_INDEX = 1

TAB_FIELDS = "sheets(data(rowMetadata(hiddenByUser),rowData(values(formattedValue))))"


def _cell(row: Sequence[Any], idx: int) -> str:
    if idx >= len(row):
        return ""
    return row[idx] or ""


def find_container(values: List[List[str]], number: str, line: str = "") -> Dict[str, str]:
    """
    Find the first data row whose column A is ``number`` and, when ``line``
    is given, whose column B is ``line``. Both comparisons ignore case and
    surrounding whitespace.

    Returns the row keyed by header name with whitespace removed.
    """
    number = (number or "").strip().upper()
    line = (line or "").strip().upper()

    if not values:
        raise SheetProxyError("No data in sheet", status_code=404)

    header = [(h or "").strip() for h in values[0]]
    match = None
    for row in values[1:]:
        row_container = _cell(row, 0).strip().upper()
        row_line = _cell(row, 1).strip().upper()
        if row_container == number and (not line or row_line == line):
            match = row
            break

    if match is None:
        raise SheetProxyError("Container not found", status_code=404)

    result = {}
    for idx, key in enumerate(header):
        if not key:
            continue
        result[re.sub(r"\s+", "", key)] = _cell(match, idx)
    return result


def quote_sheet_name(sheet_name: str) -> str:
    """Quote a tab name for A1 notation; embedded single quotes are doubled."""
    return "'" + sheet_name.replace("'", "''") + "'"


def tab_range(sheet_name: str, columns: str = "A1:Z1000") -> str:
    return f"{quote_sheet_name(sheet_name)}!{columns}"


def _formatted(cells: List[Dict[str, Any]], idx: int) -> str:
    if idx >= len(cells):
        return ""
    cell = cells[idx] or {}
    value = cell.get("formattedValue")
    return "" if value is None else value


def build_tab(grid: Dict[str, Any]) -> Dict[str, List]:
    """
    Turn a ``spreadsheets.get`` grid payload into ``{"header", "rows"}``.

    Row 2 is the header; every later row not hidden by the user becomes a
    row of formatted values aligned to the header width.
    """
    sheets = grid.get("sheets") or [{}]
    data_blocks = sheets[0].get("data") or [{}]
    data = data_blocks[0]
    row_metadata = data.get("rowMetadata") or []
    row_data = data.get("rowData") or []

    if not row_data:
        raise SheetProxyError("No data in this tab", status_code=404)

    def is_hidden(idx: int) -> bool:
        return idx < len(row_metadata) and (row_metadata[idx] or {}).get("hiddenByUser") is True

    if len(row_data) <= TAB_HEADER_ROW_INDEX:
        raise SheetProxyError("Row 2 (header row) not found in this tab", status_code=404)

    header_cells = (row_data[TAB_HEADER_ROW_INDEX] or {}).get("values") or []
    header = [_formatted(header_cells, idx) for idx in range(len(header_cells))]
    if not header:
        raise SheetProxyError("Row 2 (header row) is empty in this tab", status_code=404)

    rows = []
    for idx in range(TAB_HEADER_ROW_INDEX + 1, len(row_data)):
        if is_hidden(idx):
            continue
        cells = (row_data[idx] or {}).get("values") or []
        rows.append([_formatted(cells, col) for col in range(len(header))])

    return {"header": header, "rows": rows}

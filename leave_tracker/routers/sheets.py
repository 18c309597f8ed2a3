from fastapi import APIRouter, Depends
from typing import Dict
import logging

from leave_tracker.core.config import settings
from leave_tracker.core.exceptions import SheetProxyError
from leave_tracker.schemas.sheets import ErrorResponse, TabResponse
from leave_tracker.services.sheet_proxy import TAB_FIELDS, build_tab, find_container, tab_range
from leave_tracker.services.sheets_client import SheetsClient, SheetsClientError

router = APIRouter()
logger = logging.getLogger(__name__)

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_sheets_client() -> SheetsClient:
    """A fresh client per request; each request authenticates on its own."""
    return SheetsClient(settings.sheets)


@router.get("/containers", response_model=Dict[str, str], responses=_ERRORS)
def lookup_container(
    number: str = "",
    line: str = "",
    sheets: SheetsClient = Depends(get_sheets_client),
):
    """Look up a container by number (column A) and optional shipping line (column B)."""
    if not number.strip():
        raise SheetProxyError("Missing container number", status_code=400)

    try:
        values = sheets.get_values(settings.sheets.containers_range)
    except SheetsClientError as e:
        logger.error(f"Error reading containers sheet: {e}")
        raise SheetProxyError("Failed to read Google Sheet", status_code=500) from e

    return find_container(values, number, line)


@router.get("/tab", response_model=TabResponse, responses=_ERRORS)
def read_tab(sheet: str = "", sheets: SheetsClient = Depends(get_sheets_client)):
    """Return one tab's header (row 2) and its visible data rows."""
    sheet_name = sheet.strip()
    if not sheet_name:
        raise SheetProxyError("Missing sheet/tab name", status_code=400)

    try:
        grid = sheets.get_grid(tab_range(sheet_name, settings.sheets.tab_columns), TAB_FIELDS)
    except SheetsClientError as e:
        logger.error(f"Error reading tab '{sheet_name}': {e}")
        raise SheetProxyError("Failed to read requested tab", status_code=500) from e

    return build_tab(grid)

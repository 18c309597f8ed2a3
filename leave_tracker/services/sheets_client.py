import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from leave_tracker.core.config import SheetSettings, settings

logger = logging.getLogger(__name__)


class SheetsClientError(Exception):
    """Any failure talking to the spreadsheet service: credentials, transport or payload."""


def ensure_key_file(sheet_settings: Optional[SheetSettings] = None) -> str:
    """
    Return the service account key file path, writing it from
    ``SERVICE_ACCOUNT_JSON`` first when the file does not exist yet.
    """
    cfg = sheet_settings or settings.sheets
    key_file = cfg.service_account_file
    if cfg.service_account_json and not os.path.exists(key_file):
        with open(key_file, "w", encoding="utf-8") as fh:
            fh.write(cfg.service_account_json)
        logger.info(f"Wrote service account key file from environment: {key_file}")
    return key_file


class SheetsClient:
    """
    Read-only client for a single Google spreadsheet.

    Credentials are loaded lazily on the first call so that a missing or
    broken key surfaces as ``SheetsClientError`` inside the request.
    """

    def __init__(self, sheet_settings: Optional[SheetSettings] = None, session: Optional[requests.Session] = None):
        self.settings = sheet_settings or settings.sheets
        self._session = session

    @property
    def spreadsheet_url(self) -> str:
        return f"{self.settings.api_base_url}/{self.settings.sheet_id}"

    def _authorized_session(self) -> requests.Session:
        if self._session is None:
            try:
                key_file = ensure_key_file(self.settings)
                credentials = service_account.Credentials.from_service_account_file(
                    key_file, scopes=self.settings.scopes
                )
            except (OSError, ValueError, GoogleAuthError) as e:
                raise SheetsClientError(f"Could not load service account credentials: {e}") from e
            self._session = AuthorizedSession(credentials)
        return self._session

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        session = self._authorized_session()
        try:
            response = session.get(url, params=params, timeout=self.settings.timeout_seconds)
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as e:
            detail = e.response.text if e.response is not None else ""
            raise SheetsClientError(f"Sheets API returned an error: {e} {detail}".strip()) from e
        except (requests.RequestException, GoogleAuthError, ValueError) as e:
            raise SheetsClientError(f"Sheets API request failed: {e}") from e
        if not isinstance(payload, dict):
            raise SheetsClientError("Sheets API returned an unexpected payload")
        return payload

    def get_values(self, range_: str) -> List[List[str]]:
        """Return the cell values of ``range_`` as rows of strings (``values.get``)."""
        payload = self._get(f"{self.spreadsheet_url}/values/{quote(range_, safe='')}")
        return payload.get("values") or []

    def get_grid(self, range_: str, fields: str) -> Dict[str, Any]:
        """Return ``spreadsheets.get`` with grid data for ``range_``, limited to ``fields``."""
        return self._get(
            self.spreadsheet_url,
            params={"ranges": range_, "includeGridData": "true", "fields": fields},
        )

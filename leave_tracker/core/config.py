import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class SheetSettings(BaseModel):
    sheet_id: str = Field(default=os.getenv("SHEET_ID", "10y_pzCwdu-iqdylknQKFvZvz1EP-bHBIqAGBB4660kY"))
    service_account_json: Optional[str] = Field(default=os.getenv("SERVICE_ACCOUNT_JSON"))
    service_account_file: str = Field(default=os.getenv("SERVICE_ACCOUNT_FILE", "service-account-key.json"))
    scopes: List[str] = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
    api_base_url: str = "https://sheets.googleapis.com/v4/spreadsheets"
    timeout_seconds: float = float(os.getenv("SHEETS_TIMEOUT", "30"))

    # Containers lookup always reads the first tab
    containers_range: str = "Sheet1!A1:Z1000"
    tab_columns: str = "A1:Z1000"

class LeaveSettings(BaseModel):
    # Suffix on the key versions the stored format
    storage_key: str = Field(default=os.getenv("LEAVE_STORAGE_KEY", "leave-manager-employees-v1"))
    baseline_year: int = int(os.getenv("LEAVE_BASELINE_YEAR", "2026"))
    baseline_month: int = int(os.getenv("LEAVE_BASELINE_MONTH", "1"))
    balance_tolerance: float = float(os.getenv("LEAVE_BALANCE_TOLERANCE", "0.0001"))

class Config(BaseModel):
    app_name: str = "Leave Tracker"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "4000"))

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./leave_tracker.db")

    # Components
    sheets: SheetSettings = SheetSettings()
    leave: LeaveSettings = LeaveSettings()

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env, open by default.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv("CORS_ORIGINS", "*").split(",")
            if o.strip()
        ]
    )

settings = Config()

# --- Startup Validation ---
_logger = logging.getLogger(__name__)
if not 1 <= settings.leave.baseline_month <= 12:
    raise RuntimeError(
        f"FATAL: LEAVE_BASELINE_MONTH must be between 1 and 12, got {settings.leave.baseline_month}."
    )
if settings.environment != "development" and not (
    settings.sheets.service_account_json or os.path.exists(settings.sheets.service_account_file)
):
    _logger.warning("⚠ No Google service account configured; sheet endpoints will return 500.")

import enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import date
from typing import Any, List, Optional

class LeaveCategory(str, enum.Enum):
    ANNUAL = "annual"
    SICK = "sick"
    FAMILY = "family"
    STUDY = "study"
    RELIGIOUS = "religious"

class LeaveTransaction(BaseModel):
    """Stored as ``{type, days, dateISO}``. Loosely typed so stale or hand-edited entries still load."""
    model_config = ConfigDict(populate_by_name=True)

    type: str = ""
    days: Any = 0
    date_iso: Optional[str] = Field(default=None, alias="dateISO")

class EmployeeRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    start_display: str = ""  # MM/YY text
    annual_start: float = 0.0
    sick_start: float = 0.0
    family_start: float = 0.0
    study_start: float = 0.0
    religious_start: float = 0.0
    annual_accrual_per_month: float = 0.0
    transactions: List[LeaveTransaction] = Field(default_factory=list)

    def starting_balance(self, category: LeaveCategory) -> float:
        return getattr(self, f"{category.value}_start")

class EmployeeCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = ""
    start_display: str = ""
    annual_start: float = 0.0
    sick_start: float = 0.0
    family_start: float = 0.0
    study_start: float = 0.0
    religious_start: float = 0.0
    annual_accrual_per_month: float = 0.0

class LeaveRequestCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = ""
    days: float = 0.0
    leave_date: Optional[date] = Field(default=None, alias="date")

class LeaveBalances(BaseModel):
    annual: float = 0.0
    sick: float = 0.0
    family: float = 0.0
    study: float = 0.0
    religious: float = 0.0

    def for_category(self, category: LeaveCategory) -> float:
        return getattr(self, category.value)

class EmployeeSummary(EmployeeRecord):
    as_of: date
    balances: LeaveBalances

class ResetResponse(BaseModel):
    message: str
    removed: int

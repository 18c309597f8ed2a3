import json
import math
import logging
import uuid
from datetime import date, datetime, time, timezone
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from leave_tracker.core.config import settings
from leave_tracker.core.exceptions import NotFoundError, ValidationError
from leave_tracker.models.storage_entry import StorageEntry
from leave_tracker.schemas.leave import (
    EmployeeCreate,
    EmployeeRecord,
    LeaveCategory,
    LeaveRequestCreate,
    LeaveTransaction,
)
from leave_tracker.services.leave_balance import check_leave_request, parse_mm_yy

logger = logging.getLogger(__name__)


def _storage_key(key: Optional[str]) -> str:
    return key or settings.leave.storage_key


def load_employees(db: Session, key: Optional[str] = None) -> List[EmployeeRecord]:
    """
    Read the employee list from its storage slot.

    A missing slot, unreadable JSON or anything other than a JSON array all
    fall back to an empty list. Individual records that do not validate are
    skipped.
    """
    key = _storage_key(key)
    entry = db.get(StorageEntry, key)
    if entry is None or not entry.value:
        return []

    try:
        parsed = json.loads(entry.value)
    except json.JSONDecodeError as e:
        logger.warning(f"Stored employee list under '{key}' is not valid JSON: {e}")
        return []
    if not isinstance(parsed, list):
        logger.warning(f"Stored employee list under '{key}' is not an array; ignoring it")
        return []

    employees = []
    for raw in parsed:
        try:
            employees.append(EmployeeRecord.model_validate(raw))
        except PydanticValidationError as e:
            logger.warning(f"Skipping malformed employee record: {e.error_count()} error(s)")
    return employees


def save_employees(db: Session, employees: List[EmployeeRecord], key: Optional[str] = None) -> None:
    key = _storage_key(key)
    payload = json.dumps([emp.model_dump(mode="json", by_alias=True) for emp in employees])

    entry = db.get(StorageEntry, key)
    if entry is None:
        entry = StorageEntry(key=key, value=payload)
        db.add(entry)
    else:
        entry.value = payload

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def get_employee(db: Session, employee_id: str) -> EmployeeRecord:
    for emp in load_employees(db):
        if emp.id == employee_id:
            return emp
    raise NotFoundError("Selected employee could not be found.")


def create_employee(db: Session, data: EmployeeCreate) -> EmployeeRecord:
    """Validate the new-employee form and append the record to storage."""
    name = data.name.strip()
    start_text = data.start_display.strip()

    if not name:
        raise ValidationError("Please enter an employee name.")
    if parse_mm_yy(start_text) is None:
        raise ValidationError("Start date must be in MM/YY format, e.g. 01/26.")
    amounts = [
        data.annual_start,
        data.sick_start,
        data.family_start,
        data.study_start,
        data.religious_start,
        data.annual_accrual_per_month,
    ]
    if any(not math.isfinite(amount) or amount < 0 for amount in amounts):
        raise ValidationError("Leave balances and accrual must be zero or positive.")

    employee = EmployeeRecord(
        id=str(uuid.uuid4()),
        name=name,
        start_display=start_text,
        annual_start=data.annual_start,
        sick_start=data.sick_start,
        family_start=data.family_start,
        study_start=data.study_start,
        religious_start=data.religious_start,
        annual_accrual_per_month=data.annual_accrual_per_month,
    )

    employees = load_employees(db)
    employees.append(employee)
    save_employees(db, employees)
    logger.info(f"Created employee {employee.id}")
    return employee


def add_transaction(db: Session, employee_id: str, request: LeaveRequestCreate) -> EmployeeRecord:
    """
    Append a leave transaction after checking the request against the
    employee's balance on the requested date.
    """
    if not request.type:
        raise ValidationError("Please select a leave type.")
    try:
        category = LeaveCategory(request.type)
    except ValueError:
        raise ValidationError(f"Unknown leave type: {request.type}") from None
    if not math.isfinite(request.days) or request.days <= 0:
        raise ValidationError("Please enter a positive number of days.")

    leave_date = request.leave_date or date.today()

    employees = load_employees(db)
    employee = next((emp for emp in employees if emp.id == employee_id), None)
    if employee is None:
        raise NotFoundError("Selected employee could not be found.")

    check_leave_request(employee, category, request.days, leave_date)

    employee.transactions.append(
        LeaveTransaction(
            type=category.value,
            days=request.days,
            date_iso=datetime.combine(leave_date, time.min, tzinfo=timezone.utc).isoformat(),
        )
    )
    save_employees(db, employees)
    logger.info(f"Recorded {request.days} {category.value} day(s) for employee {employee_id}")
    return employee


def reset_employees(db: Session) -> int:
    """Discard every employee and its history. Returns how many were removed."""
    removed = len(load_employees(db))
    save_employees(db, [])
    logger.info(f"Reset leave storage; removed {removed} employee(s)")
    return removed

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from leave_tracker.database import get_db
from leave_tracker.schemas.leave import (
    EmployeeCreate,
    EmployeeRecord,
    EmployeeSummary,
    LeaveBalances,
    LeaveRequestCreate,
    ResetResponse,
)
from leave_tracker.services import employee_store
from leave_tracker.services.leave_balance import get_balances

router = APIRouter(prefix="/employees")


def _summary(employee: EmployeeRecord, as_of: Optional[date] = None) -> EmployeeSummary:
    as_of = as_of or date.today()
    return EmployeeSummary(
        **employee.model_dump(),
        as_of=as_of,
        balances=get_balances(employee, as_of),
    )


@router.get("", response_model=List[EmployeeSummary])
def list_employees(as_of: Optional[date] = None, db: Session = Depends(get_db)):
    """All employees with their balances as of ``as_of`` (default today)."""
    return [_summary(emp, as_of) for emp in employee_store.load_employees(db)]


@router.post("", response_model=EmployeeSummary, status_code=status.HTTP_201_CREATED)
def create_employee(data: EmployeeCreate, db: Session = Depends(get_db)):
    employee = employee_store.create_employee(db, data)
    return _summary(employee)


@router.delete("", response_model=ResetResponse)
def reset_employees(db: Session = Depends(get_db)):
    """Remove all employees and their history."""
    removed = employee_store.reset_employees(db)
    return ResetResponse(message="All employees removed", removed=removed)


@router.get("/{employee_id}", response_model=EmployeeSummary)
def get_employee(employee_id: str, as_of: Optional[date] = None, db: Session = Depends(get_db)):
    return _summary(employee_store.get_employee(db, employee_id), as_of)


@router.get("/{employee_id}/balances", response_model=LeaveBalances)
def get_employee_balances(employee_id: str, as_of: Optional[date] = None, db: Session = Depends(get_db)):
    employee = employee_store.get_employee(db, employee_id)
    return get_balances(employee, as_of or date.today())


@router.post("/{employee_id}/transactions", response_model=EmployeeSummary)
def record_leave(employee_id: str, request: LeaveRequestCreate, db: Session = Depends(get_db)):
    """Record leave taken; rejected when it would overdraw the category balance."""
    employee = employee_store.add_transaction(db, employee_id, request)
    return _summary(employee)

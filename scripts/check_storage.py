from datetime import date

from leave_tracker.database import SessionLocal, init_db
from leave_tracker.services.employee_store import load_employees
from leave_tracker.services.leave_balance import get_balances

def check_storage():
    init_db()
    db = SessionLocal()
    try:
        employees = load_employees(db)
        today = date.today()
        print(f"Employees in storage (balances as of {today.isoformat()}):")
        if not employees:
            print(" (No employees found)")
        for emp in employees:
            b = get_balances(emp, today)
            print(
                f" - {emp.name} [{emp.start_display}] annual={b.annual:.1f} sick={b.sick:.1f} "
                f"family={b.family:.1f} study={b.study:.1f} religious={b.religious:.1f} "
                f"accrual={emp.annual_accrual_per_month:.2f} transactions={len(emp.transactions)}"
            )
    finally:
        db.close()

if __name__ == "__main__":
    check_storage()

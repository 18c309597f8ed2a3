from leave_tracker.database import SessionLocal, init_db
from leave_tracker.schemas.leave import EmployeeCreate
from leave_tracker.services.employee_store import create_employee, load_employees

DEMO_EMPLOYEES = [
    EmployeeCreate(name="Thandi Mokoena", start_display="01/26", annual_start=10, sick_start=10,
                   family_start=3, study_start=5, religious_start=2, annual_accrual_per_month=1.25),
    EmployeeCreate(name="Pieter Naidoo", start_display="03/24", annual_start=4.5, sick_start=8,
                   family_start=3, study_start=0, religious_start=1, annual_accrual_per_month=1.5),
]

def seed():
    init_db()
    db = SessionLocal()
    try:
        existing = {emp.name for emp in load_employees(db)}
        for data in DEMO_EMPLOYEES:
            if data.name in existing:
                print(f"Employee already exists: {data.name}")
                continue
            emp = create_employee(db, data)
            print(f"Created employee: {emp.name} ({emp.id})")
    finally:
        db.close()

if __name__ == "__main__":
    seed()

import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from leave_tracker.database import Base, get_db
from leave_tracker.main import app
from leave_tracker.routers.sheets import get_sheets_client
from leave_tracker.schemas.leave import EmployeeRecord
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    # Use sessionmaker with the active connection
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def make_employee():
    """Build an in-memory employee record with sensible zero defaults."""
    def _make_employee(**overrides):
        data = {
            "id": "emp-1",
            "name": "Test Employee",
            "start_display": "01/26",
            "transactions": [],
        }
        data.update(overrides)
        return EmployeeRecord(**data)
    return _make_employee


class FakeSheetsClient:
    """Stands in for the Google Sheets client; records the ranges it was asked for."""

    def __init__(self, values=None, grid=None, error=None):
        self.values = values or []
        self.grid = grid or {}
        self.error = error
        self.calls = []

    def get_values(self, range_):
        self.calls.append(("values", range_))
        if self.error:
            raise self.error
        return self.values

    def get_grid(self, range_, fields):
        self.calls.append(("grid", range_, fields))
        if self.error:
            raise self.error
        return self.grid

@pytest.fixture(scope="function")
def fake_sheets():
    return FakeSheetsClient()

@pytest.fixture(scope="function")
def client(db_session, fake_sheets):
    """Get a TestClient that uses the test database session and a fake sheets client."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sheets_client] = lambda: fake_sheets
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

from fastapi import APIRouter
from leave_tracker.routers import employees, sheets

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(employees.router, tags=["Leave"])
api_router.include_router(sheets.router, tags=["Container Tracking"])

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from leave_tracker.database import Base

class StorageEntry(Base):
    """A single key/value slot; the employee list lives under one key as a JSON array."""
    __tablename__ = "storage_entries"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import storage_entry

from .storage_entry import StorageEntry

__all__ = [
    "StorageEntry",
]

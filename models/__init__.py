"""Database models and record types for Squad Load Analytics."""

from models.database.base import Base
from models.database.weekly_load import WeeklyLoad
from models.records import LoadRecord, WeekBucket

__all__ = [
    "Base",
    "WeeklyLoad",
    "LoadRecord",
    "WeekBucket",
]

"""
Half-open time interval shared by shifts, appointments and slots.
"""

from pydantic import BaseModel, ConfigDict
from datetime import datetime, timedelta


class TimeInterval(BaseModel):
    """
    Half-open interval [start, end).
    Malformed intervals (start >= end) are representable on purpose so the
    engine can detect and skip them; see `is_valid`.
    """
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @property
    def is_valid(self) -> bool:
        return self.start < self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_minutes(self) -> float:
        return self.duration.total_seconds() / 60

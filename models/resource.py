"""
Resource data models for the Clinic Schedule Grid.

This module defines the 'Supply' side of a clinic day:
1. Practices (the locations that own a shift and its color)
2. Therapists (the resources whose columns are drawn)
3. Work Shifts (when a therapist is rostered at a practice)
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime

from .interval import TimeInterval


class Practice(BaseModel):
    """A clinic location. Its color tints the shifts rostered there."""
    id: str = Field(description="Unique identifier")
    name: str = Field(default="", description="Display name of the practice")
    color: Optional[str] = Field(
        default=None,
        description="Hex color (#RRGGBB) used for shift backgrounds"
    )


class Therapist(BaseModel):
    """
    Human resource whose day is drawn as one column of the grid.
    Immutable for the duration of one layout computation.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique identifier")
    name: str = Field(default="", description="Name of the therapist")
    practice_ids: List[str] = Field(
        default_factory=list,
        description="Practices this therapist is affiliated with"
    )

    @property
    def display_name(self) -> str:
        return self.name or f"Therapist {self.id}"


class WorkShift(BaseModel):
    """
    A bounded interval during which a therapist is rostered at a practice.
    The interval is NOT validated here: the grid engine skips malformed
    shifts instead of failing the whole day.
    """

    id: str = Field(description="Unique identifier")
    therapist_id: str = Field(description="Rostered therapist")
    practice_id: str = Field(default="", description="Practice that owns this shift")
    start: datetime = Field(description="Shift start (inclusive)")
    end: datetime = Field(description="Shift end (exclusive)")

    # Denormalized from the practice so the engine never needs a lookup
    practice_name: str = Field(default="")
    practice_color: Optional[str] = Field(default=None)

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(start=self.start, end=self.end)

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "id": "ws_0912",
            "therapist_id": "th_01",
            "practice_id": "pr_centrum",
            "start": "2025-03-10T09:00:00",
            "end": "2025-03-10T12:00:00",
            "practice_name": "Fysio Centrum",
            "practice_color": "#4caf50"
        }
    })

"""
Schedule grid data models for the Clinic Schedule Grid.

This module defines the 'Output' of the layout engine:
1. Configuration (the visible day window and pixel scale)
2. Value objects (intervals, slots, cells, column spans)
3. The assembled ScheduleGridModel handed to the presentation layer

Everything here is a plain data carrier. The engine builds fresh instances
on every call and never mutates them afterwards.
"""

import logging
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict, model_validator
from datetime import date as date_type, datetime, timedelta

from .interval import TimeInterval
from .resource import Therapist, WorkShift
from .appointment import Appointment

logger = logging.getLogger(__name__)


class GridConfig(BaseModel):
    """Visible window, slot discretization and pixel scale of the day grid."""
    model_config = ConfigDict(frozen=True)

    window_start_hour: int = Field(default=6, ge=0, le=24, description="First visible hour")
    window_end_hour: int = Field(default=21, ge=0, le=24, description="Hour the window closes")
    slot_minutes: int = Field(default=30, gt=0, description="Length of one background slot")
    pixels_per_hour: float = Field(default=60.0, gt=0)
    min_event_height_px: float = Field(
        default=36.0,
        ge=0,
        description="Height needed to render time range + patient name"
    )
    default_duration_minutes: int = Field(
        default=30,
        gt=0,
        description="Fallback length for appointments with no end and no duration"
    )
    short_event_damping: float = Field(
        default=0.98,
        gt=0,
        le=1,
        description="Short events never grow past this share of their natural height"
    )
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone for aware instants; None means system local time"
    )

    @model_validator(mode='after')
    def validate_window(self):
        if self.window_end_hour <= self.window_start_hour:
            raise ValueError("window_end_hour must be after window_start_hour")

        window_minutes = (self.window_end_hour - self.window_start_hour) * 60
        if window_minutes % self.slot_minutes:
            logger.warning(
                f"Window of {window_minutes} min is not a multiple of {self.slot_minutes} min; "
                f"the trailing partial slot will not be drawn"
            )
        return self

    @property
    def window_minutes(self) -> int:
        return (self.window_end_hour - self.window_start_hour) * 60

    def window_for(self, day: date_type) -> TimeInterval:
        """The visible [H0:00, H1:00) window on a given calendar day."""
        midnight = datetime.combine(day, datetime.min.time())
        return TimeInterval(
            start=midnight + timedelta(hours=self.window_start_hour),
            end=midnight + timedelta(hours=self.window_end_hour),
        )


class TimeSlot(BaseModel):
    """One fixed-length background unit of the visible window."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    interval: TimeInterval

    @property
    def label(self) -> str:
        return self.interval.start.strftime("%H:%M")


class GridCell(BaseModel):
    """Coverage of one (slot, therapist) pair. Derived, never stored."""
    model_config = ConfigDict(frozen=True)

    slot: TimeSlot
    resource: Therapist
    coverage: Optional[WorkShift] = Field(default=None, description="Covering shift, if on duty")
    background: str = Field(description="CSS color for the cell background")

    @property
    def on_duty(self) -> bool:
        return self.coverage is not None


class ColumnSpan(BaseModel):
    """Horizontal placement of one therapist column, in percent of the grid width."""
    model_config = ConfigDict(frozen=True)

    left: float = Field(ge=0)
    width: float = Field(ge=0)

    @property
    def right(self) -> float:
        return self.left + self.width


class PlacedAppointment(BaseModel):
    """Geometric projection of an appointment onto the grid."""
    model_config = ConfigDict(frozen=True)

    appointment: Appointment = Field(description="Source of truth; never modified")
    interval: TimeInterval = Field(description="Effective interval, clamped to the window")
    top: float = Field(description="Offset from window start, in px")
    height: float = Field(description="Rendered height, in px")
    column: ColumnSpan
    clamped: bool = Field(default=False, description="True if cut at a window edge")
    background: str = Field(default="")
    text_color: str = Field(default="#000000")


class NowIndicator(BaseModel):
    """Horizontal 'current time' line, only shown when viewing today."""
    top: float
    label: str


class DataIssue(BaseModel):
    """A data-quality finding. Recorded and logged, never raised."""
    issue_type: str = Field(description="MalformedInterval, ShiftOverlap, DoubleBooking, UnknownResource")
    reason: str
    record_id: str
    resource_id: Optional[str] = None


class BookingRequest(BaseModel):
    """Prefilled parameters for the create-appointment form after a slot click."""
    start: datetime
    therapist_id: str
    therapist_name: str = ""
    practice_id: str = ""
    practice_name: str = ""
    duration_minutes: int = Field(gt=0)


class ScheduleRequestKey(BaseModel):
    """
    Identity of a day fetch. Callers compare the key of a resolved fetch with
    the current selection and drop results that were superseded meanwhile.
    """
    model_config = ConfigDict(frozen=True)

    day: date_type
    resource_ids: Tuple[str, ...]

    @classmethod
    def for_selection(cls, day: date_type, resources: List[Therapist]) -> "ScheduleRequestKey":
        return cls(day=day, resource_ids=tuple(r.id for r in resources))

    def matches(self, other: "ScheduleRequestKey") -> bool:
        return self == other


class ScheduleGridModel(BaseModel):
    """
    The complete layout for one day: slots x resources x placed appointments.
    Pure data, safe to diff between renders.
    """
    model_config = ConfigDict(frozen=True)

    day: date_type
    config: GridConfig
    slots: List[TimeSlot] = Field(default_factory=list)
    resources: List[Therapist] = Field(default_factory=list)
    columns: List[ColumnSpan] = Field(default_factory=list)
    cells: List[List[GridCell]] = Field(
        default_factory=list,
        description="cells[slot_index][resource_index]"
    )
    placed_appointments: List[PlacedAppointment] = Field(default_factory=list)
    now_indicator: Optional[NowIndicator] = None
    issues: List[DataIssue] = Field(default_factory=list)

    @property
    def total_height(self) -> float:
        return self.config.window_minutes / 60 * self.config.pixels_per_hour

    def cell(self, slot_index: int, resource_index: int) -> GridCell:
        return self.cells[slot_index][resource_index]

    def appointments_for(self, resource_id: str) -> List[PlacedAppointment]:
        return [p for p in self.placed_appointments if p.appointment.therapist_id == resource_id]

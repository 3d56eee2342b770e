"""
Data models package for the Clinic Schedule Grid.

This package exports the three core pillars of the data architecture:
1. Supply (Practice, Therapist, WorkShift)
2. Demand (Appointment, AppointmentStatus, AppointmentType)
3. Output (GridConfig, TimeSlot, GridCell, PlacedAppointment, ScheduleGridModel)
"""

from .interval import TimeInterval

from .resource import (
    Practice,
    Therapist,
    WorkShift
)

from .appointment import (
    Appointment,
    AppointmentStatus,
    AppointmentType,
    APPOINTMENT_TYPE_DISPLAY_NAMES,
    STATUS_CODES
)

from .schedule import (
    GridConfig,
    TimeSlot,
    GridCell,
    ColumnSpan,
    PlacedAppointment,
    NowIndicator,
    DataIssue,
    BookingRequest,
    ScheduleRequestKey,
    ScheduleGridModel
)

__all__ = [
    "TimeInterval",

    # --- Resource Models ---
    "Practice",
    "Therapist",
    "WorkShift",

    # --- Appointment Models ---
    "Appointment",
    "AppointmentStatus",
    "AppointmentType",
    "APPOINTMENT_TYPE_DISPLAY_NAMES",
    "STATUS_CODES",

    # --- Output Models ---
    "GridConfig",
    "TimeSlot",
    "GridCell",
    "ColumnSpan",
    "PlacedAppointment",
    "NowIndicator",
    "DataIssue",
    "BookingRequest",
    "ScheduleRequestKey",
    "ScheduleGridModel",
]

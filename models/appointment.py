"""
Appointment data models for the Clinic Schedule Grid.

Appointments are the 'Demand' side of a clinic day. They are created and
edited by the booking workflow and only ever read by the grid engine.
Status and type values reach the data layer either as numbers or as names;
the ingestion boundary folds both into the enums below.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime

from .interval import TimeInterval


class AppointmentStatus(str, Enum):
    """Lifecycle state of a booked appointment."""
    SCHEDULED = "Gepland"
    COMPLETED = "Afgerond"
    CANCELLED = "Geannuleerd"
    NO_SHOW = "NoShow"


# Numeric codes used by the persistence layer
STATUS_CODES = {
    0: AppointmentStatus.SCHEDULED,
    1: AppointmentStatus.COMPLETED,
    2: AppointmentStatus.CANCELLED,
    3: AppointmentStatus.NO_SHOW,
}


class AppointmentType(int, Enum):
    """Treatment categories (insurer performance codes)."""
    FYSIO_THERAPIE = 1000
    KINDER_FYSIO_THERAPIE = 1001
    ERGO_THERAPIE = 1200
    OEDEEM_THERAPIE = 1500
    BEKKEN_FYSIO_THERAPIE = 1600
    INTAKE = 1864
    INTAKE_NA_VERWIJZING = 1870

    @property
    def display_name(self) -> str:
        return APPOINTMENT_TYPE_DISPLAY_NAMES[self]


APPOINTMENT_TYPE_DISPLAY_NAMES = {
    AppointmentType.FYSIO_THERAPIE: "1000 - behandeling fysiotherapie",
    AppointmentType.KINDER_FYSIO_THERAPIE: "1001 - behandeling kinderfysiotherapie",
    AppointmentType.ERGO_THERAPIE: "1200 - behandeling ergotherapie",
    AppointmentType.OEDEEM_THERAPIE: "1500 - behandeling oedeemtherapie",
    AppointmentType.BEKKEN_FYSIO_THERAPIE: "1600 - behandeling bekkenfysiotherapie",
    AppointmentType.INTAKE: "1864 - intake",
    AppointmentType.INTAKE_NA_VERWIJZING: "1870 - intake na verwijzing",
}


class Appointment(BaseModel):
    """
    A booked treatment for one patient with one therapist.

    Only `start` is mandatory. When `end` is missing the engine infers it
    from `duration_minutes`, falling back to the configured default.
    """
    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "id": "apt_1042",
            "therapist_id": "th_01",
            "patient_id": "pat_77",
            "patient_name": "J. de Vries",
            "start": "2025-03-10T10:00:00",
            "duration_minutes": 30,
            "appointment_type": 1000,
            "status": "Gepland",
            "notes": "Knee, week 3"
        }
    })

    # --- Core Identity ---
    id: str = Field(description="Unique identifier")
    therapist_id: str = Field(description="Therapist (resource) column to draw in")
    patient_id: str = Field(default="", description="Reference to the patient record")
    patient_name: str = Field(default="", description="Name shown inside the event")
    practice_id: Optional[str] = Field(default=None)

    # --- Timing ---
    start: datetime = Field(description="Start of the appointment")
    end: Optional[datetime] = Field(default=None, description="Explicit end, if stored")
    duration_minutes: Optional[int] = Field(
        default=None,
        description="Stored duration; used when no explicit end exists"
    )

    # --- Classification ---
    appointment_type: Optional[AppointmentType] = Field(default=None)
    type_color: Optional[str] = Field(default=None, description="Hex color for the type")
    status: AppointmentStatus = Field(default=AppointmentStatus.SCHEDULED)
    notes: str = Field(default="")

    @property
    def type_label(self) -> str:
        if self.appointment_type is None:
            return ""
        return self.appointment_type.display_name

    @property
    def stored_interval(self) -> Optional[TimeInterval]:
        """The interval as persisted, or None when the end must be inferred."""
        if self.end is None:
            return None
        return TimeInterval(start=self.start, end=self.end)

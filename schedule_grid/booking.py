"""
Booking prefill for clicks on free grid cells.

Only an on-duty cell with no appointment drawn over it can start a new
booking. The request carries everything the create-appointment form needs.
"""

from typing import Optional

from models import BookingRequest, GridCell, GridConfig, ScheduleGridModel
from .intervals import overlaps


def is_bookable(cell: GridCell, model: ScheduleGridModel) -> bool:
    if not cell.on_duty:
        return False
    for placed in model.appointments_for(cell.resource.id):
        if overlaps(placed.interval, cell.slot.interval):
            return False
    return True


def booking_request_for_cell(
    cell: GridCell,
    model: ScheduleGridModel,
    config: Optional[GridConfig] = None
) -> Optional[BookingRequest]:
    if not is_bookable(cell, model):
        return None

    config = config or model.config
    shift = cell.coverage
    return BookingRequest(
        start=cell.slot.interval.start,
        therapist_id=cell.resource.id,
        therapist_name=cell.resource.name,
        practice_id=shift.practice_id,
        practice_name=shift.practice_name,
        duration_minutes=config.default_duration_minutes
    )

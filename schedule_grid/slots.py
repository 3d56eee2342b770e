"""
Time-Slot Generator.

Discretizes the visible day window into contiguous, fixed-length slots.
Slots are value objects rebuilt on every render.
"""

from datetime import date as date_type, timedelta
from typing import List

from models import GridConfig, TimeInterval, TimeSlot


def slot_count(config: GridConfig) -> int:
    """Whole slots that fit in the window. A trailing remainder is dropped."""
    return config.window_minutes // config.slot_minutes


def generate_slots(day: date_type, config: GridConfig) -> List[TimeSlot]:
    window = config.window_for(day)
    step = timedelta(minutes=config.slot_minutes)

    slots = []
    for index in range(slot_count(config)):
        start = window.start + index * step
        slots.append(TimeSlot(index=index, interval=TimeInterval(start=start, end=start + step)))
    return slots

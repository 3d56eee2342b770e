"""
Schedule grid layout engine.

Pure computation: resources, shifts and appointments for one day in,
a ScheduleGridModel out. No I/O, no state between calls.
"""

from .engine import GridAssembler, compute_schedule_grid
from .intervals import overlaps, covers, clamp_end, infer_end
from .slots import generate_slots, slot_count
from .coverage import resolve_coverage
from .geometry import effective_interval, event_height, vertical_geometry
from .columns import column_spans, resolve_display_resources
from .booking import booking_request_for_cell, is_bookable

__all__ = [
    "GridAssembler",
    "compute_schedule_grid",
    "overlaps",
    "covers",
    "clamp_end",
    "infer_end",
    "generate_slots",
    "slot_count",
    "resolve_coverage",
    "effective_interval",
    "event_height",
    "vertical_geometry",
    "column_spans",
    "resolve_display_resources",
    "booking_request_for_cell",
    "is_bookable",
]

"""
The Clinic Schedule Grid Engine.

This module assembles one day's renderable layout:
1. Slot Generation - discretize the visible window.
2. Coverage - mark which slots fall inside each therapist's shifts.
3. Placement - project appointments onto pixel geometry inside their column.

Every call is a pure function of its inputs. The engine holds no state
between calls, so repeated or concurrent invocations cannot interfere;
the caller simply keeps the newest model.
"""

import logging
from datetime import date as date_type, datetime
from typing import Dict, List, Optional

from models import (
    Appointment, GridCell, GridConfig, NowIndicator, PlacedAppointment,
    ScheduleGridModel, Therapist, TimeInterval, WorkShift
)
from .columns import column_spans, columns_by_resource
from .coverage import find_shift_overlaps, group_shifts, resolve_coverage
from .geometry import clamp_to_window, effective_interval, vertical_geometry
from .intervals import covers, minutes_between, overlaps, to_wall_clock
from .issues import IssueLog, DOUBLE_BOOKING, MALFORMED_INTERVAL, UNKNOWN_RESOURCE
from .palette import appointment_background, contrast_text, shift_background
from .slots import generate_slots

logger = logging.getLogger(__name__)


class GridAssembler:
    """
    Builds a ScheduleGridModel for one day.
    Ingests Supply (Shifts) and Demand (Appointments), outputs a layout.
    """

    def __init__(
        self,
        day: date_type,
        resources: List[Therapist],
        shifts: List[WorkShift],
        appointments: List[Appointment],
        config: Optional[GridConfig] = None,
        now: Optional[datetime] = None
    ):
        day = day.date() if isinstance(day, datetime) else day
        self.day = day
        self.resources = list(resources)
        self.shifts = shifts
        self.appointments = appointments
        self.config = config or GridConfig()
        self.now = now

        self.window = self.config.window_for(day)
        self.log = IssueLog()

    def build(self) -> ScheduleGridModel:
        logger.debug(
            f"Building grid for {self.day.isoformat()}: {len(self.resources)} therapists, "
            f"{len(self.shifts)} shifts, {len(self.appointments)} appointments"
        )

        slots = generate_slots(self.day, self.config)

        # 1. Coverage
        shifts_by_resource = group_shifts(self._valid_shifts())
        for resource in self.resources:
            find_shift_overlaps(resource.id, shifts_by_resource.get(resource.id, []), self.log)

        cells = []
        for slot in slots:
            row = []
            for resource in self.resources:
                shift = resolve_coverage(slot, shifts_by_resource.get(resource.id, []))
                row.append(GridCell(
                    slot=slot,
                    resource=resource,
                    coverage=shift,
                    background=shift_background(shift)
                ))
            cells.append(row)

        # 2. Placement
        placed = self._place_appointments()
        self._report_double_bookings(placed)

        model = ScheduleGridModel(
            day=self.day,
            config=self.config,
            slots=slots,
            resources=self.resources,
            columns=column_spans(len(self.resources)),
            cells=cells,
            placed_appointments=placed,
            now_indicator=self._now_indicator(),
            issues=self.log.issues
        )

        if self.log.issues:
            logger.info(f"Grid for {self.day.isoformat()} built with issues: {self.log.counts()}")
        return model

    # --- Supply ---

    def _valid_shifts(self) -> List[WorkShift]:
        """Shifts in wall-clock time, malformed ones dropped."""
        valid = []
        for shift in self.shifts:
            shift = self._localize_shift(shift)
            if not shift.interval.is_valid:
                self.log.record(
                    MALFORMED_INTERVAL,
                    f"Shift ends at or before its start ({shift.start:%H:%M}-{shift.end:%H:%M})",
                    shift.id,
                    shift.therapist_id
                )
                continue
            valid.append(shift)
        return valid

    def _localize_shift(self, shift: WorkShift) -> WorkShift:
        if shift.start.tzinfo is None and shift.end.tzinfo is None:
            return shift
        return shift.model_copy(update={
            "start": to_wall_clock(shift.start, self.config.timezone),
            "end": to_wall_clock(shift.end, self.config.timezone),
        })

    # --- Demand ---

    def _place_appointments(self) -> List[PlacedAppointment]:
        columns = columns_by_resource(self.resources)
        placed = []

        for appointment in self.appointments:
            column = columns.get(appointment.therapist_id)
            if column is None:
                self.log.record(
                    UNKNOWN_RESOURCE,
                    f"Therapist {appointment.therapist_id} is not displayed",
                    appointment.id,
                    appointment.therapist_id
                )
                continue

            interval = self._appointment_interval(appointment)
            if not interval.is_valid:
                self.log.record(
                    MALFORMED_INTERVAL,
                    f"Appointment ends at or before its start ({interval.start:%H:%M}-{interval.end:%H:%M})",
                    appointment.id,
                    appointment.therapist_id
                )
                continue

            visible = clamp_to_window(interval, self.window)
            if visible is None:
                logger.debug(f"Appointment {appointment.id} lies outside the visible window")
                continue

            top, height = vertical_geometry(visible, self.window, self.config)
            background = appointment_background(appointment)
            placed.append(PlacedAppointment(
                appointment=appointment,
                interval=visible,
                top=top,
                height=height,
                column=column,
                clamped=visible != interval,
                background=background,
                text_color=contrast_text(background)
            ))

        return placed

    def _appointment_interval(self, appointment: Appointment) -> TimeInterval:
        interval = effective_interval(appointment, self.config)
        return TimeInterval(
            start=to_wall_clock(interval.start, self.config.timezone),
            end=to_wall_clock(interval.end, self.config.timezone),
        )

    def _report_double_bookings(self, placed: List[PlacedAppointment]) -> None:
        """
        Concurrent appointments of one therapist stay drawn on top of each
        other; they are only reported.
        """
        by_resource: Dict[str, List[PlacedAppointment]] = {}
        for item in placed:
            by_resource.setdefault(item.appointment.therapist_id, []).append(item)

        for therapist_id, items in by_resource.items():
            for i, first in enumerate(items):
                for second in items[i + 1:]:
                    if overlaps(first.interval, second.interval):
                        self.log.record(
                            DOUBLE_BOOKING,
                            f"Appointment {second.appointment.id} overlaps {first.appointment.id}",
                            second.appointment.id,
                            therapist_id
                        )

    # --- Decorations ---

    def _now_indicator(self) -> Optional[NowIndicator]:
        if self.now is None:
            return None
        now = to_wall_clock(self.now, self.config.timezone)
        # Both edges inclusive, so the line still shows at closing time
        if now.date() != self.day or not (covers(self.window, now) or now == self.window.end):
            return None
        top = minutes_between(self.window.start, now) / 60 * self.config.pixels_per_hour
        return NowIndicator(top=top, label=now.strftime("%H:%M"))


def compute_schedule_grid(
    day: date_type,
    resources: List[Therapist],
    shifts: List[WorkShift],
    appointments: List[Appointment],
    config: Optional[GridConfig] = None,
    now: Optional[datetime] = None
) -> ScheduleGridModel:
    """
    Layout for one day: slots x therapists x placed appointments.

    Never raises for bad records; they are skipped and listed in
    `model.issues`. Raises only for an invalid GridConfig, which fails at
    construction time.
    """
    return GridAssembler(day, resources, shifts, appointments, config, now).build()

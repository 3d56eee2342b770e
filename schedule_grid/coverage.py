"""
Shift Membership Resolver.

Answers: "Is therapist X on duty during slot Y, and for which practice?"
Evaluated per slot per therapist without caching; a day grid is small.
"""

from collections import defaultdict
from typing import Dict, List, Optional

from models import TimeSlot, WorkShift
from .intervals import overlaps
from .issues import IssueLog, SHIFT_OVERLAP


def resolve_coverage(slot: TimeSlot, shifts: List[WorkShift]) -> Optional[WorkShift]:
    """
    First shift (in input order) that overlaps the slot, or None.
    Overlapping shifts are not merged or ranked by practice.
    """
    for shift in shifts:
        if overlaps(shift.interval, slot.interval):
            return shift
    return None


def group_shifts(shifts: List[WorkShift]) -> Dict[str, List[WorkShift]]:
    """Index shifts by therapist, preserving input order within each group."""
    grouped: Dict[str, List[WorkShift]] = defaultdict(list)
    for shift in shifts:
        grouped[shift.therapist_id].append(shift)
    return grouped


def find_shift_overlaps(therapist_id: str, shifts: List[WorkShift], log: IssueLog) -> int:
    """
    Record each pair of overlapping shifts for one therapist.
    These are upstream data anomalies; coverage still resolves to the first match.
    """
    found = 0
    for i, first in enumerate(shifts):
        for second in shifts[i + 1:]:
            if overlaps(first.interval, second.interval):
                log.record(
                    SHIFT_OVERLAP,
                    f"Shift {second.id} overlaps {first.id}; {first.id} takes precedence",
                    second.id,
                    therapist_id
                )
                found += 1
    return found

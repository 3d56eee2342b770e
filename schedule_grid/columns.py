"""
Resource Column Layout.

Splits the grid width evenly across the displayed therapists, in the order
the caller selected them. Appointments take the full width of their
therapist's column; concurrent bookings for one therapist are drawn on
top of each other rather than in sub-lanes.
"""

from typing import Dict, List

from models import ColumnSpan, Therapist


def column_spans(count: int) -> List[ColumnSpan]:
    if count <= 0:
        return []
    width = 100.0 / count
    return [ColumnSpan(left=i * width, width=width) for i in range(count)]


def columns_by_resource(resources: List[Therapist]) -> Dict[str, ColumnSpan]:
    """Map therapist id -> column. On duplicate ids the first position wins."""
    spans = column_spans(len(resources))
    mapping: Dict[str, ColumnSpan] = {}
    for resource, span in zip(resources, spans):
        mapping.setdefault(resource.id, span)
    return mapping


def resolve_display_resources(selected: List[Therapist], filtered: List[Therapist]) -> List[Therapist]:
    """Explicitly selected therapists win; otherwise show the filtered set."""
    return list(selected) if selected else list(filtered)

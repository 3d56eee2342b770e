"""
Data-ingestion boundary: raw clinic API payloads -> canonical models.
"""

from .normalizer import (
    DaySnapshot,
    RecordNormalizer,
    RejectedRecord,
    parse_appointment_type,
    parse_status
)

__all__ = [
    "DaySnapshot",
    "RecordNormalizer",
    "RejectedRecord",
    "parse_appointment_type",
    "parse_status",
]

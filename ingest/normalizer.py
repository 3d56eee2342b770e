"""
Record normalizer for the Clinic Schedule Grid.

The data-ingestion boundary: turns raw REST payloads into canonical models
before anything reaches the layout engine.

STRATEGY: Validate record by record. A bad record is logged and dropped,
never allowed to sink the whole batch.
Handles both payload generations of the clinic API:
- nested objects (`therapist: {id}`, `practice: {...}`) with `startTime`/`time`
- flat ids (`therapistId`) with `startDateTime`/`durationMinutes`
and status/type values sent as numbers, numeric strings or names.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from models import (
    Appointment, AppointmentStatus, AppointmentType, Practice, Therapist, WorkShift,
    STATUS_CODES
)
from schedule_grid.intervals import to_wall_clock

logger = logging.getLogger(__name__)


@dataclass
class RejectedRecord:
    """Detailed reason for dropping a raw record."""
    kind: str  # e.g., "appointment", "workshift"
    index: int
    reason: str
    record_id: Optional[str] = None


@dataclass
class DaySnapshot:
    """Everything the grid needs for one request, already canonical."""
    therapists: List[Therapist] = field(default_factory=list)
    practices: List[Practice] = field(default_factory=list)
    shifts: List[WorkShift] = field(default_factory=list)
    appointments: List[Appointment] = field(default_factory=list)

    def for_day(self, day: date_type, timezone: Optional[str] = None) -> "DaySnapshot":
        """Keep only shifts and appointments that start on `day` (local time)."""
        return DaySnapshot(
            therapists=self.therapists,
            practices=self.practices,
            shifts=[s for s in self.shifts if to_wall_clock(s.start, timezone).date() == day],
            appointments=[a for a in self.appointments if to_wall_clock(a.start, timezone).date() == day],
        )


def _key(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())


# 'FysioTherapie', 'FYSIO_THERAPIE' and 'fysio therapie' all fold to one key
_TYPE_BY_NAME = {_key(t.name): t for t in AppointmentType}
_STATUS_BY_NAME = {_key(s.name): s for s in AppointmentStatus}
_STATUS_BY_NAME.update({_key(s.value): s for s in AppointmentStatus})


def parse_status(value: Any) -> AppointmentStatus:
    """Status from a code (0-3), a numeric string or a name. Missing means scheduled."""
    if value is None or value == "":
        return AppointmentStatus.SCHEDULED
    if isinstance(value, AppointmentStatus):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Unknown appointment status {value!r}")
    if isinstance(value, int) or (isinstance(value, str) and value.strip().isdigit()):
        code = int(value)
        if code not in STATUS_CODES:
            raise ValueError(f"Unknown appointment status code {code}")
        return STATUS_CODES[code]
    if isinstance(value, str) and _key(value) in _STATUS_BY_NAME:
        return _STATUS_BY_NAME[_key(value)]
    raise ValueError(f"Unknown appointment status {value!r}")


def parse_appointment_type(value: Any) -> Tuple[Optional[AppointmentType], Optional[str]]:
    """
    (type, color) from a code, a numeric string, a name, a display name
    ('1000 - behandeling fysiotherapie') or a type object.
    """
    if value is None or value == "":
        return None, None
    if isinstance(value, AppointmentType):
        return value, None

    color = None
    if isinstance(value, dict):
        color = value.get("color")
        value = value.get("code", value.get("id"))
        if value is None:
            return None, color

    if isinstance(value, int) and not isinstance(value, bool):
        return AppointmentType(value), color

    if isinstance(value, str):
        text = value.strip()
        leading = re.match(r"^(\d+)", text)
        if leading:
            return AppointmentType(int(leading.group(1))), color
        if _key(text) in _TYPE_BY_NAME:
            return _TYPE_BY_NAME[_key(text)], color

    raise ValueError(f"Unknown appointment type {value!r}")


def _unwrap_list(payload: Any, keys: Tuple[str, ...]) -> List[Any]:
    """Accept a bare list or a dict wrapping it under one of `keys`."""
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys + ("result", "data", "items"):
            if key in payload and isinstance(payload[key], list):
                return payload[key]
        return [payload]
    return []


def _ref_id(record: Dict[str, Any], nested: str, flat: str) -> Optional[str]:
    """Id of a related record, from `{nested: {id}}` or `{flat: id}`."""
    obj = record.get(nested)
    if isinstance(obj, dict) and obj.get("id") is not None:
        return str(obj["id"])
    if record.get(flat) is not None:
        return str(record[flat])
    return None


def _first(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _full_name(*parts: Any) -> str:
    return " ".join(str(p).strip() for p in parts if p)


class RecordNormalizer:
    """
    Converts raw API records into canonical models.
    Practices are indexed as they are read so later shifts can pick up
    their practice color even when the payload only carries a practice id.
    """

    def __init__(self):
        self.practices: Dict[str, Practice] = {}
        self.rejected: List[RejectedRecord] = []

    # --- Directory records ---

    def normalize_practices(self, payload: Any) -> List[Practice]:
        items = self._validate_all("practice", _unwrap_list(payload, ("practices",)), self._practice_fields, Practice)
        for practice in items:
            self.practices[practice.id] = practice
        return items

    def normalize_therapists(self, payload: Any) -> List[Therapist]:
        return self._validate_all("therapist", _unwrap_list(payload, ("therapists",)), self._therapist_fields, Therapist)

    # --- Day records ---

    def normalize_shifts(self, payload: Any) -> List[WorkShift]:
        raw = _unwrap_list(payload, ("workshifts", "workShifts", "shifts"))
        return self._validate_all("workshift", raw, self._shift_fields, WorkShift)

    def normalize_appointments(self, payload: Any) -> List[Appointment]:
        raw = _unwrap_list(payload, ("appointments",))
        return self._validate_all("appointment", raw, self._appointment_fields, Appointment)

    def normalize_snapshot(self, payload: Dict[str, Any]) -> DaySnapshot:
        """A whole snapshot. Practices go first so shifts can be colored."""
        practices = self.normalize_practices(payload.get("practices"))
        therapists = self.normalize_therapists(payload.get("therapists"))
        shifts = self.normalize_shifts(_first(payload, "workshifts", "workShifts", "shifts"))
        appointments = self.normalize_appointments(payload.get("appointments"))

        logger.info(
            f"Normalized snapshot: {len(therapists)} therapists, {len(practices)} practices, "
            f"{len(shifts)} shifts, {len(appointments)} appointments ({len(self.rejected)} rejected)"
        )
        return DaySnapshot(
            therapists=therapists,
            practices=practices,
            shifts=shifts,
            appointments=appointments
        )

    # --- Helpers ---

    def _validate_all(self, kind: str, raw_items: List[Any], to_fields, model_class: Type[BaseModel]) -> List[Any]:
        valid_items = []
        for i, item in enumerate(raw_items):
            record_id = str(item.get("id")) if isinstance(item, dict) and item.get("id") is not None else None
            try:
                if not isinstance(item, dict):
                    raise ValueError(f"expected an object, got {type(item).__name__}")
                valid_items.append(model_class(**to_fields(item)))
            except ValidationError as e:
                self._reject(kind, i, record_id, f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}")
            except (ValueError, TypeError) as e:
                self._reject(kind, i, record_id, str(e))
        return valid_items

    def _reject(self, kind: str, index: int, record_id: Optional[str], reason: str) -> None:
        logger.warning(f"Skipping invalid {kind} #{index} (id={record_id}): {reason}")
        self.rejected.append(RejectedRecord(kind=kind, index=index, reason=reason, record_id=record_id))

    def _practice_fields(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": str(record.get("id", "")),
            "name": record.get("name") or "",
            "color": record.get("color") or None,
        }

    def _therapist_fields(self, record: Dict[str, Any]) -> Dict[str, Any]:
        practice_ids = [str(p) for p in record.get("practiceIds") or []]
        for practice in record.get("practices") or []:
            if isinstance(practice, dict) and practice.get("id") is not None:
                practice_ids.append(str(practice["id"]))
        single = _ref_id(record, "practice", "practiceId")
        if single and single not in practice_ids:
            practice_ids.append(single)

        name = record.get("name")
        if not name:
            name = _full_name(record.get("firstName"), record.get("lastName"))
        return {
            "id": str(record.get("id", "")),
            "name": name or "",
            "practice_ids": practice_ids,
        }

    def _shift_fields(self, record: Dict[str, Any]) -> Dict[str, Any]:
        practice_id = _ref_id(record, "practice", "practiceId") or ""
        nested = record.get("practice") if isinstance(record.get("practice"), dict) else {}
        known = self.practices.get(practice_id)

        return {
            "id": str(record.get("id", "")),
            "therapist_id": _ref_id(record, "therapist", "therapistId"),
            "practice_id": practice_id,
            "start": _first(record, "startTime", "startDateTime", "start"),
            "end": _first(record, "endTime", "endDateTime", "end"),
            "practice_name": nested.get("name") or (known.name if known else ""),
            "practice_color": nested.get("color") or (known.color if known else None),
        }

    def _appointment_fields(self, record: Dict[str, Any]) -> Dict[str, Any]:
        appointment_type, type_color = parse_appointment_type(
            _first(record, "appointmentType", "type", "appointmentTypeId")
        )
        patient = record.get("patient") if isinstance(record.get("patient"), dict) else {}
        patient_name = _full_name(patient.get("firstName"), patient.get("lastName"))

        return {
            "id": str(record.get("id", "")),
            "therapist_id": _ref_id(record, "therapist", "therapistId"),
            "patient_id": _ref_id(record, "patient", "patientId") or "",
            "patient_name": patient_name or patient.get("name") or "",
            "practice_id": _ref_id(record, "practice", "practiceId"),
            "start": _first(record, "startTime", "time", "start"),
            "end": _first(record, "endTime", "end"),
            "duration_minutes": _first(record, "durationMinutes", "duration"),
            "appointment_type": appointment_type,
            "type_color": type_color,
            "status": parse_status(record.get("status")),
            "notes": record.get("notes") or "",
        }

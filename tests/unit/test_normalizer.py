"""Unit tests for the ingestion normalizer."""

import pytest

from ingest import RecordNormalizer, parse_appointment_type, parse_status
from models import AppointmentStatus, AppointmentType
from tests.helpers import DAY, at


class TestParseStatus:
    """Status arrives as a code, a numeric string or a name."""

    @pytest.mark.parametrize("raw,expected", [
        (0, AppointmentStatus.SCHEDULED),
        ("2", AppointmentStatus.CANCELLED),
        ("Afgerond", AppointmentStatus.COMPLETED),
        ("NoShow", AppointmentStatus.NO_SHOW),
        ("no_show", AppointmentStatus.NO_SHOW),
        (None, AppointmentStatus.SCHEDULED),
    ])
    def test_forms(self, raw, expected):
        assert parse_status(raw) is expected

    @pytest.mark.parametrize("raw", [7, "Lost", True])
    def test_unknown_raises(self, raw):
        with pytest.raises(ValueError):
            parse_status(raw)


class TestParseAppointmentType:
    """Type arrives as a code, a name, a display name or an object."""

    @pytest.mark.parametrize("raw,expected", [
        (1000, AppointmentType.FYSIO_THERAPIE),
        ("1864", AppointmentType.INTAKE),
        ("FysioTherapie", AppointmentType.FYSIO_THERAPIE),
        ("INTAKE_NA_VERWIJZING", AppointmentType.INTAKE_NA_VERWIJZING),
        ("1200 - behandeling ergotherapie", AppointmentType.ERGO_THERAPIE),
    ])
    def test_forms(self, raw, expected):
        parsed, color = parse_appointment_type(raw)
        assert parsed is expected
        assert color is None

    def test_object_with_color(self):
        parsed, color = parse_appointment_type({"id": "1500", "color": "#00bcd4"})
        assert parsed is AppointmentType.OEDEEM_THERAPIE
        assert color == "#00bcd4"

    def test_missing(self):
        assert parse_appointment_type(None) == (None, None)

    def test_unknown_code_raises(self):
        with pytest.raises(ValueError):
            parse_appointment_type(4242)

    def test_display_name_property(self):
        assert AppointmentType.INTAKE.display_name == "1864 - intake"


class TestNormalizeShifts:
    """Test both shift payload generations."""

    def test_flat_payload_picks_up_practice_color(self):
        normalizer = RecordNormalizer()
        normalizer.normalize_practices([{"id": 10, "name": "Fysio Centrum", "color": "#4caf50"}])
        shifts = normalizer.normalize_shifts([{
            "id": 1, "therapistId": 3, "practiceId": 10,
            "startDateTime": "2025-03-10T09:00:00", "endDateTime": "2025-03-10T12:00:00",
        }])

        assert len(shifts) == 1
        shift = shifts[0]
        assert shift.therapist_id == "3"
        assert shift.practice_color == "#4caf50"
        assert shift.practice_name == "Fysio Centrum"
        assert shift.start == at(9)

    def test_nested_payload(self):
        shifts = RecordNormalizer().normalize_shifts({"workshifts": [{
            "id": "a", "therapist": {"id": "t1"}, "practice": {"id": "p1", "color": "#2196f3"},
            "startTime": "2025-03-10T08:00:00", "endTime": "2025-03-10T16:30:00",
        }]})
        assert shifts[0].practice_id == "p1"
        assert shifts[0].practice_color == "#2196f3"

    def test_malformed_interval_passes_through(self):
        """start >= end is the engine's concern, not a parse error."""
        shifts = RecordNormalizer().normalize_shifts([{
            "id": 1, "therapistId": 1,
            "startTime": "2025-03-10T13:00:00", "endTime": "2025-03-10T12:00:00",
        }])
        assert len(shifts) == 1
        assert not shifts[0].interval.is_valid

    def test_missing_end_is_rejected(self):
        normalizer = RecordNormalizer()
        shifts = normalizer.normalize_shifts([{"id": 1, "therapistId": 1, "startTime": "2025-03-10T13:00:00"}])
        assert shifts == []
        assert normalizer.rejected[0].kind == "workshift"
        assert normalizer.rejected[0].record_id == "1"


class TestNormalizeAppointments:
    """Test appointment payloads."""

    def test_flat_payload(self):
        appointments = RecordNormalizer().normalize_appointments([{
            "id": 5, "patientId": 7, "therapistId": 1, "startTime": "2025-03-10T10:00:00",
            "durationMinutes": 30, "status": 1, "type": 1001,
        }])
        apt = appointments[0]
        assert apt.id == "5"
        assert apt.patient_id == "7"
        assert apt.duration_minutes == 30
        assert apt.end is None
        assert apt.status is AppointmentStatus.COMPLETED
        assert apt.type_label == "1001 - behandeling kinderfysiotherapie"

    def test_nested_payload(self):
        appointments = RecordNormalizer().normalize_appointments({"appointments": [{
            "id": "x", "patient": {"id": "8", "firstName": "Eva", "lastName": "de Vries"},
            "therapist": {"id": "2"}, "practice": {"id": "11"},
            "appointmentType": {"id": "1864", "color": "#ff9800"},
            "time": "2025-03-10T08:30:00", "duration": 45, "notes": "Intake",
        }]})
        apt = appointments[0]
        assert apt.patient_name == "Eva de Vries"
        assert apt.therapist_id == "2"
        assert apt.practice_id == "11"
        assert apt.appointment_type is AppointmentType.INTAKE
        assert apt.type_color == "#ff9800"
        assert apt.start == at(8, 30)

    def test_bad_records_do_not_sink_batch(self):
        normalizer = RecordNormalizer()
        appointments = normalizer.normalize_appointments([
            {"id": 1, "therapistId": 1, "startTime": "not a date"},
            {"id": 2, "therapistId": 1, "startTime": "2025-03-10T10:00:00", "status": "Lost"},
            {"id": 3, "startTime": "2025-03-10T10:00:00"},
            "garbage",
            {"id": 4, "therapistId": 1, "startTime": "2025-03-10T11:00:00"},
            {"id": 5, "therapistId": 1, "startTime": "2025-03-10T12:00:00", "patient": {"id": 8, "firstName": 123}},
        ])
        assert [a.id for a in appointments] == ["4", "5"]
        assert appointments[1].patient_name == "123"
        assert len(normalizer.rejected) == 4

    def test_malformed_field_types_are_rejected_per_record(self):
        normalizer = RecordNormalizer()
        therapists = normalizer.normalize_therapists([
            {"id": 1, "firstName": "Anna", "lastName": 7, "practiceIds": 5},
            {"id": 2, "firstName": "Pieter", "lastName": 42},
        ])
        assert [(t.id, t.name) for t in therapists] == [("2", "Pieter 42")]
        assert [r.record_id for r in normalizer.rejected] == ["1"]


class TestSnapshot:
    """Test whole-snapshot normalization."""

    def test_for_day_filters_other_days(self):
        snapshot = RecordNormalizer().normalize_snapshot({
            "therapists": [{"id": 1, "name": "Anna", "practiceId": 10}],
            "appointments": [
                {"id": 1, "therapistId": 1, "startTime": "2025-03-10T10:00:00"},
                {"id": 2, "therapistId": 1, "startTime": "2025-03-11T10:00:00"},
            ],
            "workshifts": [
                {"id": 1, "therapistId": 1, "startTime": "2025-03-09T09:00:00", "endTime": "2025-03-09T12:00:00"},
            ],
        }).for_day(DAY)

        assert [a.id for a in snapshot.appointments] == ["1"]
        assert snapshot.shifts == []
        assert snapshot.therapists[0].practice_ids == ["10"]

"""Integration tests for the runner script against the bundled sample day."""

import json
from pathlib import Path

import pytest

import run_schedule_grid

SAMPLE = Path(__file__).resolve().parents[2] / "data" / "sample_day.json"


@pytest.fixture
def exported(tmp_path, monkeypatch):
    out = tmp_path / "grid.json"
    monkeypatch.setattr(run_schedule_grid, "SNAPSHOT_FILENAME", str(SAMPLE))
    monkeypatch.setattr(run_schedule_grid, "EXPORT_FILENAME", str(out))
    monkeypatch.setattr(run_schedule_grid, "SCHEDULE_DAY", None)
    assert run_schedule_grid.main() == 0
    return json.loads(out.read_text())


class TestRunner:
    """Test the load -> normalize -> layout -> export pipeline."""

    def test_selected_therapists_only(self, exported):
        assert exported["day"] == "2025-03-10"
        assert [r["id"] for r in exported["resources"]] == ["1", "2"]
        assert [r["width"] for r in exported["resources"]] == [50, 50]

    def test_slots_and_coverage(self, exported):
        assert len(exported["slots"]) == 30
        nine = exported["slots"][6]
        assert nine["label"] == "09:00"
        assert nine["cells"][0]["on_duty"]
        assert nine["cells"][0]["background"] == "#4caf5033"

    def test_appointments_placed(self, exported):
        by_id = {a["id"]: a for a in exported["appointments"]}
        assert set(by_id) == {"500", "501", "502", "503"}
        assert by_id["500"]["top"] == pytest.approx(240)
        assert by_id["501"]["type"] == "1864 - intake"
        assert by_id["501"]["background"] == "#ff9800"
        assert by_id["502"]["clamped"]
        assert by_id["502"]["end"] == "21:00"
        assert by_id["503"]["height"] == pytest.approx(9.8)
        assert by_id["503"]["status"] == "NoShow"

    def test_malformed_shift_reported(self, exported):
        assert [(i["issue_type"], i["record_id"]) for i in exported["issues"]] == [("MalformedInterval", "102")]

    def test_missing_snapshot(self, tmp_path, monkeypatch):
        monkeypatch.setattr(run_schedule_grid, "SNAPSHOT_FILENAME", str(tmp_path / "missing.json"))
        assert run_schedule_grid.main() == 1

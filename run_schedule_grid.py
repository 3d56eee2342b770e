"""
Main Execution Script for the Clinic Schedule Grid.

Loads a day snapshot (raw API payloads), normalizes it, computes the
grid layout and exports it for the dashboard front-end.
"""

import os
import sys
import logging
from datetime import date, datetime
import json

from ingest import RecordNormalizer
from models import GridConfig, ScheduleGridModel
from schedule_grid import compute_schedule_grid, resolve_display_resources

logger = logging.getLogger("Main")

# --- CONFIGURATION ---
SNAPSHOT_FILENAME = os.environ.get("SCHEDULE_SNAPSHOT", "data/sample_day.json")
EXPORT_FILENAME = os.environ.get("SCHEDULE_EXPORT", "schedule_grid.json")
SCHEDULE_DAY = os.environ.get("SCHEDULE_DAY")  # ISO date; defaults to the snapshot's day
GRID_CONFIG = GridConfig(
    window_start_hour=6,
    window_end_hour=21,
    slot_minutes=30,
    pixels_per_hour=60,
    min_event_height_px=36,
    default_duration_minutes=30
)
# ---------------------


def load_snapshot(filename: str):
    """
    Helper to load the JSON snapshot.
    Returns None when the file is missing or unreadable.
    """
    try:
        with open(filename, 'r') as f:
            data = json.load(f)
        logger.info(f"📂 Loaded snapshot from {filename}")
        return data
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.error(f"❌ Snapshot {filename} not found or invalid: {e}")
        return None


def export_grid(model: ScheduleGridModel, filename: str) -> dict:
    """
    Serializes the grid model into a JSON format for the frontend.
    Cells are flattened to the fields a renderer needs.
    """
    logger.info(f"💾 Exporting grid to {filename}...")

    data = {
        "day": model.day.isoformat(),
        "height": model.total_height,
        "resources": [],
        "slots": [],
        "appointments": [],
        "now": model.now_indicator.model_dump(mode='json') if model.now_indicator else None,
        "issues": [issue.model_dump(mode='json') for issue in model.issues],
    }

    # 1. Columns
    for resource, column in zip(model.resources, model.columns):
        data["resources"].append({
            "id": resource.id,
            "name": resource.display_name,
            "left": column.left,
            "width": column.width,
        })

    # 2. Background rows
    for slot, row in zip(model.slots, model.cells):
        data["slots"].append({
            "label": slot.label,
            "cells": [
                {
                    "background": cell.background,
                    "on_duty": cell.on_duty,
                    "practice_id": cell.coverage.practice_id if cell.coverage else None,
                }
                for cell in row
            ],
        })

    # 3. Events
    for placed in model.placed_appointments:
        apt = placed.appointment
        data["appointments"].append({
            "id": apt.id,
            "therapist_id": apt.therapist_id,
            "patient": apt.patient_name,
            "type": apt.type_label,
            "status": apt.status.value,
            "start": placed.interval.start.strftime("%H:%M"),
            "end": placed.interval.end.strftime("%H:%M"),
            "top": placed.top,
            "height": placed.height,
            "left": placed.column.left,
            "width": placed.column.width,
            "clamped": placed.clamped,
            "background": placed.background,
            "color": placed.text_color,
        })

    with open(filename, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info("✅ Grid exported.")
    return data


def _pick_day(raw: dict) -> date:
    if SCHEDULE_DAY:
        return date.fromisoformat(SCHEDULE_DAY)
    if raw.get("day"):
        return date.fromisoformat(raw["day"])
    return date.today()


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    raw = load_snapshot(SNAPSHOT_FILENAME)
    if raw is None:
        return 1

    # --- PHASE 1: INGESTION ---
    normalizer = RecordNormalizer()
    day = _pick_day(raw)
    snapshot = normalizer.normalize_snapshot(raw).for_day(day, GRID_CONFIG.timezone)

    selected_ids = raw.get("selectedTherapistIds") or []
    selected = [t for t in snapshot.therapists if t.id in selected_ids]
    resources = resolve_display_resources(selected, snapshot.therapists)

    # --- PHASE 2: LAYOUT ---
    logger.info(f"🗓️ Building grid for {day.isoformat()} ({len(resources)} therapists)")
    model = compute_schedule_grid(
        day,
        resources,
        snapshot.shifts,
        snapshot.appointments,
        GRID_CONFIG,
        now=datetime.now()
    )

    # --- PHASE 3: REPORTING ---
    print("\n" + "=" * 50)
    print("📊 SCHEDULE GRID REPORT")
    print("=" * 50)
    print(f"Day:              {day.isoformat()}")
    print(f"Slots:            {len(model.slots)}")
    print(f"Therapists:       {len(model.resources)}")
    print(f"Placed:           {len(model.placed_appointments)} / {len(snapshot.appointments)}")
    print(f"Rejected records: {len(normalizer.rejected)}")

    if model.issues:
        print("\n🔍 DATA ISSUES")
        for issue in model.issues:
            print(f"⚠️ [{issue.issue_type}] {issue.record_id}: {issue.reason}")

    # --- PHASE 4: EXPORT FOR FRONTEND ---
    export_grid(model, EXPORT_FILENAME)
    return 0


if __name__ == "__main__":
    sys.exit(main())

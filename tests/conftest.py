"""Shared test fixtures for the schedule grid tests."""

from datetime import date, datetime
from typing import Callable

import pytest

from models import Appointment, GridConfig, Therapist, WorkShift
from tests.helpers import DAY


@pytest.fixture
def day() -> date:
    return DAY


@pytest.fixture
def config() -> GridConfig:
    """Default grid: 06:00-21:00, 30 min slots, 60 px per hour."""
    return GridConfig()


@pytest.fixture
def anna() -> Therapist:
    return Therapist(id="th_1", name="Anna Bakker", practice_ids=["pr_c"])


@pytest.fixture
def pieter() -> Therapist:
    return Therapist(id="th_2", name="Pieter Jansen", practice_ids=["pr_n"])


@pytest.fixture
def make_shift() -> Callable[..., WorkShift]:
    counter = iter(range(1, 1000))

    def _make(therapist_id: str, start: datetime, end: datetime, **kwargs) -> WorkShift:
        kwargs.setdefault("id", f"ws_{next(counter)}")
        kwargs.setdefault("practice_id", "pr_c")
        kwargs.setdefault("practice_name", "Fysio Centrum")
        kwargs.setdefault("practice_color", "#4caf50")
        return WorkShift(therapist_id=therapist_id, start=start, end=end, **kwargs)

    return _make


@pytest.fixture
def make_appointment() -> Callable[..., Appointment]:
    counter = iter(range(1, 1000))

    def _make(therapist_id: str, start: datetime, **kwargs) -> Appointment:
        kwargs.setdefault("id", f"apt_{next(counter)}")
        kwargs.setdefault("patient_id", "pat_1")
        return Appointment(therapist_id=therapist_id, start=start, **kwargs)

    return _make

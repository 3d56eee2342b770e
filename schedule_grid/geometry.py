"""
Appointment Geometry Calculator.

Converts an appointment's effective interval into a vertical position
inside the day window:

    top    = minutes since window start / 60 * pixels_per_hour
    height = natural height, or for short events
             min(min_event_height, natural * damping)

Short events are never stretched beyond their own slot span, so the
minimum height only ever applies as a cap. Pure and idempotent.
"""

from typing import Optional, Tuple

from models import Appointment, GridConfig, TimeInterval
from .intervals import clamp_end, clamp_start, infer_end, minutes_between


def effective_interval(appointment: Appointment, config: GridConfig) -> TimeInterval:
    """The appointment's interval with the missing end filled in."""
    end = infer_end(
        appointment.start,
        appointment.end,
        appointment.duration_minutes,
        config.default_duration_minutes
    )
    return TimeInterval(start=appointment.start, end=end)


def event_height(natural_height: float, config: GridConfig) -> float:
    if natural_height >= config.min_event_height_px:
        return natural_height
    return min(config.min_event_height_px, natural_height * config.short_event_damping)


def vertical_geometry(interval: TimeInterval, window: TimeInterval, config: GridConfig) -> Tuple[float, float]:
    """(top, height) in px for an interval already clamped to `window`."""
    top = minutes_between(window.start, interval.start) / 60 * config.pixels_per_hour
    natural_height = interval.duration_minutes / 60 * config.pixels_per_hour
    return top, event_height(natural_height, config)


def clamp_to_window(interval: TimeInterval, window: TimeInterval) -> Optional[TimeInterval]:
    """
    Cut an interval at the window edges.
    Returns None if nothing of it is visible.
    """
    if interval.end <= window.start or interval.start >= window.end:
        return None
    return clamp_start(clamp_end(interval, window.end), window.start)

"""
Color derivation for grid cells and placed appointments.

Practice colors arrive as '#RRGGBB'. Shift backgrounds use the practice
color at 20% opacity by appending an alpha byte.
"""

from typing import Optional

from models import Appointment, WorkShift

OFF_DUTY_BACKGROUND = "rgba(0, 0, 0, 0.04)"
FALLBACK_SHIFT_BACKGROUND = "#7986cb"   # primary.light
FALLBACK_APPOINTMENT_BACKGROUND = "#ff4081"  # secondary.light
SHIFT_ALPHA = "33"

DARK_TEXT = "rgba(0, 0, 0, 0.87)"
LIGHT_TEXT = "#ffffff"


def _parse_hex(color: str) -> Optional[tuple]:
    value = color.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) not in (6, 8):
        return None
    try:
        return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return None


def shift_background(shift: Optional[WorkShift]) -> str:
    """Background for a cell covered by `shift` (or the off-duty color)."""
    if shift is None:
        return OFF_DUTY_BACKGROUND
    if shift.practice_color and _parse_hex(shift.practice_color):
        # Only append alpha to plain #RRGGBB
        base = shift.practice_color.strip()
        if len(base.lstrip("#")) == 6:
            return base + SHIFT_ALPHA
        return base
    return FALLBACK_SHIFT_BACKGROUND


def appointment_background(appointment: Appointment) -> str:
    if appointment.type_color and _parse_hex(appointment.type_color):
        return appointment.type_color
    return FALLBACK_APPOINTMENT_BACKGROUND


def relative_luminance(color: str) -> Optional[float]:
    """WCAG relative luminance of a hex color, or None if unreadable."""
    rgb = _parse_hex(color)
    if rgb is None:
        return None

    def channel(c: int) -> float:
        c = c / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_text(background: str) -> str:
    """
    Light text once it reaches a 3:1 contrast ratio with `background`,
    dark text otherwise.
    """
    luminance = relative_luminance(background)
    if luminance is None:
        return DARK_TEXT

    # Contrast ratio against white (L=1)
    against_light = 1.05 / (luminance + 0.05)
    return LIGHT_TEXT if against_light >= 3 else DARK_TEXT

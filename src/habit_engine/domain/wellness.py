"""Wellness domain models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WellnessLogEntry:
    """Daily mood/energy/focus ratings (1-5) and hours slept."""

    date_key: date
    mood: float
    energy: float
    focus: float
    sleep_hours: float

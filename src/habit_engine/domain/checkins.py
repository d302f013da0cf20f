"""Domain models for daily check-ins and streaks."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class CheckIn:
    """A user's self-report for one local calendar day."""

    date_key: date
    sugar_free: bool
    grams_consumed: float | None = None
    notes: str | None = None
    mood: int | None = None


@dataclass(frozen=True)
class StreakState:
    """Derived streak counters, owned by the streak calculator."""

    current_streak: int
    longest_streak: int
    last_check_in_instant: datetime | None
    start_date: date
    total_days_sugar_free: int
    # The ledger lacks days already counted in these totals, e.g. after
    # adopting a remote snapshot whose check-ins were not all downloaded.
    partial_history: bool = False


@dataclass(frozen=True)
class HabitEngineState:
    """Snapshot of engine state handed to presentation code."""

    streak: StreakState
    revision: int = 0

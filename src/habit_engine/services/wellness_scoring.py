"""Daily wellness scoring."""

from habit_engine.domain.wellness import WellnessLogEntry
from habit_engine.services.nutrition_scoring import finite_or_zero

RATING_SCALE = 5.0
MOOD_POINTS = 25.0
ENERGY_POINTS = 25.0
FOCUS_POINTS = 20.0
SLEEP_POINTS = 30.0

OPTIMAL_SLEEP = (7.0, 9.0)
ACCEPTABLE_SLEEP = (6.0, 10.0)
ACCEPTABLE_SLEEP_SHARE = 0.75
REDUCED_SLEEP_SHARE = 0.5
MAX_CREDITED_SLEEP = 14.0


def score_wellness(entry: WellnessLogEntry) -> int:
    """Return a 0-100 wellness score for one day."""
    score = (
        _rating_points(entry.mood, MOOD_POINTS)
        + _rating_points(entry.energy, ENERGY_POINTS)
        + _rating_points(entry.focus, FOCUS_POINTS)
        + sleep_points(entry.sleep_hours)
    )
    return max(0, min(100, round(score)))


def sleep_points(hours: float) -> float:
    """Non-monotonic sleep credit peaking in the 7-9 hour band."""
    slept = finite_or_zero(hours)
    if OPTIMAL_SLEEP[0] <= slept <= OPTIMAL_SLEEP[1]:
        return SLEEP_POINTS
    if ACCEPTABLE_SLEEP[0] <= slept <= ACCEPTABLE_SLEEP[1]:
        return SLEEP_POINTS * ACCEPTABLE_SLEEP_SHARE
    reduced = SLEEP_POINTS * REDUCED_SLEEP_SHARE
    if slept < ACCEPTABLE_SLEEP[0]:
        return reduced * slept / ACCEPTABLE_SLEEP[0]
    if slept >= MAX_CREDITED_SLEEP:
        return 0.0
    return reduced * (MAX_CREDITED_SLEEP - slept) / (
        MAX_CREDITED_SLEEP - ACCEPTABLE_SLEEP[1]
    )


def _rating_points(rating: float, weight: float) -> float:
    value = min(finite_or_zero(rating), RATING_SCALE)
    return value / RATING_SCALE * weight

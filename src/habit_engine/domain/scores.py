"""Domain models for composite scores and insights."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CompositeScore:
    """Scores for one window, each in 0..100."""

    overall: int
    nutrition: int
    wellness: int
    consistency: int


@dataclass(frozen=True)
class CompositeScoreSnapshot:
    """Composite score for the window [window_start, window_end)."""

    window_start: date
    window_end: date
    score: CompositeScore
    logged_days: int


@dataclass(frozen=True)
class ScoreDeltas:
    """Signed change from the previous window to the current one."""

    overall: int
    nutrition: int
    wellness: int


@dataclass(frozen=True)
class Insight:
    """Rule-based insight; lower priority values rank first."""

    title: str
    message: str
    priority: int


@dataclass(frozen=True)
class DailyScore:
    """Score for a single logged day."""

    day: date
    score: int


@dataclass(frozen=True)
class MacroBalance:
    """Share of macro calories, in whole percent."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class NutritionSummary:
    """Per logged day averages for a window."""

    logged_days: int
    avg_calories: float
    avg_protein_g: float
    avg_carbs_g: float
    avg_fat_g: float
    avg_added_sugar_g: float
    avg_fiber_g: float
    macro_balance: MacroBalance
    sugar_status: str
    recommendations: list[str]


@dataclass(frozen=True)
class Dashboard:
    """Everything the analytics view needs for one timeframe."""

    current: CompositeScoreSnapshot
    previous: CompositeScoreSnapshot
    deltas: ScoreDeltas
    insights: list[Insight]
    trend: list[DailyScore]
    nutrition: NutritionSummary


@dataclass(frozen=True)
class WindowStats:
    """Derived aggregates for one window; averages are None without data."""

    days: int
    logged_days: int
    food_days: int
    wellness_days: int
    nutrition: float
    wellness: float
    consistency: float
    overall: float
    avg_added_sugar_g: float | None
    avg_protein_g: float | None
    avg_fiber_g: float | None
    avg_mood: float | None
    avg_energy: float | None
    avg_focus: float | None
    avg_sleep_hours: float | None
    sugar_crash_days: int

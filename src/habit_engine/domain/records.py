"""Wire records shared by the local store and the remote profile store.

Field names mirror the domain dataclasses exactly so that a record written
locally and a record written remotely are interchangeable. Dates serialize as
``YYYY-MM-DD`` strings and instants as ISO-8601.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, TypeAdapter

from habit_engine.domain.checkins import CheckIn, StreakState
from habit_engine.domain.nutrition import FoodLogEntry, NutrientVector
from habit_engine.domain.wellness import WellnessLogEntry


class CheckInRecord(BaseModel):
    """Serialized check-in."""

    date_key: date
    sugar_free: bool
    grams_consumed: float | None = None
    notes: str | None = None
    mood: int | None = None

    @classmethod
    def from_domain(cls, check_in: CheckIn) -> "CheckInRecord":
        return cls(
            date_key=check_in.date_key,
            sugar_free=check_in.sugar_free,
            grams_consumed=check_in.grams_consumed,
            notes=check_in.notes,
            mood=check_in.mood,
        )

    def to_domain(self) -> CheckIn:
        return CheckIn(
            date_key=self.date_key,
            sugar_free=self.sugar_free,
            grams_consumed=self.grams_consumed,
            notes=self.notes,
            mood=self.mood,
        )


class StreakRecord(BaseModel):
    """Serialized streak state."""

    current_streak: int = Field(ge=0)
    longest_streak: int = Field(ge=0)
    last_check_in_instant: datetime | None = None
    start_date: date
    total_days_sugar_free: int = Field(ge=0)
    partial_history: bool = False

    @classmethod
    def from_domain(cls, streak: StreakState) -> "StreakRecord":
        return cls(
            current_streak=streak.current_streak,
            longest_streak=streak.longest_streak,
            last_check_in_instant=streak.last_check_in_instant,
            start_date=streak.start_date,
            total_days_sugar_free=streak.total_days_sugar_free,
            partial_history=streak.partial_history,
        )

    def to_domain(self) -> StreakState:
        return StreakState(
            current_streak=self.current_streak,
            longest_streak=max(self.longest_streak, self.current_streak),
            last_check_in_instant=self.last_check_in_instant,
            start_date=self.start_date,
            total_days_sugar_free=self.total_days_sugar_free,
            partial_history=self.partial_history,
        )


class FoodLogRecord(BaseModel):
    """Serialized food log entry with its stored score."""

    id: str
    date_key: date
    name: str = ""
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    added_sugar_g: float = 0.0
    natural_sugar_g: float = 0.0
    fiber_g: float = 0.0
    saturated_fat_g: float = 0.0
    sodium_mg: float = 0.0
    portion_percent: float = 100.0
    health_score: int = Field(ge=0, le=100)

    @classmethod
    def from_domain(cls, entry: FoodLogEntry) -> "FoodLogRecord":
        nutrients = entry.nutrients
        return cls(
            id=entry.id,
            date_key=entry.date_key,
            name=entry.name,
            calories=nutrients.calories,
            protein_g=nutrients.protein_g,
            carbs_g=nutrients.carbs_g,
            fat_g=nutrients.fat_g,
            added_sugar_g=nutrients.added_sugar_g,
            natural_sugar_g=nutrients.natural_sugar_g,
            fiber_g=nutrients.fiber_g,
            saturated_fat_g=nutrients.saturated_fat_g,
            sodium_mg=nutrients.sodium_mg,
            portion_percent=entry.portion_percent,
            health_score=entry.health_score,
        )

    def to_domain(self) -> FoodLogEntry:
        return FoodLogEntry(
            id=self.id,
            date_key=self.date_key,
            name=self.name,
            nutrients=NutrientVector(
                calories=self.calories,
                protein_g=self.protein_g,
                carbs_g=self.carbs_g,
                fat_g=self.fat_g,
                added_sugar_g=self.added_sugar_g,
                natural_sugar_g=self.natural_sugar_g,
                fiber_g=self.fiber_g,
                saturated_fat_g=self.saturated_fat_g,
                sodium_mg=self.sodium_mg,
            ),
            portion_percent=self.portion_percent,
            health_score=self.health_score,
        )


class WellnessRecord(BaseModel):
    """Serialized wellness log entry."""

    date_key: date
    mood: float = 0.0
    energy: float = 0.0
    focus: float = 0.0
    sleep_hours: float = 0.0

    @classmethod
    def from_domain(cls, entry: WellnessLogEntry) -> "WellnessRecord":
        return cls(
            date_key=entry.date_key,
            mood=entry.mood,
            energy=entry.energy,
            focus=entry.focus,
            sleep_hours=entry.sleep_hours,
        )

    def to_domain(self) -> WellnessLogEntry:
        return WellnessLogEntry(
            date_key=self.date_key,
            mood=self.mood,
            energy=self.energy,
            focus=self.focus,
            sleep_hours=self.sleep_hours,
        )


CHECK_IN_LIST = TypeAdapter(list[CheckInRecord])
FOOD_LOG_LIST = TypeAdapter(list[FoodLogRecord])
WELLNESS_LIST = TypeAdapter(list[WellnessRecord])
STREAK_DOCUMENT = TypeAdapter(StreakRecord)

"""Pydantic models for API request bodies."""

from datetime import date

from pydantic import BaseModel, Field

from habit_engine.domain.nutrition import NutrientVector


class CheckInRequest(BaseModel):
    """Daily check-in payload; the date defaults to today."""

    date_key: date | None = None
    sugar_free: bool
    grams_consumed: float | None = Field(default=None, ge=0)
    notes: str | None = None
    mood: int | None = Field(default=None, ge=1, le=5)


class FoodLogRequest(BaseModel):
    """Food entry payload with nutrients for the full base portion."""

    id: str | None = None
    date_key: date | None = None
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
    portion_percent: float = Field(default=100.0, ge=0)

    def nutrients(self) -> NutrientVector:
        """Return the nutrient vector described by the payload."""
        return NutrientVector(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            added_sugar_g=self.added_sugar_g,
            natural_sugar_g=self.natural_sugar_g,
            fiber_g=self.fiber_g,
            saturated_fat_g=self.saturated_fat_g,
            sodium_mg=self.sodium_mg,
        )


class WellnessLogRequest(BaseModel):
    """Wellness payload; ratings use a 1-5 scale."""

    date_key: date | None = None
    mood: float = Field(ge=1, le=5)
    energy: float = Field(ge=1, le=5)
    focus: float = Field(ge=1, le=5)
    sleep_hours: float = Field(ge=0, le=24)


class UsernameRequest(BaseModel):
    """Username claim payload."""

    username: str

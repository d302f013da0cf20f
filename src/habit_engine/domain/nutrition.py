"""Nutrition domain models."""

from dataclasses import dataclass, fields, replace
from datetime import date


@dataclass(frozen=True)
class NutrientVector:
    """Nutrients for a food item; absent values are zero."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    added_sugar_g: float = 0.0
    natural_sugar_g: float = 0.0
    fiber_g: float = 0.0
    saturated_fat_g: float = 0.0
    sodium_mg: float = 0.0

    def scaled(self, portion_percent: float) -> "NutrientVector":
        """Return the vector scaled to the eaten portion."""
        factor = portion_percent / 100.0
        return replace(
            self,
            **{item.name: getattr(self, item.name) * factor for item in fields(self)},
        )


@dataclass(frozen=True)
class FoodLogEntry:
    """Logged food item with its score frozen at log time."""

    id: str
    date_key: date
    name: str
    nutrients: NutrientVector
    portion_percent: float
    health_score: int

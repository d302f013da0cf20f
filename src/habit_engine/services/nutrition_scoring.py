"""Food item health scoring.

Additive model around a neutral base of 70: nutrient-dense foods earn protein
and fiber bonuses, while added sugar, saturated fat, sodium and very large
portions cost points. Thresholds follow WHO (added sugar under 10 % of
energy), AHA (saturated fat under 7 % of energy) and FDA (sodium under
2300 mg/day) guidance.
"""

import math
from dataclasses import fields, replace
from datetime import date
from uuid import uuid4

from habit_engine.domain.nutrition import FoodLogEntry, NutrientVector

BASE_SCORE = 70.0

PROTEIN_BONUS_MAX = 15.0
PROTEIN_DENSITY_TARGET = 8.0  # grams per 100 kcal

FIBER_BONUS_MAX = 10.0
FIBER_TARGET_G = 5.0

ADDED_SUGAR_PENALTY_MAX = 30.0
ADDED_SUGAR_FREE_PERCENT = 5.0
ADDED_SUGAR_HIGH_PERCENT = 30.0

NATURAL_SUGAR_PENALTY = 5.0
NATURAL_SUGAR_HIGH_PERCENT = 40.0

SATURATED_FAT_PENALTY_MAX = 15.0
SATURATED_FAT_FREE_PERCENT = 7.0
SATURATED_FAT_HIGH_PERCENT = 15.0

SODIUM_PENALTY_MAX = 10.0
SODIUM_FREE_MG = 400.0
SODIUM_HIGH_MG = 800.0

HIGH_CALORIE_THRESHOLD = 600.0
HIGH_CALORIE_PENALTY = 5.0

KCAL_PER_G_CARB = 4.0
KCAL_PER_G_FAT = 9.0


def score_food(nutrients: NutrientVector) -> int:
    """Return a 0-100 health score for one eaten portion."""
    clean = sanitize_nutrients(nutrients)
    score = BASE_SCORE
    score += _protein_bonus(clean)
    score += FIBER_BONUS_MAX * _ramp(clean.fiber_g, 0.0, FIBER_TARGET_G)
    score -= ADDED_SUGAR_PENALTY_MAX * _ramp(
        _percent_of_calories(clean.added_sugar_g * KCAL_PER_G_CARB, clean.calories),
        ADDED_SUGAR_FREE_PERCENT,
        ADDED_SUGAR_HIGH_PERCENT,
    )
    natural_percent = _percent_of_calories(
        clean.natural_sugar_g * KCAL_PER_G_CARB, clean.calories
    )
    if natural_percent > NATURAL_SUGAR_HIGH_PERCENT:
        score -= NATURAL_SUGAR_PENALTY
    score -= SATURATED_FAT_PENALTY_MAX * _ramp(
        _percent_of_calories(clean.saturated_fat_g * KCAL_PER_G_FAT, clean.calories),
        SATURATED_FAT_FREE_PERCENT,
        SATURATED_FAT_HIGH_PERCENT,
    )
    score -= SODIUM_PENALTY_MAX * _ramp(clean.sodium_mg, SODIUM_FREE_MG, SODIUM_HIGH_MG)
    if clean.calories > HIGH_CALORIE_THRESHOLD:
        score -= HIGH_CALORIE_PENALTY
    return _clamp_score(score)


def build_food_entry(
    date_key: date,
    name: str,
    nutrients: NutrientVector,
    portion_percent: float = 100.0,
    entry_id: str | None = None,
) -> FoodLogEntry:
    """Scale nutrients to the eaten portion and freeze the score."""
    portion = finite_or_zero(portion_percent)
    eaten = sanitize_nutrients(nutrients).scaled(portion)
    return FoodLogEntry(
        id=entry_id or str(uuid4()),
        date_key=date_key,
        name=name,
        nutrients=eaten,
        portion_percent=portion,
        health_score=score_food(eaten),
    )


def sanitize_nutrients(nutrients: NutrientVector) -> NutrientVector:
    """Replace missing, negative or non-finite fields with zero."""
    return replace(
        nutrients,
        **{
            item.name: finite_or_zero(getattr(nutrients, item.name))
            for item in fields(nutrients)
        },
    )


def finite_or_zero(value: object) -> float:
    """Coerce a value to a non-negative finite float, else 0.0."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _protein_bonus(nutrients: NutrientVector) -> float:
    if nutrients.calories <= 0:
        return 0.0
    density = nutrients.protein_g / (nutrients.calories / 100.0)
    return PROTEIN_BONUS_MAX * _ramp(density, 0.0, PROTEIN_DENSITY_TARGET)


def _percent_of_calories(kcal: float, calories: float) -> float:
    if kcal <= 0:
        return 0.0
    if calories <= 0:
        # Energy from a nutrient with no declared calories counts as all of it.
        return 100.0
    return kcal / calories * 100.0


def _ramp(value: float, low: float, high: float) -> float:
    """Linear 0..1 ramp between low and high."""
    if value <= low:
        return 0.0
    if value >= high:
        return 1.0
    return (value - low) / (high - low)


def _clamp_score(score: float) -> int:
    return max(0, min(100, round(score)))

"""Per-window nutrition averages and recommendations."""

from collections import defaultdict
from datetime import date

from habit_engine.domain.nutrition import FoodLogEntry
from habit_engine.domain.scores import MacroBalance, NutritionSummary

KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_CARB = 4.0
KCAL_PER_G_FAT = 9.0

SUGAR_STATUS_LIMITS = (
    (25.0, "excellent"),
    (50.0, "good"),
    (75.0, "high"),
)
VERY_HIGH_SUGAR = "very-high"

EMPTY_RECOMMENDATION = "Start logging food to see nutrition insights"
BALANCED_RECOMMENDATION = "Great macro balance! Keep up the good work."


def summarize_nutrition(entries: list[FoodLogEntry]) -> NutritionSummary:
    """Average food intake per logged day."""
    by_day: dict[date, list[FoodLogEntry]] = defaultdict(list)
    for entry in entries:
        by_day[entry.date_key].append(entry)

    days = len(by_day)
    if days == 0:
        return NutritionSummary(
            logged_days=0,
            avg_calories=0.0,
            avg_protein_g=0.0,
            avg_carbs_g=0.0,
            avg_fat_g=0.0,
            avg_added_sugar_g=0.0,
            avg_fiber_g=0.0,
            macro_balance=MacroBalance(protein=0, carbs=0, fat=0),
            sugar_status=SUGAR_STATUS_LIMITS[0][1],
            recommendations=[EMPTY_RECOMMENDATION],
        )

    def average(attribute: str) -> float:
        total = sum(getattr(entry.nutrients, attribute) for entry in entries)
        return round(total / days, 1)

    avg_protein = average("protein_g")
    avg_carbs = average("carbs_g")
    avg_fat = average("fat_g")
    avg_added_sugar = average("added_sugar_g")
    avg_fiber = average("fiber_g")
    balance = _macro_balance(avg_protein, avg_carbs, avg_fat)
    return NutritionSummary(
        logged_days=days,
        avg_calories=average("calories"),
        avg_protein_g=avg_protein,
        avg_carbs_g=avg_carbs,
        avg_fat_g=avg_fat,
        avg_added_sugar_g=avg_added_sugar,
        avg_fiber_g=avg_fiber,
        macro_balance=balance,
        sugar_status=sugar_status(avg_added_sugar),
        recommendations=_recommendations(
            avg_added_sugar, avg_protein, avg_fiber, balance
        ),
    )


def sugar_status(avg_added_sugar_g: float) -> str:
    """Classify average daily added sugar."""
    for limit, status in SUGAR_STATUS_LIMITS:
        if avg_added_sugar_g <= limit:
            return status
    return VERY_HIGH_SUGAR


def _macro_balance(protein_g: float, carbs_g: float, fat_g: float) -> MacroBalance:
    protein_kcal = protein_g * KCAL_PER_G_PROTEIN
    carbs_kcal = carbs_g * KCAL_PER_G_CARB
    fat_kcal = fat_g * KCAL_PER_G_FAT
    total = protein_kcal + carbs_kcal + fat_kcal
    if total <= 0:
        return MacroBalance(protein=0, carbs=0, fat=0)
    return MacroBalance(
        protein=round(protein_kcal / total * 100),
        carbs=round(carbs_kcal / total * 100),
        fat=round(fat_kcal / total * 100),
    )


def _recommendations(
    added_sugar_g: float, protein_g: float, fiber_g: float, balance: MacroBalance
) -> list[str]:
    recommendations: list[str] = []
    if added_sugar_g > 50:
        recommendations.append("Reduce added sugars - try whole fruits instead")
    if protein_g < 50:
        recommendations.append("Increase protein to 15-20% of calories for satiety")
    if fiber_g < 25:
        recommendations.append("Add more vegetables and whole grains for fiber")
    if balance.protein < 25:
        recommendations.append("Balance your diet with more protein-rich foods")
    if balance.fat > 35:
        recommendations.append("Consider reducing fat intake slightly")
    return recommendations or [BALANCED_RECOMMENDATION]

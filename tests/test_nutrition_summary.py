"""Tests for the nutrition summary."""

from datetime import date

from habit_engine.domain.nutrition import NutrientVector
from habit_engine.services.nutrition_scoring import build_food_entry
from habit_engine.services.nutrition_summary import (
    BALANCED_RECOMMENDATION,
    EMPTY_RECOMMENDATION,
    summarize_nutrition,
    sugar_status,
)


def test_empty_summary() -> None:
    summary = summarize_nutrition([])

    assert summary.logged_days == 0
    assert summary.avg_calories == 0.0
    assert summary.sugar_status == "excellent"
    assert summary.recommendations == [EMPTY_RECOMMENDATION]


def test_averages_are_per_logged_day() -> None:
    entries = [
        build_food_entry(
            date(2024, 3, 1),
            "breakfast",
            NutrientVector(calories=400, protein_g=20, carbs_g=50, fat_g=10),
        ),
        build_food_entry(
            date(2024, 3, 1),
            "lunch",
            NutrientVector(calories=600, protein_g=40, carbs_g=50, fat_g=20),
        ),
        build_food_entry(
            date(2024, 3, 3),
            "dinner",
            NutrientVector(calories=500, protein_g=30, carbs_g=50, fat_g=15),
        ),
    ]

    summary = summarize_nutrition(entries)

    assert summary.logged_days == 2
    assert summary.avg_calories == 750.0
    assert summary.avg_protein_g == 45.0
    assert summary.avg_carbs_g == 75.0
    assert summary.avg_fat_g == 22.5
    # 180 kcal protein, 300 kcal carbs, 202.5 kcal fat.
    assert summary.macro_balance.protein == 26
    assert summary.macro_balance.carbs == 44
    assert summary.macro_balance.fat == 30


def test_sugar_status_bands() -> None:
    assert sugar_status(25) == "excellent"
    assert sugar_status(25.1) == "good"
    assert sugar_status(50) == "good"
    assert sugar_status(75) == "high"
    assert sugar_status(75.1) == "very-high"


def test_recommendations_flag_sugar_and_fiber() -> None:
    entries = [
        build_food_entry(
            date(2024, 3, 1),
            "dessert",
            NutrientVector(calories=900, protein_g=60, carbs_g=120, added_sugar_g=80),
        )
    ]

    summary = summarize_nutrition(entries)

    assert summary.sugar_status == "very-high"
    assert "Reduce added sugars - try whole fruits instead" in summary.recommendations
    assert "Add more vegetables and whole grains for fiber" in summary.recommendations


def test_balanced_diet_gets_praise() -> None:
    entries = [
        build_food_entry(
            date(2024, 3, 1),
            "day",
            NutrientVector(
                calories=2000, protein_g=130, carbs_g=200, fat_g=60, fiber_g=30
            ),
        )
    ]

    assert summarize_nutrition(entries).recommendations == [BALANCED_RECOMMENDATION]

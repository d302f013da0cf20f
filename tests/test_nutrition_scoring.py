"""Tests for food scoring."""

import math
from datetime import date

from habit_engine.domain.nutrition import NutrientVector
from habit_engine.services.nutrition_scoring import (
    build_food_entry,
    finite_or_zero,
    score_food,
)


def test_empty_vector_scores_base() -> None:
    assert score_food(NutrientVector()) == 70


def test_sugary_drink_is_capped_by_added_sugar_penalty() -> None:
    soda = NutrientVector(
        calories=139,
        added_sugar_g=39,
        protein_g=0,
        fiber_g=0,
        saturated_fat_g=0,
        sodium_mg=45,
    )

    assert score_food(soda) == 40


def test_protein_and_fiber_bonuses_max_out() -> None:
    chicken_salad = NutrientVector(calories=200, protein_g=20, fiber_g=6)

    assert score_food(chicken_salad) == 95


def test_protein_bonus_is_linear() -> None:
    # 4 g per 100 kcal is half of the density target.
    assert score_food(NutrientVector(calories=100, protein_g=4)) == 78


def test_added_sugar_penalty_starts_above_five_percent() -> None:
    # 1 g of sugar is 4 kcal, 4 % of 100 kcal.
    assert score_food(NutrientVector(calories=100, added_sugar_g=1)) == 70


def test_natural_sugar_penalty_only_above_forty_percent() -> None:
    apple = NutrientVector(calories=100, natural_sugar_g=10)
    very_sweet_fruit = NutrientVector(calories=100, natural_sugar_g=15)

    assert score_food(apple) == 70
    assert score_food(very_sweet_fruit) == 65


def test_saturated_fat_sodium_and_calorie_penalties() -> None:
    burger = NutrientVector(calories=800, saturated_fat_g=20, sodium_mg=1200)

    # 180 kcal of 800 is 22.5 % saturated fat: full -15, sodium -10, calories -5.
    assert score_food(burger) == 40


def test_score_is_clamped() -> None:
    worst = NutrientVector(
        calories=2000,
        added_sugar_g=400,
        natural_sugar_g=400,
        saturated_fat_g=200,
        sodium_mg=5000,
    )

    assert 0 <= score_food(worst) <= 100
    assert score_food(worst) == 5


def test_invalid_fields_count_as_zero() -> None:
    broken = NutrientVector(
        calories=math.nan,
        protein_g=-5,
        added_sugar_g=math.inf,
        sodium_mg=None,  # type: ignore[arg-type]
    )

    assert score_food(broken) == 70


def test_finite_or_zero() -> None:
    assert finite_or_zero(3) == 3.0
    assert finite_or_zero(-1) == 0.0
    assert finite_or_zero(True) == 0.0
    assert finite_or_zero("12") == 0.0
    assert finite_or_zero(math.nan) == 0.0


def test_build_food_entry_scales_portion_and_freezes_score() -> None:
    cookie = NutrientVector(calories=100, added_sugar_g=10, protein_g=1)

    entry = build_food_entry(date(2024, 3, 1), "Cookie", cookie, portion_percent=200)

    assert entry.nutrients.calories == 200
    assert entry.nutrients.added_sugar_g == 20
    assert entry.portion_percent == 200
    assert entry.health_score == score_food(entry.nutrients)
    assert entry.id


def test_build_food_entry_keeps_given_id() -> None:
    entry = build_food_entry(
        date(2024, 3, 1), "Tea", NutrientVector(), entry_id="entry-1"
    )

    assert entry.id == "entry-1"
    assert entry.health_score == 70

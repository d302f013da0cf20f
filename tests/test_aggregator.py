"""Tests for windowed composite scores."""

from datetime import date, timedelta

import pytest

from habit_engine.domain.nutrition import FoodLogEntry, NutrientVector
from habit_engine.domain.wellness import WellnessLogEntry
from habit_engine.services.aggregator import Aggregator, Timeframe, window_for

TODAY = date(2024, 3, 7)
WEEK_START = date(2024, 3, 1)
WEEK_END = date(2024, 3, 8)


def _food(day: int, score: int, **nutrients: float) -> FoodLogEntry:
    return FoodLogEntry(
        id=f"food-{day}-{score}",
        date_key=date(2024, 3, day),
        name="item",
        nutrients=NutrientVector(**nutrients),
        portion_percent=100.0,
        health_score=score,
    )


def _wellness(day: int, rating: float = 5.0, sleep: float = 8.0) -> WellnessLogEntry:
    return WellnessLogEntry(
        date_key=date(2024, 3, day),
        mood=rating,
        energy=rating,
        focus=rating,
        sleep_hours=sleep,
    )


def test_window_for_ends_with_today() -> None:
    assert window_for(Timeframe.WEEK, TODAY) == (WEEK_START, WEEK_END)
    start, end = window_for(Timeframe.MONTH, TODAY)
    assert (end - start).days == 30
    assert Timeframe.YEAR.days == 365


def test_days_without_food_do_not_pull_nutrition_down() -> None:
    food = [_food(2, 90), _food(4, 30), _food(6, 30)]
    wellness = [_wellness(2), _wellness(3)]

    snapshot = Aggregator().snapshot(food, wellness, WEEK_START, WEEK_END)

    assert snapshot.score.nutrition == 50
    assert snapshot.score.wellness == 100
    assert snapshot.score.consistency == 57
    assert snapshot.score.overall == 71
    assert snapshot.logged_days == 4


def test_nutrition_uses_daily_means() -> None:
    food = [_food(2, 100), _food(2, 80), _food(4, 30)]

    snapshot = Aggregator().snapshot(food, [], WEEK_START, WEEK_END)

    assert snapshot.score.nutrition == 60
    assert snapshot.score.wellness == 0


def test_empty_window_scores_zero() -> None:
    snapshot = Aggregator().snapshot([], [], WEEK_START, WEEK_END)

    assert snapshot.score.overall == 0
    assert snapshot.score.nutrition == 0
    assert snapshot.score.wellness == 0
    assert snapshot.score.consistency == 0
    assert snapshot.logged_days == 0


def test_consistency_saturates_after_a_week_of_logging() -> None:
    wellness = [_wellness(day) for day in range(1, 8)]

    stats = Aggregator().stats([], wellness, date(2024, 2, 7), WEEK_END)

    assert stats.consistency == pytest.approx(100.0)


def test_entries_outside_window_are_ignored() -> None:
    food = [_food(1, 10), _food(8, 10), _food(5, 80)]

    snapshot = Aggregator().snapshot(food, [], date(2024, 3, 2), WEEK_END)

    assert snapshot.score.nutrition == 80


def test_compare_uses_preceding_window_of_equal_length() -> None:
    aggregator = Aggregator()
    food = [_food(3, 80), _food(10, 40)]
    wellness = [_wellness(10, rating=3, sleep=8)]
    second_start, second_end = date(2024, 3, 8), date(2024, 3, 15)

    current, previous, deltas = aggregator.compare(
        food, wellness, second_start, second_end
    )

    assert previous == aggregator.snapshot(food, wellness, WEEK_START, WEEK_END)
    assert current == aggregator.snapshot(food, wellness, second_start, second_end)
    assert previous.window_end == current.window_start
    assert deltas.overall == current.score.overall - previous.score.overall
    assert deltas.nutrition == -40
    assert deltas.wellness == 72


def test_compare_is_antisymmetric_when_windows_swap() -> None:
    aggregator = Aggregator()
    food = [_food(3, 80), _food(10, 40)]
    first = aggregator.snapshot(food, [], WEEK_START, WEEK_END)
    second = aggregator.snapshot(food, [], WEEK_END, WEEK_END + timedelta(days=7))

    _, _, forward = aggregator.compare(
        food, [], WEEK_END, WEEK_END + timedelta(days=7)
    )

    assert forward.nutrition == second.score.nutrition - first.score.nutrition
    assert -forward.nutrition == first.score.nutrition - second.score.nutrition


def test_daily_trend_averages_available_components() -> None:
    food = [_food(2, 90)]
    wellness = [_wellness(2), _wellness(4, rating=5, sleep=8)]

    trend = Aggregator().daily_trend(food, wellness, WEEK_START, WEEK_END)

    assert [(point.day.day, point.score) for point in trend] == [(2, 95), (4, 100)]


def test_sugar_crash_days_need_high_sugar_and_low_energy() -> None:
    food = [
        _food(2, 30, added_sugar_g=60),
        _food(3, 30, added_sugar_g=60),
        _food(4, 30, added_sugar_g=60),
    ]
    wellness = [
        _wellness(2, rating=2, sleep=8),
        _wellness(3, rating=1, sleep=8),
        _wellness(4, rating=4, sleep=8),
    ]

    stats = Aggregator().stats(food, wellness, WEEK_START, WEEK_END)

    assert stats.sugar_crash_days == 2
    assert stats.avg_added_sugar_g == pytest.approx(60.0)


def test_dashboard_bundles_everything() -> None:
    food = [_food(6, 90, calories=300, protein_g=30, added_sugar_g=5)]
    wellness = [_wellness(6)]

    dashboard = Aggregator().dashboard(food, wellness, Timeframe.WEEK, TODAY)

    assert dashboard.current.window_start == WEEK_START
    assert dashboard.current.window_end == WEEK_END
    assert dashboard.previous.window_end == WEEK_START
    assert dashboard.deltas.nutrition == 90
    assert [point.day for point in dashboard.trend] == [date(2024, 3, 6)]
    assert dashboard.nutrition.logged_days == 1
    assert 0 < len(dashboard.insights) <= 4

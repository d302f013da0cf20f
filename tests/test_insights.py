"""Tests for rule-based insights."""

from dataclasses import replace

from habit_engine.domain.scores import WindowStats
from habit_engine.services.insights import INSIGHT_RULES, generate_insights

EMPTY = WindowStats(
    days=7,
    logged_days=0,
    food_days=0,
    wellness_days=0,
    nutrition=0.0,
    wellness=0.0,
    consistency=0.0,
    overall=0.0,
    avg_added_sugar_g=None,
    avg_protein_g=None,
    avg_fiber_g=None,
    avg_mood=None,
    avg_energy=None,
    avg_focus=None,
    avg_sleep_hours=None,
    sugar_crash_days=0,
)


def test_no_data_suggests_logging() -> None:
    insights = generate_insights(EMPTY)

    assert [insight.title for insight in insights] == ["Start logging"]


def test_problems_rank_before_praise_and_are_capped() -> None:
    stats = replace(
        EMPTY,
        logged_days=5,
        food_days=5,
        wellness_days=5,
        overall=55.0,
        avg_added_sugar_g=70.0,
        avg_protein_g=30.0,
        avg_fiber_g=10.0,
        avg_mood=2.5,
        avg_energy=2.0,
        avg_sleep_hours=6.0,
        sugar_crash_days=3,
    )

    insights = generate_insights(stats)

    assert [insight.title for insight in insights] == [
        "Sugar crashes",
        "High sugar intake",
        "Short on sleep",
        "Low mood or energy",
    ]
    assert [insight.priority for insight in insights] == [1, 2, 3, 4]


def test_healthy_week_gets_positive_feedback() -> None:
    stats = replace(
        EMPTY,
        logged_days=7,
        food_days=7,
        wellness_days=7,
        overall=85.0,
        avg_added_sugar_g=10.0,
        avg_protein_g=90.0,
        avg_fiber_g=30.0,
        avg_mood=4.5,
        avg_energy=4.5,
        avg_sleep_hours=8.0,
    )

    titles = [insight.title for insight in generate_insights(stats)]

    assert titles == ["Sleep is paying off", "Sugar under control", "Excellent habits"]


def test_good_progress_band() -> None:
    stats = replace(EMPTY, logged_days=2, overall=65.0)

    titles = [insight.title for insight in generate_insights(stats)]

    assert titles == ["Good progress"]


def test_same_stats_give_same_insights() -> None:
    stats = replace(EMPTY, logged_days=3, overall=70.0, avg_protein_g=20.0)

    assert generate_insights(stats) == generate_insights(stats)


def test_limit_and_priorities_are_unique() -> None:
    priorities = [rule.priority for rule in INSIGHT_RULES]

    assert len(priorities) == len(set(priorities))
    assert generate_insights(EMPTY, limit=0) == []

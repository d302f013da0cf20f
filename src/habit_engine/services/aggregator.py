"""Windowed composite health scores with period-over-period comparison."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from statistics import fmean

from habit_engine.domain.nutrition import FoodLogEntry
from habit_engine.domain.scores import (
    CompositeScore,
    CompositeScoreSnapshot,
    DailyScore,
    Dashboard,
    ScoreDeltas,
    WindowStats,
)
from habit_engine.domain.wellness import WellnessLogEntry
from habit_engine.services.insights import MAX_INSIGHTS, generate_insights
from habit_engine.services.nutrition_summary import summarize_nutrition
from habit_engine.services.wellness_scoring import score_wellness

NUTRITION_WEIGHT = 0.45
WELLNESS_WEIGHT = 0.40
CONSISTENCY_WEIGHT = 0.15
CONSISTENCY_SATURATION_DAYS = 7

HIGH_SUGAR_DAY_G = 50.0
LOW_ENERGY_RATING = 2.0


class Timeframe(Enum):
    """Supported trailing windows, in days."""

    WEEK = 7
    MONTH = 30
    YEAR = 365

    @property
    def days(self) -> int:
        return self.value


def window_for(timeframe: Timeframe, today: date) -> tuple[date, date]:
    """Return [start, end) for a window ending with today."""
    end = today + timedelta(days=1)
    return end - timedelta(days=timeframe.days), end


@dataclass
class Aggregator:
    """Computes window scores, comparisons, trends and insights."""

    max_insights: int = MAX_INSIGHTS

    def stats(
        self,
        food: list[FoodLogEntry],
        wellness: list[WellnessLogEntry],
        start: date,
        end: date,
    ) -> WindowStats:
        """Derive aggregates for entries dated in [start, end)."""
        food_by_day = _food_by_day(food, start, end)
        wellness_by_day = _wellness_by_day(wellness, start, end)

        daily_nutrition = [
            fmean(entry.health_score for entry in entries)
            for entries in food_by_day.values()
        ]
        daily_wellness = [score_wellness(entry) for entry in wellness_by_day.values()]
        nutrition = fmean(daily_nutrition) if daily_nutrition else 0.0
        wellness_score = fmean(daily_wellness) if daily_wellness else 0.0

        logged = set(food_by_day) | set(wellness_by_day)
        days = (end - start).days
        consistency = _consistency(logged, days)
        overall = (
            NUTRITION_WEIGHT * nutrition
            + WELLNESS_WEIGHT * wellness_score
            + CONSISTENCY_WEIGHT * consistency
        )

        food_days = len(food_by_day)
        wellness_entries = list(wellness_by_day.values())

        def per_food_day(attribute: str) -> float | None:
            if not food_days:
                return None
            total = sum(
                getattr(entry.nutrients, attribute)
                for entries in food_by_day.values()
                for entry in entries
            )
            return total / food_days

        def wellness_mean(attribute: str) -> float | None:
            if not wellness_entries:
                return None
            return fmean(getattr(entry, attribute) for entry in wellness_entries)

        return WindowStats(
            days=days,
            logged_days=len(logged),
            food_days=food_days,
            wellness_days=len(wellness_entries),
            nutrition=nutrition,
            wellness=wellness_score,
            consistency=consistency,
            overall=overall,
            avg_added_sugar_g=per_food_day("added_sugar_g"),
            avg_protein_g=per_food_day("protein_g"),
            avg_fiber_g=per_food_day("fiber_g"),
            avg_mood=wellness_mean("mood"),
            avg_energy=wellness_mean("energy"),
            avg_focus=wellness_mean("focus"),
            avg_sleep_hours=wellness_mean("sleep_hours"),
            sugar_crash_days=_sugar_crash_days(food_by_day, wellness_by_day),
        )

    def snapshot(
        self,
        food: list[FoodLogEntry],
        wellness: list[WellnessLogEntry],
        start: date,
        end: date,
    ) -> CompositeScoreSnapshot:
        """Return the composite score for [start, end)."""
        return _to_snapshot(self.stats(food, wellness, start, end), start, end)

    def compare(
        self,
        food: list[FoodLogEntry],
        wellness: list[WellnessLogEntry],
        start: date,
        end: date,
    ) -> tuple[CompositeScoreSnapshot, CompositeScoreSnapshot, ScoreDeltas]:
        """Score [start, end) and the equally long window right before it."""
        length = end - start
        current = self.snapshot(food, wellness, start, end)
        previous = self.snapshot(food, wellness, start - length, start)
        deltas = ScoreDeltas(
            overall=current.score.overall - previous.score.overall,
            nutrition=current.score.nutrition - previous.score.nutrition,
            wellness=current.score.wellness - previous.score.wellness,
        )
        return current, previous, deltas

    def daily_trend(
        self,
        food: list[FoodLogEntry],
        wellness: list[WellnessLogEntry],
        start: date,
        end: date,
    ) -> list[DailyScore]:
        """Per-day scores for days that have any data."""
        food_by_day = _food_by_day(food, start, end)
        wellness_by_day = _wellness_by_day(wellness, start, end)
        trend = []
        for day in sorted(set(food_by_day) | set(wellness_by_day)):
            components = []
            if day in food_by_day:
                components.append(
                    fmean(entry.health_score for entry in food_by_day[day])
                )
            if day in wellness_by_day:
                components.append(score_wellness(wellness_by_day[day]))
            trend.append(DailyScore(day=day, score=round(fmean(components))))
        return trend

    def dashboard(
        self,
        food: list[FoodLogEntry],
        wellness: list[WellnessLogEntry],
        timeframe: Timeframe,
        today: date,
    ) -> Dashboard:
        """Build the full analytics view for a timeframe ending today."""
        start, end = window_for(timeframe, today)
        current, previous, deltas = self.compare(food, wellness, start, end)
        stats = self.stats(food, wellness, start, end)
        return Dashboard(
            current=current,
            previous=previous,
            deltas=deltas,
            insights=generate_insights(stats, limit=self.max_insights),
            trend=self.daily_trend(food, wellness, start, end),
            nutrition=summarize_nutrition(
                [entry for entry in food if start <= entry.date_key < end]
            ),
        )


def _to_snapshot(
    stats: WindowStats, start: date, end: date
) -> CompositeScoreSnapshot:
    return CompositeScoreSnapshot(
        window_start=start,
        window_end=end,
        score=CompositeScore(
            overall=_clamp(stats.overall),
            nutrition=_clamp(stats.nutrition),
            wellness=_clamp(stats.wellness),
            consistency=_clamp(stats.consistency),
        ),
        logged_days=stats.logged_days,
    )


def _food_by_day(
    food: list[FoodLogEntry], start: date, end: date
) -> dict[date, list[FoodLogEntry]]:
    by_day: dict[date, list[FoodLogEntry]] = defaultdict(list)
    for entry in food:
        if start <= entry.date_key < end:
            by_day[entry.date_key].append(entry)
    return dict(by_day)


def _wellness_by_day(
    wellness: list[WellnessLogEntry], start: date, end: date
) -> dict[date, WellnessLogEntry]:
    return {
        entry.date_key: entry for entry in wellness if start <= entry.date_key < end
    }


def _consistency(logged: set[date], days: int) -> float:
    """Share of logged days, saturating after a week of consecutive logging."""
    if days <= 0 or not logged:
        return 0.0
    fraction = len(logged) / days
    streak = _longest_consecutive(logged) / CONSISTENCY_SATURATION_DAYS
    return min(100.0, max(fraction, streak) * 100.0)


def _longest_consecutive(days: set[date]) -> int:
    longest = 0
    run = 0
    previous: date | None = None
    for day in sorted(days):
        consecutive = previous is not None and day - previous == timedelta(days=1)
        run = run + 1 if consecutive else 1
        longest = max(longest, run)
        previous = day
    return longest


def _sugar_crash_days(
    food_by_day: dict[date, list[FoodLogEntry]],
    wellness_by_day: dict[date, WellnessLogEntry],
) -> int:
    crashes = 0
    for day, entries in food_by_day.items():
        check = wellness_by_day.get(day)
        if check is None:
            continue
        added_sugar = sum(entry.nutrients.added_sugar_g for entry in entries)
        if added_sugar > HIGH_SUGAR_DAY_G and check.energy <= LOW_ENERGY_RATING:
            crashes += 1
    return crashes


def _clamp(score: float) -> int:
    return max(0, min(100, round(score)))

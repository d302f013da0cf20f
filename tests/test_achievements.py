"""Tests for streak milestones."""

from datetime import date, timedelta

from habit_engine.services.achievements import (
    ACHIEVEMENTS,
    locked,
    newly_unlocked,
    next_milestone,
    progress,
    unlocked,
)
from habit_engine.services.engine import HabitEngine


def test_milestones_are_ordered() -> None:
    milestones = [achievement.milestone for achievement in ACHIEVEMENTS]

    assert milestones == [1, 3, 7, 14, 21, 30, 60, 90]


def test_newly_unlocked_only_reports_crossed_milestones() -> None:
    assert [a.id for a in newly_unlocked(0, 1)] == ["day_1"]
    assert [a.id for a in newly_unlocked(2, 7)] == ["day_3", "day_7"]
    assert newly_unlocked(7, 7) == []
    assert newly_unlocked(5, 0) == []


def test_unlocked_and_locked_partition_the_table() -> None:
    assert len(unlocked(14)) + len(locked(14)) == len(ACHIEVEMENTS)
    assert unlocked(14)[-1].id == "day_14"
    assert locked(14)[0].id == "day_21"


def test_next_milestone_follows_current_streak() -> None:
    assert next_milestone(0).milestone == 1
    assert next_milestone(8).milestone == 14
    assert next_milestone(90) is None


def test_progress_uses_best_streak_for_unlocked() -> None:
    summary = progress(current_streak=2, longest_streak=10)

    assert [a.milestone for a in summary.unlocked] == [1, 3, 7]
    assert summary.next_milestone is not None
    assert summary.next_milestone.milestone == 3


def test_check_ins_report_unlocks(engine: HabitEngine) -> None:
    start = date(2024, 3, 1)
    reported = []
    for offset in range(3):
        day = start + timedelta(days=offset)
        result = engine.check_in(day, True, day)
        reported.extend(a.id for a in result.newly_unlocked)

    assert reported == ["day_1", "day_3"]
    assert engine.achievements(start + timedelta(days=2)).next_milestone.id == "day_7"

"""Streak milestones."""

from habit_engine.domain.achievements import Achievement, AchievementProgress

ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="day_1",
        title="Fresh Start",
        milestone=1,
        description="Complete your first day",
        message="Every journey begins with a single step. You took yours today!",
    ),
    Achievement(
        id="day_3",
        title="Momentum Building",
        milestone=3,
        description="Reach 3 days sugar-free",
        message="The first 3 days are the hardest. You're past the worst!",
    ),
    Achievement(
        id="day_7",
        title="One Week Warrior",
        milestone=7,
        description="Complete a full week",
        message="One week down! Your taste buds are already changing.",
    ),
    Achievement(
        id="day_14",
        title="Two Week Champion",
        milestone=14,
        description="Reach the 2-week milestone",
        message="14 days! Your cravings are significantly reduced now.",
    ),
    Achievement(
        id="day_21",
        title="Habit Former",
        milestone=21,
        description="Complete 21 days",
        message="21 days, the foundation of habit formation.",
    ),
    Achievement(
        id="day_30",
        title="One Month Master",
        milestone=30,
        description="Achieve 1 month sugar-free",
        message="A full month! You've proven this isn't temporary.",
    ),
    Achievement(
        id="day_60",
        title="Diamond Strong",
        milestone=60,
        description="Reach 60 days of freedom",
        message="60 days! Habits are now deeply ingrained.",
    ),
    Achievement(
        id="day_90",
        title="Neural Rewired",
        milestone=90,
        description="Complete the full 90-day journey",
        message="90 days! Sugar no longer runs the show.",
    ),
)


def newly_unlocked(previous_streak: int, current_streak: int) -> list[Achievement]:
    """Return milestones crossed when the streak moved between values."""
    return [
        achievement
        for achievement in ACHIEVEMENTS
        if previous_streak < achievement.milestone <= current_streak
    ]


def unlocked(longest_streak: int) -> list[Achievement]:
    """Return milestones reached by the best streak so far."""
    return [a for a in ACHIEVEMENTS if a.milestone <= longest_streak]


def locked(longest_streak: int) -> list[Achievement]:
    """Return milestones not reached yet."""
    return [a for a in ACHIEVEMENTS if a.milestone > longest_streak]


def next_milestone(current_streak: int) -> Achievement | None:
    """Return the next milestone for the running streak."""
    return next((a for a in ACHIEVEMENTS if a.milestone > current_streak), None)


def progress(current_streak: int, longest_streak: int) -> AchievementProgress:
    """Summarize milestone progress."""
    return AchievementProgress(
        unlocked=unlocked(longest_streak),
        locked=locked(longest_streak),
        next_milestone=next_milestone(current_streak),
    )

"""Domain models for streak milestones."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Achievement:
    """A streak milestone."""

    id: str
    title: str
    milestone: int
    description: str
    message: str


@dataclass(frozen=True)
class AchievementProgress:
    """Unlocked and remaining milestones for a user."""

    unlocked: list[Achievement]
    locked: list[Achievement]
    next_milestone: Achievement | None

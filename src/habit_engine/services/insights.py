"""Rule table for window insights.

Rules are pure predicates over ``WindowStats``; the same stats always produce
the same insights, in ascending priority order.
"""

from collections.abc import Callable
from dataclasses import dataclass

from habit_engine.domain.scores import Insight, WindowStats

MAX_INSIGHTS = 4

HIGH_SUGAR_G = 50.0
LOW_SUGAR_G = 25.0
LOW_PROTEIN_G = 50.0
LOW_FIBER_G = 20.0
LOW_RATING = 3.0
HIGH_RATING = 4.0
MIN_SLEEP_HOURS = 7.0
MAX_SLEEP_HOURS = 9.0
CRASH_DAYS_THRESHOLD = 2
EXCELLENT_SCORE = 80.0
GOOD_SCORE = 60.0


@dataclass(frozen=True)
class InsightRule:
    """A single row of the insight table."""

    title: str
    message: str
    priority: int
    applies: Callable[[WindowStats], bool]

    def evaluate(self, stats: WindowStats) -> Insight | None:
        if not self.applies(stats):
            return None
        return Insight(title=self.title, message=self.message, priority=self.priority)


def _below(value: float | None, limit: float) -> bool:
    return value is not None and value < limit


def _above(value: float | None, limit: float) -> bool:
    return value is not None and value > limit


INSIGHT_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        title="Sugar crashes",
        message="High-sugar days keep lining up with low energy. "
        "Swapping one sweet snack could steady your afternoons.",
        priority=1,
        applies=lambda s: s.sugar_crash_days >= CRASH_DAYS_THRESHOLD,
    ),
    InsightRule(
        title="High sugar intake",
        message="Added sugar is averaging over 50 g a day. "
        "Try fruit for sweetness instead.",
        priority=2,
        applies=lambda s: _above(s.avg_added_sugar_g, HIGH_SUGAR_G),
    ),
    InsightRule(
        title="Short on sleep",
        message="You are averaging under 7 hours. "
        "More sleep could boost your energy and focus.",
        priority=3,
        applies=lambda s: _below(s.avg_sleep_hours, MIN_SLEEP_HOURS),
    ),
    InsightRule(
        title="Low mood or energy",
        message="Mood or energy has been low. "
        "Regular movement is a reliable way to lift both.",
        priority=4,
        applies=lambda s: _below(s.avg_mood, LOW_RATING)
        or _below(s.avg_energy, LOW_RATING),
    ),
    InsightRule(
        title="More protein",
        message="Protein is under 50 g a day. "
        "Adding some at each meal helps satiety and steady energy.",
        priority=5,
        applies=lambda s: _below(s.avg_protein_g, LOW_PROTEIN_G),
    ),
    InsightRule(
        title="More fiber",
        message="Fiber is under 20 g a day. "
        "Vegetables and whole grains are easy wins.",
        priority=6,
        applies=lambda s: _below(s.avg_fiber_g, LOW_FIBER_G),
    ),
    InsightRule(
        title="Sleep is paying off",
        message="Nights of 7-9 hours are showing up as high energy.",
        priority=7,
        applies=lambda s: s.avg_sleep_hours is not None
        and MIN_SLEEP_HOURS <= s.avg_sleep_hours <= MAX_SLEEP_HOURS
        and not _below(s.avg_energy, HIGH_RATING),
    ),
    InsightRule(
        title="Sugar under control",
        message="Added sugar is staying under 25 g a day. Keep it up!",
        priority=8,
        applies=lambda s: s.avg_added_sugar_g is not None
        and s.avg_added_sugar_g <= LOW_SUGAR_G,
    ),
    InsightRule(
        title="Excellent habits",
        message="You're on the right track across nutrition and wellness.",
        priority=9,
        applies=lambda s: s.logged_days > 0 and s.overall >= EXCELLENT_SCORE,
    ),
    InsightRule(
        title="Good progress",
        message="Good progress, with room for improvement.",
        priority=10,
        applies=lambda s: s.logged_days > 0
        and GOOD_SCORE <= s.overall < EXCELLENT_SCORE,
    ),
    InsightRule(
        title="Start logging",
        message="Log meals and how you feel to unlock personal insights.",
        priority=11,
        applies=lambda s: s.logged_days == 0,
    ),
)


def generate_insights(
    stats: WindowStats,
    rules: tuple[InsightRule, ...] = INSIGHT_RULES,
    limit: int = MAX_INSIGHTS,
) -> list[Insight]:
    """Evaluate the rule table and return the top matches."""
    matches = [insight for rule in rules if (insight := rule.evaluate(stats))]
    matches.sort(key=lambda insight: insight.priority)
    return matches[:limit]

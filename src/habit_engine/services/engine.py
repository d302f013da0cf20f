"""Engine facade consumed by presentation code."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from habit_engine.domain.achievements import Achievement, AchievementProgress
from habit_engine.domain.checkins import CheckIn, HabitEngineState
from habit_engine.domain.nutrition import FoodLogEntry, NutrientVector
from habit_engine.domain.plans import PlanGuidance, PlanType
from habit_engine.domain.scores import Dashboard
from habit_engine.domain.wellness import WellnessLogEntry
from habit_engine.services import achievements, plans
from habit_engine.services.aggregator import Aggregator, Timeframe, window_for
from habit_engine.services.clock import instant_on, resolve_timezone
from habit_engine.services.ledger import CheckInLedger
from habit_engine.services.logs import FoodLog, WellnessLog
from habit_engine.services.nutrition_scoring import build_food_entry, finite_or_zero
from habit_engine.services.storage import LocalStore
from habit_engine.services.streaks import StreakCalculator
from habit_engine.services.sync import (
    RemoteProfileStore,
    SessionSource,
    SyncPolicy,
    SyncReconciler,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    """State after a check-in plus any milestones it crossed."""

    state: HabitEngineState
    newly_unlocked: list[Achievement] = field(default_factory=list)


@dataclass
class HabitEngine:
    """Coordinates the ledger, streaks, logs, scores and sync.

    Remote writes start immediately when called inside a running event loop.
    Synchronous callers must await `flush()` (for example at shutdown) to
    mirror them; until then only the latest queued write per row is kept.
    """

    ledger: CheckInLedger
    food_log: FoodLog
    wellness_log: WellnessLog
    calculator: StreakCalculator
    reconciler: SyncReconciler
    aggregator: Aggregator = field(default_factory=Aggregator)
    plan: PlanType = PlanType.GRADUAL

    @classmethod
    def create(
        cls,
        *,
        user_id: str,
        store: LocalStore,
        remote: RemoteProfileStore,
        timezone: str = "UTC",
        policy: SyncPolicy | None = None,
        plan: PlanType = PlanType.GRADUAL,
    ) -> "HabitEngine":
        """Build an engine over a local store and a remote profile store."""
        ledger = CheckInLedger(store)
        calculator = StreakCalculator(resolve_timezone(timezone))
        reconciler = SyncReconciler(
            user_id=user_id,
            remote=remote,
            store=store,
            ledger=ledger,
            calculator=calculator,
            policy=policy or SyncPolicy(),
        )
        return cls(
            ledger=ledger,
            food_log=FoodLog(store),
            wellness_log=WellnessLog(store),
            calculator=calculator,
            reconciler=reconciler,
            plan=plan,
        )

    def state(self, today: date) -> HabitEngineState:
        """Return the current streak state."""
        return self.reconciler.state_for(today)

    def check_in(  # noqa: PLR0913
        self,
        date_key: date,
        sugar_free: bool,
        today: date,
        *,
        grams_consumed: float | None = None,
        notes: str | None = None,
        mood: int | None = None,
        at: datetime | None = None,
    ) -> CheckInResult:
        """Record a check-in, update the streak and mirror both remotely."""
        check_in = CheckIn(
            date_key=date_key,
            sugar_free=sugar_free,
            grams_consumed=grams_consumed,
            notes=notes,
            mood=mood,
        )
        previous = self.reconciler.state_for(today).streak
        prior = self.ledger.upsert(check_in)
        streak = self.calculator.advance(
            previous,
            check_in,
            prior,
            self.ledger.records(),
            today,
            at or instant_on(today, self.calculator.timezone),
        )
        state = self.reconciler.commit(streak, check_in)
        unlocked = achievements.newly_unlocked(
            previous.current_streak, streak.current_streak
        )
        if unlocked:
            _logger.info(
                "Unlocked %s", ", ".join(achievement.id for achievement in unlocked)
            )
        return CheckInResult(state=state, newly_unlocked=unlocked)

    def reset_streak(self, today: date) -> HabitEngineState:
        """Start the running streak over from today."""
        current = self.reconciler.state_for(today).streak
        return self.reconciler.commit(self.calculator.reset(current, today))

    def log_food(
        self,
        date_key: date,
        name: str,
        nutrients: NutrientVector,
        portion_percent: float = 100.0,
        entry_id: str | None = None,
    ) -> FoodLogEntry:
        """Score and store a food entry."""
        entry = build_food_entry(
            date_key, name, nutrients, portion_percent, entry_id=entry_id
        )
        self.food_log.add(entry)
        return entry

    def log_wellness(  # noqa: PLR0913
        self,
        date_key: date,
        mood: float,
        energy: float,
        focus: float,
        sleep_hours: float,
    ) -> WellnessLogEntry:
        """Store the wellness entry for a date, replacing any earlier one."""
        entry = WellnessLogEntry(
            date_key=date_key,
            mood=finite_or_zero(mood),
            energy=finite_or_zero(energy),
            focus=finite_or_zero(focus),
            sleep_hours=finite_or_zero(sleep_hours),
        )
        self.wellness_log.upsert(entry)
        return entry

    def history(self, start_inclusive: date, end_exclusive: date) -> list[CheckIn]:
        """Return check-ins dated in [start, end)."""
        return self.ledger.range(start_inclusive, end_exclusive)

    def dashboard(self, timeframe: Timeframe, today: date) -> Dashboard:
        """Return scores, comparison, insights and trend for a timeframe."""
        start, end = window_for(timeframe, today)
        # The comparison window precedes the current one.
        since = start - timedelta(days=timeframe.days)
        return self.aggregator.dashboard(
            self.food_log.range(since, end),
            self.wellness_log.range(since, end),
            timeframe,
            today,
        )

    def achievements(self, today: date) -> AchievementProgress:
        """Return milestone progress for the current streak."""
        streak = self.reconciler.state_for(today).streak
        return achievements.progress(streak.current_streak, streak.longest_streak)

    def plan_guidance(self, today: date) -> PlanGuidance:
        """Return today's reduction plan limit and how today's check-in compares."""
        streak = self.reconciler.state_for(today).streak
        return plans.today_guidance(
            self.plan, streak.start_date, today, self.ledger.get(today)
        )

    def clear_all(self, today: date) -> HabitEngineState:
        """Wipe every local record and start from an empty streak."""
        self.ledger.clear()
        self.food_log.clear()
        self.wellness_log.clear()
        _logger.info("Cleared local data for %s", self.reconciler.user_id)
        return self.reconciler.commit(self.calculator.initial_state(today))

    async def start_session(self, today: date) -> SessionSource:
        """Reconcile with the remote profile at session start."""
        return await self.reconciler.start_session(today)

    async def flush(self) -> None:
        """Wait for outstanding remote writes."""
        await self.reconciler.flush()

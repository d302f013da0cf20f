"""Streak state machine.

Writes for today advance the streak incrementally. Any other date (a
retroactive correction, or a date ahead of the device clock) can invalidate
the continuity of every later day, so those rebuild the state from a full
ledger scan instead.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from habit_engine.domain.checkins import CheckIn, StreakState
from habit_engine.services.clock import local_date_of, start_of_day

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakCalculator:
    """Computes streak states in the user's timezone."""

    timezone: ZoneInfo

    def initial_state(self, today: date) -> StreakState:
        """Return the state of a user who has never checked in."""
        return StreakState(
            current_streak=0,
            longest_streak=0,
            last_check_in_instant=None,
            start_date=today,
            total_days_sugar_free=0,
        )

    def advance(  # noqa: PLR0913
        self,
        state: StreakState,
        check_in: CheckIn,
        prior: CheckIn | None,
        records: list[CheckIn],
        today: date,
        at: datetime,
    ) -> StreakState:
        """Return the state after a check-in that is already in the ledger."""
        if prior is not None and prior.sugar_free == check_in.sugar_free:
            return state
        if check_in.date_key != today:
            return self.recompute(state, records)
        return self.apply_check_in(state, check_in, prior, records, at)

    def apply_check_in(
        self,
        state: StreakState,
        check_in: CheckIn,
        prior: CheckIn | None,
        records: list[CheckIn],
        at: datetime,
    ) -> StreakState:
        """Incremental transition for a check-in dated today."""
        if not check_in.sugar_free:
            return replace(state, current_streak=0, last_check_in_instant=at)

        if state.current_streak == 0 or self._is_next_day(state, check_in.date_key):
            current = state.current_streak + 1
        else:
            current = 1
        if prior is None:
            total = state.total_days_sugar_free + 1
        else:
            # A had-sugar day switched to sugar-free may already be counted.
            total = max(state.total_days_sugar_free, _sugar_free_days(records))
        return replace(
            state,
            current_streak=current,
            longest_streak=max(state.longest_streak, current),
            total_days_sugar_free=total,
            last_check_in_instant=at,
        )

    def recompute(self, state: StreakState, records: list[CheckIn]) -> StreakState:
        """Rebuild counters from a full scan of the ledger.

        With partial history the scan cannot see the days behind the stored
        counters, so the longest streak is not lowered and a current run that
        reaches back to the oldest known record keeps its stored length.
        """
        ordered = sorted(records, key=lambda record: record.date_key)
        window = [record for record in ordered if record.date_key >= state.start_date]
        current = _trailing_run(window)
        longest = max(_longest_run(ordered), current)
        if state.partial_history:
            if current == len(window):
                current = max(current, state.current_streak)
            longest = max(longest, state.longest_streak, current)
        total = max(state.total_days_sugar_free, _sugar_free_days(ordered))
        return replace(
            state,
            current_streak=current,
            longest_streak=longest,
            total_days_sugar_free=total,
            last_check_in_instant=self._last_instant(state, ordered),
        )

    def reconcile(self, snapshot: StreakState, records: list[CheckIn]) -> StreakState:
        """Fit a remote snapshot to the merged ledger it was downloaded with."""
        scanned = self.recompute(replace(snapshot, partial_history=False), records)
        if (
            scanned.current_streak >= snapshot.current_streak
            and scanned.longest_streak >= snapshot.longest_streak
            and _sugar_free_days(records) >= snapshot.total_days_sugar_free
        ):
            return scanned
        return self.recompute(replace(snapshot, partial_history=True), records)

    def reset(self, state: StreakState, today: date) -> StreakState:
        """Start over from today, keeping the longest streak and total."""
        return replace(state, current_streak=0, start_date=today)

    def _is_next_day(self, state: StreakState, date_key: date) -> bool:
        if state.last_check_in_instant is None:
            return False
        last_day = local_date_of(state.last_check_in_instant, self.timezone)
        return date_key - last_day == ONE_DAY

    def _last_instant(
        self, state: StreakState, ordered: list[CheckIn]
    ) -> datetime | None:
        if not ordered:
            return state.last_check_in_instant
        latest_day = ordered[-1].date_key
        instant = state.last_check_in_instant
        if instant is not None and local_date_of(instant, self.timezone) >= latest_day:
            return instant
        return start_of_day(latest_day, self.timezone)


def _trailing_run(ordered: list[CheckIn]) -> int:
    """Length of the sugar-free run ending at the most recent record."""
    run = 0
    previous: date | None = None
    for record in reversed(ordered):
        if not record.sugar_free:
            break
        if previous is not None and previous - record.date_key != ONE_DAY:
            break
        run += 1
        previous = record.date_key
    return run


def _longest_run(ordered: list[CheckIn]) -> int:
    longest = 0
    run = 0
    previous: date | None = None
    for record in ordered:
        if not record.sugar_free:
            run = 0
            previous = None
            continue
        if previous is not None and record.date_key - previous == ONE_DAY:
            run += 1
        else:
            run = 1
        previous = record.date_key
        longest = max(longest, run)
    return longest


def _sugar_free_days(records: list[CheckIn]) -> int:
    return sum(1 for record in records if record.sugar_free)

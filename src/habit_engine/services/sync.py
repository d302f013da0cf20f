"""Local-first synchronization with the remote profile store.

Local writes are applied and persisted synchronously; the remote copy is a
best-effort mirror. The only path from remote to local is the bounded fetch
at session start, and its result is dropped whenever the local revision has
moved on since the fetch was issued.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Protocol

from habit_engine.domain.checkins import CheckIn, HabitEngineState, StreakState
from habit_engine.domain.profiles import RemoteProfile
from habit_engine.domain.records import STREAK_DOCUMENT, StreakRecord
from habit_engine.services.ledger import CheckInLedger
from habit_engine.services.storage import (
    STREAK_KEY,
    LocalStore,
    load_document,
    save_document,
)
from habit_engine.services.streaks import StreakCalculator

_logger = logging.getLogger(__name__)


class FallbackMode(Enum):
    """State to use when the remote fetch does not produce a profile."""

    USE_LOCAL = "use_local"
    USE_DEFAULT = "use_default"


class SessionSource(Enum):
    """Where the session's starting state came from."""

    REMOTE = "remote"
    LOCAL = "local"
    DEFAULT = "default"


@dataclass(frozen=True)
class SyncPolicy:
    """Timeout and fallback policy for the session-start fetch."""

    timeout_seconds: float = 3.0
    on_timeout: FallbackMode = FallbackMode.USE_LOCAL


class RemoteProfileStore(Protocol):
    """Remote copy of the user's profile, streak and check-ins."""

    async def fetch_profile(self, user_id: str) -> RemoteProfile | None:
        """Return the stored profile, if any."""

    async def write_check_in(self, user_id: str, check_in: CheckIn) -> None:
        """Upsert a check-in by date."""

    async def write_streak(self, user_id: str, streak: StreakState) -> None:
        """Replace the stored streak snapshot."""


@dataclass
class OfflineProfileStore(RemoteProfileStore):
    """Remote store for deployments without a configured backend."""

    async def fetch_profile(self, user_id: str) -> RemoteProfile | None:
        """Return no profile."""
        return None

    async def write_check_in(self, user_id: str, check_in: CheckIn) -> None:
        """Drop the write."""

    async def write_streak(self, user_id: str, streak: StreakState) -> None:
        """Drop the write."""


RemoteWrite = Callable[[], Awaitable[None]]


@dataclass
class SyncReconciler:
    """Owns the current engine state and mirrors it to the remote store."""

    user_id: str
    remote: RemoteProfileStore
    store: LocalStore
    ledger: CheckInLedger
    calculator: StreakCalculator
    policy: SyncPolicy = field(default_factory=SyncPolicy)
    _state: HabitEngineState | None = field(default=None, init=False)
    _revision: int = field(default=0, init=False)
    _outbox: dict[str, RemoteWrite] = field(default_factory=dict, init=False)
    _pending: set[asyncio.Task[None]] = field(default_factory=set, init=False)
    _late_fetches: set[asyncio.Task[RemoteProfile | None]] = field(
        default_factory=set, init=False
    )

    def __post_init__(self) -> None:
        stored = load_document(self.store, STREAK_KEY, STREAK_DOCUMENT)
        if stored is not None:
            self._state = HabitEngineState(stored.to_domain(), self._revision)

    @property
    def revision(self) -> int:
        """Monotonic counter of local mutations."""
        return self._revision

    def state_for(self, today: date) -> HabitEngineState:
        """Return the current state, or a fresh one starting today."""
        if self._state is None:
            initial = self.calculator.initial_state(today)
            return HabitEngineState(initial, self._revision)
        return self._state

    def commit(
        self, streak: StreakState, check_in: CheckIn | None = None
    ) -> HabitEngineState:
        """Apply a local mutation and mirror it remotely in the background."""
        self._revision += 1
        self._state = HabitEngineState(streak, self._revision)
        self._persist(streak)
        if check_in is not None:
            self._schedule(
                f"check-in {check_in.date_key.isoformat()}",
                lambda: self.remote.write_check_in(self.user_id, check_in),
            )
        self._schedule("streak", lambda: self.remote.write_streak(self.user_id, streak))
        return self._state

    async def start_session(self, today: date) -> SessionSource:
        """Pull the remote profile within the policy timeout."""
        issued_at = self._revision
        fetch = asyncio.create_task(self.remote.fetch_profile(self.user_id))
        done, _ = await asyncio.wait({fetch}, timeout=self.policy.timeout_seconds)

        if fetch not in done:
            _logger.warning(
                "Remote profile fetch for %s timed out after %.1fs",
                self.user_id,
                self.policy.timeout_seconds,
            )
            self._late_fetches.add(fetch)
            fetch.add_done_callback(self._discard_late_fetch)
            return self._fall_back(today)

        error = fetch.exception()
        if error is not None:
            _logger.warning(
                "Remote profile fetch for %s failed: %s", self.user_id, error
            )
            return self._fall_back(today)

        profile = fetch.result()
        if profile is None:
            _logger.info("No remote profile for %s", self.user_id)
            return self._fall_back(today)

        if self._revision != issued_at:
            _logger.info(
                "Discarding remote profile for %s: local state advanced during fetch",
                self.user_id,
            )
            return SessionSource.LOCAL

        self._adopt(profile)
        return SessionSource.REMOTE

    async def flush(self) -> None:
        """Start queued remote writes and wait for all pending ones."""
        while self._outbox:
            label = next(iter(self._outbox))
            self._start(label, self._outbox.pop(label))
        if self._pending:
            await asyncio.gather(*list(self._pending))

    def _adopt(self, profile: RemoteProfile) -> None:
        if profile.check_ins:
            merged = {record.date_key: record for record in self.ledger.records()}
            merged.update({record.date_key: record for record in profile.check_ins})
            self.ledger.replace_all(list(merged.values()))
        streak = self.calculator.reconcile(profile.streak, self.ledger.records())
        self._revision += 1
        self._state = HabitEngineState(streak, self._revision)
        self._persist(streak)

    def _fall_back(self, today: date) -> SessionSource:
        if self.policy.on_timeout is FallbackMode.USE_DEFAULT or self._state is None:
            initial = self.calculator.initial_state(today)
            self._state = HabitEngineState(initial, self._revision)
            self._persist(initial)
            return SessionSource.DEFAULT
        return SessionSource.LOCAL

    def _persist(self, streak: StreakState) -> None:
        save_document(
            self.store, STREAK_KEY, STREAK_DOCUMENT, StreakRecord.from_domain(streak)
        )

    def _schedule(self, label: str, write: RemoteWrite) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Newer writes for the same row supersede queued ones.
            self._outbox.pop(label, None)
            self._outbox[label] = write
            return
        self._start(label, write)

    def _start(self, label: str, write: RemoteWrite) -> None:
        task = asyncio.create_task(self._mirror(label, write))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _mirror(self, label: str, write: RemoteWrite) -> None:
        try:
            await write()
        except Exception:
            _logger.exception("Remote %s write failed for %s", label, self.user_id)

    def _discard_late_fetch(self, task: "asyncio.Task[RemoteProfile | None]") -> None:
        self._late_fetches.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            _logger.info(
                "Late remote profile fetch for %s failed: %s", self.user_id, error
            )
            return
        _logger.info("Discarding late remote profile for %s", self.user_id)

"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime

import pytest

from habit_engine.config import Settings
from habit_engine.containers import AppContainer
from habit_engine.domain.checkins import CheckIn, StreakState
from habit_engine.domain.profiles import RemoteProfile
from habit_engine.services.engine import HabitEngine
from habit_engine.services.profiles import InMemoryUsernameRepository, ProfileService
from habit_engine.services.storage import InMemoryLocalStore
from habit_engine.services.sync import RemoteProfileStore, SyncPolicy

USER_ID = "user-1"


@dataclass
class FakeRemoteProfileStore(RemoteProfileStore):
    """Remote store that records writes and can be slowed down or broken."""

    profile: RemoteProfile | None = None
    fetch_delay: float = 0.0
    fetch_error: Exception | None = None
    write_error: Exception | None = None
    fetch_calls: int = 0
    check_ins: list[tuple[str, CheckIn]] = field(default_factory=list)
    streaks: list[tuple[str, StreakState]] = field(default_factory=list)

    async def fetch_profile(self, user_id: str) -> RemoteProfile | None:
        self.fetch_calls += 1
        if self.fetch_delay:
            await asyncio.sleep(self.fetch_delay)
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.profile

    async def write_check_in(self, user_id: str, check_in: CheckIn) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.check_ins.append((user_id, check_in))

    async def write_streak(self, user_id: str, streak: StreakState) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.streaks.append((user_id, streak))


def make_streak(  # noqa: PLR0913
    current: int = 0,
    longest: int = 0,
    total: int = 0,
    start: date = date(2024, 1, 1),
    last: datetime | None = None,
) -> StreakState:
    return StreakState(
        current_streak=current,
        longest_streak=longest,
        last_check_in_instant=last,
        start_date=start,
        total_days_sugar_free=total,
    )


def make_engine(
    store: InMemoryLocalStore | None = None,
    remote: RemoteProfileStore | None = None,
    policy: SyncPolicy | None = None,
) -> HabitEngine:
    return HabitEngine.create(
        user_id=USER_ID,
        store=store or InMemoryLocalStore(),
        remote=remote or FakeRemoteProfileStore(),
        timezone="UTC",
        policy=policy,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        user_id=USER_ID,
        timezone="UTC",
        local_store_dir=str(tmp_path / "store"),
        supabase_url=None,
        supabase_service_key=None,
    )


@pytest.fixture
def store() -> InMemoryLocalStore:
    return InMemoryLocalStore()


@pytest.fixture
def remote() -> FakeRemoteProfileStore:
    return FakeRemoteProfileStore()


@pytest.fixture
def engine(store: InMemoryLocalStore, remote: FakeRemoteProfileStore) -> HabitEngine:
    return make_engine(store, remote)


@pytest.fixture
def usernames() -> InMemoryUsernameRepository:
    return InMemoryUsernameRepository()


@pytest.fixture
def container(
    settings: Settings,
    engine: HabitEngine,
    usernames: InMemoryUsernameRepository,
) -> AppContainer:
    async def close_resources() -> None:
        await engine.flush()

    return AppContainer(
        settings=settings,
        engine=engine,
        profile_service=ProfileService(usernames),
        close_resources=close_resources,
    )

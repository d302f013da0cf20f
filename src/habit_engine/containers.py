"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from habit_engine.adapters.file_local_store import FileLocalStore
from habit_engine.adapters.supabase_profile_store import SupabaseProfileStore
from habit_engine.adapters.supabase_username_repository import (
    SupabaseUsernameRepository,
)
from habit_engine.config import Settings
from habit_engine.services.engine import HabitEngine
from habit_engine.services.profiles import (
    InMemoryUsernameRepository,
    ProfileService,
    UsernameRepository,
)
from habit_engine.services.storage import LocalStore
from habit_engine.services.sync import OfflineProfileStore, RemoteProfileStore

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    engine: HabitEngine
    profile_service: ProfileService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, store: LocalStore | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    local_store = store or FileLocalStore(Path(resolved_settings.local_store_dir))

    remote: RemoteProfileStore
    usernames: UsernameRepository
    if resolved_settings.remote_configured:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        remote = SupabaseProfileStore(supabase_client)
        usernames = SupabaseUsernameRepository(supabase_client)
    else:
        _logger.info("Supabase is not configured; running offline")
        remote = OfflineProfileStore()
        usernames = InMemoryUsernameRepository()

    engine = HabitEngine.create(
        user_id=resolved_settings.user_id,
        store=local_store,
        remote=remote,
        timezone=resolved_settings.timezone,
        policy=resolved_settings.sync_policy(),
        plan=resolved_settings.plan_type(),
    )

    async def close_resources() -> None:
        await engine.flush()

    return AppContainer(
        settings=resolved_settings,
        engine=engine,
        profile_service=ProfileService(usernames),
        close_resources=close_resources,
    )

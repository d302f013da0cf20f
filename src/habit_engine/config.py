"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from habit_engine.domain.plans import PlanType
from habit_engine.services.plans import parse_plan_type
from habit_engine.services.sync import FallbackMode, SyncPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    user_id: str = "local"
    timezone: str = "UTC"
    local_store_dir: str = ".habit_engine"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    remote_fetch_timeout_seconds: float = 3.0
    remote_fallback: str = "use_local"
    reduction_plan: str = "gradual"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def remote_configured(self) -> bool:
        """Return True when both Supabase credentials are present."""
        return bool(self.supabase_url and self.supabase_service_key)

    def sync_policy(self) -> SyncPolicy:
        """Build the remote timeout/fallback policy from settings."""
        return SyncPolicy(
            timeout_seconds=max(self.remote_fetch_timeout_seconds, 0.0),
            on_timeout=parse_fallback_mode(self.remote_fallback),
        )

    def plan_type(self) -> PlanType:
        """Return the configured sugar reduction plan."""
        return parse_plan_type(self.reduction_plan)


def parse_fallback_mode(raw: str | None) -> FallbackMode:
    """Parse the remote fallback mode from env, defaulting to local state."""
    if raw is None:
        return FallbackMode.USE_LOCAL
    cleaned = raw.strip().lower().replace("-", "_")
    for mode in FallbackMode:
        if mode.value == cleaned:
            return mode
    return FallbackMode.USE_LOCAL

"""Supabase-backed remote profile store."""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from habit_engine.domain.checkins import CheckIn, StreakState
from habit_engine.domain.profiles import RemoteProfile
from habit_engine.domain.records import CheckInRecord, StreakRecord
from habit_engine.services.sync import RemoteProfileStore

PROFILES_TABLE = "profiles"
CHECK_INS_TABLE = "check_ins"


@dataclass
class SupabaseProfileStore(RemoteProfileStore):
    """Supabase implementation of the remote profile copy.

    The client is synchronous, so every call runs in a worker thread to keep
    the event loop free while a request is in flight.
    """

    client: Client

    async def fetch_profile(self, user_id: str) -> RemoteProfile | None:
        """Return the stored profile with its check-ins, if present."""
        return await asyncio.to_thread(self._fetch_profile, user_id)

    async def write_check_in(self, user_id: str, check_in: CheckIn) -> None:
        """Upsert a check-in keyed by user and date."""
        await asyncio.to_thread(self._write_check_in, user_id, check_in)

    async def write_streak(self, user_id: str, streak: StreakState) -> None:
        """Replace the streak snapshot on the profile row."""
        await asyncio.to_thread(self._write_streak, user_id, streak)

    def _fetch_profile(self, user_id: str) -> RemoteProfile | None:
        response = (
            self.client.table(PROFILES_TABLE)
            .select("user_id, username, streak")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if not row.get("streak"):
            return None
        streak = StreakRecord.model_validate(row["streak"]).to_domain()

        check_ins = (
            self.client.table(CHECK_INS_TABLE)
            .select("date_key, sugar_free, grams_consumed, notes, mood")
            .eq("user_id", user_id)
            .order("date_key")
            .execute()
        )
        return RemoteProfile(
            user_id=user_id,
            streak=streak,
            check_ins=[
                CheckInRecord.model_validate(item).to_domain()
                for item in check_ins.data or []
            ],
            username=row.get("username"),
        )

    def _write_check_in(self, user_id: str, check_in: CheckIn) -> None:
        payload = CheckInRecord.from_domain(check_in).model_dump(mode="json")
        payload["user_id"] = user_id
        self.client.table(CHECK_INS_TABLE).upsert(
            payload, on_conflict="user_id,date_key"
        ).execute()

    def _write_streak(self, user_id: str, streak: StreakState) -> None:
        self.client.table(PROFILES_TABLE).upsert(
            {
                "user_id": user_id,
                "streak": StreakRecord.from_domain(streak).model_dump(mode="json"),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

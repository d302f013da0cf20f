"""Supabase repository for usernames."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from habit_engine.services.profiles import UsernameRepository


@dataclass
class SupabaseUsernameRepository(UsernameRepository):
    """Supabase implementation for username persistence."""

    client: Client

    def is_taken(self, username: str, user_id: str) -> bool:
        """Return True if another profile holds the username."""
        response = (
            self.client.table("profiles")
            .select("user_id")
            .eq("username", username)
            .limit(1)
            .execute()
        )
        return any(row.get("user_id") != user_id for row in response.data or [])

    def set_username(self, user_id: str, username: str) -> None:
        """Store the username on the user's profile row."""
        self.client.table("profiles").upsert(
            {
                "user_id": user_id,
                "username": username,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

"""Domain models for remote profiles."""

from dataclasses import dataclass, field

from habit_engine.domain.checkins import CheckIn, StreakState


@dataclass(frozen=True)
class RemoteProfile:
    """Profile snapshot fetched from the remote store."""

    user_id: str
    streak: StreakState
    check_ins: list[CheckIn] = field(default_factory=list)
    username: str | None = None


@dataclass(frozen=True)
class UsernameCheck:
    """Result of validating a username; reason is machine-readable."""

    ok: bool
    reason: str | None = None

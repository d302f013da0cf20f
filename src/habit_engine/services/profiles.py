"""Profile business logic."""

import re
from dataclasses import dataclass
from typing import Protocol

from habit_engine.domain.profiles import UsernameCheck

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r"^[a-z0-9_]+$")

TOO_SHORT = "too_short"
TOO_LONG = "too_long"
INVALID_CHARACTERS = "invalid_characters"
TAKEN = "taken"


class UsernameRepository(Protocol):
    """Persistence interface for usernames."""

    def is_taken(self, username: str, user_id: str) -> bool:
        """Return True if another user holds the username."""

    def set_username(self, user_id: str, username: str) -> None:
        """Store the username for a user."""


@dataclass
class ProfileService:
    """Application service for username rules."""

    repository: UsernameRepository

    def validate_username(self, username: str, user_id: str) -> UsernameCheck:
        """Check format and uniqueness without persisting anything."""
        candidate = normalize_username(username)
        if len(candidate) < USERNAME_MIN_LENGTH:
            return UsernameCheck(ok=False, reason=TOO_SHORT)
        if len(candidate) > USERNAME_MAX_LENGTH:
            return UsernameCheck(ok=False, reason=TOO_LONG)
        if not USERNAME_PATTERN.match(candidate):
            return UsernameCheck(ok=False, reason=INVALID_CHARACTERS)
        if self.repository.is_taken(candidate, user_id):
            return UsernameCheck(ok=False, reason=TAKEN)
        return UsernameCheck(ok=True)

    def claim_username(self, username: str, user_id: str) -> UsernameCheck:
        """Validate and store a username."""
        check = self.validate_username(username, user_id)
        if check.ok:
            self.repository.set_username(user_id, normalize_username(username))
        return check


def normalize_username(username: str) -> str:
    """Usernames are compared case-insensitively without surrounding spaces."""
    return username.strip().lower()


@dataclass
class InMemoryUsernameRepository(UsernameRepository):
    """Username registry for deployments without a remote backend."""

    _owners: dict[str, str]

    def __init__(self) -> None:
        self._owners = {}

    def is_taken(self, username: str, user_id: str) -> bool:
        """Return True if another user holds the username."""
        owner = self._owners.get(username)
        return owner is not None and owner != user_id

    def set_username(self, user_id: str, username: str) -> None:
        """Assign the username, releasing the user's previous one."""
        for name, owner in list(self._owners.items()):
            if owner == user_id:
                del self._owners[name]
        self._owners[username] = user_id

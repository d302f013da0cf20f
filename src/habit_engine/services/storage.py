"""Local key-value storage abstractions."""

import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

CHECK_INS_KEY = "habit_engine:check_ins"
FOOD_LOGS_KEY = "habit_engine:food_logs"
WELLNESS_LOGS_KEY = "habit_engine:wellness_logs"
STREAK_KEY = "habit_engine:streak"

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class LocalStore(Protocol):
    """Device-local byte store keyed by stable namespaced keys."""

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, if any."""

    def set(self, key: str, value: bytes) -> None:
        """Store bytes under a key, replacing any previous value."""

    def remove(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class InMemoryLocalStore(LocalStore):
    """In-memory store used for tests and ephemeral sessions."""

    _entries: dict[str, bytes]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, if any."""
        return self._entries.get(key)

    def set(self, key: str, value: bytes) -> None:
        """Store bytes under a key."""
        self._entries[key] = value

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        self._entries.pop(key, None)


def load_document(store: LocalStore, key: str, adapter: TypeAdapter[T]) -> T | None:
    """Decode a JSON document, returning None when missing or unreadable."""
    raw = store.get(key)
    if raw is None:
        return None
    try:
        return adapter.validate_json(raw)
    except ValidationError:
        _logger.warning("Discarding unreadable local data under %s", key)
        return None


def save_document(
    store: LocalStore, key: str, adapter: TypeAdapter[T], value: T
) -> None:
    """Encode a value as JSON and store it."""
    store.set(key, adapter.dump_json(value))

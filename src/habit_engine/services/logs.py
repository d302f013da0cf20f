"""Food and wellness log books backed by the local store."""

from dataclasses import dataclass, field
from datetime import date

from habit_engine.domain.nutrition import FoodLogEntry
from habit_engine.domain.records import (
    FOOD_LOG_LIST,
    WELLNESS_LIST,
    FoodLogRecord,
    WellnessRecord,
)
from habit_engine.domain.wellness import WellnessLogEntry
from habit_engine.services.storage import (
    FOOD_LOGS_KEY,
    WELLNESS_LOGS_KEY,
    LocalStore,
    load_document,
    save_document,
)


@dataclass
class FoodLog:
    """Logged food entries, replaced by id on rewrite."""

    store: LocalStore
    _entries: dict[str, FoodLogEntry] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        stored = load_document(self.store, FOOD_LOGS_KEY, FOOD_LOG_LIST) or []
        self._entries = {record.id: record.to_domain() for record in stored}

    def add(self, entry: FoodLogEntry) -> None:
        """Store an entry; an existing id is replaced."""
        self._entries[entry.id] = entry
        save_document(
            self.store,
            FOOD_LOGS_KEY,
            FOOD_LOG_LIST,
            [FoodLogRecord.from_domain(item) for item in self._entries.values()],
        )

    def entries(self) -> list[FoodLogEntry]:
        """Return every entry ordered by date."""
        return sorted(self._entries.values(), key=lambda entry: entry.date_key)

    def range(self, start_inclusive: date, end_exclusive: date) -> list[FoodLogEntry]:
        """Return entries dated in [start, end)."""
        return [
            entry
            for entry in self.entries()
            if start_inclusive <= entry.date_key < end_exclusive
        ]

    def clear(self) -> None:
        """Remove every entry."""
        self._entries = {}
        self.store.remove(FOOD_LOGS_KEY)


@dataclass
class WellnessLog:
    """At most one wellness entry per date; later writes win."""

    store: LocalStore
    _entries: dict[date, WellnessLogEntry] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        stored = load_document(self.store, WELLNESS_LOGS_KEY, WELLNESS_LIST) or []
        self._entries = {record.date_key: record.to_domain() for record in stored}

    def upsert(self, entry: WellnessLogEntry) -> WellnessLogEntry | None:
        """Store the entry for its date and return the replaced one."""
        prior = self._entries.get(entry.date_key)
        self._entries[entry.date_key] = entry
        save_document(
            self.store,
            WELLNESS_LOGS_KEY,
            WELLNESS_LIST,
            [WellnessRecord.from_domain(item) for item in self.entries()],
        )
        return prior

    def entries(self) -> list[WellnessLogEntry]:
        """Return every entry ordered by date."""
        return [self._entries[key] for key in sorted(self._entries)]

    def range(
        self, start_inclusive: date, end_exclusive: date
    ) -> list[WellnessLogEntry]:
        """Return entries dated in [start, end)."""
        return [
            entry
            for entry in self.entries()
            if start_inclusive <= entry.date_key < end_exclusive
        ]

    def clear(self) -> None:
        """Remove every entry."""
        self._entries = {}
        self.store.remove(WELLNESS_LOGS_KEY)

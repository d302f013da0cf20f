"""Check-in ledger keyed by local calendar date."""

from dataclasses import dataclass, field
from datetime import date

from habit_engine.domain.checkins import CheckIn
from habit_engine.domain.records import CHECK_IN_LIST, CheckInRecord
from habit_engine.services.storage import (
    CHECK_INS_KEY,
    LocalStore,
    load_document,
    save_document,
)


@dataclass
class CheckInLedger:
    """One check-in per date; writes overwrite in place."""

    store: LocalStore
    _records: dict[date, CheckIn] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Re-read the ledger from the local store."""
        stored = load_document(self.store, CHECK_INS_KEY, CHECK_IN_LIST) or []
        self._records = {record.date_key: record.to_domain() for record in stored}

    def upsert(self, check_in: CheckIn) -> CheckIn | None:
        """Insert or overwrite the record for a date; return the prior one."""
        prior = self._records.get(check_in.date_key)
        self._records[check_in.date_key] = check_in
        self._persist()
        return prior

    def get(self, date_key: date) -> CheckIn | None:
        """Return the record for a date, if any."""
        return self._records.get(date_key)

    def range(self, start_inclusive: date, end_exclusive: date) -> list[CheckIn]:
        """Return records in [start, end) ordered by date."""
        return [
            record
            for record in self.records()
            if start_inclusive <= record.date_key < end_exclusive
        ]

    def records(self) -> list[CheckIn]:
        """Return every record ordered by date."""
        return [self._records[key] for key in sorted(self._records)]

    def replace_all(self, records: list[CheckIn]) -> None:
        """Replace the ledger contents."""
        self._records = {record.date_key: record for record in records}
        self._persist()

    def clear(self) -> None:
        """Remove every record."""
        self._records = {}
        self.store.remove(CHECK_INS_KEY)

    def __len__(self) -> int:
        return len(self._records)

    def _persist(self) -> None:
        save_document(
            self.store,
            CHECK_INS_KEY,
            CHECK_IN_LIST,
            [CheckInRecord.from_domain(record) for record in self.records()],
        )

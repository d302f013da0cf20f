"""Tests for the check-in ledger and local documents."""

from datetime import date

from habit_engine.domain.checkins import CheckIn
from habit_engine.services.ledger import CheckInLedger
from habit_engine.services.storage import CHECK_INS_KEY, InMemoryLocalStore


def test_upsert_overwrites_and_returns_prior() -> None:
    ledger = CheckInLedger(InMemoryLocalStore())
    first = CheckIn(date_key=date(2024, 3, 1), sugar_free=True)
    second = CheckIn(date_key=date(2024, 3, 1), sugar_free=False, grams_consumed=12)

    assert ledger.upsert(first) is None
    assert ledger.upsert(second) == first
    assert ledger.get(date(2024, 3, 1)) == second
    assert len(ledger) == 1


def test_range_is_half_open_and_sorted() -> None:
    ledger = CheckInLedger(InMemoryLocalStore())
    for day in (5, 1, 3, 2):
        ledger.upsert(CheckIn(date_key=date(2024, 3, day), sugar_free=True))

    records = ledger.range(date(2024, 3, 2), date(2024, 3, 5))

    assert [record.date_key.day for record in records] == [2, 3]


def test_ledger_survives_reload() -> None:
    store = InMemoryLocalStore()
    ledger = CheckInLedger(store)
    ledger.upsert(
        CheckIn(date_key=date(2024, 3, 1), sugar_free=True, notes="easy", mood=4)
    )

    reopened = CheckInLedger(store)

    assert reopened.get(date(2024, 3, 1)) == CheckIn(
        date_key=date(2024, 3, 1), sugar_free=True, notes="easy", mood=4
    )


def test_stored_dates_are_plain_calendar_dates() -> None:
    store = InMemoryLocalStore()
    CheckInLedger(store).upsert(CheckIn(date_key=date(2024, 3, 1), sugar_free=True))

    raw = store.get(CHECK_INS_KEY)

    assert raw is not None
    assert b'"date_key":"2024-03-01"' in raw


def test_corrupt_data_is_treated_as_empty() -> None:
    store = InMemoryLocalStore()
    store.set(CHECK_INS_KEY, b"not json")

    ledger = CheckInLedger(store)

    assert ledger.records() == []


def test_replace_all_and_clear() -> None:
    store = InMemoryLocalStore()
    ledger = CheckInLedger(store)
    ledger.upsert(CheckIn(date_key=date(2024, 3, 1), sugar_free=True))

    ledger.replace_all([CheckIn(date_key=date(2024, 3, 9), sugar_free=False)])
    assert [record.date_key for record in ledger.records()] == [date(2024, 3, 9)]

    ledger.clear()
    assert ledger.records() == []
    assert store.get(CHECK_INS_KEY) is None

"""Tests for the directory-backed local store."""

from datetime import date

from habit_engine.adapters.file_local_store import FileLocalStore
from habit_engine.domain.checkins import CheckIn
from habit_engine.services.ledger import CheckInLedger
from habit_engine.services.storage import CHECK_INS_KEY


def test_set_get_remove(tmp_path) -> None:
    store = FileLocalStore(tmp_path / "data")

    store.set("habit_engine:streak", b"{}")

    assert store.get("habit_engine:streak") == b"{}"
    assert (tmp_path / "data" / "habit_engine%3Astreak.json").exists()
    store.remove("habit_engine:streak")
    assert store.get("habit_engine:streak") is None
    store.remove("habit_engine:streak")


def test_overwrite_leaves_no_temporary_files(tmp_path) -> None:
    store = FileLocalStore(tmp_path)

    store.set("key", b"one")
    store.set("key", b"two")

    assert store.get("key") == b"two"
    assert not list(tmp_path.glob("*.tmp"))


def test_ledger_persists_across_store_instances(tmp_path) -> None:
    CheckInLedger(FileLocalStore(tmp_path)).upsert(
        CheckIn(date_key=date(2024, 3, 1), sugar_free=True)
    )

    reopened = CheckInLedger(FileLocalStore(tmp_path))

    assert reopened.get(date(2024, 3, 1)) is not None
    assert FileLocalStore(tmp_path).get(CHECK_INS_KEY) is not None

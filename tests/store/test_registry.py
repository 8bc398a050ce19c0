"""Tests for goalsheet.store.registry."""

import json
import logging
import sqlite3

import pytest

from goalsheet.domain.models import SheetName
from goalsheet.domain.sheet import SavingsSheet
from goalsheet.store.kv import MemoryStore
from goalsheet.store.registry import EMPTY_NAME_WARNING, STORAGE_KEY, SheetRegistry


class FailingStore:
    """Store whose every operation fails."""

    def get(self, key: str) -> str | None:
        raise sqlite3.OperationalError("disk I/O error")

    def set(self, key: str, value: str) -> None:
        raise sqlite3.OperationalError("disk I/O error")


class BrokenStore:
    """Non-SQLite store that fails with its own error type."""

    def get(self, key: str) -> str | None:
        raise ValueError("backend unavailable")

    def set(self, key: str, value: str) -> None:
        raise ValueError("backend unavailable")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def holiday() -> SavingsSheet:
    sheet = SavingsSheet(name=SheetName("Holiday"))
    sheet.set_goal("1000")
    sheet.set_current_balance("100")
    sheet.incomes.update_label(0, "Salary")
    sheet.incomes.update_amount(0, "450")
    sheet.incomes.append()
    sheet.incomes.update_label(1, "Side job")
    sheet.incomes.update_amount(1, "50")
    sheet.outgoings.update_label(0, "Rent")
    sheet.outgoings.update_amount(0, "300")
    return sheet


def load_registry(store: MemoryStore) -> SheetRegistry:
    registry = SheetRegistry(store)
    registry.load()
    return registry


class TestLoad:
    """Tests for SheetRegistry.load."""

    def test_absent_blob_gives_empty_registry(self, store: MemoryStore) -> None:
        assert load_registry(store).list_names() == []

    def test_corrupt_blob_gives_empty_registry(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log and start empty rather than failing."""
        store = MemoryStore({STORAGE_KEY: "{not json"})

        with caplog.at_level(logging.WARNING, logger="goalsheet"):
            registry = load_registry(store)

        assert registry.list_names() == []
        assert "corrupt" in caplog.text

    def test_deeply_nested_blob_gives_empty_registry(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should treat JSON too deep to decode as corrupt."""
        blob = '{"a": ' + "[" * 200000 + "]" * 200000 + "}"

        with caplog.at_level(logging.WARNING, logger="goalsheet"):
            registry = load_registry(MemoryStore({STORAGE_KEY: blob}))

        assert registry.list_names() == []
        assert "corrupt" in caplog.text

    def test_non_object_blob_gives_empty_registry(self) -> None:
        store = MemoryStore({STORAGE_KEY: json.dumps(["a", "b"])})
        assert load_registry(store).list_names() == []

    def test_store_failure_gives_empty_registry(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="goalsheet"):
            registry = SheetRegistry(FailingStore())
            registry.load()

        assert registry.list_names() == []
        assert "Could not read saved sheets" in caplog.text

    def test_other_store_failure_gives_empty_registry(self) -> None:
        """Should not let any store error reach the caller."""
        registry = SheetRegistry(BrokenStore())
        registry.load()
        assert registry.list_names() == []

    def test_skips_malformed_entries(self) -> None:
        """Should keep valid sheets when one entry is broken."""
        blob = json.dumps({"Good": {"goal": "10"}, "Bad": "oops"})
        registry = load_registry(MemoryStore({STORAGE_KEY: blob}))
        assert registry.list_names() == ["Good"]


class TestSave:
    """Tests for SheetRegistry.save."""

    def test_empty_name_is_rejected(self, store: MemoryStore) -> None:
        """Should return a message and leave the mapping unchanged."""
        registry = load_registry(store)

        assert registry.save(SavingsSheet()) == EMPTY_NAME_WARNING
        assert registry.list_names() == []
        assert STORAGE_KEY not in store.data
        assert registry.current is None

    def test_whitespace_name_is_rejected(self, store: MemoryStore) -> None:
        registry = load_registry(store)
        assert registry.save(SavingsSheet(name=SheetName("   "))) == EMPTY_NAME_WARNING
        assert registry.list_names() == []

    def test_save_writes_full_mapping(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        """Should write every sheet in the stored JSON format."""
        registry = load_registry(store)
        car = SavingsSheet(name=SheetName("Car"))

        registry.save(holiday)
        registry.save(car)

        stored = json.loads(store.data[STORAGE_KEY])
        assert list(stored) == ["Holiday", "Car"]
        assert stored["Holiday"] == {
            "goal": "1000",
            "currentBalance": "100",
            "incomes": [{"label": "Salary", "amount": "450"}, {"label": "Side job", "amount": "50"}],
            "outgoings": [{"label": "Rent", "amount": "300"}],
        }

    def test_save_selects_sheet(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        registry = load_registry(store)
        registry.save(holiday)
        assert registry.current == "Holiday"

    def test_save_overwrites_existing_name(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        registry = load_registry(store)
        registry.save(holiday)

        holiday.set_goal("2000")
        registry.save(holiday)

        assert registry.list_names() == ["Holiday"]
        saved = registry.get("Holiday")
        assert saved is not None
        assert saved.goal == "2000"

    def test_name_is_used_verbatim(self, store: MemoryStore) -> None:
        registry = load_registry(store)
        registry.save(SavingsSheet(name=SheetName(" Trip ")))
        assert registry.list_names() == [" Trip "]

    def test_later_edits_do_not_change_saved_sheet(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        registry = load_registry(store)
        registry.save(holiday)

        holiday.incomes.update_amount(0, "1")

        saved = registry.get("Holiday")
        assert saved is not None
        assert saved.incomes[0].amount == "450"

    def test_write_failure_keeps_sheet_in_memory(
        self, holiday: SavingsSheet, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should swallow store failures and keep the new entry."""
        registry = SheetRegistry(FailingStore())

        with caplog.at_level(logging.WARNING, logger="goalsheet"):
            assert registry.save(holiday) is None

        assert registry.list_names() == ["Holiday"]
        assert "Could not write saved sheets" in caplog.text

    def test_other_store_write_failure_is_logged(
        self, holiday: SavingsSheet, caplog: pytest.LogCaptureFixture
    ) -> None:
        registry = SheetRegistry(BrokenStore())

        with caplog.at_level(logging.WARNING, logger="goalsheet"):
            assert registry.save(holiday) is None

        assert registry.current == "Holiday"
        assert "backend unavailable" in caplog.text


class TestRoundTrip:
    """Tests for saving and reloading through the store."""

    def test_fresh_registry_reconstructs_sheet(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        """Should preserve totals and every label/amount pair in order."""
        load_registry(store).save(holiday)

        fresh = load_registry(store)
        sheet = SavingsSheet()
        fresh.open("Holiday", sheet)

        assert fresh.list_names() == ["Holiday"]
        assert sheet == holiday
        assert sheet.total_income == holiday.total_income == 500
        assert sheet.total_outgoings == 300
        assert sheet.months_to_goal == 5


class TestOpen:
    """Tests for SheetRegistry.open, get and list_names."""

    def test_open_known_sheet(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        registry = load_registry(store)
        registry.save(holiday)
        sheet = SavingsSheet()

        registry.open("Holiday", sheet)

        assert sheet.name == "Holiday"
        assert sheet.goal == "1000"
        assert registry.current == "Holiday"

    def test_open_unknown_name_resets_to_blank(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        """Loading a name that was never saved resets instead of erroring."""
        registry = load_registry(store)
        registry.save(holiday)

        registry.open("Nope", holiday)

        assert holiday == SavingsSheet()
        assert registry.current is None

    def test_open_blank_name_resets_and_clears_selection(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        registry = load_registry(store)
        registry.save(holiday)

        registry.open("", holiday)

        assert holiday == SavingsSheet()
        assert registry.current is None
        assert registry.list_names() == ["Holiday"]

    def test_get_unknown_is_none(self, store: MemoryStore) -> None:
        assert load_registry(store).get("Nope") is None

    def test_get_returns_copy(self, store: MemoryStore, holiday: SavingsSheet) -> None:
        registry = load_registry(store)
        registry.save(holiday)

        copy = registry.get("Holiday")
        assert copy is not None
        copy.incomes.update_amount(0, "1")

        again = registry.get("Holiday")
        assert again is not None
        assert again.incomes[0].amount == "450"

import threading
from datetime import timezone

import pytest

from string_analyzer.exceptions import ConflictError, InvalidInputError, NotFoundError
from string_analyzer.store import RecordStore


class TestInsert:
    def test_insert_returns_record(self, store):
        record = store.insert("test string")
        assert record.value == "test string"
        assert record.id == record.properties.sha256_hash
        assert record.created_at.tzinfo == timezone.utc
        assert len(store) == 1

    def test_value_stored_verbatim(self, store):
        record = store.insert("  Mixed Case  ")
        assert record.value == "  Mixed Case  "

    def test_duplicate_raises_conflict(self, store):
        store.insert("test string")
        with pytest.raises(ConflictError):
            store.insert("test string")
        assert len(store) == 1

    def test_case_variants_are_distinct(self, store):
        store.insert("Test String")
        store.insert("test string")
        assert len(store) == 2

    def test_empty_value_rejected_by_default(self, store):
        with pytest.raises(InvalidInputError):
            store.insert("")

    def test_empty_value_allowed_when_configured(self):
        store = RecordStore(allow_empty=True)
        record = store.insert("")
        assert record.properties.is_palindrome is True

    def test_non_string_rejected(self, store):
        with pytest.raises(InvalidInputError):
            store.insert(123)


class TestLookup:
    def test_get_by_value(self, store):
        created = store.insert("lookup")
        found = store.get("lookup")
        assert found == created

    def test_get_is_case_sensitive(self, store):
        store.insert("Lookup")
        assert store.get("lookup") is None

    def test_get_missing(self, store):
        assert store.get("missing") is None

    def test_get_by_id(self, store):
        created = store.insert("by id")
        assert store.get_by_id(created.id).value == "by id"

    def test_contains(self, store):
        store.insert("present")
        assert "present" in store
        assert "absent" not in store

    def test_list_in_insertion_order(self, store):
        for value in ["b", "a", "c"]:
            store.insert(value)
        assert [r.value for r in store.list()] == ["b", "a", "c"]

    def test_reads_return_copies(self, store):
        store.insert("copy me")
        listed = store.list()[0]
        listed.properties.character_frequency_map["z"] = 99
        assert "z" not in store.get("copy me").properties.character_frequency_map


class TestDelete:
    def test_delete_then_get(self, store):
        store.insert("gone")
        store.delete("gone")
        assert store.get("gone") is None

    def test_reinsert_after_delete(self, store):
        store.insert("again")
        store.delete("again")
        record = store.insert("again")
        assert record.value == "again"

    def test_delete_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            store.delete("never stored")

    def test_clear(self, seeded_store):
        seeded_store.clear()
        assert len(seeded_store) == 0


class TestConcurrency:
    def test_concurrent_inserts_of_same_value(self, store):
        outcomes = []
        lock = threading.Lock()

        def worker():
            try:
                store.insert("contended")
                result = "created"
            except ConflictError:
                result = "conflict"
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("created") == 1
        assert outcomes.count("conflict") == 15
        assert len(store) == 1

    def test_concurrent_distinct_inserts(self, store):
        threads = [threading.Thread(target=store.insert, args=(f"value {i}",)) for i in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(store.list()) == 50

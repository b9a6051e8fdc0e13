"""Tests for InMemoryRecordStore.

Tests cover:
1. Add and lookup by id
2. Bulk listing by record type in insertion order
3. Unknown id raises RecordNotFoundError
4. Raw dict coercion with dashboard aliases
5. Loading a JSON corpus, skipping invalid entries
6. Persistence (save/load cycle)
7. Statistics
"""

import json

import pytest

from regintel_engine.data_management.record_store import (
    InMemoryRecordStore,
    RecordNotFoundError,
    RecordStore,
)
from regintel_engine.data_management.schemas import RecordType, RecordValidationError


@pytest.fixture
def corpus_file(tmp_path):
    """JSON corpus with one invalid update."""
    path = tmp_path / "corpus.json"
    path.write_text(
        json.dumps(
            {
                "regulatory_updates": [
                    {
                        "id": "upd-1",
                        "title": "FDA 510(k) Clearance: CardioFlow Stent",
                        "description": "Manufacturer: Acme Medical. Coronary stent.",
                        "authority": "FDA",
                        "region": "US",
                        "publishedAt": "2025-05-20T00:00:00Z",
                    },
                    {"id": "upd-bad"},
                    {
                        "id": "upd-2",
                        "title": "CE Mark: CardioFlow Stent",
                        "authority": "EMA",
                        "region": "EU",
                    },
                ],
                "legal_cases": [
                    {
                        "id": "case-1",
                        "caseTitle": "Doe v. Acme Medical",
                        "keyIssues": ["product liability"],
                        "decisionDate": "2024-03-01",
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestInMemoryStore:
    """Tests for add, lookup and listing."""

    def test_protocol(self):
        assert isinstance(InMemoryRecordStore(), RecordStore)

    def test_get_record(self, make_update):
        store = InMemoryRecordStore([make_update("upd-1")])
        assert store.get_record("upd-1").id == "upd-1"

    def test_unknown_id(self):
        with pytest.raises(RecordNotFoundError) as exc_info:
            InMemoryRecordStore().get_record("missing")
        assert exc_info.value.record_id == "missing"

    def test_listing_by_type(self, make_update, make_case):
        store = InMemoryRecordStore(
            [make_update("u-2"), make_case("c-1"), make_update("u-1")]
        )
        assert [r.id for r in store.list_regulatory_updates()] == ["u-2", "u-1"]
        assert [r.id for r in store.list_legal_cases()] == ["c-1"]
        assert len(store) == 3

    def test_readd_replaces(self, make_update):
        store = InMemoryRecordStore([make_update("u-1", "Old"), make_update("u-1", "New")])
        assert len(store) == 1
        assert store.get_record("u-1").title == "New"

    def test_add_raw(self):
        store = InMemoryRecordStore()
        record = store.add_raw(
            {"id": "c-9", "caseTitle": "Roe v. Acme", "content": "Full text"},
            RecordType.LEGAL_CASE,
        )
        assert record.is_legal_case
        assert record.title == "Roe v. Acme"
        assert record.body == "Full text"

    def test_add_raw_invalid(self):
        with pytest.raises(RecordValidationError):
            InMemoryRecordStore().add_raw({"id": "x"}, RecordType.REGULATORY_UPDATE)


class TestPersistence:
    """Tests for loading and saving JSON corpora."""

    def test_load_skips_invalid(self, corpus_file):
        store = InMemoryRecordStore(persistence_path=str(corpus_file))

        assert len(store) == 3
        assert store.rejected == 1
        update = store.get_record("upd-1")
        assert update.jurisdiction == "US"
        assert update.body.startswith("Manufacturer: Acme Medical")
        case = store.get_record("case-1")
        assert case.is_legal_case
        assert case.key_issues == ("product liability",)

    def test_missing_file_is_empty(self, tmp_path):
        store = InMemoryRecordStore(persistence_path=str(tmp_path / "absent.json"))
        assert len(store) == 0

    def test_save_load_cycle(self, corpus_file, tmp_path):
        store = InMemoryRecordStore(persistence_path=str(corpus_file))
        target = store.save(str(tmp_path / "out" / "saved.json"))

        reloaded = InMemoryRecordStore(persistence_path=str(target))
        assert [r.id for r in reloaded.list_regulatory_updates()] == ["upd-1", "upd-2"]
        assert reloaded.get_record("upd-1") == store.get_record("upd-1")
        assert reloaded.get_record("case-1") == store.get_record("case-1")

    def test_save_without_path(self):
        with pytest.raises(ValueError):
            InMemoryRecordStore().save()

    def test_stats(self, corpus_file):
        stats = InMemoryRecordStore(persistence_path=str(corpus_file)).get_stats()
        assert stats["total_records"] == 3
        assert stats["regulatory_updates"] == 2
        assert stats["legal_cases"] == 1
        assert stats["authorities"] == 2
        assert stats["rejected_on_load"] == 1

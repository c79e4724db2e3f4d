"""Tests for the JSON file and in-memory item stores."""

import json
import logging

import pytest

from wsjf.adapters.json_store import JsonItemStore
from wsjf.adapters.memory_store import MemoryItemStore
from wsjf.core.items import ItemDraft


class FakeClock:
    def __init__(self, start=1_000):
        self.now = start

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(params=["json", "memory"])
def store(request, tmp_path, clock):
    if request.param == "json":
        return JsonItemStore(tmp_path / "items.json", clock=clock)
    return MemoryItemStore(clock=clock)


@pytest.fixture
def draft():
    return ItemDraft(
        name="Upgrade DB",
        categories=["Avoid Cost"],
        effort=5,
        category_data={"costAvoidedTotal": 50000},
    )


class TestItemStore:
    def test_empty(self, store):
        assert store.get_all() == []

    def test_add_assigns_id_and_created_at(self, store, draft):
        item = store.add(draft, 10000.0)
        assert item.id
        assert item.created_at == 1_000
        assert item.wsjf_score == 10000.0
        assert store.get_all() == [item]

    def test_ids_are_unique(self, store, draft):
        a = store.add(draft, 1)
        b = store.add(draft, 1)
        assert a.id != b.id

    def test_created_at_strictly_increases(self, store, draft):
        a = store.add(draft, 1)
        b = store.add(draft, 1)
        assert b.created_at > a.created_at

    def test_insertion_order_kept(self, store, draft, clock):
        low = store.add(draft, 1)
        clock.now += 10
        high = store.add(draft, 100)
        assert [i.id for i in store.get_all()] == [low.id, high.id]

    def test_get(self, store, draft):
        item = store.add(draft, 1)
        assert store.get(item.id) == item
        assert store.get("missing") is None

    def test_update_replaces_fields(self, store, draft):
        item = store.add(draft, 1)
        store.update(item.id, name="Renamed", wsjf_score=42.0)
        updated = store.get(item.id)
        assert updated.name == "Renamed"
        assert updated.wsjf_score == 42.0
        assert updated.created_at == item.created_at

    def test_update_unknown_id_is_noop(self, store, draft):
        item = store.add(draft, 1)
        store.update("missing", name="Nope")
        assert store.get_all() == [item]

    def test_update_rejects_immutable_fields(self, store, draft):
        item = store.add(draft, 1)
        with pytest.raises(TypeError, match="created_at"):
            store.update(item.id, created_at=5)

    def test_delete(self, store, draft):
        a = store.add(draft, 1)
        b = store.add(draft, 2)
        store.delete(a.id)
        assert store.get_all() == [b]

    def test_delete_unknown_id_is_noop(self, store, draft):
        item = store.add(draft, 1)
        store.delete("missing")
        assert store.get_all() == [item]


class TestJsonItemStore:
    def test_independent_stores(self, tmp_path, draft):
        a = JsonItemStore(tmp_path / "a.json")
        b = JsonItemStore(tmp_path / "b.json")
        a.add(draft, 1)
        assert len(a.get_all()) == 1
        assert b.get_all() == []

    def test_writes_record_shape(self, tmp_path, draft):
        path = tmp_path / "items.json"
        item = JsonItemStore(path, clock=lambda: 123).add(draft, 10000.0)
        assert json.loads(path.read_text()) == [
            {
                "id": item.id,
                "name": "Upgrade DB",
                "description": "",
                "categories": ["Avoid Cost"],
                "effort": 5,
                "createdAt": 123,
                "wsjfScore": 10000.0,
                "categoryData": {"costAvoidedTotal": 50000},
            }
        ]

    def test_creates_parent_directory(self, tmp_path, draft):
        path = tmp_path / "nested" / "dir" / "items.json"
        JsonItemStore(path).add(draft, 1)
        assert path.exists()

    def test_no_temp_file_left_behind(self, tmp_path, draft):
        JsonItemStore(tmp_path / "items.json").add(draft, 1)
        assert [p.name for p in tmp_path.iterdir()] == ["items.json"]

    def test_corrupt_file_reads_empty(self, tmp_path, caplog):
        path = tmp_path / "items.json"
        path.write_text("{not json")
        with caplog.at_level(logging.WARNING):
            assert JsonItemStore(path).get_all() == []
        assert "Failed to parse" in caplog.text

    def test_non_list_payload_reads_empty(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text('{"items": []}')
        assert JsonItemStore(path).get_all() == []

    def test_legacy_records_migrated_on_read(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "old",
                        "name": "Legacy",
                        "category": "Avoid Cost",
                        "createdAt": 1,
                        "wsjfScore": 3,
                        "data": {"estimationAvoidValue": 4, "costAvoidedTotal": 12},
                    }
                ]
            )
        )
        [item] = JsonItemStore(path).get_all()
        assert item.categories == ["Avoid Cost"]
        assert item.effort == 4.0
        assert item.category_data["costAvoidedTotal"] == 12

    def test_long_integer_literal_reads_as_zero(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text('[{"id": "a", "name": "n", "effort": 1' + "0" * 400 + "}]")
        [item] = JsonItemStore(path).get_all()
        assert item.effort == 0.0


class TestMemoryItemStore:
    def test_oversized_numbers_read_as_zero(self):
        store = MemoryItemStore(
            [{"id": "a", "name": "n", "categories": [], "effort": 10**400, "wsjfScore": 10**400}]
        )
        [item] = store.get_all()
        assert item.effort == 0.0
        assert item.wsjf_score == 0.0

    def test_unknown_keys_kept_across_writes(self, draft):
        store = MemoryItemStore([{"id": "x", "name": "Seed", "pinned": True}])
        store.add(draft, 1)
        store.update("x", name="Changed")
        assert store.records[0]["pinned"] is True
        assert store.records[0]["name"] == "Changed"

    def test_seeded_records_normalized(self):
        store = MemoryItemStore([{"id": "x", "category": "Reduce Cost"}])
        [item] = store.get_all()
        assert item.categories == ["Reduce Cost"]

    def test_seed_is_copied(self, draft):
        seed = [{"id": "x", "name": "Seed"}]
        store = MemoryItemStore(seed)
        store.update("x", name="Changed")
        assert seed == [{"id": "x", "name": "Seed"}]

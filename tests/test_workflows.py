"""Tests for the shared workflow layer."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from wsjf.adapters.memory_store import MemoryItemStore
from wsjf.config import Config, DATA_DIR
from wsjf.core.items import ItemDraft
from wsjf.workflows import (
    create_item,
    delete_item,
    edit_item,
    get_store,
    list_prioritized,
)


@pytest.fixture
def store():
    return MemoryItemStore()


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def avoid_cost_draft(**overrides):
    fields = dict(
        name="Upgrade DB",
        categories=["Avoid Cost"],
        effort=5,
        category_data={"costAvoidedTotal": "50000"},
    )
    fields.update(overrides)
    return ItemDraft(**fields)


class TestGetStore:
    def test_uses_configured_file(self, tmp_path):
        store = get_store(Config(items_file=str(tmp_path / "mine.json")))
        assert store.path == tmp_path / "mine.json"

    def test_expands_user_path(self):
        store = get_store(Config(items_file="~/some/items.json"))
        assert store.path == Path.home() / "some" / "items.json"

    def test_falls_back_to_default(self):
        assert get_store(Config()).path == DATA_DIR / "items.json"


class TestCreateItem:
    def test_scores_and_stores(self, store):
        item = create_item(store, avoid_cost_draft())
        assert item.wsjf_score == 10000.0
        assert store.get(item.id).wsjf_score == 10000.0

    def test_prunes_unselected_fields(self, store):
        item = create_item(
            store,
            avoid_cost_draft(category_data={"costAvoidedTotal": "50000", "peopleNow": 3}),
        )
        assert item.category_data == {"costAvoidedTotal": 50000.0}

    def test_coerces_effort(self, store):
        item = create_item(store, avoid_cost_draft(effort="5"))
        assert item.effort == 5.0

    def test_zero_effort_scores_zero(self, store):
        item = create_item(store, avoid_cost_draft(effort=0))
        assert item.wsjf_score == 0


class TestEditItem:
    def test_recomputes_score(self, store):
        item = create_item(store, avoid_cost_draft())
        updated = edit_item(store, item.id, category_data={"risk": "50"})
        assert updated.wsjf_score == 5000.0
        assert updated.category_data == {"costAvoidedTotal": 50000.0, "risk": 50.0}

    def test_keeps_id_and_created_at(self, store):
        item = create_item(store, avoid_cost_draft())
        updated = edit_item(store, item.id, name="Renamed", effort=10)
        assert updated.id == item.id
        assert updated.created_at == item.created_at
        assert updated.name == "Renamed"
        assert updated.wsjf_score == 5000.0

    def test_empty_value_clears_field(self, store):
        item = create_item(store, avoid_cost_draft(category_data={"costAvoidedTotal": 100, "risk": 10}))
        assert item.wsjf_score == 2.0
        updated = edit_item(store, item.id, category_data={"risk": ""})
        assert "risk" not in updated.category_data
        assert updated.wsjf_score == 20.0

    def test_switching_categories_drops_old_fields(self, store):
        item = create_item(store, avoid_cost_draft())
        updated = edit_item(
            store,
            item.id,
            categories=["Reduce Cost"],
            category_data={"peopleNow": 1, "hoursNow": 10},
        )
        assert "costAvoidedTotal" not in updated.category_data
        assert updated.wsjf_score == 50.0

    def test_unknown_id(self, store):
        assert edit_item(store, "missing", name="x") is None
        assert store.get_all() == []


class TestDeleteItem:
    def test_deletes(self, store):
        item = create_item(store, avoid_cost_draft())
        assert delete_item(store, item.id) is True
        assert store.get_all() == []

    def test_unknown_id(self, store):
        assert delete_item(store, "missing") is False


class TestListPrioritized:
    def test_orders_by_urgency_then_score(self, store, now):
        big = create_item(store, avoid_cost_draft(name="Big"))
        urgent = create_item(
            store,
            avoid_cost_draft(
                name="Urgent",
                category_data={"costAvoidedTotal": 10, "timeCostOccur": "2025-01-20"},
            ),
        )
        small = create_item(store, avoid_cost_draft(name="Small", effort=100))
        ordered = list_prioritized(store, as_of=now)
        assert [i.id for i in ordered] == [urgent.id, big.id, small.id]

    def test_storage_order_untouched(self, store, now):
        first = create_item(store, avoid_cost_draft(name="Low", effort=100))
        second = create_item(store, avoid_cost_draft(name="High"))
        list_prioritized(store, as_of=now)
        assert [r["id"] for r in store.records] == [first.id, second.id]

    def test_limit(self, store, now):
        for n in range(3):
            create_item(store, avoid_cost_draft(name=f"Item {n}"))
        assert len(list_prioritized(store, as_of=now, limit=2)) == 2
        assert len(list_prioritized(store, as_of=now, limit=0)) == 3

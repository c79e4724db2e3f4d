"""Shared read-modify-write logic for record-backed item stores."""

import logging
import time
import uuid
from dataclasses import replace

from wsjf.core.items import Item, ItemDraft
from wsjf.core.migration import records_to_items

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"name", "description", "categories", "effort", "wsjf_score", "category_data"}
)


def _now_ms() -> int:
    return int(time.time() * 1000)


class RecordItemStore:
    """
    Item store over a whole-collection record list.

    Subclasses provide _read_records and _write_records. Every mutation reads
    the full collection, applies the change and writes it all back.
    """

    def __init__(self, clock=None):
        self._clock = clock or _now_ms

    def _read_records(self) -> list:
        raise NotImplementedError

    def _write_records(self, records: list[dict]) -> None:
        raise NotImplementedError

    def _save(self, items: list[Item]) -> None:
        self._write_records([item.to_record() for item in items])

    def get_all(self) -> list[Item]:
        """All items, normalized, in insertion order."""
        return records_to_items(self._read_records())

    def get(self, item_id: str) -> Item | None:
        for item in self.get_all():
            if item.id == item_id:
                return item
        return None

    def add(self, draft: ItemDraft, wsjf_score: float) -> Item:
        """Store a new item, assigning its id and creation time."""
        items = self.get_all()
        # Creation times strictly increase so they can break ordering ties
        created_at = max([self._clock()] + [i.created_at + 1 for i in items])
        item = Item(
            name=draft.name,
            description=draft.description,
            categories=list(draft.categories),
            effort=draft.effort,
            category_data=dict(draft.category_data),
            id=str(uuid.uuid4()),
            created_at=created_at,
            wsjf_score=wsjf_score,
        )
        items.append(item)
        self._save(items)
        logger.debug(f"Added item {item.id} ({item.name!r})")
        return item

    def update(self, item_id: str, **fields) -> None:
        """Replace fields on an item. No-op if the id is unknown."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update item fields: {', '.join(sorted(unknown))}")

        items = self.get_all()
        for index, item in enumerate(items):
            if item.id == item_id:
                items[index] = replace(item, **fields)
                self._save(items)
                logger.debug(f"Updated item {item_id}")
                return
        logger.debug(f"Update skipped, no item {item_id}")

    def delete(self, item_id: str) -> None:
        """Remove an item. No-op if the id is unknown."""
        items = self.get_all()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            logger.debug(f"Delete skipped, no item {item_id}")
            return
        self._save(remaining)
        logger.debug(f"Deleted item {item_id}")

"""Item store interface."""

from typing import Protocol

from wsjf.core.items import Item, ItemDraft


class ItemStore(Protocol):
    """Interface for persisting items in any backend."""

    def get_all(self) -> list[Item]:
        """All items, normalized, in insertion order."""
        ...

    def get(self, item_id: str) -> Item | None:
        """A single item by id. Returns None if not found."""
        ...

    def add(self, draft: ItemDraft, wsjf_score: float) -> Item:
        """Store a new item, assigning its id and creation time."""
        ...

    def update(self, item_id: str, **fields) -> None:
        """Replace fields on an item. No-op if the id is unknown."""
        ...

    def delete(self, item_id: str) -> None:
        """Remove an item. No-op if the id is unknown."""
        ...

"""Shared workflow layer between the CLI and any other front end.

Every save goes through here so the stored score always matches the stored
inputs: category data is pruned to the selected categories and the score is
recomputed before the store is touched.
"""

import logging
from dataclasses import replace
from datetime import datetime

from .adapters.json_store import JsonItemStore
from .config import Config
from .core.categories import parse_numeric_field
from .core.items import Item, ItemDraft, prune_category_data
from .core.ordering import order_items
from .core.scoring import compute_wsjf
from .ports.item_store import ItemStore

logger = logging.getLogger(__name__)


def get_store(config: Config) -> JsonItemStore:
    """Resolve the item store from config."""
    return JsonItemStore(config.items_path)


def prepare_draft(draft: ItemDraft) -> ItemDraft:
    """Drop fields that belong to unselected categories and coerce effort."""
    return replace(
        draft,
        effort=parse_numeric_field(draft.effort),
        category_data=prune_category_data(draft.categories, draft.category_data),
    )


def create_item(store: ItemStore, draft: ItemDraft) -> Item:
    """Score a new item and store it."""
    draft = prepare_draft(draft)
    score = compute_wsjf(draft)
    item = store.add(draft, score)
    logger.info(f"Created {item.name!r} with score {score:.2f}")
    return item


def edit_item(
    store: ItemStore,
    item_id: str,
    *,
    name: str | None = None,
    description: str | None = None,
    categories: list[str] | None = None,
    effort: float | None = None,
    category_data: dict | None = None,
) -> Item | None:
    """
    Replace the given fields on an item and recompute its score.

    category_data is merged over the existing values; an empty string clears
    a field. Returns the updated item, or None if the id is unknown.
    """
    existing = store.get(item_id)
    if existing is None:
        logger.debug(f"Edit skipped, no item {item_id}")
        return None

    draft = existing.draft()
    if name is not None:
        draft.name = name
    if description is not None:
        draft.description = description
    if categories is not None:
        draft.categories = list(categories)
    if effort is not None:
        draft.effort = effort
    if category_data:
        draft.category_data.update(category_data)

    draft = prepare_draft(draft)
    score = compute_wsjf(draft)
    store.update(
        item_id,
        name=draft.name,
        description=draft.description,
        categories=draft.categories,
        effort=draft.effort,
        category_data=draft.category_data,
        wsjf_score=score,
    )
    logger.info(f"Updated {draft.name!r}, score now {score:.2f}")
    return store.get(item_id)


def delete_item(store: ItemStore, item_id: str) -> bool:
    """Delete an item. Returns False if there was nothing to delete."""
    if store.get(item_id) is None:
        return False
    store.delete(item_id)
    return True


def list_prioritized(
    store: ItemStore,
    as_of: datetime | None = None,
    limit: int = 0,
) -> list[Item]:
    """All stored items in priority order, optionally truncated."""
    ordered = order_items(store.get_all(), as_of)
    if limit > 0:
        return ordered[:limit]
    return ordered

"""Normalize stored records of older shapes into the current item shape."""

import logging

from .categories import Category, parse_numeric_field
from .items import Item

logger = logging.getLogger(__name__)

# Per-category effort estimates that predate the shared effort field,
# checked in this order.
LEGACY_EFFORT_FIELDS = (
    "estimationAvoidValue",
    "estimationValue",
    "estimationProtectValue",
    "estimationIncreaseValue",
)

RECORD_KEYS = frozenset(
    {"id", "name", "description", "categories", "effort", "createdAt", "wsjfScore", "categoryData"}
)


def _normalize_categories(raw: dict) -> list[str]:
    tags = raw.get("categories")
    if tags is None:
        legacy = raw.get("category")
        tags = [legacy] if legacy else []
    elif isinstance(tags, str):
        tags = [tags]
    elif not isinstance(tags, (list, tuple)):
        logger.warning(f"Record {raw.get('id')!r}: unreadable categories {tags!r}")
        tags = []

    categories: list[str] = []
    for tag in tags:
        if not tag:
            continue
        category = Category.parse(tag)
        # Unknown tags are kept so no data is lost; they score 0
        name = category.value if category else str(tag)
        if name not in categories:
            categories.append(name)
    return categories


def _legacy_effort(category_data: dict) -> float:
    for key in LEGACY_EFFORT_FIELDS:
        value = parse_numeric_field(category_data.get(key))
        if value:
            return value
    return 0.0


def _int_or_zero(raw) -> int:
    value = parse_numeric_field(raw)
    return int(value)


def normalize_record(raw: dict) -> dict:
    """
    Coerce a raw stored record into the current record shape.

    Idempotent: a current-shape record comes back unchanged. Unknown keys are
    preserved, and `record_to_item` carries them on `Item.extra`.
    Never raises for malformed field values.
    """
    record = dict(raw)

    category_data = record.get("categoryData")
    if category_data is None:
        category_data = record.pop("data", None)
    if not isinstance(category_data, dict):
        category_data = {}
    record["categoryData"] = dict(category_data)

    record["categories"] = _normalize_categories(raw)
    record.pop("category", None)

    if record.get("effort") is None:
        record["effort"] = _legacy_effort(record["categoryData"])
    else:
        record["effort"] = parse_numeric_field(record["effort"])

    record["id"] = str(record.get("id") or "")
    record["name"] = str(record.get("name") or "")
    record["description"] = str(record.get("description") or "")
    record["createdAt"] = _int_or_zero(record.get("createdAt"))
    record["wsjfScore"] = parse_numeric_field(record.get("wsjfScore"))
    return record


def record_to_item(raw: dict) -> Item:
    """Normalize a raw record and build an Item from it."""
    record = normalize_record(raw)
    return Item(
        id=record["id"],
        name=record["name"],
        description=record["description"],
        categories=record["categories"],
        effort=record["effort"],
        created_at=record["createdAt"],
        wsjf_score=record["wsjfScore"],
        category_data=record["categoryData"],
        extra={k: v for k, v in record.items() if k not in RECORD_KEYS},
    )


def records_to_items(raw_records) -> list[Item]:
    """Build items from a stored collection, skipping entries that are not records."""
    items = []
    for index, raw in enumerate(raw_records):
        if not isinstance(raw, dict):
            logger.warning(f"Skipping stored entry {index}: not a record ({type(raw).__name__})")
            continue
        items.append(record_to_item(raw))
    return items

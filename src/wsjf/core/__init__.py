"""Functional core - pure business logic with no I/O."""

from .categories import (
    Category,
    HOURLY_RATE,
    AvoidCost,
    ReduceCost,
    ProtectRevenue,
    IncreaseRevenue,
    parse_numeric_field,
    parse_ratio_field,
)
from .items import Item, ItemDraft, prune_category_data
from .scoring import compute_wsjf, score_breakdown, round_down_two_decimals
from .ordering import order_items, item_deadline, is_urgent, deadline_info, DeadlineInfo
from .migration import normalize_record, record_to_item, records_to_items
from .listing import format_item_line, item_to_dict

__all__ = [
    # Categories
    "Category",
    "HOURLY_RATE",
    "AvoidCost",
    "ReduceCost",
    "ProtectRevenue",
    "IncreaseRevenue",
    "parse_numeric_field",
    "parse_ratio_field",
    # Items
    "Item",
    "ItemDraft",
    "prune_category_data",
    # Scoring
    "compute_wsjf",
    "score_breakdown",
    "round_down_two_decimals",
    # Ordering
    "order_items",
    "item_deadline",
    "is_urgent",
    "deadline_info",
    "DeadlineInfo",
    # Migration
    "normalize_record",
    "record_to_item",
    "records_to_items",
    # Listing
    "format_item_line",
    "item_to_dict",
]

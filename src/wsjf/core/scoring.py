"""WSJF score calculation - pure, no I/O dependencies."""

import logging
import math

from .categories import Category, inputs_for, parse_numeric_field
from .items import ItemDraft

logger = logging.getLogger(__name__)


def round_down_two_decimals(value: float) -> float:
    """Floor to 2 decimal places (12.399 -> 12.39). Scores are never rounded up."""
    return math.floor(value * 100) / 100


def score_breakdown(draft: ItemDraft) -> dict[Category, float]:
    """
    Value contributed by each selected category.

    Unknown tags contribute nothing. Fields of categories that are not
    selected are ignored.
    """
    breakdown: dict[Category, float] = {}
    for tag in draft.categories:
        category = Category.parse(tag)
        if category is None:
            logger.debug(f"Ignoring unknown category {tag!r} on {draft.name!r}")
            continue
        if category in breakdown:
            continue
        breakdown[category] = inputs_for(category, draft.category_data).value()
    return breakdown


def total_value(draft: ItemDraft) -> float:
    """Cost of delay: the sum of all category contributions."""
    return sum(score_breakdown(draft).values())


def compute_wsjf(draft: ItemDraft) -> float:
    """
    WSJF = cost of delay / job size, floored to 2 decimals.

    Returns 0 when effort is missing, zero or negative.
    Pure function - no I/O.
    """
    effort = parse_numeric_field(draft.effort)
    if effort <= 0:
        return 0
    score = total_value(draft) / effort
    if not math.isfinite(score * 100):
        logger.warning(f"Score for {draft.name!r} overflowed, using 0")
        return 0
    return round_down_two_decimals(score)

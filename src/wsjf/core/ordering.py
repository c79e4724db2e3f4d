"""Priority ordering: deadline urgency first, then WSJF score - no I/O."""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from .categories import parse_numeric_field
from .items import Item

# Urgency window in days relative to now: overdue by up to a week still
# counts, due a month or more out does not.
URGENT_OVERDUE_DAYS = -7
URGENT_WINDOW_DAYS = 30

DEADLINE_FIELDS = ("timeCostOccur", "timeToLossOccur")

SECONDS_PER_DAY = 24 * 60 * 60


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_deadline(raw) -> datetime | None:
    """
    Parse a stored deadline into an aware datetime.

    Accepts ISO dates ("2025-01-20", taken as UTC midnight), ISO datetimes
    (naive ones taken as UTC) and epoch milliseconds. Anything else is None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        return _as_utc(raw)
    if isinstance(raw, date):
        return datetime.combine(raw, time(), tzinfo=timezone.utc)
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time(), tzinfo=timezone.utc)
        return _as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return None


def item_deadline(item: Item) -> datetime | None:
    """Earliest parseable deadline on the item, or None."""
    deadlines = [
        d
        for d in (parse_deadline(item.category_data.get(key)) for key in DEADLINE_FIELDS)
        if d is not None
    ]
    return min(deadlines) if deadlines else None


def days_until(deadline: datetime, as_of: datetime | None = None) -> int:
    """Whole days until the deadline, rounded up (negative if overdue)."""
    as_of = _as_utc(as_of or _utc_now())
    return math.ceil((deadline - as_of).total_seconds() / SECONDS_PER_DAY)


def is_urgent(deadline: datetime | None, as_of: datetime | None = None) -> bool:
    """Deadline falls inside the urgency window around as_of."""
    if deadline is None:
        return False
    return URGENT_OVERDUE_DAYS <= days_until(deadline, as_of) < URGENT_WINDOW_DAYS


def order_items(items: list[Item], as_of: datetime | None = None) -> list[Item]:
    """
    Sort items for display.

    Urgent items come first, soonest deadline first. Everything else (and
    urgent items sharing a deadline) by WSJF score descending, then newest
    first. Returns a new list; input order is never trusted or modified.

    Pure function - no I/O.
    """
    as_of = _as_utc(as_of or _utc_now())

    def sort_key(item: Item) -> tuple[bool, float, float, int]:
        deadline = item_deadline(item)
        urgent = is_urgent(deadline, as_of)
        # Non-urgent items share a constant so they fall through to score
        deadline_key = deadline.timestamp() if urgent else 0.0
        score = parse_numeric_field(item.wsjf_score)
        return (not urgent, deadline_key, -score, -int(item.created_at or 0))

    return sorted(items, key=sort_key)


@dataclass
class DeadlineInfo:
    """Deadline status of an item relative to a point in time."""

    deadline: datetime
    days_left: int
    is_urgent: bool

    @property
    def is_overdue(self) -> bool:
        return self.days_left < 0

    def label(self) -> str:
        if self.is_overdue:
            return f"Overdue by {-self.days_left} days"
        if self.days_left == 0:
            return "Due today"
        return f"Due in {self.days_left} days"


def deadline_info(item: Item, as_of: datetime | None = None) -> DeadlineInfo | None:
    """Deadline status for display, or None if the item has no deadline."""
    deadline = item_deadline(item)
    if deadline is None:
        return None
    as_of = _as_utc(as_of or _utc_now())
    return DeadlineInfo(
        deadline=deadline,
        days_left=days_until(deadline, as_of),
        is_urgent=is_urgent(deadline, as_of),
    )

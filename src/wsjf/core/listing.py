"""Pure list formatting logic - no I/O dependencies."""

from datetime import datetime

from .items import Item
from .ordering import deadline_info


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_item_line(item: Item, as_of: datetime | None = None) -> str:
    """
    Format a single item for display in the priority list.

    Pure function - no I/O.
    """
    details = [", ".join(item.categories) or "Uncategorized"]
    details.append(f"effort {_format_number(item.effort)}w")

    info = deadline_info(item, as_of)
    if info:
        deadline = info.label()
        if info.is_urgent:
            deadline += ", URGENT"
        details.append(deadline)

    return f"[{item.wsjf_score:>10.2f}] {item.name} ({'; '.join(details)})"


def item_to_dict(item: Item, as_of: datetime | None = None) -> dict:
    """Item record plus its deadline status, for JSON output."""
    data = item.to_record()
    info = deadline_info(item, as_of)
    data["deadline"] = info.deadline.isoformat() if info else None
    data["daysLeft"] = info.days_left if info else None
    data["urgent"] = info.is_urgent if info else False
    return data

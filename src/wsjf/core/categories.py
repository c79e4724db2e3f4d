"""Value categories and their typed input fields - no I/O dependencies."""

import math
import re
from dataclasses import dataclass
from enum import Enum

# Fixed hourly cost used by the Reduce Cost rule.
HOURLY_RATE = 25


class Category(Enum):
    """The four value-contribution rules an item can be tagged with."""

    AVOID_COST = "Avoid Cost"
    REDUCE_COST = "Reduce Cost"
    PROTECT_REVENUE = "Protect Revenue"
    INCREASE_REVENUE = "Increase Revenue"

    @property
    def slug(self) -> str:
        return self.value.lower().replace(" ", "-")

    @classmethod
    def parse(cls, tag) -> "Category | None":
        """
        Resolve a tag to a Category.

        Accepts the display name ("Avoid Cost") or any slug form
        ("avoid-cost", "avoid_cost", "AvoidCost"). Returns None for
        anything else.
        """
        if isinstance(tag, Category):
            return tag
        if not isinstance(tag, str):
            return None
        key = _squash(tag)
        for category in cls:
            if _squash(category.value) == key:
                return category
        return None


def _squash(text: str) -> str:
    return re.sub(r"[\s_\-]+", "", text).lower()


def parse_numeric_field(raw) -> float:
    """
    Parse a raw input value into a number.

    Total by design: missing, empty, non-numeric, and non-finite input all
    give 0.0. One bad field never fails a whole computation.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return 0.0
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def parse_ratio_field(raw) -> float | None:
    """
    Parse a percentage field.

    Returns None when the field is missing or empty, which callers read as
    "assume 100%". An explicit 0 stays 0.
    """
    if raw is None:
        return None
    if isinstance(raw, str) and not raw.strip():
        return None
    return parse_numeric_field(raw)


def _ratio_factor(percent: float | None) -> float:
    return 1.0 if percent is None else percent / 100


def _text(raw) -> str | None:
    if raw is None or raw == "":
        return None
    return str(raw)


@dataclass
class AvoidCost:
    """Avoid Cost inputs: a one-off cost, optionally weighted by risk."""

    cost_avoided_total: float = 0.0
    risk: float | None = None
    time_cost_occur: str | None = None

    category = Category.AVOID_COST

    def value(self) -> float:
        return self.cost_avoided_total * _ratio_factor(self.risk)

    @property
    def deadline(self) -> str | None:
        return self.time_cost_occur

    @classmethod
    def from_fields(cls, fields: dict) -> "AvoidCost":
        return cls(
            cost_avoided_total=parse_numeric_field(fields.get("costAvoidedTotal")),
            risk=parse_ratio_field(fields.get("risk")),
            time_cost_occur=_text(fields.get("timeCostOccur")),
        )

    def to_fields(self) -> dict:
        fields: dict = {"costAvoidedTotal": self.cost_avoided_total}
        if self.risk is not None:
            fields["risk"] = self.risk
        if self.time_cost_occur:
            fields["timeCostOccur"] = self.time_cost_occur
        return fields


@dataclass
class ReduceCost:
    """Reduce Cost inputs: people and hours spent now versus afterwards."""

    people_now: float = 0.0
    hours_now: float = 0.0
    people_future: float = 0.0
    hours_future: float = 0.0

    category = Category.REDUCE_COST

    def current_cost(self) -> float:
        return self.people_now * HOURLY_RATE * self.hours_now

    def future_cost(self) -> float:
        return self.people_future * HOURLY_RATE * self.hours_future

    def value(self) -> float:
        # Negative when the future cost is higher; not clamped.
        return self.current_cost() - self.future_cost()

    @property
    def deadline(self) -> str | None:
        return None

    @classmethod
    def from_fields(cls, fields: dict) -> "ReduceCost":
        return cls(
            people_now=parse_numeric_field(fields.get("peopleNow")),
            hours_now=parse_numeric_field(fields.get("hoursNow")),
            people_future=parse_numeric_field(fields.get("peopleFuture")),
            hours_future=parse_numeric_field(fields.get("hoursFuture")),
        )

    def to_fields(self) -> dict:
        return {
            "peopleNow": self.people_now,
            "hoursNow": self.hours_now,
            "peopleFuture": self.people_future,
            "hoursFuture": self.hours_future,
        }


@dataclass
class ProtectRevenue:
    """Protect Revenue inputs: revenue at stake, optionally weighted by share."""

    total_revenue_protected: float = 0.0
    market_share: float | None = None
    time_to_loss_occur: str | None = None

    category = Category.PROTECT_REVENUE

    def value(self) -> float:
        return self.total_revenue_protected * _ratio_factor(self.market_share)

    @property
    def deadline(self) -> str | None:
        return self.time_to_loss_occur

    @classmethod
    def from_fields(cls, fields: dict) -> "ProtectRevenue":
        return cls(
            total_revenue_protected=parse_numeric_field(fields.get("totalRevenueProtected")),
            market_share=parse_ratio_field(fields.get("marketShare")),
            time_to_loss_occur=_text(fields.get("timeToLossOccur")),
        )

    def to_fields(self) -> dict:
        fields: dict = {"totalRevenueProtected": self.total_revenue_protected}
        if self.market_share is not None:
            fields["marketShare"] = self.market_share
        if self.time_to_loss_occur:
            fields["timeToLossOccur"] = self.time_to_loss_occur
        return fields


@dataclass
class IncreaseRevenue:
    """Increase Revenue inputs: price times volume now versus afterwards."""

    revenue_now: float = 0.0
    sales_now: float = 0.0
    revenue_future: float = 0.0
    sales_future: float = 0.0

    category = Category.INCREASE_REVENUE

    def value(self) -> float:
        return self.revenue_future * self.sales_future - self.revenue_now * self.sales_now

    @property
    def deadline(self) -> str | None:
        return None

    @classmethod
    def from_fields(cls, fields: dict) -> "IncreaseRevenue":
        return cls(
            revenue_now=parse_numeric_field(fields.get("revenueNow")),
            sales_now=parse_numeric_field(fields.get("salesNow")),
            revenue_future=parse_numeric_field(fields.get("revenueFuture")),
            sales_future=parse_numeric_field(fields.get("salesFuture")),
        )

    def to_fields(self) -> dict:
        return {
            "revenueNow": self.revenue_now,
            "salesNow": self.sales_now,
            "revenueFuture": self.revenue_future,
            "salesFuture": self.sales_future,
        }


CategoryInputs = AvoidCost | ReduceCost | ProtectRevenue | IncreaseRevenue

VARIANTS: dict[Category, type] = {
    Category.AVOID_COST: AvoidCost,
    Category.REDUCE_COST: ReduceCost,
    Category.PROTECT_REVENUE: ProtectRevenue,
    Category.INCREASE_REVENUE: IncreaseRevenue,
}

# Record keys recognized per category, in display order.
CATEGORY_FIELDS: dict[Category, tuple[str, ...]] = {
    Category.AVOID_COST: ("costAvoidedTotal", "risk", "timeCostOccur"),
    Category.REDUCE_COST: ("peopleNow", "hoursNow", "peopleFuture", "hoursFuture"),
    Category.PROTECT_REVENUE: ("totalRevenueProtected", "marketShare", "timeToLossOccur"),
    Category.INCREASE_REVENUE: ("revenueNow", "salesNow", "revenueFuture", "salesFuture"),
}

DATE_FIELDS = frozenset({"timeCostOccur", "timeToLossOccur"})


def inputs_for(category: Category, fields: dict) -> CategoryInputs:
    """Build the typed inputs of one category from a flat field map."""
    return VARIANTS[category].from_fields(fields or {})


def resolve_categories(tags) -> list[Category]:
    """Known categories among tags, in order, without repeats."""
    resolved: list[Category] = []
    for tag in tags or []:
        category = Category.parse(tag)
        if category is not None and category not in resolved:
            resolved.append(category)
    return resolved

"""Pure item domain model - no I/O dependencies."""

from dataclasses import dataclass, field

from .categories import Category, CategoryInputs, inputs_for, resolve_categories


@dataclass
class ItemDraft:
    """An item as entered, before it has an id or a stored score."""

    name: str
    description: str = ""
    categories: list[str] = field(default_factory=list)
    effort: float = 0.0
    category_data: dict[str, float | str] = field(default_factory=dict)

    def selected(self) -> list[Category]:
        """Known categories selected on this item (unknown tags skipped)."""
        return resolve_categories(self.categories)

    def inputs(self) -> list[CategoryInputs]:
        """Typed inputs for each selected category."""
        return [inputs_for(c, self.category_data) for c in self.selected()]


@dataclass
class Item(ItemDraft):
    """A stored prioritization candidate."""

    id: str = ""
    created_at: int = 0
    wsjf_score: float = 0.0
    # Top-level record keys this version does not know about, kept on save
    extra: dict = field(default_factory=dict)

    def draft(self) -> ItemDraft:
        return ItemDraft(
            name=self.name,
            description=self.description,
            categories=list(self.categories),
            effort=self.effort,
            category_data=dict(self.category_data),
        )

    def to_record(self) -> dict:
        """Serialize to the persisted camelCase record shape."""
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "categories": list(self.categories),
            "effort": self.effort,
            "createdAt": self.created_at,
            "wsjfScore": self.wsjf_score,
            "categoryData": dict(self.category_data),
        }


def prune_category_data(categories, category_data: dict) -> dict:
    """
    Keep only the fields of the selected categories.

    Values go through each category's parser, so stored data is always the
    coerced form that produced the score.
    """
    pruned: dict = {}
    for category in resolve_categories(categories):
        pruned.update(inputs_for(category, category_data).to_fields())
    return pruned

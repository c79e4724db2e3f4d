"""WSJF CLI - prioritize items by Weighted Shortest Job First."""

import json
import logging
import sys
from pathlib import Path

import click

from .adapters.json_store import JsonItemStore
from .config import load_config
from .core.categories import CATEGORY_FIELDS, HOURLY_RATE, Category
from .core.items import Item, ItemDraft
from .core.listing import format_item_line, item_to_dict
from .core.scoring import compute_wsjf, score_breakdown, total_value
from .workflows import create_item, delete_item, edit_item, get_store, list_prioritized

KNOWN_FIELDS = {key for fields in CATEGORY_FIELDS.values() for key in fields}


def _parse_categories(ctx, param, values) -> list[str]:
    """Click callback: resolve category names to their display form."""
    categories: list[str] = []
    for value in values:
        category = Category.parse(value)
        if category is None:
            choices = ", ".join(c.slug for c in Category)
            raise click.BadParameter(f"unknown category {value!r} (choose from {choices})")
        if category.value not in categories:
            categories.append(category.value)
    return categories


def _parse_fields(ctx, param, values) -> dict[str, str]:
    """Click callback: turn KEY=VALUE pairs into a category field map."""
    fields: dict[str, str] = {}
    for value in values:
        key, sep, raw = value.partition("=")
        key = key.strip()
        if not sep:
            raise click.BadParameter(f"expected KEY=VALUE, got {value!r}")
        if key not in KNOWN_FIELDS:
            raise click.BadParameter(f"unknown field {key!r} (see 'wsjf categories')")
        fields[key] = raw.strip()
    return fields


def item_options(func):
    """Options shared by the commands that take item inputs."""
    func = click.option(
        "--set", "-s", "fields", multiple=True, callback=_parse_fields, metavar="KEY=VALUE",
        help="Category field value, e.g. costAvoidedTotal=50000 (repeatable)",
    )(func)
    func = click.option("--effort", "-e", type=float, default=None, help="Effort in weeks")(func)
    func = click.option(
        "--category", "-c", "categories", multiple=True, callback=_parse_categories,
        help="Value category, e.g. avoid-cost (repeatable)",
    )(func)
    return func


def _get_store(ctx) -> JsonItemStore:
    return ctx.obj["store"]


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _show_breakdown(draft: ItemDraft) -> None:
    breakdown = score_breakdown(draft)
    if not breakdown:
        click.echo("  No value categories selected.")
    for category, value in breakdown.items():
        click.echo(f"  {category.value:18} {value:>14,.2f}")
    click.echo(f"  {'Cost of delay':18} {total_value(draft):>14,.2f}")
    click.echo(f"  {'Effort':18} {draft.effort:>14g}")


@click.group()
@click.version_option(package_name="wsjf")
@click.option("--store", "store_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Item store file (overrides ITEMS_FILE)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, store_path: Path | None, debug: bool):
    """WSJF - Weighted Shortest Job First prioritizer."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    config = load_config()
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store"] = JsonItemStore(store_path) if store_path else get_store(config)


@main.command()
@click.argument("name")
@click.option("--description", "-d", default="", help="Short description")
@item_options
@click.pass_context
def add(ctx, name: str, description: str, categories: list[str], effort: float | None,
        fields: dict[str, str]):
    """Score and store a new item."""
    if not name.strip():
        raise click.UsageError("Item name is required.")

    config = ctx.obj["config"]
    draft = ItemDraft(
        name=name.strip(),
        description=description,
        categories=categories,
        effort=config.default_effort if effort is None else effort,
        category_data=fields,
    )
    try:
        item = create_item(_get_store(ctx), draft)
    except OSError as e:
        _fail(e)

    click.echo(f"Added {item.id}")
    click.echo(f"WSJF score: {item.wsjf_score:.2f}")


@main.command()
@click.argument("item_id")
@click.option("--name", "-n", default=None, help="New name")
@click.option("--description", "-d", default=None, help="New description")
@item_options
@click.pass_context
def edit(ctx, item_id: str, name: str | None, description: str | None,
         categories: list[str], effort: float | None, fields: dict[str, str]):
    """Change an item's inputs and recompute its score."""
    if name is not None and not name.strip():
        raise click.UsageError("Item name cannot be empty.")

    try:
        item = edit_item(
            _get_store(ctx),
            item_id,
            name=name.strip() if name else None,
            description=description,
            categories=categories or None,
            effort=effort,
            category_data=fields,
        )
    except OSError as e:
        _fail(e)

    if item is None:
        click.echo(f"No item {item_id}.")
        return
    click.echo(f"Updated {item.id}")
    click.echo(f"WSJF score: {item.wsjf_score:.2f}")


@main.command()
@click.argument("item_id")
@click.pass_context
def delete(ctx, item_id: str):
    """Delete an item."""
    try:
        deleted = delete_item(_get_store(ctx), item_id)
    except OSError as e:
        _fail(e)

    click.echo(f"Deleted {item_id}." if deleted else f"No item {item_id}.")


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--limit", "-l", type=int, default=None, help="Show at most N items")
@click.pass_context
def list_items(ctx, as_json: bool, limit: int | None):
    """List items in priority order."""
    config = ctx.obj["config"]
    try:
        items = list_prioritized(
            _get_store(ctx),
            limit=config.list_limit if limit is None else limit,
        )
    except OSError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([item_to_dict(item) for item in items], indent=2))
        return

    if not items:
        click.echo("No items yet. Add one with 'wsjf add'.")
        return

    for item in items:
        click.echo(f"{format_item_line(item)}  {item.id}")


@main.command()
@click.argument("item_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx, item_id: str, as_json: bool):
    """Show one item with its score breakdown."""
    try:
        item: Item | None = _get_store(ctx).get(item_id)
    except OSError as e:
        _fail(e)

    if item is None:
        click.echo(f"No item {item_id}.", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(item_to_dict(item), indent=2))
        return

    click.echo(format_item_line(item))
    if item.description:
        click.echo(f"\n{item.description}")
    if item.category_data:
        click.echo("\nInputs:")
        for key, value in item.category_data.items():
            click.echo(f"  {key:22} {value}")
    click.echo("\nBreakdown:")
    _show_breakdown(item)


@main.command()
@item_options
def score(categories: list[str], effort: float | None, fields: dict[str, str]):
    """Compute a WSJF score without storing anything."""
    draft = ItemDraft(
        name="(unsaved)",
        categories=categories,
        effort=1.0 if effort is None else effort,
        category_data=fields,
    )
    _show_breakdown(draft)
    click.echo(f"\nWSJF score: {compute_wsjf(draft):.2f}")


@main.command()
def categories():
    """List value categories and the fields each one reads."""
    for category, fields in CATEGORY_FIELDS.items():
        click.echo(f"{category.value} ({category.slug})")
        for key in fields:
            click.echo(f"  {key}")
    click.echo(f"\nReduce Cost uses a fixed rate of ${HOURLY_RATE}/hour.")


if __name__ == "__main__":
    main()

"""Ports - interfaces/protocols for external dependencies."""

from .item_store import ItemStore

__all__ = [
    "ItemStore",
]

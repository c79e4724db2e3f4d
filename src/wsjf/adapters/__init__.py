"""Adapters - I/O implementations of ports."""

from .json_store import JsonItemStore
from .memory_store import MemoryItemStore

__all__ = [
    "JsonItemStore",
    "MemoryItemStore",
]

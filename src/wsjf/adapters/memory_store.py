"""In-memory item storage adapter."""

import copy

from .record_store import RecordItemStore


class MemoryItemStore(RecordItemStore):
    """
    In-memory item storage.

    Implements ItemStore protocol. Holds raw records, so legacy-shaped
    records can be seeded and go through the same normalization as on disk.
    """

    def __init__(self, records: list | None = None, clock=None):
        super().__init__(clock)
        self.records = copy.deepcopy(records) if records else []

    def _read_records(self) -> list:
        return copy.deepcopy(self.records)

    def _write_records(self, records: list[dict]) -> None:
        self.records = copy.deepcopy(records)

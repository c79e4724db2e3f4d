"""JSON file item storage adapter."""

import json
import logging
import os
from pathlib import Path

from .record_store import RecordItemStore

logger = logging.getLogger(__name__)


class JsonItemStore(RecordItemStore):
    """
    File-based item storage.

    Implements ItemStore protocol. The whole collection lives in one JSON
    list; a corrupt file reads as empty rather than failing.
    """

    def __init__(self, path: Path | str, clock=None):
        super().__init__(clock)
        self.path = Path(path).expanduser()

    def _read_records(self) -> list:
        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to parse item store {self.path}: {e}")
            return []
        if not isinstance(payload, list):
            logger.warning(f"Item store {self.path} does not hold a list, ignoring it")
            return []
        return payload

    def _write_records(self, records: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

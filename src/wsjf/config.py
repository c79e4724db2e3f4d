"""Configuration management for the WSJF prioritizer."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

WSJF_HOME = Path(os.environ.get("WSJF_HOME", Path.home() / "wsjf"))
CONFIG_FILE = WSJF_HOME / "config" / "wsjf.conf"
DATA_DIR = WSJF_HOME / "data"


@dataclass
class Config:
    """WSJF configuration."""

    items_file: str = ""
    default_effort: float = 1.0
    list_limit: int = 0

    @property
    def items_path(self) -> Path:
        """Resolved path of the item store file."""
        if self.items_file:
            return Path(self.items_file).expanduser()
        return DATA_DIR / "items.json"


def _strip_value(value: str) -> str:
    """Unquote a value, dropping any inline comment."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from wsjf.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "items_file":
                config.items_file = value
            case "default_effort":
                try:
                    config.default_effort = float(value)
                except ValueError:
                    logger.warning(f"Ignoring invalid DEFAULT_EFFORT: {value!r}")
            case "list_limit":
                try:
                    config.list_limit = int(value)
                except ValueError:
                    logger.warning(f"Ignoring invalid LIST_LIMIT: {value!r}")

    return config

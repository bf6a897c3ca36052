"""Configuration management for Inkwell."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.catalog import DEFAULT_SORT, SortOption, parse_sort_option

logger = logging.getLogger(__name__)

INKWELL_HOME = Path(os.environ.get("INKWELL_HOME", Path.home() / "inkwell"))
CONFIG_FILE = INKWELL_HOME / "config" / "inkwell.conf"
DEFAULT_JOURNAL_DIR = Path.home() / "Documents" / "JournalApp"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Inkwell configuration."""

    journal_dir: str = ""
    default_sort: SortOption = DEFAULT_SORT
    app_title: str = "Journal"
    log_level: str = "WARNING"

    @property
    def journal_path(self) -> Path:
        """Resolve the entry container directory."""
        if self.journal_dir:
            return Path(self.journal_dir).expanduser()
        return DEFAULT_JOURNAL_DIR


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            if end_quote != -1:
                return value[1:end_quote]
            return value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from inkwell.conf file."""
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
        value = _unquote(value.strip())

        match key:
            case "journal_dir":
                config.journal_dir = value
            case "default_sort":
                try:
                    config.default_sort = parse_sort_option(value)
                except ValueError as e:
                    logger.warning(f"Invalid DEFAULT_SORT, using {DEFAULT_SORT.value}: {e}")
            case "app_title":
                config.app_title = value
            case "log_level":
                if value.upper() in LOG_LEVELS:
                    config.log_level = value.upper()
                else:
                    logger.warning(f"Invalid LOG_LEVEL: {value}")

    return config

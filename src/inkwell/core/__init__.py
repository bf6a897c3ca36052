"""Functional core - pure journal logic with no I/O."""

from .entries import (
    AppSettings,
    EntryMetadata,
    JournalEntry,
    ViewMode,
    default_display_name,
    is_content_filename,
    metadata_filename,
)
from .catalog import SortOption, parse_sort_option, sort_entries

__all__ = [
    # Entries
    "AppSettings",
    "EntryMetadata",
    "JournalEntry",
    "ViewMode",
    "default_display_name",
    "is_content_filename",
    "metadata_filename",
    # Catalog
    "SortOption",
    "parse_sort_option",
    "sort_entries",
]

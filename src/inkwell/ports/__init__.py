"""Ports - interfaces/protocols for external dependencies."""

from .entry_store import EntryNotFoundError, EntryStore, StorageError
from .window_chrome import WindowChrome

__all__ = [
    "EntryStore",
    "EntryNotFoundError",
    "StorageError",
    "WindowChrome",
]

"""Entry storage interface."""

from datetime import datetime
from typing import Protocol

from inkwell.core.entries import AppSettings, EntryMetadata, JournalEntry


class StorageError(Exception):
    """Raised when the journal container cannot be read or written."""

    pass


class EntryNotFoundError(StorageError):
    """Raised when an entry's content file does not exist."""

    pass


class EntryStore(Protocol):
    """Interface for persisting entries, their metadata, and app records."""

    async def ensure_container(self) -> None:
        """Create the storage container if it does not exist."""
        ...

    async def save_content(self, filename: str, content: str) -> None:
        """Write/overwrite the content of an entry."""
        ...

    async def load_content(self, filename: str) -> str:
        """Read the content of an entry. Raises EntryNotFoundError if absent."""
        ...

    async def list_entries(self) -> list[JournalEntry]:
        """List all entries with their metadata merged in, unsorted."""
        ...

    async def save_metadata(
        self,
        filename: str,
        display_name: str,
        date: datetime,
        last_modified: datetime | None = None,
    ) -> None:
        """Replace the metadata record of an entry."""
        ...

    async def load_metadata(self, filename: str) -> EntryMetadata | None:
        """Read the metadata record of an entry. Returns None if not found."""
        ...

    async def rename_entry(self, filename: str, new_display_name: str) -> EntryMetadata:
        """Change an entry's display name, keeping its dates and filename.

        Returns the metadata record as written.
        """
        ...

    async def delete_entry(self, filename: str) -> None:
        """Remove an entry's content and metadata."""
        ...

    async def save_last_opened(self, filename: str) -> None:
        """Remember the most recently selected entry."""
        ...

    async def load_last_opened(self) -> str | None:
        """Read the most recently selected entry. Returns None if not set."""
        ...

    async def save_settings(self, settings: AppSettings) -> None:
        """Write the settings record."""
        ...

    async def load_settings(self) -> AppSettings | None:
        """Read the settings record. Returns None if not found."""
        ...

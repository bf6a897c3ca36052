"""File-based journal entry storage adapter."""

import json
import logging
from datetime import datetime
from pathlib import Path

import aiofiles
import aiofiles.os

from inkwell.core.entries import (
    LAST_OPENED_FILENAME,
    SETTINGS_FILENAME,
    AppSettings,
    EntryMetadata,
    JournalEntry,
    is_content_filename,
    metadata_filename,
    utc_now,
)
from inkwell.ports.entry_store import EntryNotFoundError, StorageError

logger = logging.getLogger(__name__)


class FileEntryStore:
    """
    File-based entry storage.

    Implements EntryStore protocol. Each entry is a content file plus an
    optional `<stem>.meta.<ext>` JSON file in a single container directory,
    next to `settings.json` and the `.last_opened` pointer.
    """

    def __init__(self, journal_dir: Path | str):
        self.journal_dir = Path(journal_dir).expanduser()

    def _path(self, filename: str) -> Path:
        """Resolve a file name inside the container, rejecting anything else."""
        if not filename or filename in (".", "..") or Path(filename).name != filename:
            raise StorageError(f"Invalid entry filename: {filename!r}")
        return self.journal_dir / filename

    async def _read_text(self, path: Path) -> str:
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                return await f.read()
        except FileNotFoundError:
            raise
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    async def _write_text(self, path: Path, text: str) -> None:
        await self.ensure_container()
        try:
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(text)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

    async def ensure_container(self) -> None:
        """Create the journal directory if it does not exist."""
        try:
            await aiofiles.os.makedirs(self.journal_dir, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create {self.journal_dir}: {e}") from e

    async def save_content(self, filename: str, content: str) -> None:
        """Write/overwrite the content of an entry."""
        await self._write_text(self._path(filename), content)

    async def load_content(self, filename: str) -> str:
        """Read the content of an entry. Raises EntryNotFoundError if absent."""
        try:
            return await self._read_text(self._path(filename))
        except FileNotFoundError:
            raise EntryNotFoundError(f"Entry not found: {filename}") from None

    async def list_entries(self) -> list[JournalEntry]:
        """List all entries in the container with metadata merged in.

        Entries come back in directory order (by file name); ordering by date
        or title is the catalog's job.
        """
        await self.ensure_container()
        try:
            names = sorted(await aiofiles.os.listdir(self.journal_dir))
        except OSError as e:
            raise StorageError(f"Cannot list {self.journal_dir}: {e}") from e

        entries = []
        for name in names:
            if not is_content_filename(name):
                continue
            if not await aiofiles.os.path.isfile(self.journal_dir / name):
                continue
            metadata = await self.load_metadata(name)
            entries.append(JournalEntry.from_metadata(name, metadata))
        return entries

    async def save_metadata(
        self,
        filename: str,
        display_name: str,
        date: datetime,
        last_modified: datetime | None = None,
    ) -> None:
        """Replace the metadata record of an entry. Every field is rewritten."""
        metadata = EntryMetadata(display_name, date, last_modified)
        path = self._path(metadata_filename(filename))
        await self._write_text(path, json.dumps(metadata.to_dict()))

    async def load_metadata(self, filename: str) -> EntryMetadata | None:
        """Read the metadata record of an entry. Returns None if not found."""
        path = self._path(metadata_filename(filename))
        try:
            data = json.loads(await self._read_text(path))
            return EntryMetadata.from_dict(data)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable metadata for {filename}: {e}")
            return None
        except StorageError as e:
            logger.warning(f"Failed to read metadata for {filename}: {e}")
            return None

    async def rename_entry(self, filename: str, new_display_name: str) -> EntryMetadata:
        """Change an entry's display name, keeping its dates and filename.

        Returns the record as written, including a fresh date for an entry
        that had no metadata.
        """
        await self.ensure_container()
        metadata = await self.load_metadata(filename)
        date = metadata.date if metadata else utc_now()
        last_modified = metadata.last_modified if metadata else None
        await self.save_metadata(filename, new_display_name, date, last_modified)
        return EntryMetadata(new_display_name, date, last_modified)

    async def delete_entry(self, filename: str) -> None:
        """Remove an entry's content file, then its metadata if there is any."""
        await self.ensure_container()
        try:
            await aiofiles.os.remove(self._path(filename))
        except FileNotFoundError:
            raise EntryNotFoundError(f"Entry not found: {filename}") from None
        except OSError as e:
            raise StorageError(f"Cannot delete {filename}: {e}") from e

        try:
            await aiofiles.os.remove(self._path(metadata_filename(filename)))
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to delete metadata for {filename}: {e}")

    async def save_last_opened(self, filename: str) -> None:
        """Remember the most recently selected entry."""
        await self._write_text(self._path(LAST_OPENED_FILENAME), filename)

    async def load_last_opened(self) -> str | None:
        """Read the most recently selected entry. Returns None if not set."""
        try:
            value = await self._read_text(self._path(LAST_OPENED_FILENAME))
        except FileNotFoundError:
            return None
        except StorageError as e:
            logger.warning(f"Ignoring unreadable last opened pointer: {e}")
            return None
        return value.strip() or None

    async def save_settings(self, settings: AppSettings) -> None:
        """Write the settings record."""
        await self._write_text(self._path(SETTINGS_FILENAME), json.dumps(settings.to_dict()))

    async def load_settings(self) -> AppSettings | None:
        """Read the settings record. Returns None if not found or unreadable."""
        try:
            data = json.loads(await self._read_text(self._path(SETTINGS_FILENAME)))
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, StorageError) as e:
            logger.warning(f"Ignoring unreadable settings: {e}")
            return None
        if not isinstance(data, dict):
            return None
        return AppSettings.from_dict(data)

"""Session controller - view state and selection for the journal.

Orchestrates the entry store and the catalog: the startup bootstrap,
selection changes, and pushing edits back into entry metadata. State lives
in a SessionState owned by the controller; only controller methods change it.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable

from .core.catalog import DEFAULT_SORT, SortOption, parse_sort_option, sort_entries
from .core.entries import EMPTY_DOCUMENT, AppSettings, JournalEntry, ViewMode, utc_now
from .ports.entry_store import EntryNotFoundError, EntryStore, StorageError
from .ports.window_chrome import WindowChrome

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Everything the journal views render from."""

    entries: list[JournalEntry] = field(default_factory=list)
    current_entry: JournalEntry | None = None
    view_mode: ViewMode = ViewMode.FEED
    sort_order: SortOption = DEFAULT_SORT  # Not persisted
    is_loading: bool = False
    initial_load_done: bool = False


class SessionController:
    """
    Single writer of the session state.

    Storage failures are logged and the operation is abandoned; they never
    propagate out of the public operations except refresh().
    """

    def __init__(
        self,
        store: EntryStore,
        chrome: WindowChrome | None = None,
        app_title: str = "Journal",
        sort_order: SortOption = DEFAULT_SORT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.chrome = chrome
        self.app_title = app_title
        self.clock = clock
        self.state = SessionState(sort_order=sort_order)

    @property
    def sorted_entries(self) -> list[JournalEntry]:
        """The entry list in the active sort order."""
        return sort_entries(self.state.entries, self.state.sort_order)

    @property
    def current_entry(self) -> JournalEntry | None:
        return self.state.current_entry

    def find(self, filename: str) -> JournalEntry | None:
        """Look up a loaded entry by filename."""
        for entry in self.state.entries:
            if entry.filename == filename:
                return entry
        return None

    def window_title(self, entry: JournalEntry | None) -> str:
        if entry and entry.display_name:
            return f"{entry.display_name} - {self.app_title}"
        return self.app_title

    def _patch(self, filename: str, **changes) -> None:
        """Apply field changes to an entry and to the current selection."""
        self.state.entries = [
            replace(e, **changes) if e.filename == filename else e for e in self.state.entries
        ]
        current = self.state.current_entry
        if current is not None and current.filename == filename:
            self.state.current_entry = self.find(filename) or replace(current, **changes)

    async def refresh(self) -> None:
        """Reload the entry list from storage and rebind the selection to it."""
        self.state.entries = await self.store.list_entries()
        current = self.state.current_entry
        if current is not None:
            self.state.current_entry = self.find(current.filename)

    async def bootstrap(self) -> JournalEntry | None:
        """
        Load entries and, on the first run only, restore preferences and
        pick the initial selection.

        Selection priority: the last-opened entry, else the first listed
        entry, else a brand-new entry. Returns the entry created for an
        empty journal, otherwise None. Never raises; a failed load leaves
        whatever was loaded so far.
        """
        self.state.is_loading = True
        try:
            await self.refresh()
            if self.state.initial_load_done:
                return None
            self.state.initial_load_done = True

            settings = await self.store.load_settings()
            if settings and settings.view_mode:
                self.state.view_mode = settings.view_mode

            last_opened = await self.store.load_last_opened()
            if last_opened:
                last_entry = self.find(last_opened)
                if last_entry:
                    await self.select(last_entry)
                    return None

            # Listing order, not catalog order
            if self.state.entries:
                await self.select(self.state.entries[0])
            else:
                return await self.create()
        except StorageError as e:
            logger.error(f"Failed to load entries: {e}")
        finally:
            self.state.is_loading = False
        return None

    async def select(self, entry: JournalEntry) -> None:
        """Make an entry current, remember it, and retitle the window."""
        self.state.current_entry = entry

        try:
            await self.store.save_last_opened(entry.filename)
        except StorageError as e:
            logger.warning(f"Failed to remember last opened entry: {e}")

        if self.chrome is None:
            return
        try:
            await self.chrome.set_title(self.window_title(entry))
        except Exception as e:
            logger.warning(f"Failed to update window title: {e}")

    async def create(self) -> JournalEntry | None:
        """Create an empty entry and select it. Returns None on failure."""
        entry = JournalEntry.new(self.clock())
        try:
            await self.store.save_content(entry.filename, EMPTY_DOCUMENT)
            await self.store.save_metadata(
                entry.filename, entry.display_name, entry.date, entry.last_modified
            )
            await self.store.save_last_opened(entry.filename)
            await self.refresh()
        except StorageError as e:
            logger.error(f"Failed to create entry: {e}")
            return None

        created = self.find(entry.filename) or entry
        await self.select(created)
        logger.info(f"Created entry {created.filename}")
        return created

    async def rename(self, entry: JournalEntry, new_name: str) -> None:
        """Change an entry's display name. Blank or unchanged names are ignored."""
        name = new_name.strip()
        if not name or name == entry.display_name:
            return

        try:
            metadata = await self.store.rename_entry(entry.filename, name)
        except StorageError as e:
            logger.error(f"Failed to rename entry: {e}")
            return

        # An entry without metadata gets its date fixed by the first rename
        self._patch(
            entry.filename,
            display_name=metadata.display_name,
            date=metadata.date,
            last_modified=metadata.last_modified,
        )

    async def delete(self, entry: JournalEntry) -> bool:
        """Delete an entry. The selection is cleared, not replaced."""
        try:
            await self.store.delete_entry(entry.filename)
        except StorageError as e:
            logger.error(f"Failed to delete entry: {e}")
            return False

        self.state.entries = [e for e in self.state.entries if e.filename != entry.filename]
        current = self.state.current_entry
        if current is not None and current.filename == entry.filename:
            self.state.current_entry = None
        return True

    async def save(self, filename: str, content: str) -> JournalEntry | None:
        """
        Persist new content and stamp the entry's last-modified time.

        Content for an entry that is not in the loaded list is still written,
        but its metadata is left alone and None is returned.
        """
        try:
            await self.store.save_content(filename, content)

            entry = self.find(filename)
            if entry is None:
                logger.warning(f"Saved {filename}, but it is not a loaded entry; metadata not updated")
                return None

            last_modified = self.clock()
            await self.store.save_metadata(
                entry.filename, entry.display_name, entry.date, last_modified
            )
        except StorageError as e:
            logger.error(f"Failed to save entry content: {e}")
            return None

        self._patch(filename, last_modified=last_modified)
        return self.find(filename)

    async def load_content(self, entry: JournalEntry) -> str | None:
        """Fetch an entry's content for display. None if it cannot be read."""
        try:
            return await self.store.load_content(entry.filename)
        except EntryNotFoundError:
            logger.warning(f"Content missing for {entry.filename}")
        except StorageError as e:
            logger.error(f"Failed to load content for {entry.filename}: {e}")
        return None

    async def set_view_mode(self, mode: ViewMode | str) -> None:
        """Switch view mode now; persisting it is best-effort."""
        mode = ViewMode(mode)
        self.state.view_mode = mode
        try:
            await self.store.save_settings(AppSettings(view_mode=mode))
        except StorageError as e:
            logger.warning(f"Failed to save settings: {e}")

    def set_sort_order(self, order: SortOption | str) -> None:
        self.state.sort_order = parse_sort_option(order)

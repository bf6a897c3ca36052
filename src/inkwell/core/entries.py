"""Pure journal entry domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePath

METADATA_MARKER = ".meta"
SETTINGS_FILENAME = "settings.json"
LAST_OPENED_FILENAME = ".last_opened"
EMPTY_DOCUMENT = "[]"


class ViewMode(str, Enum):
    """How the journal is browsed."""

    FEED = "feed"  # All entries, one after another
    SINGLE = "single"  # Only the current entry


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are treated as UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def metadata_filename(filename: str) -> str:
    """
    Name of the metadata file paired with a content file.

    The final extension segment is replaced by `.meta.<ext>`:
    entry_1.json -> entry_1.meta.json
    """
    path = PurePath(filename)
    if not path.suffix:
        return f"{filename}{METADATA_MARKER}"
    return f"{filename[: -len(path.suffix)]}{METADATA_MARKER}{path.suffix}"


def is_metadata_filename(filename: str) -> bool:
    path = PurePath(filename)
    return path.stem.endswith(METADATA_MARKER) or path.suffix == METADATA_MARKER


def is_content_filename(filename: str) -> bool:
    """Whether a file in the container holds entry content."""
    if filename.startswith("."):
        return False
    if filename == SETTINGS_FILENAME:
        return False
    return not is_metadata_filename(filename)


def default_display_name(filename: str) -> str:
    """Fallback title for an entry without metadata: the name minus its extension."""
    return PurePath(filename).stem or filename


def new_entry_filename(now: datetime) -> str:
    return f"entry_{int(now.timestamp() * 1000)}.json"


def format_display_name(moment: datetime) -> str:
    """Human title for a new entry, e.g. 'Oct 19, 2026, 1:40 PM'."""
    local = moment.astimezone()
    hour = local.hour % 12 or 12
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local:%M} {local:%p}"


@dataclass
class EntryMetadata:
    """The persisted companion record of an entry."""

    display_name: str
    date: datetime
    last_modified: datetime | None = None

    def to_dict(self) -> dict:
        data = {
            "displayName": self.display_name,
            "date": self.date.isoformat(),
        }
        if self.last_modified is not None:
            data["lastModified"] = self.last_modified.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "EntryMetadata":
        """Create metadata from a decoded metadata file.

        Raises KeyError, TypeError or ValueError for a malformed record.
        """
        for key in ("displayName", "date"):
            if not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string, not {type(data[key]).__name__}")
        if not isinstance(data.get("lastModified") or "", str):
            raise TypeError("lastModified must be a string")
        last_modified = None
        if data.get("lastModified"):
            last_modified = parse_timestamp(data["lastModified"])
        return cls(
            display_name=data["displayName"],
            date=parse_timestamp(data["date"]),
            last_modified=last_modified,
        )


@dataclass
class JournalEntry:
    """A journal entry as seen in listings. Content is loaded on demand."""

    filename: str
    display_name: str
    date: datetime
    last_modified: datetime | None = None
    content: str | None = None

    @property
    def effective_date(self) -> datetime:
        """The date entries are ordered by: last edit, else creation."""
        return self.last_modified or self.date

    @property
    def metadata(self) -> EntryMetadata:
        return EntryMetadata(self.display_name, self.date, self.last_modified)

    @classmethod
    def from_metadata(cls, filename: str, metadata: EntryMetadata | None) -> "JournalEntry":
        """Merge a content file name with its metadata, or fall back to defaults."""
        if metadata is None:
            return cls(
                filename=filename,
                display_name=default_display_name(filename),
                date=utc_now(),
            )
        return cls(
            filename=filename,
            display_name=metadata.display_name,
            date=metadata.date,
            last_modified=metadata.last_modified,
        )

    @classmethod
    def new(cls, now: datetime | None = None) -> "JournalEntry":
        """A fresh entry whose identity is derived from the current time."""
        now = now or utc_now()
        return cls(
            filename=new_entry_filename(now),
            display_name=format_display_name(now),
            date=now,
            last_modified=now,
        )


@dataclass
class AppSettings:
    """Persisted user preferences."""

    view_mode: ViewMode | None = None

    def to_dict(self) -> dict:
        data = {}
        if self.view_mode is not None:
            data["viewMode"] = self.view_mode.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        view_mode = None
        try:
            if data.get("viewMode"):
                view_mode = ViewMode(data["viewMode"])
        except ValueError:
            view_mode = None
        return cls(view_mode=view_mode)

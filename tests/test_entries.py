"""Tests for core entry logic."""

from datetime import datetime, timedelta, timezone

import pytest

from inkwell.core.entries import (
    AppSettings,
    EntryMetadata,
    JournalEntry,
    ViewMode,
    default_display_name,
    format_display_name,
    is_content_filename,
    metadata_filename,
    parse_timestamp,
)


@pytest.fixture
def created():
    return datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)


class TestFileNames:
    def test_metadata_name_replaces_extension(self):
        assert metadata_filename("entry_1.json") == "entry_1.meta.json"

    def test_metadata_name_only_touches_last_extension(self):
        assert metadata_filename("notes.v2.json") == "notes.v2.meta.json"

    def test_metadata_name_without_extension(self):
        assert metadata_filename("plain") == "plain.meta"

    @pytest.mark.parametrize("name", ["entry_1.json", "Monday.txt", "plain"])
    def test_content_files(self, name):
        assert is_content_filename(name)

    @pytest.mark.parametrize(
        "name", ["entry_1.meta.json", "plain.meta", "settings.json", ".last_opened", ".DS_Store"]
    )
    def test_non_content_files(self, name):
        assert not is_content_filename(name)

    def test_default_display_name_drops_extension(self):
        assert default_display_name("entry_1700000000000.json") == "entry_1700000000000"


class TestTimestamps:
    def test_parses_zulu_suffix(self):
        parsed = parse_timestamp("2025-01-15T09:30:00.000Z")
        assert parsed == datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2025-01-15T09:30:00").tzinfo == timezone.utc

    def test_keeps_offset(self):
        parsed = parse_timestamp("2025-01-15T09:30:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)


class TestEntryMetadata:
    def test_to_dict_omits_missing_last_modified(self, created):
        data = EntryMetadata("Monday", created).to_dict()
        assert data == {"displayName": "Monday", "date": created.isoformat()}

    def test_from_dict_roundtrip(self, created):
        metadata = EntryMetadata("Monday", created, created + timedelta(hours=1))
        assert EntryMetadata.from_dict(metadata.to_dict()) == metadata

    def test_from_dict_requires_display_name(self, created):
        with pytest.raises(KeyError):
            EntryMetadata.from_dict({"date": created.isoformat()})

    @pytest.mark.parametrize(
        "data",
        [
            {"displayName": 5, "date": "2025-01-01T00:00:00"},
            {"displayName": None, "date": "2025-01-01T00:00:00"},
            {"displayName": "Monday", "date": 20250101},
            {"displayName": "Monday", "date": "2025-01-01T00:00:00", "lastModified": 7},
        ],
    )
    def test_from_dict_rejects_non_string_fields(self, data):
        with pytest.raises(TypeError):
            EntryMetadata.from_dict(data)


class TestJournalEntry:
    def test_effective_date_prefers_last_modified(self, created):
        edited = created + timedelta(days=1)
        entry = JournalEntry("a.json", "A", created, edited)
        assert entry.effective_date == edited

    def test_effective_date_falls_back_to_date(self, created):
        assert JournalEntry("a.json", "A", created).effective_date == created

    def test_from_metadata(self, created):
        entry = JournalEntry.from_metadata("a.json", EntryMetadata("Title", created, created))
        assert entry.display_name == "Title"
        assert entry.date == created
        assert entry.last_modified == created
        assert entry.content is None

    def test_from_missing_metadata_uses_defaults(self):
        before = datetime.now(timezone.utc)
        entry = JournalEntry.from_metadata("entry_5.json", None)
        assert entry.display_name == "entry_5"
        assert entry.date >= before
        assert entry.last_modified is None

    def test_new_entry_identity_from_timestamp(self, created):
        entry = JournalEntry.new(created)
        assert entry.filename == f"entry_{int(created.timestamp() * 1000)}.json"
        assert entry.date == created
        assert entry.last_modified == created

    def test_format_display_name(self):
        moment = datetime(2026, 10, 19, 13, 40).astimezone()
        assert format_display_name(moment) == "Oct 19, 2026, 1:40 PM"

    def test_format_display_name_midnight(self):
        moment = datetime(2026, 1, 2, 0, 5).astimezone()
        assert format_display_name(moment) == "Jan 2, 2026, 12:05 AM"


class TestAppSettings:
    def test_roundtrip(self):
        settings = AppSettings(view_mode=ViewMode.SINGLE)
        assert settings.to_dict() == {"viewMode": "single"}
        assert AppSettings.from_dict(settings.to_dict()) == settings

    def test_empty(self):
        assert AppSettings().to_dict() == {}
        assert AppSettings.from_dict({}).view_mode is None

    def test_unknown_view_mode_ignored(self):
        assert AppSettings.from_dict({"viewMode": "grid"}).view_mode is None

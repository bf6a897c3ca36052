"""Entry catalog - sorted projection of the entry set. Pure, no state."""

import unicodedata
from enum import Enum

from .entries import JournalEntry


class SortOption(str, Enum):
    """Orderings offered by the entry list."""

    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"


DEFAULT_SORT = SortOption.DATE_DESC


def parse_sort_option(value: str | SortOption) -> SortOption:
    """Convert user input to a SortOption. Raises ValueError if unknown."""
    if isinstance(value, SortOption):
        return value
    try:
        return SortOption(value.strip().lower())
    except ValueError:
        choices = ", ".join(o.value for o in SortOption)
        raise ValueError(f"Unknown sort order '{value}' (expected one of: {choices})") from None


def date_key(entry: JournalEntry) -> float:
    return entry.effective_date.timestamp()


def title_key(entry: JournalEntry) -> tuple[str, str]:
    """
    Locale-style collation key for a title.

    Accents and case are ignored first; the raw string breaks ties so that
    the order stays total.
    """
    decomposed = unicodedata.normalize("NFKD", entry.display_name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), entry.display_name


def sort_entries(entries: list[JournalEntry], order: SortOption = DEFAULT_SORT) -> list[JournalEntry]:
    """
    Return a new list of entries in the requested order.

    Pure function - the input list is never modified. Sorting is stable, and
    descending orders keep equal-key entries in their input order.
    """
    match order:
        case SortOption.DATE_DESC:
            return sorted(entries, key=date_key, reverse=True)
        case SortOption.DATE_ASC:
            return sorted(entries, key=date_key)
        case SortOption.TITLE_ASC:
            return sorted(entries, key=title_key)
        case SortOption.TITLE_DESC:
            return sorted(entries, key=title_key, reverse=True)
    return list(entries)

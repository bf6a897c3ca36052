"""Adapters - I/O implementations of ports."""

from .file_entries import FileEntryStore
from .terminal_title import TerminalTitle

__all__ = [
    "FileEntryStore",
    "TerminalTitle",
]

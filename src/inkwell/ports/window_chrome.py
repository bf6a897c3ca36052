"""Window chrome interface."""

from typing import Protocol


class WindowChrome(Protocol):
    """Interface for the surface that displays the window title."""

    async def set_title(self, title: str) -> None:
        """Show a plain-text title. May raise; callers treat failure as non-fatal."""
        ...

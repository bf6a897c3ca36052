"""Terminal title adapter - window chrome for the command-line shell."""

import sys
from typing import TextIO

import click


class TerminalTitle:
    """
    Terminal window title adapter.

    Implements WindowChrome protocol using the xterm OSC 0 sequence.
    Does nothing when the stream is not a terminal.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def _is_terminal(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    async def set_title(self, title: str) -> None:
        """Show a plain-text title in the terminal's title bar."""
        if not self._is_terminal():
            return
        # Control characters would end the escape sequence early
        clean = "".join(c for c in title if c.isprintable())
        click.echo(f"\x1b]0;{clean}\x07", file=self.stream, nl=False)

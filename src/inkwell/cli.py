"""Inkwell CLI - Personal Journal."""

import asyncio
import json
import logging
import sys

import click

from .adapters.file_entries import FileEntryStore
from .adapters.terminal_title import TerminalTitle
from .config import Config, load_config
from .core.catalog import SortOption
from .core.entries import JournalEntry, ViewMode
from .session import SessionController

SORT_CHOICES = click.Choice([o.value for o in SortOption])
VIEW_CHOICES = click.Choice([m.value for m in ViewMode])


def get_session(config: Config) -> SessionController:
    """Build a session over the configured journal directory."""
    return SessionController(
        FileEntryStore(config.journal_path),
        chrome=TerminalTitle(),
        app_title=config.app_title,
        sort_order=config.default_sort,
    )


async def open_session(config: Config, sort: str | None = None) -> SessionController:
    """Start a session the way the app does on launch."""
    session = get_session(config)
    if sort:
        session.set_sort_order(sort)
    await session.bootstrap()
    return session


def _format_date(entry: JournalEntry) -> str:
    return entry.date.astimezone().strftime("%A, %B %d, %Y %H:%M")


def _not_found(filename: str) -> None:
    click.echo(f"Error: no entry named '{filename}'", err=True)
    sys.exit(1)


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """Inkwell - Personal Journal CLI."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else config.log_level,
    )
    ctx.obj = config


@main.command("list")
@click.option("--sort", type=SORT_CHOICES, help="Sort order")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_entries(config: Config, sort: str | None, as_json: bool):
    """List journal entries."""
    session = asyncio.run(open_session(config, sort))
    current = session.current_entry
    entries = session.sorted_entries

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "filename": e.filename,
                        "displayName": e.display_name,
                        "date": e.date.isoformat(),
                        "lastModified": e.last_modified.isoformat() if e.last_modified else None,
                        "current": current is not None and e.filename == current.filename,
                    }
                    for e in entries
                ],
                indent=2,
            )
        )
        return

    if not entries:
        click.echo("No entries.")
        return

    for entry in entries:
        marker = "*" if current is not None and entry.filename == current.filename else " "
        click.echo(f"{marker} {entry.effective_date.astimezone():%Y-%m-%d %H:%M}  {entry.display_name}  ({entry.filename})")


@main.command()
@click.pass_obj
def new(config: Config):
    """Create a new entry and open it."""

    async def _new():
        session = get_session(config)
        created = await session.bootstrap()
        # An empty journal already got its first entry
        if created is not None:
            return created
        return await session.create()

    entry = asyncio.run(_new())
    if entry is None:
        click.echo("Error: failed to create entry", err=True)
        sys.exit(1)
    click.echo(f"Created {entry.display_name} ({entry.filename})")


@main.command("open")
@click.argument("filename")
@click.pass_obj
def open_entry(config: Config, filename: str):
    """Select an entry as the current one."""

    async def _open():
        session = await open_session(config)
        entry = session.find(filename)
        if entry is not None:
            await session.select(entry)
        return entry

    entry = asyncio.run(_open())
    if entry is None:
        _not_found(filename)
    click.echo(f"Opened {entry.display_name}")


@main.command()
@click.argument("filename", required=False)
@click.pass_obj
def show(config: Config, filename: str | None):
    """Print an entry's content (default: the current entry)."""

    async def _show():
        session = await open_session(config)
        entry = session.find(filename) if filename else session.current_entry
        if entry is None:
            return None, None
        return entry, await session.load_content(entry)

    entry, content = asyncio.run(_show())
    if entry is None and filename is None:
        click.echo("No entry selected.")
        return
    if entry is None:
        _not_found(filename)
    click.echo(f"# {entry.display_name}")
    click.echo(_format_date(entry))
    click.echo()
    click.echo(content or "")


@main.command()
@click.argument("filename")
@click.option(
    "--file",
    "source",
    type=click.File("r"),
    default="-",
    help="Read content from a file instead of stdin",
)
@click.pass_obj
def write(config: Config, filename: str, source):
    """Replace an entry's content with serialized document text."""
    content = source.read()

    async def _write():
        session = await open_session(config)
        if session.find(filename) is None:
            return False, None
        return True, await session.save(filename, content)

    found, entry = asyncio.run(_write())
    if not found:
        _not_found(filename)
    if entry is None:
        click.echo(f"Error: failed to save {filename}", err=True)
        sys.exit(1)
    click.echo(f"Saved {entry.display_name}")


@main.command()
@click.argument("filename")
@click.argument("name")
@click.pass_obj
def rename(config: Config, filename: str, name: str):
    """Change an entry's title."""

    async def _rename():
        session = await open_session(config)
        entry = session.find(filename)
        if entry is None:
            return None
        await session.rename(entry, name)
        return session.find(filename)

    entry = asyncio.run(_rename())
    if entry is None:
        _not_found(filename)
    click.echo(f"Title: {entry.display_name}")


@main.command()
@click.argument("filename")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def delete(config: Config, filename: str, yes: bool):
    """Delete an entry and its metadata."""
    if not yes:
        click.confirm(f"Delete {filename}?", abort=True)

    async def _delete():
        session = await open_session(config)
        entry = session.find(filename)
        if entry is None:
            return None
        return await session.delete(entry)

    deleted = asyncio.run(_delete())
    if deleted is None:
        _not_found(filename)
    if not deleted:
        click.echo(f"Error: failed to delete {filename}", err=True)
        sys.exit(1)
    click.echo(f"Deleted {filename}")


@main.command()
@click.argument("mode", type=VIEW_CHOICES, required=False)
@click.pass_obj
def view(config: Config, mode: str | None):
    """Show or change the view mode."""

    async def _view():
        session = await open_session(config)
        if mode:
            await session.set_view_mode(mode)
        return session.state.view_mode

    click.echo(asyncio.run(_view()).value)


@main.command()
@click.option("--sort", type=SORT_CHOICES, help="Sort order")
@click.pass_obj
def feed(config: Config, sort: str | None):
    """Read the journal in the current view mode."""

    async def _feed():
        session = await open_session(config, sort)
        if session.state.view_mode == ViewMode.SINGLE:
            entries = [session.current_entry] if session.current_entry else []
        else:
            entries = session.sorted_entries
        return [(entry, await session.load_content(entry)) for entry in entries]

    pages = asyncio.run(_feed())
    if not pages:
        click.echo("No entry selected.")
        return

    for i, (entry, content) in enumerate(pages):
        if i:
            click.echo("\n---\n")
        click.echo(f"## {entry.display_name}")
        click.echo(_format_date(entry))
        click.echo()
        click.echo(content or "")


if __name__ == "__main__":
    main()

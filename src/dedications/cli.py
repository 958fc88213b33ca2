"""
Click-based CLI for dedications.

This module only ORCHESTRATES: it loads settings, opens the store, calls
the entry service and formats output.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from dedications import __version__
from dedications.config import ConfigError, Settings, load_settings
from dedications.errors import DedicationsError
from dedications.service import EntryService
from dedications.storage import Database, EntryRepository

console = Console()

_STATUS_STYLES = {
    "pending": "yellow",
    "approved": "cyan",
    "scheduled": "blue",
    "completed": "green",
    "cancelled": "dim",
}


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="dedications")
@click.option("--config", "-c", type=click.Path(dir_okay=False), help="Path to a YAML config file")
@click.pass_context
def main(ctx: click.Context, config: str | None) -> None:
    """dedications: manage charitable dedication entries."""
    ctx.ensure_object(dict)
    try:
        settings = load_settings(config)
    except ConfigError as e:
        console.print(f"[bold red]Error:[/] {e}")
        ctx.exit(1)
    _setup_logging(settings.log_level)
    ctx.obj["settings"] = settings


@main.command()
@click.option("--host", help="Bind address (overrides config)")
@click.option("--port", type=int, help="Listen port (overrides config)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    from dedications.web.app import run_server

    settings: Settings = ctx.obj["settings"]
    if host:
        settings.host = host
    if port:
        settings.port = port
    console.print(f"[bold green]Serving dedications at[/] http://{settings.host}:{settings.port}")
    run_server(settings)


@main.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create the database file and schema (safe to re-run)."""
    settings: Settings = ctx.obj["settings"]
    with Database(settings.db_path) as db:
        mode = db.journal_mode()
    console.print(f"[green]✓ Database ready:[/] {settings.db_path} (journal_mode={mode})")


@main.command("list")
@click.option("--status", "-s", help="Only show entries with this status")
@click.pass_context
def list_entries(ctx: click.Context, status: str | None) -> None:
    """Print entries as a table, newest first."""
    settings: Settings = ctx.obj["settings"]
    with Database(settings.db_path) as db:
        service = EntryService(EntryRepository(db))
        try:
            entries = service.list_entries(status)
        except DedicationsError as e:
            console.print(f"[bold red]Error:[/] {e.message}")
            ctx.exit(1)

    if not entries:
        console.print("[yellow]No entries found.[/]")
        return

    table = Table(title="Dedication entries")
    table.add_column("ID", justify="right")
    table.add_column("Sponsor")
    table.add_column("Dedication")
    table.add_column("Amount", justify="right")
    table.add_column("Status")
    table.add_column("Assigned")
    table.add_column("Created")
    for entry in entries:
        style = _STATUS_STYLES.get(entry.status.value, "")
        table.add_row(
            str(entry.id),
            escape(f"{entry.sponsor_name} <{entry.email}>"),
            escape(f"{entry.dedication_type.value} {entry.dedication_name}"),
            f"${entry.amount / 100:,.2f}",
            f"[{style}]{entry.status.value}[/]" if style else entry.status.value,
            escape(entry.assigned_date or "-"),
            entry.created_at,
        )
    console.print(table)


if __name__ == "__main__":
    main()

"""Database management commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

console = Console()

db_app = typer.Typer(
    name="db",
    help="Database management operations",
    no_args_is_help=True,
)


@db_app.command(name="init")
def init_database(
    db_url: Annotated[
        Optional[str],
        typer.Option("--url", help="Database URL (default: NEURON_VSG_DATABASE_URL or sqlite file)"),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option("--env-file", help="Load environment variables from .env file"),
    ] = None,
    create_levels: Annotated[
        bool,
        typer.Option("--levels/--no-levels", help="Populate the signal levels registry"),
    ] = True,
) -> None:
    """
    Initialize database schema (idempotent).

    Creates all tables and optionally populates the signal levels registry.
    Safe to run multiple times.
    """
    from neuron_vsg.config import Settings
    from neuron_vsg.db import LevelRepository, create_db_and_tables, get_engine, get_session

    settings = Settings.from_env(env_file, database_url=db_url)

    console.print("[bold blue]Initializing database...[/bold blue]")
    engine = get_engine(settings.database_url)
    console.print(f"Database: {engine.url}")

    create_db_and_tables(engine)
    console.print("[green]✓[/green] Tables ready")

    if create_levels:
        with get_session(engine) as session:
            created = LevelRepository(session).ensure_defaults()
        console.print(f"[green]✓[/green] Levels registry populated ({created} created)")

    console.print("[green]✓[/green] Database initialized successfully")


@db_app.command(name="info")
def database_info(
    db_url: Annotated[
        Optional[str],
        typer.Option("--url", help="Database URL"),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option("--env-file", help="Load environment variables from .env file"),
    ] = None,
) -> None:
    """Show the store URL and the row count of each table."""
    from sqlalchemy import inspect

    from neuron_vsg.config import Settings
    from neuron_vsg.db import BaseRepository, get_engine, get_session
    from neuron_vsg.models.orm import Base

    settings = Settings.from_env(env_file, database_url=db_url)
    engine = get_engine(settings.database_url)
    existing = set(inspect(engine).get_table_names())
    console.print(f"[bold blue]Store:[/bold blue] {engine.url} ({engine.dialect.name})")
    if not existing:
        console.print("[yellow]Database not initialized, run `neuron_vsg db init`[/yellow]")
        return

    table = Table(title="Stored Objects")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", style="magenta", justify="right")

    with get_session(engine) as session:
        for mapper in sorted(Base.registry.mappers, key=lambda m: m.local_table.name):
            name = mapper.local_table.name
            if name not in existing:
                table.add_row(name, "[red]missing[/red]")
                continue
            count = BaseRepository(session, mapper.class_).count()
            table.add_row(name, str(count))

    console.print(table)

"""Generator run command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

console = Console()


def run_generator(
    snapshots: Annotated[
        Path,
        typer.Argument(help="Element snapshot file, or directory of *.json snapshots"),
    ],
    db_url: Annotated[
        Optional[str],
        typer.Option("--url", help="Database URL"),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option("--env-file", help="Load environment variables from .env file"),
    ] = None,
    protocol: Annotated[
        Optional[str],
        typer.Option("--protocol", help="Protocol name of the elements to process"),
    ] = None,
    version: Annotated[
        Optional[str],
        typer.Option("--version", help="Protocol version of the elements to process"),
    ] = None,
    keep_going: Annotated[
        bool,
        typer.Option("--keep-going", help="Roll back a failing element and continue"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Build flows and VSGs only, don't write to DB"),
    ] = False,
) -> None:
    """
    Generate flows, VSGs and resources from element snapshots.

    Processes every element running the configured protocol, then deletes
    resources whose element or video path disappeared.
    """
    from pydantic import ValidationError

    from neuron_vsg.config import Settings
    from neuron_vsg.constants import Level
    from neuron_vsg.db import LevelRepository, create_db_and_tables, get_engine, get_session
    from neuron_vsg.element import load_element_snapshots, select_elements
    from neuron_vsg.exceptions import NeuronVsgError
    from neuron_vsg.mapping import NeuronVsgGenerator, build_element_model

    try:
        settings = Settings.from_env(
            env_file,
            database_url=db_url,
            protocol_name=protocol,
            protocol_version=version,
        )
    except (FileNotFoundError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[bold blue]Loading snapshots:[/bold blue] {snapshots}")
    try:
        handles = load_element_snapshots(snapshots)
    except NeuronVsgError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    selected = list(
        select_elements(handles, settings.protocol_name, settings.protocol_version)
    )
    console.print(
        f"Elements: {len(selected)} of {len(handles)} run "
        f"{settings.protocol_name!r} {settings.protocol_version!r}"
    )
    if not selected:
        console.print("[yellow]No matching elements[/yellow]")
        return

    if dry_run:
        table = Table(title="Dry Run")
        table.add_column("Element", style="cyan")
        table.add_column("Flows", style="magenta", justify="right")
        table.add_column("VSGs", style="magenta", justify="right")
        table.add_column("Resources", style="magenta", justify="right")

        known_levels = {int(level) for level in Level}
        failed = 0
        for handle in selected:
            try:
                model = build_element_model(handle, known_levels)
            except NeuronVsgError as e:
                console.print(f"[red]✗[/red] {handle.name}: {e}")
                if not keep_going:
                    raise typer.Exit(code=1)
                failed += 1
                continue
            table.add_row(
                handle.name,
                str(len(model.flows())),
                str(len(model.vsgs())),
                str(len(model.paths)),
            )

        console.print(table)
        console.print("[yellow]Dry run - not writing to database[/yellow]")
        if failed:
            raise typer.Exit(code=1)
        return

    engine = get_engine(settings.database_url)
    create_db_and_tables(engine)

    try:
        with get_session(engine) as session:
            if not LevelRepository(session).known_numbers():
                console.print(
                    "[yellow]Levels registry is empty: flows will not be placed in "
                    "VSG sections (run `neuron_vsg db init`)[/yellow]"
                )
            generator = NeuronVsgGenerator(session, settings, fail_fast=not keep_going)
            stats = generator.run(selected)
    except NeuronVsgError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title="Run Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta", justify="right")
    table.add_row("Elements processed", str(stats.elements_processed))
    table.add_row("Elements failed", str(stats.elements_failed))
    table.add_row("Flows", str(stats.flows))
    table.add_row("VSGs", str(stats.vsgs))
    table.add_row("Resources", str(stats.resources))
    table.add_row("Stale VSGs deleted", str(stats.stale_vsgs_deleted))
    table.add_row("Stale resources deleted", str(stats.stale_resources_deleted))
    console.print(table)

    if stats.elements_failed:
        console.print(f"[red]✗[/red] {stats.elements_failed} element(s) failed")
        raise typer.Exit(code=1)
    console.print("[green]✓[/green] Generation complete")

"""Commands displaying the stored flows, VSGs and resources."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

console = Console()

show_app = typer.Typer(
    name="show",
    help="Display stored flows, VSGs and resources",
    no_args_is_help=True,
)

UrlOption = Annotated[
    Optional[str],
    typer.Option("--url", help="Database URL"),
]
EnvFileOption = Annotated[
    Optional[Path],
    typer.Option("--env-file", help="Load environment variables from .env file"),
]
ElementOption = Annotated[
    Optional[str],
    typer.Option(
        "--element",
        "-e",
        help="Only objects of this element, by DMS element id (e.g. 346/12)",
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print JSON instead of a table"),
]


def _engine(db_url, env_file):
    from neuron_vsg.config import Settings
    from neuron_vsg.db import get_engine

    settings = Settings.from_env(env_file, database_url=db_url)
    return get_engine(settings.database_url)


def _print_json(responses) -> None:
    console.print_json(json.dumps([r.model_dump(mode="json") for r in responses]))


@show_app.command(name="flows")
def show_flows(
    db_url: UrlOption = None,
    env_file: EnvFileOption = None,
    element: ElementOption = None,
    as_json: JsonOption = False,
) -> None:
    """List stored flows."""
    from sqlalchemy.orm import Session

    from neuron_vsg.db import FlowRepository
    from neuron_vsg.models.schemas import FlowResponse

    with Session(_engine(db_url, env_file)) as session:
        flows = FlowRepository(session).list_by_element(element)
        responses = [FlowResponse.model_validate(f) for f in flows]

    if as_json:
        _print_json(responses)
        return
    if not responses:
        console.print("[yellow]No flows found[/yellow]")
        return

    table = Table(title=f"Flows ({len(responses)})")
    table.add_column("Name", style="cyan")
    table.add_column("Dir", style="green")
    table.add_column("Transport", style="green")
    table.add_column("Interface", style="magenta")
    table.add_column("Source", style="magenta")
    table.add_column("Destination", style="magenta")
    for flow in responses:
        destination = (
            f"{flow.destination_ip}:{flow.destination_port}" if flow.destination_ip else ""
        )
        table.add_row(
            flow.name,
            flow.direction,
            flow.transport_type,
            flow.interface,
            flow.source_ip or "",
            destination,
        )
    console.print(table)


@show_app.command(name="vsgs")
def show_vsgs(
    db_url: UrlOption = None,
    env_file: EnvFileOption = None,
    element: ElementOption = None,
    as_json: JsonOption = False,
) -> None:
    """List stored virtual signal groups with their level sections."""
    from sqlalchemy.orm import Session

    from neuron_vsg.db import VirtualSignalGroupRepository
    from neuron_vsg.models.schemas import VsgResponse

    with Session(_engine(db_url, env_file)) as session:
        vsgs = VirtualSignalGroupRepository(session).list_by_element(element)
        responses = [VsgResponse.from_orm_vsg(v) for v in vsgs]

    if as_json:
        _print_json(responses)
        return
    if not responses:
        console.print("[yellow]No VSGs found[/yellow]")
        return

    table = Table(title=f"Virtual Signal Groups ({len(responses)})")
    table.add_column("Name", style="cyan")
    table.add_column("Role", style="green")
    table.add_column("Level", style="green")
    table.add_column("Blue", style="blue")
    table.add_column("Red", style="red")
    for vsg in responses:
        if not vsg.linked_flows:
            table.add_row(vsg.name, vsg.role, "", "", "")
        for i, section in enumerate(vsg.linked_flows):
            table.add_row(
                vsg.name if i == 0 else "",
                vsg.role if i == 0 else "",
                section.level,
                section.blue or "",
                section.red or "",
            )
    console.print(table)


@show_app.command(name="resources")
def show_resources(
    db_url: UrlOption = None,
    env_file: EnvFileOption = None,
    element: ElementOption = None,
    as_json: JsonOption = False,
) -> None:
    """List stored resources."""
    from sqlalchemy.orm import Session

    from neuron_vsg.db import ResourceRepository
    from neuron_vsg.models.schemas import ResourceResponse

    with Session(_engine(db_url, env_file)) as session:
        resources = ResourceRepository(session).list_by_element(element)
        responses = [ResourceResponse.model_validate(r) for r in resources]

    if as_json:
        _print_json(responses)
        return
    if not responses:
        console.print("[yellow]No resources found[/yellow]")
        return

    table = Table(title=f"Resources ({len(responses)})")
    table.add_column("Name", style="cyan")
    table.add_column("Element", style="green")
    table.add_column("Mode", style="green")
    table.add_column("Properties", style="magenta")
    for resource in responses:
        properties = ", ".join(f"{p.name}={p.value}" for p in resource.properties)
        table.add_row(resource.name, resource.element_id, resource.mode, properties)
    console.print(table)

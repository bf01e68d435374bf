"""Console script for neuron_vsg."""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from neuron_vsg.log import configure_logging

app = typer.Typer(
    name="neuron_vsg",
    help="EVS Neuron flow, VSG and resource generator",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Log level (DEBUG, INFO, WARNING, ERROR); default NEURON_VSG_LOG_LEVEL or INFO",
        ),
    ] = None,
) -> None:
    """EVS Neuron flow, VSG and resource generator."""
    from neuron_vsg.config import Settings

    configure_logging(log_level or Settings.from_env().log_level)


# Import subcommand apps
from neuron_vsg.cli.db_commands import db_app  # noqa: E402
from neuron_vsg.cli.run_commands import run_generator  # noqa: E402
from neuron_vsg.cli.show_commands import show_app  # noqa: E402

# Register subcommands
app.add_typer(db_app, name="db", help="Database management operations")
app.add_typer(show_app, name="show", help="Display stored flows, VSGs and resources")
app.command(name="run")(run_generator)


if __name__ == "__main__":
    app()

"""Entry point for ``python -m neuron_vsg``."""

from neuron_vsg.cli import app

app()

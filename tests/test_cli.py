"""Tests for the neuron_vsg command line."""

from __future__ import annotations

import json
import sys

import pytest
from loguru import logger
from typer.testing import CliRunner

from neuron_vsg.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """Point loguru back at the real stderr after each invocation."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def db_url(tmp_path):
    """SQLite file URL in a temporary directory."""
    return f"sqlite:///{tmp_path / 'store.sqlite'}"


@pytest.fixture
def snapshot_dir(tmp_path, snapshot_factory):
    """Directory holding two Neuron snapshots and one other protocol."""
    directory = tmp_path / "snapshots"
    directory.mkdir()
    documents = {
        "neuron01.json": snapshot_factory(),
        "neuron02.json": snapshot_factory(name="Neuron 02", element_id=13),
        "other.json": snapshot_factory(name="Other", element_id=14, protocol="Other Protocol"),
    }
    for file_name, document in documents.items():
        (directory / file_name).write_text(json.dumps(document))
    return directory


class TestDbCommands:
    """Test the db sub-commands."""

    def test_init(self, db_url):
        """Test init creates tables and levels."""
        result = runner.invoke(app, ["db", "init", "--url", db_url])
        assert result.exit_code == 0, result.output
        assert "Levels registry populated (5 created)" in result.output

        result = runner.invoke(app, ["db", "info", "--url", db_url])
        assert result.exit_code == 0, result.output
        assert "level" in result.output

    def test_info_uninitialized(self, db_url):
        """Test info on an empty database."""
        result = runner.invoke(app, ["db", "info", "--url", db_url])
        assert result.exit_code == 0
        assert "not initialized" in result.output


class TestRunCommand:
    """Test the run command."""

    def test_run_and_show(self, db_url, snapshot_dir):
        """Test a run stores matching elements only."""
        runner.invoke(app, ["db", "init", "--url", db_url])
        result = runner.invoke(app, ["run", str(snapshot_dir), "--url", db_url])
        assert result.exit_code == 0, result.output
        assert "Elements: 2 of 3" in result.output
        assert "Generation complete" in result.output

        result = runner.invoke(
            app, ["show", "resources", "--url", db_url, "-e", "346/13", "--json"]
        )
        assert result.exit_code == 0, result.output
        resources = json.loads(result.output)
        assert [r["name"] for r in resources] == ["Neuron 02 A1", "Neuron 02 A2", "Neuron 02 B1"]

        result = runner.invoke(app, ["show", "vsgs", "--url", db_url, "--json"])
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)) == 10

        result = runner.invoke(app, ["show", "flows", "--url", db_url])
        assert result.exit_code == 0, result.output
        assert "Flows (30)" in result.output

    def test_show_element_filter_is_exact(self, db_url, tmp_path, snapshot_factory):
        """Test an element filter does not match elements sharing a name prefix."""
        directory = tmp_path / "snapshots"
        directory.mkdir()
        (directory / "short.json").write_text(json.dumps(snapshot_factory(name="Neuron")))
        (directory / "long.json").write_text(
            json.dumps(snapshot_factory(name="Neuron 01", element_id=13))
        )
        runner.invoke(app, ["db", "init", "--url", db_url])
        result = runner.invoke(app, ["run", str(directory), "--url", db_url])
        assert result.exit_code == 0, result.output

        result = runner.invoke(
            app, ["show", "resources", "--url", db_url, "-e", "346/12", "--json"]
        )
        assert result.exit_code == 0, result.output
        resources = json.loads(result.output)
        assert [r["name"] for r in resources] == ["Neuron A1", "Neuron A2", "Neuron B1"]
        assert {r["element_id"] for r in resources} == {"346/12"}

        result = runner.invoke(app, ["show", "vsgs", "--url", db_url, "-e", "346/13", "--json"])
        assert result.exit_code == 0, result.output
        vsgs = json.loads(result.output)
        assert len(vsgs) == 5
        assert all(v["name"].startswith("Neuron 01 ") for v in vsgs)

    def test_dry_run(self, db_url, snapshot_dir, tmp_path):
        """Test dry run writes nothing."""
        result = runner.invoke(app, ["run", str(snapshot_dir), "--url", db_url, "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "Dry run" in result.output
        assert not (tmp_path / "store.sqlite").exists()

    def test_missing_snapshots(self, db_url, tmp_path):
        """Test a missing snapshot path exits with an error."""
        result = runner.invoke(app, ["run", str(tmp_path / "nothing"), "--url", db_url])
        assert result.exit_code == 1
        assert "Snapshot path not found" in result.output

    def test_failing_element(self, db_url, tmp_path, snapshot_factory):
        """Test a failing element exits with an error."""
        path = tmp_path / "broken.json"
        path.write_text(json.dumps(snapshot_factory(mac_settings=[["1", "", "10.0.0.1"]])))
        result = runner.invoke(app, ["run", str(path), "--url", db_url, "--keep-going"])
        assert result.exit_code == 1
        assert "1 element(s) failed" in result.output

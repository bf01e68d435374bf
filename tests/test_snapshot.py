"""Tests for element snapshot loading and validation."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from neuron_vsg.element import load_element_snapshot, load_element_snapshots, select_elements
from neuron_vsg.exceptions import SnapshotError
from neuron_vsg.models.schemas import ElementSnapshot, TableSnapshot


def _write(path, document) -> None:
    path.write_text(json.dumps(document), encoding="utf-8")


class TestSchemas:
    """Test snapshot schema validation."""

    def test_table_keys_from_json_strings(self, snapshot_factory):
        """Test table ids given as JSON object keys become integers."""
        document = json.loads(json.dumps(snapshot_factory()))
        snapshot = ElementSnapshot.model_validate(document)
        assert 2300 in snapshot.tables
        assert snapshot.protocol.version == "Production"

    def test_empty_name_rejected(self, snapshot_factory):
        """Test an element needs a name."""
        with pytest.raises(ValidationError) as exc_info:
            ElementSnapshot.model_validate(snapshot_factory(name=""))
        assert "name" in str(exc_info.value)

    def test_row_width_checked_against_columns(self):
        """Test rows must match the declared column pids."""
        with pytest.raises(ValidationError):
            TableSnapshot(rows=[["1", 131, "extra"]], columns=[1701, 1702])

    def test_protocol_version_default(self):
        """Test the protocol version defaults to Production."""
        snapshot = ElementSnapshot(
            name="N",
            dma_id=1,
            element_id=2,
            protocol={"name": "EVS Neuron NAP - CONVERT"},
        )
        assert snapshot.protocol.version == "Production"
        assert snapshot.tables == {}


class TestLoading:
    """Test loading snapshots from disk."""

    def test_load_file(self, tmp_path, snapshot_factory):
        """Test a snapshot file becomes an element handle."""
        path = tmp_path / "neuron.json"
        _write(path, snapshot_factory())
        handle = load_element_snapshot(path)
        assert handle.name == "Neuron 01"
        assert handle.dms_element_id == "346/12"
        assert len(handle.get_table(2300)) == 3

    def test_load_directory_sorted(self, tmp_path, snapshot_factory):
        """Test every JSON file of a directory is loaded, by file name."""
        _write(tmp_path / "b.json", snapshot_factory(name="Neuron B", element_id=2))
        _write(tmp_path / "a.json", snapshot_factory(name="Neuron A", element_id=1))
        (tmp_path / "notes.txt").write_text("ignored")
        handles = load_element_snapshots(tmp_path)
        assert [h.name for h in handles] == ["Neuron A", "Neuron B"]

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON raises SnapshotError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotError, match="Invalid JSON") as exc_info:
            load_element_snapshot(path)
        assert exc_info.value.path == path

    def test_invalid_schema(self, tmp_path):
        """Test a document failing validation raises SnapshotError."""
        path = tmp_path / "bad.json"
        _write(path, {"name": "N"})
        with pytest.raises(SnapshotError, match="Invalid snapshot"):
            load_element_snapshot(path)

    def test_missing_path(self, tmp_path):
        """Test a missing path raises SnapshotError."""
        with pytest.raises(SnapshotError, match="not found"):
            load_element_snapshots(tmp_path / "missing")


class TestSelectElements:
    """Test protocol filtering."""

    def test_select_by_protocol_and_version(self, handle_factory):
        """Test only elements running the protocol name and version are kept."""
        handles = [
            handle_factory(name="Match"),
            handle_factory(name="Other Version", version="1.0.0.2"),
            handle_factory(name="Other Protocol", protocol="Generic Router"),
        ]
        selected = select_elements(handles, "EVS Neuron NAP - CONVERT", "Production")
        assert [h.name for h in selected] == ["Match"]

"""End-to-end tests of the generator against an in-memory database."""

from __future__ import annotations

import pytest

from neuron_vsg.constants import Level, ResourceMode
from neuron_vsg.db import (
    FlowRepository,
    ResourcePoolRepository,
    ResourceRepository,
    VirtualSignalGroupRepository,
)
from neuron_vsg.exceptions import MissingTableRowError
from neuron_vsg.mapping import (
    NeuronVsgGenerator,
    build_element_model,
    resource_mode,
    resource_properties,
)
from neuron_vsg.mapping.resources import INPUT_VSGS_PROPERTY, OUTPUT_VSGS_PROPERTY
from neuron_vsg.models.metadata import find_property
from neuron_vsg.models.records import VideoPathData


def _names(repo, element_id=None):
    return sorted(obj.name for obj in repo.list_by_element(element_id))


class TestBuildElementModel:
    """Test building an element without a database."""

    def test_counts(self, neuron_handle):
        """Test the default element yields 15 flows, 5 VSGs and 3 paths."""
        model = build_element_model(neuron_handle, {int(level) for level in Level})
        assert len(model.flows()) == 15
        assert len(model.vsgs()) == 5
        assert model.resource_names() == ["Neuron 01 A1", "Neuron 01 A2", "Neuron 01 B1"]


class TestResourceHelpers:
    """Test resource mode and properties."""

    def test_mode_without_vsgs(self):
        """Test a path without VSGs is unavailable."""
        assert resource_mode(VideoPathData(index="A1")) is ResourceMode.UNAVAILABLE

    def test_properties(self):
        """Test VSG guids are joined with semicolons."""
        properties = resource_properties("A1", ["g1", "g2"], [])
        assert find_property(properties, "Path") == "A1"
        assert find_property(properties, INPUT_VSGS_PROPERTY) == "g1;g2"
        assert find_property(properties, OUTPUT_VSGS_PROPERTY) == ""


class TestGenerator:
    """Test NeuronVsgGenerator.run."""

    def test_run_stores_everything(self, seeded_session, neuron_handle):
        """Test flows, VSGs and resources are stored and linked."""
        stats = NeuronVsgGenerator(seeded_session).run([neuron_handle])

        assert stats.elements_processed == 1
        assert stats.elements_failed == 0
        assert (stats.flows, stats.vsgs, stats.resources) == (15, 5, 3)

        flows = FlowRepository(seeded_session)
        vsgs = VirtualSignalGroupRepository(seeded_session)
        assert flows.count() == 15
        assert vsgs.count() == 5

        sdi1 = flows.get_by_name("Neuron 01 SDI 1")
        assert sdi1.linked_signal_group.name == "Neuron 01 A1"
        audio = flows.get_by_name("Neuron 01 Main Audio Stream 1")
        assert audio.linked_signal_group.name == "Neuron 01 IP A1"

        source = vsgs.get_by_name("Neuron 01 IP A1")
        assert {s.level.number for s in source.linked_flows} == {0, 1}
        assert len(source.flows) == 4

    def test_resource_references_path_vsgs(self, seeded_session, neuron_handle):
        """Test each resource lists the guids of its own path's VSGs."""
        NeuronVsgGenerator(seeded_session).run([neuron_handle])
        vsgs = VirtualSignalGroupRepository(seeded_session)
        resources = ResourceRepository(seeded_session)

        a1 = resources.get_by_name("Neuron 01 A1")
        assert a1.mode == "Available"
        assert a1.max_concurrency == 1000
        assert a1.pool.name == "Processors"
        assert find_property(a1.properties, "Path") == "A1"
        assert (
            find_property(a1.properties, INPUT_VSGS_PROPERTY)
            == vsgs.get_by_name("Neuron 01 A1").guid
        )
        assert (
            find_property(a1.properties, OUTPUT_VSGS_PROPERTY)
            == vsgs.get_by_name("Neuron 01 IP A1").guid
        )
        assert a1.capabilities[0].profile_parameter.name == "Linked Source"

        b1 = resources.get_by_name("Neuron 01 B1")
        assert find_property(b1.properties, INPUT_VSGS_PROPERTY) == ""

    def test_rerun_is_idempotent(self, seeded_session, neuron_handle):
        """Test a second run updates rows in place and keeps guids."""
        generator = NeuronVsgGenerator(seeded_session)
        generator.run([neuron_handle])
        vsgs = VirtualSignalGroupRepository(seeded_session)
        resources = ResourceRepository(seeded_session)
        guids = {v.name: v.guid for v in vsgs.list()}
        resource_guids = {r.name: r.guid for r in resources.list()}

        stats = generator.run([neuron_handle])

        assert stats.stale_resources_deleted == 0
        assert FlowRepository(seeded_session).count() == 15
        assert {v.name: v.guid for v in vsgs.list()} == guids
        assert {r.name: r.guid for r in resources.list()} == resource_guids
        assert len(resources.get_by_name("Neuron 01 A1").capabilities) == 1

    def test_removed_path_deletes_resource(self, seeded_session, handle_factory):
        """Test the resource of a vanished video path is deleted."""
        from conftest import video_path_row

        generator = NeuronVsgGenerator(seeded_session)
        generator.run([handle_factory()])

        smaller = handle_factory(
            video_paths=[video_path_row("A1", 529, 530), video_path_row("A2", 531, 0)]
        )
        stats = generator.run([smaller])

        assert stats.stale_resources_deleted == 1
        assert _names(ResourceRepository(seeded_session)) == ["Neuron 01 A1", "Neuron 01 A2"]

    def test_removed_element_deletes_resources(self, seeded_session, handle_factory):
        """Test resources of an element missing from the run are deleted."""
        generator = NeuronVsgGenerator(seeded_session)
        first = handle_factory()
        second = handle_factory(name="Neuron 02", element_id=13)
        generator.run([first, second])
        assert ResourceRepository(seeded_session).count() == 6

        stats = generator.run([second])

        assert stats.stale_resources_deleted == 3
        assert _names(ResourceRepository(seeded_session)) == [
            "Neuron 02 A1",
            "Neuron 02 A2",
            "Neuron 02 B1",
        ]

    def test_fail_fast_reraises(self, seeded_session, handle_factory):
        """Test the first element error propagates and is rolled back."""
        broken = handle_factory(name="Neuron 02", element_id=13, mac_settings=[["1", "", "10.0.0.1"]])
        with pytest.raises(MissingTableRowError):
            NeuronVsgGenerator(seeded_session).run([broken])
        assert FlowRepository(seeded_session).count() == 0

    def test_keep_going(self, seeded_session, handle_factory):
        """Test a failing element is counted and its resources are kept."""
        generator = NeuronVsgGenerator(seeded_session, fail_fast=False)
        good = handle_factory()
        second = handle_factory(name="Neuron 02", element_id=13)
        generator.run([good, second])

        broken = handle_factory(name="Neuron 02", element_id=13, mac_settings=[["1", "", "10.0.0.1"]])
        stats = generator.run([good, broken])

        assert stats.elements_processed == 1
        assert stats.elements_failed == 1
        assert stats.stale_resources_deleted == 0
        assert ResourceRepository(seeded_session).count() == 6

    def test_protocol_settings(self, seeded_session, neuron_handle):
        """Test pool and concurrency come from the settings."""
        from neuron_vsg.config import Settings

        settings = Settings(resource_pool_name="Neurons", max_concurrency=4)
        NeuronVsgGenerator(seeded_session, settings).run([neuron_handle])

        pool = ResourcePoolRepository(seeded_session).get_by_name("Neurons")
        resources = ResourceRepository(seeded_session).list_in_pool(pool)
        assert len(resources) == 3
        assert {r.max_concurrency for r in resources} == {4}

    def test_empty_level_registry(self, session, neuron_handle):
        """Test flows are linked but no sections are written without levels."""
        NeuronVsgGenerator(session).run([neuron_handle])

        vsgs = VirtualSignalGroupRepository(session)
        assert vsgs.count() == 5
        assert all(not v.linked_flows for v in vsgs.list())
        sdi1 = FlowRepository(session).get_by_name("Neuron 01 SDI 1")
        assert sdi1.linked_signal_group.name == "Neuron 01 A1"

    def test_path_leaving_sdi_window_unlinks_flows(self, seeded_session, handle_factory):
        """Test a rerun clears flow links and deletes the VSG no longer generated."""
        from conftest import video_path_row

        generator = NeuronVsgGenerator(seeded_session)
        generator.run([handle_factory()])

        rerouted = handle_factory(
            video_paths=[
                video_path_row("A1", 0, 0),
                video_path_row("A2", 531, 0),
                video_path_row("B1", 0, 0),
            ]
        )
        stats = generator.run([rerouted])

        flows = FlowRepository(seeded_session)
        vsgs = VirtualSignalGroupRepository(seeded_session)
        assert stats.stale_vsgs_deleted == 1
        assert vsgs.get_by_name("Neuron 01 A1") is None
        assert flows.get_by_name("Neuron 01 SDI 1").linked_signal_group is None
        assert flows.get_by_name("Neuron 01 SDI 2").linked_signal_group is None
        assert flows.get_by_name("Neuron 01 SDI 3").linked_signal_group.name == "Neuron 01 A2"
        assert vsgs.count() == 4

        a1 = ResourceRepository(seeded_session).get_by_name("Neuron 01 A1")
        assert find_property(a1.properties, INPUT_VSGS_PROPERTY) == ""
        assert find_property(a1.properties, OUTPUT_VSGS_PROPERTY) == (
            vsgs.get_by_name("Neuron 01 IP A1").guid
        )

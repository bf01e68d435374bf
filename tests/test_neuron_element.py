"""Tests for the named row structs and the Neuron table reader."""

from __future__ import annotations

import pytest

from conftest import dcf_row, ip_audio_row, ip_video_row, video_path_row
from neuron_vsg.element import (
    DcfInterfaceRow,
    IpAudioOutputStreamRow,
    IpVideoOutputStreamRow,
    MacSettingsRow,
    NeuronElement,
    VideoPathRow,
)
from neuron_vsg.exceptions import (
    MalformedValueError,
    MissingTableError,
    MissingTableRowError,
    UnknownPathSelectionError,
)


class TestRowStructs:
    """Test fixed-offset row conversion."""

    def test_video_path_row(self):
        """Test key, main and backup inputs."""
        row = VideoPathRow.from_row(video_path_row("A1", "529", 530.0))
        assert row == VideoPathRow(key="A1", main_input=529, backup_input=530)

    def test_video_path_row_malformed(self):
        """Test a non-numeric input raises."""
        with pytest.raises(MalformedValueError):
            VideoPathRow.from_row(video_path_row("A1", "n/a", 0))

    @pytest.mark.parametrize("value", ["531.6", 531.5, "529,0", ""])
    def test_video_path_row_fractional_input(self, value):
        """Test fractional or non-numeric inputs raise instead of selecting a flow."""
        with pytest.raises(MalformedValueError):
            VideoPathRow.from_row(video_path_row("A1", value, 0))

    def test_integral_float_input(self):
        """Test integral floats and their text form are accepted."""
        row = VideoPathRow.from_row(video_path_row("A1", "531.0", 530.0))
        assert (row.main_input, row.backup_input) == (531, 530)

    def test_short_row_is_malformed(self):
        """Test a row missing a fixed column raises."""
        with pytest.raises(MalformedValueError):
            VideoPathRow.from_row(["A1", "", ""])

    def test_mac_settings_row(self):
        """Test key and IP address."""
        assert MacSettingsRow.from_row(["1", "x", "10.0.0.1"]).ip_address == "10.0.0.1"

    def test_dcf_interface_row(self):
        """Test key and dynamic link."""
        row = DcfInterfaceRow.from_row(dcf_row("10", "1;1"))
        assert (row.key, row.interface_dynamic_link) == ("10", "1;1")

    def test_ip_video_row(self):
        """Test video stream offsets and path selection."""
        row = IpVideoOutputStreamRow.from_row(
            ip_video_row("4", "680", "5000", "239.0.0.4", 5001.0, "239.1.0.4")
        )
        assert row.key == "4"
        assert row.path == "B2"
        assert (row.primary_destination_ip, row.primary_destination_port) == ("239.0.0.4", 5000)
        assert (row.secondary_destination_ip, row.secondary_destination_port) == ("239.1.0.4", 5001)

    def test_ip_video_row_unknown_path(self):
        """Test an unmapped path selection raises."""
        with pytest.raises(UnknownPathSelectionError):
            IpVideoOutputStreamRow.from_row(ip_video_row("1", 700, 1, "a", 2, "b"))

    def test_ip_audio_row(self):
        """Test audio stream offsets; the path comes from the stream index."""
        row = IpAudioOutputStreamRow.from_row(
            ip_audio_row("13", 6000, "239.2.0.13", 6001, "239.3.0.13")
        )
        assert row.path == "D1"
        assert (row.primary_destination_ip, row.primary_destination_port) == ("239.2.0.13", 6000)
        assert (row.secondary_destination_ip, row.secondary_destination_port) == ("239.3.0.13", 6001)

    def test_ip_audio_row_unknown_index(self):
        """Test a stream index outside 1..16 raises."""
        with pytest.raises(UnknownPathSelectionError):
            IpAudioOutputStreamRow.from_row(ip_audio_row("17", 1, "a", 2, "b"))


class TestNeuronElement:
    """Test the typed table readers."""

    def test_sdi_static_rows_with_status_ok(self, neuron_element):
        """Test only status OK rows are returned."""
        assert [r.key for r in neuron_element.sdi_static_io_rows()] == ["1", "2"]

    def test_sdi_bidirectional_input_rows(self, neuron_element):
        """Test only rows configured as input are returned."""
        assert [r.key for r in neuron_element.sdi_bidirectional_io_rows()] == ["2", "3"]

    def test_video_path_rows(self, neuron_element):
        """Test all video path rows, in table order."""
        assert [r.key for r in neuron_element.video_path_rows()] == ["A1", "A2", "B1"]

    def test_mac_rows(self, neuron_element):
        """Test first and second MAC settings rows."""
        assert neuron_element.primary_mac().ip_address == "10.0.0.1"
        assert neuron_element.secondary_mac().ip_address == "10.0.0.2"

    def test_missing_second_mac_row(self, handle_factory):
        """Test fewer than two MAC rows raises."""
        element = NeuronElement(handle_factory(mac_settings=[["1", "", "10.0.0.1"]]))
        assert element.primary_mac().key == "1"
        with pytest.raises(MissingTableRowError):
            element.secondary_mac()

    def test_dcf_interface_join(self, neuron_element):
        """Test the join on "group;key"."""
        assert neuron_element.dcf_interface_id(1, "1") == "10"
        assert neuron_element.dcf_interface_id(2, "3") == "11"
        assert neuron_element.dcf_interface_id(5, "2") == "21"

    def test_dcf_interface_miss(self, neuron_element):
        """Test an unlinked row resolves to None."""
        assert neuron_element.dcf_interface_id(1, "2") is None

    def test_missing_video_paths_table(self, neuron_handle):
        """Test construction fails without the video paths table."""
        del neuron_handle.tables[2300]
        with pytest.raises(MissingTableError):
            NeuronElement(neuron_handle)

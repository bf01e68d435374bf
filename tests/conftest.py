"""pytest configuration for neuron_vsg tests."""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.orm import Session

from neuron_vsg.constants import PROTOCOL_NAME, PROTOCOL_VERSION
from neuron_vsg.db import LevelRepository, create_db_and_tables, get_engine
from neuron_vsg.element import NeuronElement, element_from_snapshot
from neuron_vsg.models.schemas import ElementSnapshot


def _pad(cells: dict[int, Any], width: int) -> list[Any]:
    row: list[Any] = [""] * width
    for index, value in cells.items():
        row[index] = value
    return row


def video_path_row(key: str, main_input: int, backup_input: int) -> list[Any]:
    return [key, "", "", main_input, backup_input]


def ip_video_row(key, path_value, port, ip, secondary_port, secondary_ip) -> list[Any]:
    return _pad(
        {0: key, 5: port, 6: ip, 9: path_value, 13: secondary_port, 14: secondary_ip},
        15,
    )


def ip_audio_row(key, port, ip, secondary_port, secondary_ip) -> list[Any]:
    return _pad({0: key, 3: port, 4: ip, 11: secondary_port, 12: secondary_ip}, 13)


def dcf_row(key: str, link: str) -> list[Any]:
    return _pad({0: key, 5: link}, 6)


def build_snapshot(
    name: str = "Neuron 01",
    dma_id: int = 346,
    element_id: int = 12,
    *,
    protocol: str = PROTOCOL_NAME,
    version: str = PROTOCOL_VERSION,
    static_io: list | None = None,
    bidirectional_io: list | None = None,
    video_paths: list | None = None,
    mac_settings: list | None = None,
    ip_video: list | None = None,
    ip_audio: list | None = None,
    dcf_interfaces: list | None = None,
) -> dict[str, Any]:
    """
    Build a snapshot document of a small Neuron element.

    Defaults: SDI flows 1, 2 (static) and 3 (bidirectional); video paths A1
    (main 529, backup 530), A2 (main 531) and B1 (no SDI input); IP streams
    for A1, A2 and B1.
    """
    if static_io is None:
        static_io = [["1", 131], ["2", 131], ["3", 130]]
    if bidirectional_io is None:
        bidirectional_io = [["2", 131], ["3", 131], ["4", 130]]
    if video_paths is None:
        video_paths = [
            video_path_row("A1", 529, 530),
            video_path_row("A2", 531, 0),
            video_path_row("B1", 0, 0),
        ]
    if mac_settings is None:
        mac_settings = [["1", "", "10.0.0.1"], ["2", "", "10.0.0.2"]]
    if ip_video is None:
        ip_video = [
            ip_video_row("1", 675, 5000, "239.0.0.1", 5001, "239.1.0.1"),
            ip_video_row("2", 676, 5002, "239.0.0.2", 5003, "239.1.0.2"),
            ip_video_row("3", 679, 5004, "239.0.0.3", 5005, "239.1.0.3"),
        ]
    if ip_audio is None:
        ip_audio = [
            ip_audio_row("1", 6000, "239.2.0.1", 6001, "239.3.0.1"),
            ip_audio_row("2", 6002, "239.2.0.2", 6003, "239.3.0.2"),
            ip_audio_row("5", 6004, "239.2.0.5", 6005, "239.3.0.5"),
        ]
    if dcf_interfaces is None:
        dcf_interfaces = [
            dcf_row("10", "1;1"),
            dcf_row("11", "2;3"),
            dcf_row("20", "5;1"),
            dcf_row("21", "5;2"),
        ]
    return {
        "name": name,
        "dma_id": dma_id,
        "element_id": element_id,
        "protocol": {"name": protocol, "version": version},
        "tables": {
            1000: {"rows": mac_settings},
            1700: {"rows": static_io},
            2300: {"rows": video_paths},
            3100: {"rows": bidirectional_io},
            3200: {"rows": ip_video},
            3400: {"rows": ip_audio},
            65049: {"rows": dcf_interfaces},
        },
    }


def build_handle(**kwargs):
    return element_from_snapshot(ElementSnapshot.model_validate(build_snapshot(**kwargs)))


@pytest.fixture
def snapshot_factory():
    """Factory building snapshot documents (see ``build_snapshot``)."""
    return build_snapshot


@pytest.fixture
def handle_factory():
    """Factory building element handles from snapshot documents."""
    return build_handle


@pytest.fixture
def neuron_handle():
    """Element handle of the default test element."""
    return build_handle()


@pytest.fixture
def neuron_element(neuron_handle):
    """Table reader over the default test element."""
    return NeuronElement(neuron_handle)


@pytest.fixture
def engine():
    """Create in-memory SQLite engine with all tables."""
    engine = get_engine("sqlite:///:memory:")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create SQLAlchemy session for testing."""
    with Session(engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def seeded_session(session):
    """Session whose levels registry holds Video and Audio1..Audio4."""
    LevelRepository(session).ensure_defaults()
    session.commit()
    return session

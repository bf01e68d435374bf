"""Per-element orchestration of the flow, VSG and resource builders.

Each element is processed in its own transaction:

1. read the tables (:class:`~neuron_vsg.element.NeuronElement`)
2. build SDI and IP flows
3. build destination and source VSGs per video path
4. upsert flows, then VSGs (linking the flows), then one resource per path

After all elements, resources of vanished elements or paths are deleted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Container, Iterable

from loguru import logger

from neuron_vsg.config import Settings
from neuron_vsg.db.repository import (
    FlowRepository,
    LevelRepository,
    VirtualSignalGroupRepository,
)
from neuron_vsg.element.neuron import NeuronElement
from neuron_vsg.mapping.flows import FlowBuilder, IpFlows, SdiFlows
from neuron_vsg.mapping.resources import ResourcePublisher, resource_name
from neuron_vsg.mapping.vsgs import VsgBuilder

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from neuron_vsg.element.handle import ElementHandle
    from neuron_vsg.models.orm import Resource
    from neuron_vsg.models.records import (
        FlowRecord,
        VideoPathData,
        VirtualSignalGroupRecord,
    )

__all__ = [
    "ElementModel",
    "NeuronVsgGenerator",
    "RunStats",
    "build_element_model",
]


@dataclass
class RunStats:
    """Statistics for a generator run.

    Attributes
    ----------
    elements_processed : int
        Elements whose flows, VSGs and resources were stored
    elements_failed : int
        Elements rolled back after an error
    flows : int
        Flows upserted
    vsgs : int
        VSGs upserted
    resources : int
        Resources upserted
    stale_vsgs_deleted : int
        VSGs deleted because their video path no longer produces them
    stale_resources_deleted : int
        Resources deleted because their element or path is gone
    """

    elements_processed: int = 0
    elements_failed: int = 0
    flows: int = 0
    vsgs: int = 0
    resources: int = 0
    stale_vsgs_deleted: int = 0
    stale_resources_deleted: int = 0

    def __str__(self) -> str:
        return (
            f"Elements: {self.elements_processed}, "
            f"Failed: {self.elements_failed}, "
            f"Flows: {self.flows}, "
            f"VSGs: {self.vsgs}, "
            f"Resources: {self.resources}, "
            f"Stale VSGs deleted: {self.stale_vsgs_deleted}, "
            f"Stale resources deleted: {self.stale_resources_deleted}"
        )


@dataclass
class ElementModel:
    """Flows and VSGs built for one element, before persistence."""

    handle: ElementHandle
    sdi_flows: SdiFlows
    ip_flows: IpFlows
    paths: list[VideoPathData] = field(default_factory=list)

    def flows(self) -> list[FlowRecord]:
        return [*self.sdi_flows, *self.ip_flows]

    def vsgs(self) -> list[VirtualSignalGroupRecord]:
        out = []
        for path in self.paths:
            out.extend(v for v in (path.input_vsg, path.output_vsg) if v is not None)
        return out

    def resource_names(self) -> list[str]:
        return [resource_name(self.handle.name, path.index) for path in self.paths]


def build_element_model(handle: ElementHandle, known_levels: Container[int]) -> ElementModel:
    """
    Build the flows and VSGs of one element without touching the database.

    Parameters
    ----------
    handle : ElementHandle
        Element to read
    known_levels : Container[int]
        Level numbers present in the levels registry

    Raises
    ------
    NeuronVsgError
        On a missing table, row or path selection, or a malformed cell
    """
    element = NeuronElement(handle)
    flow_builder = FlowBuilder(element)
    sdi_flows = flow_builder.build_sdi_flows()
    ip_flows = flow_builder.build_ip_flows()
    paths = VsgBuilder(element, known_levels).build(sdi_flows, ip_flows)
    return ElementModel(handle=handle, sdi_flows=sdi_flows, ip_flows=ip_flows, paths=paths)


class NeuronVsgGenerator:
    """
    Generate and store flows, VSGs and resources for Neuron elements.

    Parameters
    ----------
    session : Session
        Database session; the generator commits once per element
    settings : Settings | None
        Pool, capability and concurrency settings
    fail_fast : bool
        Re-raise the first element error (default). When False, the failing
        element is rolled back and logged and the run continues.

    Examples
    --------
    >>> with get_session(engine) as session:
    ...     stats = NeuronVsgGenerator(session).run(handles)
    >>> print(stats)
    """

    def __init__(
        self,
        session: Session,
        settings: Settings | None = None,
        *,
        fail_fast: bool = True,
    ) -> None:
        self.session = session
        self.settings = settings or Settings()
        self.fail_fast = fail_fast
        self.publisher = ResourcePublisher(
            session,
            pool_name=self.settings.resource_pool_name,
            capability_name=self.settings.capability_name,
            max_concurrency=self.settings.max_concurrency,
        )

    def process_element(
        self, handle: ElementHandle
    ) -> tuple[ElementModel, list[Resource], int]:
        """
        Build and store everything for one element (no commit).

        Flow links are reset from the records, and VSGs of the element that
        were not generated again are deleted.

        Returns
        -------
        tuple[ElementModel, list[Resource], int]
            The built model, the published resources and the number of
            stale VSGs deleted
        """
        levels = LevelRepository(self.session).by_number()
        model = build_element_model(handle, levels.keys())

        flow_repo = FlowRepository(self.session)
        stored_flows = {record.name: flow_repo.upsert(record) for record in model.flows()}

        vsg_repo = VirtualSignalGroupRepository(self.session)
        stored_vsgs = {
            record.name: vsg_repo.upsert(record, stored_flows, levels)
            for record in model.vsgs()
        }
        for record in model.flows():
            stored_flows[record.name].linked_signal_group = stored_vsgs.get(
                record.linked_signal_group
            )
        self.session.flush()
        stale_vsgs = vsg_repo.delete_stale(handle.dms_element_id, set(stored_vsgs))

        resources = self.publisher.publish(handle, model.paths, stored_vsgs)
        return model, resources, stale_vsgs

    def run(self, handles: Iterable[ElementHandle]) -> RunStats:
        """
        Process every element, then delete stale resources.

        Parameters
        ----------
        handles : Iterable[ElementHandle]
            Elements still present; resources of other elements are removed

        Returns
        -------
        RunStats
            Statistics for the run
        """
        stats = RunStats()
        present: set[str] = set()
        processed: set[str] = set()
        keep_names: set[str] = set()

        for handle in handles:
            present.add(handle.dms_element_id)
            logger.info(f"Processing element {handle.name} ({handle.dms_element_id})")
            try:
                model, resources, stale_vsgs = self.process_element(handle)
                self.session.commit()
            except Exception:
                self.session.rollback()
                if self.fail_fast:
                    raise
                stats.elements_failed += 1
                logger.exception(f"Failed to process element {handle.name}")
                continue

            processed.add(handle.dms_element_id)
            keep_names.update(r.name for r in resources)
            stats.elements_processed += 1
            stats.flows += len(model.flows())
            stats.vsgs += len(model.vsgs())
            stats.resources += len(resources)
            stats.stale_vsgs_deleted += stale_vsgs
            logger.info(
                f"{handle.name}: {len(model.flows())} flows, "
                f"{len(model.vsgs())} VSGs, {len(resources)} resources"
            )

        stats.stale_resources_deleted = self.publisher.delete_stale(
            keep_names,
            present,
            processed,
        )
        self.session.commit()
        logger.info(f"Run complete: {stats}")
        return stats

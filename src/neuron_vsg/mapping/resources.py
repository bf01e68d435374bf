"""Resource publisher: one schedulable resource per video path."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from loguru import logger

from neuron_vsg.constants import (
    CAPABILITY_PARAMETER_NAME,
    RESOURCE_MAX_CONCURRENCY,
    RESOURCE_POOL_NAME,
    ParameterType,
    ProfileParameterCategory,
    ResourceMode,
)
from neuron_vsg.db.repository import (
    ProfileParameterRepository,
    ResourcePoolRepository,
    ResourceRepository,
)
from neuron_vsg.models.metadata import ResourceProperty

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from neuron_vsg.element.handle import ElementHandle
    from neuron_vsg.models.orm import ProfileParameter, Resource, ResourcePool, VirtualSignalGroup
    from neuron_vsg.models.records import VideoPathData

__all__ = [
    "PATH_PROPERTY",
    "INPUT_VSGS_PROPERTY",
    "OUTPUT_VSGS_PROPERTY",
    "ResourcePublisher",
    "resource_mode",
    "resource_name",
    "resource_properties",
]

PATH_PROPERTY = "Path"
INPUT_VSGS_PROPERTY = "input VSGs"
OUTPUT_VSGS_PROPERTY = "output VSGs"


def resource_name(element_name: str, index: str) -> str:
    return f"{element_name} {index}"


def resource_mode(path: VideoPathData) -> ResourceMode:
    """Unavailable when the path has neither an input nor an output VSG."""
    if path.input_vsg is None and path.output_vsg is None:
        return ResourceMode.UNAVAILABLE
    return ResourceMode.AVAILABLE


def resource_properties(
    index: str,
    input_guids: Iterable[str],
    output_guids: Iterable[str],
) -> list[ResourceProperty]:
    """
    Build the properties of a video path resource.

    Examples
    --------
    >>> [p.name for p in resource_properties("A1", ["g1"], [])]
    ['Path', 'input VSGs', 'output VSGs']
    """
    return [
        ResourceProperty(name=PATH_PROPERTY, value=index),
        ResourceProperty(name=INPUT_VSGS_PROPERTY, value=";".join(input_guids)),
        ResourceProperty(name=OUTPUT_VSGS_PROPERTY, value=";".join(output_guids)),
    ]


class ResourcePublisher:
    """
    Publish video path resources into a resource pool.

    Parameters
    ----------
    session : Session
        Database session
    pool_name : str
        Resource pool the resources belong to
    capability_name : str
        Profile parameter of the time-dynamic capability
    max_concurrency : int
        Maximum concurrency of each resource
    """

    def __init__(
        self,
        session: Session,
        *,
        pool_name: str = RESOURCE_POOL_NAME,
        capability_name: str = CAPABILITY_PARAMETER_NAME,
        max_concurrency: int = RESOURCE_MAX_CONCURRENCY,
    ) -> None:
        self.session = session
        self.pool_name = pool_name
        self.capability_name = capability_name
        self.max_concurrency = max_concurrency
        self.resources = ResourceRepository(session)

    def ensure_pool(self) -> ResourcePool:
        return ResourcePoolRepository(self.session).ensure(self.pool_name)

    def ensure_capability(self) -> ProfileParameter:
        return ProfileParameterRepository(self.session).ensure(
            self.capability_name,
            category=ProfileParameterCategory.CAPABILITY,
            parameter_type=ParameterType.TEXT,
        )

    def publish(
        self,
        handle: ElementHandle,
        paths: list[VideoPathData],
        vsgs: dict[str, VirtualSignalGroup],
    ) -> list[Resource]:
        """
        Upsert one resource per video path of an element.

        Parameters
        ----------
        handle : ElementHandle
            Element the paths belong to
        paths : list[VideoPathData]
            Video paths joined to their generated VSGs
        vsgs : dict[str, VirtualSignalGroup]
            Persisted VSGs by name, source of the guids

        Returns
        -------
        list[Resource]
            Published resources, in path order
        """
        pool = self.ensure_pool()
        capability = self.ensure_capability()

        published = []
        for path in paths:
            input_guids = [vsgs[path.input_vsg.name].guid] if path.input_vsg else []
            output_guids = [vsgs[path.output_vsg.name].guid] if path.output_vsg else []
            resource = self.resources.upsert(
                resource_name(handle.name, path.index),
                element_id=handle.dms_element_id,
                pool=pool,
                mode=resource_mode(path).value,
                max_concurrency=self.max_concurrency,
                properties=resource_properties(path.index, input_guids, output_guids),
                capability=capability,
            )
            published.append(resource)
        logger.debug(f"{handle.name}: published {len(published)} resource(s)")
        return published

    def delete_stale(
        self,
        keep_names: set[str],
        present_element_ids: set[str],
        processed_element_ids: set[str] | None = None,
    ) -> int:
        """Delete the pool's resources with no remaining element or path."""
        pool = ResourcePoolRepository(self.session).get_by_name(self.pool_name)
        if pool is None:
            return 0
        return self.resources.delete_stale(
            pool,
            keep_names,
            present_element_ids,
            processed_element_ids,
        )

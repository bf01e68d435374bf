"""Repository pattern for data access layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from neuron_vsg.constants import Level as LevelNumber
from neuron_vsg.constants import ParameterType, ProfileParameterCategory
from neuron_vsg.exceptions import MissingTableRowError
from neuron_vsg.models.orm import (
    Flow,
    Level,
    ProfileParameter,
    Resource,
    ResourceCapability,
    ResourcePool,
    VirtualSignalGroup,
    VsgLinkedFlow,
)

if TYPE_CHECKING:
    from typing import Any, Iterable

    from sqlalchemy.orm import DeclarativeBase

    from neuron_vsg.models.metadata import ResourceProperties
    from neuron_vsg.models.records import FlowRecord, VirtualSignalGroupRecord

__all__ = [
    "BaseRepository",
    "FlowRepository",
    "LevelRepository",
    "NamedRepository",
    "ProfileParameterRepository",
    "ResourcePoolRepository",
    "ResourceRepository",
    "VirtualSignalGroupRepository",
]

T = TypeVar("T", bound="DeclarativeBase")


class BaseRepository(Generic[T]):
    """
    Base repository: listing, counting and creating rows of one model.

    Parameters
    ----------
    session : Session
        SQLAlchemy database session
    model_class : type[T]
        ORM model class

    Examples
    --------
    >>> repo = BaseRepository(session, Flow)
    >>> repo.count()
    """

    def __init__(self, session: Session, model_class: type[T]) -> None:
        """Initialize repository."""
        self.session = session
        self.model_class = model_class

    def list(self, **filters: Any) -> list[T]:
        """
        List entities with optional filters.

        Parameters
        ----------
        **filters : Any
            Field=value filters

        Returns
        -------
        list[T]
            List of matching entities

        Examples
        --------
        >>> flows = repo.list(element_id="346/12")
        """
        stmt = select(self.model_class)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model_class, key) == value)
        return list(self.session.execute(stmt).scalars().all())

    def count(self) -> int:
        """Return the number of rows."""
        stmt = select(func.count()).select_from(self.model_class)
        return self.session.execute(stmt).scalar_one()

    def create(self, obj: T) -> T:
        """Add a new row and load its generated columns (pk, guid, timestamps)."""
        self.session.add(obj)
        self.session.flush()
        self.session.refresh(obj)
        return obj


class NamedRepository(BaseRepository[T]):
    """Repository for models identified by a unique ``name``."""

    def get_by_name(self, name: str) -> T | None:
        """
        Get entity by its unique name.

        Returns
        -------
        T | None
            Entity instance or None
        """
        stmt = select(self.model_class).where(self.model_class.name == name)
        return self.session.execute(stmt).scalars().first()

    def list_by_element(self, element_id: str | None = None) -> list[T]:
        """List entities ordered by name, optionally for one element."""
        stmt = select(self.model_class).order_by(self.model_class.name)
        if element_id is not None:
            stmt = stmt.where(self.model_class.element_id == element_id)
        return list(self.session.execute(stmt).scalars().all())


class LevelRepository(BaseRepository[Level]):
    """
    Signal level registry.

    The builders only assign flows at levels present here.
    """

    def __init__(self, session: Session) -> None:
        super().__init__(session, Level)

    def get_by_number(self, number: int) -> Level | None:
        stmt = select(Level).where(Level.number == int(number))
        return self.session.execute(stmt).scalars().first()

    def known_numbers(self) -> set[int]:
        """Return the level numbers present in the registry."""
        return set(self.session.execute(select(Level.number)).scalars().all())

    def by_number(self) -> dict[int, Level]:
        return {level.number: level for level in self.list()}

    def ensure_defaults(self, levels: Iterable[LevelNumber] = tuple(LevelNumber)) -> int:
        """
        Create the missing signal levels.

        Returns
        -------
        int
            Number of levels created
        """
        existing = self.known_numbers()
        created = 0
        for level in levels:
            if int(level) in existing:
                continue
            self.session.add(Level(number=int(level), name=level.label))
            created += 1
        self.session.flush()
        if created:
            logger.info(f"Created {created} signal level(s)")
        return created


class FlowRepository(NamedRepository[Flow]):
    """Flows, upserted by name."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, Flow)

    def upsert(self, record: FlowRecord) -> Flow:
        """
        Create or update the flow named like the record.

        The guid of an existing flow is kept. The linked signal group is
        set separately, once the VSGs exist.
        """
        flow = self.get_by_name(record.name)
        if flow is None:
            flow = Flow(name=record.name)
            self.session.add(flow)
        flow.direction = record.direction.value
        flow.transport_type = record.transport_type.value
        flow.element_id = record.element_id
        flow.interface = record.interface
        flow.sub_interface = record.sub_interface
        flow.path_order = record.path_order
        flow.source_ip = record.source_ip
        flow.destination_ip = record.destination_ip
        flow.destination_port = record.destination_port
        flow.operational_state = record.operational_state.value
        flow.administrative_state = record.administrative_state.value
        self.session.flush()
        return flow


class VirtualSignalGroupRepository(NamedRepository[VirtualSignalGroup]):
    """Virtual signal groups, upserted by name."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, VirtualSignalGroup)

    def list_by_element(self, element_id: str | None = None) -> list[VirtualSignalGroup]:
        stmt = (
            select(VirtualSignalGroup)
            .options(selectinload(VirtualSignalGroup.linked_flows))
            .order_by(VirtualSignalGroup.name)
        )
        if element_id is not None:
            stmt = stmt.where(VirtualSignalGroup.element_id == element_id)
        return list(self.session.execute(stmt).scalars().all())

    def upsert(
        self,
        record: VirtualSignalGroupRecord,
        flows: dict[str, Flow],
        levels: dict[int, Level],
    ) -> VirtualSignalGroup:
        """
        Create or update a VSG and replace its level sections.

        Parameters
        ----------
        record : VirtualSignalGroupRecord
            VSG to store
        flows : dict[str, Flow]
            Persisted flows by name
        levels : dict[int, Level]
            Levels registry by number

        Raises
        ------
        MissingTableRowError
            If a section references a flow or level that is not persisted
        """
        vsg = self.get_by_name(record.name)
        if vsg is None:
            vsg = VirtualSignalGroup(name=record.name)
            self.session.add(vsg)
        vsg.role = record.role.value
        vsg.element_id = record.element_id
        vsg.button_label = record.button_label
        vsg.operational_state = record.operational_state.value
        vsg.administrative_state = record.administrative_state.value

        sections = {s.level.number: s for s in vsg.linked_flows}
        for number, level_flows in record.linked_flows.items():
            level = levels.get(int(number))
            if level is None:
                msg = f"Level {int(number)} is not in the levels registry"
                raise MissingTableRowError(msg)
            section = sections.pop(int(number), None)
            if section is None:
                section = VsgLinkedFlow(level=level)
                vsg.linked_flows.append(section)
            section.blue_flow = self._flow(flows, level_flows.blue)
            section.red_flow = self._flow(flows, level_flows.red)
        for stale in sections.values():
            vsg.linked_flows.remove(stale)

        self.session.flush()
        return vsg

    @staticmethod
    def _flow(flows: dict[str, Flow], record: FlowRecord | None) -> Flow | None:
        if record is None:
            return None
        try:
            return flows[record.name]
        except KeyError:
            msg = f"Flow {record.name!r} has not been stored"
            raise MissingTableRowError(msg) from None

    def delete_stale(self, element_id: str, keep_names: set[str]) -> int:
        """
        Delete the VSGs of an element that were not generated again.

        Flows still linked to a deleted VSG are unlinked, and its level
        sections are deleted with it.

        Returns
        -------
        int
            Number of deleted VSGs
        """
        deleted = 0
        for vsg in self.list_by_element(element_id):
            if vsg.name in keep_names:
                continue
            logger.info(f"Deleting stale VSG {vsg.name!r}")
            for flow in list(vsg.flows):
                flow.linked_signal_group = None
            self.session.delete(vsg)
            deleted += 1
        self.session.flush()
        return deleted


class ResourcePoolRepository(NamedRepository[ResourcePool]):
    """Resource pools."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, ResourcePool)

    def ensure(self, name: str) -> ResourcePool:
        """Return the named pool, creating it once."""
        pool = self.get_by_name(name)
        if pool is None:
            pool = self.create(ResourcePool(name=name))
            logger.info(f"Created resource pool {name!r}")
        return pool


class ProfileParameterRepository(NamedRepository[ProfileParameter]):
    """Profile parameters."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, ProfileParameter)

    def ensure(
        self,
        name: str,
        category: ProfileParameterCategory = ProfileParameterCategory.CAPABILITY,
        parameter_type: ParameterType = ParameterType.TEXT,
    ) -> ProfileParameter:
        """Return the named profile parameter, creating it once."""
        parameter = self.get_by_name(name)
        if parameter is None:
            parameter = self.create(
                ProfileParameter(
                    name=name,
                    category=category.value,
                    parameter_type=parameter_type.value,
                )
            )
            logger.info(f"Created profile parameter {name!r}")
        return parameter


class ResourceRepository(NamedRepository[Resource]):
    """Resources, upserted by name."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, Resource)

    def list_in_pool(self, pool: ResourcePool) -> list[Resource]:
        stmt = select(Resource).where(Resource.pool_fk == pool.pk).order_by(Resource.name)
        return list(self.session.execute(stmt).scalars().all())

    def upsert(
        self,
        name: str,
        *,
        element_id: str,
        pool: ResourcePool,
        mode: str,
        max_concurrency: int,
        properties: ResourceProperties,
        capability: ProfileParameter,
    ) -> Resource:
        """
        Create or update a resource and its time-dynamic capability.

        The guid of an existing resource is kept.
        """
        resource = self.get_by_name(name)
        if resource is None:
            resource = Resource(name=name)
            self.session.add(resource)
        resource.element_id = element_id
        resource.pool = pool
        resource.mode = mode
        resource.max_concurrency = max_concurrency
        resource.properties = list(properties)

        if not any(c.profile_parameter_fk == capability.pk for c in resource.capabilities):
            resource.capabilities.append(
                ResourceCapability(
                    profile_parameter=capability,
                    is_time_dynamic=True,
                    value=None,
                )
            )
        self.session.flush()
        return resource

    def delete_stale(
        self,
        pool: ResourcePool,
        keep_names: set[str],
        present_element_ids: set[str],
        processed_element_ids: set[str] | None = None,
    ) -> int:
        """
        Delete the pool's resources that no longer have a source.

        A resource is stale if its element is not present any more, or if its
        element was processed and did not publish it again.

        Parameters
        ----------
        pool : ResourcePool
            Pool to clean up
        keep_names : set[str]
            Names of the resources published in this run
        present_element_ids : set[str]
            Elements still present
        processed_element_ids : set[str] | None
            Elements processed successfully; defaults to ``present_element_ids``

        Returns
        -------
        int
            Number of deleted resources
        """
        if processed_element_ids is None:
            processed_element_ids = present_element_ids
        deleted = 0
        for resource in self.list_in_pool(pool):
            gone = resource.element_id not in present_element_ids
            outdated = (
                resource.element_id in processed_element_ids
                and resource.name not in keep_names
            )
            if gone or outdated:
                logger.info(f"Deleting stale resource {resource.name!r}")
                self.session.delete(resource)
                deleted += 1
        self.session.flush()
        return deleted

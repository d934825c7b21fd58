"""Ownable Registry - one Ownable per entity ID

The registry deploys Ownable entities under unique IDs and lets a host
look them up again. All entities share one event log; each event carries
the ID of the entity that emitted it, so history can still be rebuilt
per entity.

Usage:
    registry = OwnableRegistry()

    # Deploy (raises if the ID is taken)
    vault = registry.deploy("vault", alice)

    # Lookup
    registry.get("vault") is vault  # True
    registry.exists("treasury")  # False

    # Per-entity history from the shared log
    ownership_history(registry.event_log.events(), "vault")
"""

from __future__ import annotations

import logging

from .errors import EntityCollisionError
from .events import EventLog
from .identity import AddressLike
from .interfaces import InterfaceIdLike, InterfaceRegistry
from .ownable import Ownable

logger = logging.getLogger(__name__)


class OwnableRegistry:
    """Central registry of deployed Ownable entities.

    Thread-safety: This class is NOT thread-safe. Concurrent access should
    be synchronized externally by the host.
    """

    event_log: EventLog
    _entities: dict[str, Ownable]
    _extra_interfaces: tuple[InterfaceIdLike, ...]

    def __init__(
        self,
        event_log: EventLog | None = None,
        extra_interfaces: tuple[InterfaceIdLike, ...] = (),
    ) -> None:
        """
        Args:
            event_log: Shared log for all entities (a fresh one if not provided)
            extra_interfaces: Tags every deployed entity reports as supported
        """
        self.event_log = event_log if event_log is not None else EventLog()
        self._entities = {}
        self._extra_interfaces = tuple(extra_interfaces)

    def deploy(self, entity_id: str, initial_owner: AddressLike) -> Ownable:
        """Create and register a new Ownable.

        Raises:
            EntityCollisionError: If entity_id is already deployed
        """
        if entity_id in self._entities:
            raise EntityCollisionError(entity_id)
        entity = Ownable(
            initial_owner,
            entity_id=entity_id,
            event_log=self.event_log,
            interfaces=InterfaceRegistry.for_ownable(self._extra_interfaces),
        )
        self._entities[entity_id] = entity
        logger.debug("Deployed %s owned by %s", entity_id, entity.owner())
        return entity

    def get(self, entity_id: str) -> Ownable | None:
        return self._entities.get(entity_id)

    def exists(self, entity_id: str) -> bool:
        return entity_id in self._entities

    def get_all_ids(self) -> list[str]:
        """Get all deployed entity IDs, in deployment order."""
        return list(self._entities.keys())

    def count(self) -> int:
        return len(self._entities)

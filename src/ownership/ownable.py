"""Ownable - single-owner control of a contract-like entity

Each Ownable holds exactly one current owner. Only the current owner may
transfer control; transferring to the zero address renounces ownership
for good, since no caller can ever equal the zero address afterwards.

Every change is announced through an OwnershipTransferred event, including
the initial assignment at construction (previous owner = zero), so the
full history can be rebuilt from the event log alone.

Usage:
    vault = Ownable(alice)
    vault.owner()  # alice
    vault.transfer_ownership(alice, bob)
    vault.transfer_ownership(alice, carol)  # raises Unauthorized
    vault.renounce_ownership(bob)
    vault.renounced  # True

Thread-safety: NOT thread-safe. The host is expected to serialize
state-mutating calls against one entity.
"""

from __future__ import annotations

import logging

from .errors import Unauthorized
from .events import EventLog, OwnershipTransferred
from .identity import ZERO_ADDRESS, Address, AddressLike, to_address
from .interfaces import OWNABLE_INTERFACE_ID, InterfaceIdLike, InterfaceRegistry

logger = logging.getLogger(__name__)


class Ownable:
    """A contract-like entity with a single transferable owner.

    Self-transfer (new owner == current owner) is a genuine re-assignment:
    it succeeds and emits OwnershipTransferred(owner, owner).
    """

    entity_id: str | None
    event_log: EventLog
    interfaces: InterfaceRegistry
    _owner: Address

    def __init__(
        self,
        initial_owner: AddressLike,
        *,
        entity_id: str | None = None,
        event_log: EventLog | None = None,
        interfaces: InterfaceRegistry | None = None,
    ) -> None:
        """
        Args:
            initial_owner: First owner, commonly the deploying identity
            entity_id: Optional name stamped on emitted events
            event_log: Log to emit into (a fresh one if not provided)
            interfaces: Capability table to compose with (ownable defaults
                if not provided; the ownership tag is always registered)
        """
        owner = to_address(initial_owner)
        self.entity_id = entity_id
        self.event_log = event_log if event_log is not None else EventLog()
        if interfaces is None:
            interfaces = InterfaceRegistry.for_ownable()
        else:
            interfaces.register_interface(OWNABLE_INTERFACE_ID)
        self.interfaces = interfaces

        self._owner = ZERO_ADDRESS
        self._set_owner(owner)

    def owner(self) -> Address:
        """Return the current owner (the zero address once renounced)."""
        return self._owner

    @property
    def renounced(self) -> bool:
        return self._owner.is_zero

    def is_owner(self, identity: AddressLike) -> bool:
        """True if identity is the current owner. Never true once renounced."""
        return not self._owner.is_zero and to_address(identity) == self._owner

    def require_owner(self, caller: AddressLike) -> None:
        """Raise Unauthorized unless caller is the current owner."""
        if not self.is_owner(caller):
            raise Unauthorized(to_address(caller), self._owner)

    def transfer_ownership(
        self, caller: AddressLike, new_owner: AddressLike
    ) -> OwnershipTransferred:
        """Hand control to new_owner. Only the current owner may call this.

        Passing the zero address renounces ownership permanently.

        Returns:
            The emitted OwnershipTransferred event.

        Raises:
            InvalidAddressError: If caller or new_owner is malformed.
            Unauthorized: If caller is not the current owner. State and the
                event log are left unchanged.
        """
        caller_addr = to_address(caller)
        new_addr = to_address(new_owner)
        try:
            self.require_owner(caller_addr)
        except Unauthorized:
            logger.warning(
                "Rejected transfer of %s by %s (owner is %s)",
                self._label(), caller_addr, self._owner,
            )
            raise

        event = self._set_owner(new_addr)
        if new_addr.is_zero:
            logger.info("Ownership of %s renounced by %s", self._label(), caller_addr)
        else:
            logger.info(
                "Ownership of %s transferred from %s to %s",
                self._label(), caller_addr, new_addr,
            )
        return event

    def renounce_ownership(self, caller: AddressLike) -> OwnershipTransferred:
        """Leave the entity without an owner. Irreversible."""
        return self.transfer_ownership(caller, ZERO_ADDRESS)

    def supports_interface(self, interface_id: InterfaceIdLike) -> bool:
        """Capability discovery, answered by the composed interface table."""
        return self.interfaces.supports_interface(interface_id)

    def _set_owner(self, new_owner: Address) -> OwnershipTransferred:
        previous = self._owner
        self._owner = new_owner
        try:
            return self.event_log.emit(previous, new_owner, entity_id=self.entity_id)
        except Exception:
            # No event recorded, so the change must not stick either.
            self._owner = previous
            raise

    def _label(self) -> str:
        return self.entity_id or f"ownable@{id(self):x}"

    def __repr__(self) -> str:
        return f"Ownable(entity_id={self.entity_id!r}, owner={self._owner})"

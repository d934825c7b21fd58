"""Unit tests for Ownable entities.

Covers the ownership contract end to end:
- construction emits OwnershipTransferred(zero, initial owner)
- only the owner can transfer; rejected calls change nothing
- renouncing is terminal
- capability discovery is independent of ownership state
- self-transfer is a real re-assignment that still emits an event
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from src.ownership.errors import InvalidAddressError, Unauthorized
from src.ownership.events import EventLog, reconstruct_owner
from src.ownership.identity import ZERO_ADDRESS, Address
from src.ownership.interfaces import (
    ERC165_INTERFACE_ID,
    INVALID_INTERFACE_ID,
    OWNABLE_INTERFACE_ID,
    InterfaceRegistry,
)
from src.ownership.ownable import Ownable


class TestConstruction:
    """Initial owner and the construction notification."""

    def test_initial_notification(self, alice: Address) -> None:
        log = EventLog()
        entity = Ownable(alice, event_log=log)

        assert entity.owner() == alice
        events = log.events()
        assert len(events) == 1
        assert events[0].previous_owner == ZERO_ADDRESS
        assert events[0].new_owner == alice

    def test_accepts_hex_initial_owner(self, alice: Address) -> None:
        assert Ownable(alice.to_hex()).owner() == alice

    def test_default_event_log(self, alice: Address) -> None:
        entity = Ownable(alice)
        assert len(entity.event_log) == 1

    def test_invalid_initial_owner(self) -> None:
        with pytest.raises(InvalidAddressError):
            Ownable("0xnot-an-address")

    def test_constructed_unowned(self) -> None:
        """Deploying with the zero address yields an entity nobody controls."""
        entity = Ownable(ZERO_ADDRESS)
        assert entity.renounced
        with pytest.raises(Unauthorized):
            entity.transfer_ownership(ZERO_ADDRESS, Address.from_int(1))

    def test_entity_id_stamped_on_events(self, ownable: Ownable, event_log: EventLog) -> None:
        assert event_log.events()[0].entity_id == "vault"

    def test_owner_is_per_instance(self, alice: Address, bob: Address) -> None:
        """Two entities never share owner state."""
        first = Ownable(alice)
        second = Ownable(alice)
        first.transfer_ownership(alice, bob)
        assert second.owner() == alice


class TestTransferOwnership:
    """Authorized and unauthorized transfers."""

    def test_authorized_transfer(
        self, ownable: Ownable, event_log: EventLog, alice: Address, bob: Address
    ) -> None:
        event = ownable.transfer_ownership(alice, bob)

        assert ownable.owner() == bob
        assert len(event_log) == 2
        assert event is event_log.events()[-1]
        assert (event.previous_owner, event.new_owner) == (alice, bob)

    def test_new_owner_can_transfer_again(
        self, ownable: Ownable, alice: Address, bob: Address, carol: Address
    ) -> None:
        ownable.transfer_ownership(alice, bob)
        ownable.transfer_ownership(bob, carol)
        assert ownable.owner() == carol

    def test_previous_owner_loses_control(
        self, ownable: Ownable, alice: Address, bob: Address, carol: Address
    ) -> None:
        ownable.transfer_ownership(alice, bob)
        with pytest.raises(Unauthorized):
            ownable.transfer_ownership(alice, carol)

    @pytest.mark.parametrize("target", ["bob", "carol", "zero"])
    def test_unauthorized_transfer_rejected(
        self,
        ownable: Ownable,
        event_log: EventLog,
        alice: Address,
        bob: Address,
        carol: Address,
        target: str,
    ) -> None:
        """A non-owner caller fails, state and log are untouched."""
        new_owner = {"bob": bob, "carol": carol, "zero": ZERO_ADDRESS}[target]

        with pytest.raises(Unauthorized) as exc_info:
            ownable.transfer_ownership(carol, new_owner)

        assert exc_info.value.caller == carol
        assert exc_info.value.owner == alice
        assert ownable.owner() == alice
        assert len(event_log) == 1

    def test_failed_persist_leaves_state(
        self, tmp_path: Path, alice: Address, bob: Address
    ) -> None:
        """A transfer whose event cannot be written changes neither owner nor log."""
        path = tmp_path / "events.jsonl"
        log = EventLog(path)
        entity = Ownable(alice, entity_id="vault", event_log=log)

        path.unlink()
        path.mkdir()
        with pytest.raises(OSError):
            entity.transfer_ownership(alice, bob)

        assert entity.owner() == alice
        assert len(log) == 1

        # Once storage is back, the owner can still transfer.
        path.rmdir()
        entity.transfer_ownership(alice, bob)
        assert entity.owner() == bob
        assert len(log) == 2

    def test_invalid_new_owner_leaves_state(
        self, ownable: Ownable, event_log: EventLog, alice: Address
    ) -> None:
        with pytest.raises(InvalidAddressError):
            ownable.transfer_ownership(alice, "0x1234")
        assert ownable.owner() == alice
        assert len(event_log) == 1

    def test_accepts_hex_arguments(self, ownable: Ownable, alice: Address, bob: Address) -> None:
        ownable.transfer_ownership(alice.to_hex(), bob.to_hex())
        assert ownable.owner() == bob

    def test_rejection_is_logged(
        self, ownable: Ownable, carol: Address, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="src.ownership.ownable"):
            with pytest.raises(Unauthorized):
                ownable.transfer_ownership(carol, carol)
        assert "Rejected transfer of vault" in caplog.text


@pytest.mark.feature("renunciation")
class TestRenunciation:
    """Transferring to zero removes ownership for good."""

    def test_renounce_via_transfer_to_zero(
        self, ownable: Ownable, event_log: EventLog, alice: Address
    ) -> None:
        ownable.transfer_ownership(alice, ZERO_ADDRESS)

        assert ownable.owner() == ZERO_ADDRESS
        assert ownable.renounced
        last = event_log.events()[-1]
        assert (last.previous_owner, last.new_owner) == (alice, ZERO_ADDRESS)

    def test_renounce_ownership_helper(self, ownable: Ownable, alice: Address) -> None:
        event = ownable.renounce_ownership(alice)
        assert event.new_owner == ZERO_ADDRESS
        assert ownable.renounced

    def test_renounce_requires_owner(self, ownable: Ownable, bob: Address, alice: Address) -> None:
        with pytest.raises(Unauthorized):
            ownable.renounce_ownership(bob)
        assert ownable.owner() == alice

    def test_renunciation_is_terminal(
        self,
        ownable: Ownable,
        event_log: EventLog,
        alice: Address,
        bob: Address,
    ) -> None:
        """After renouncing nobody, not even zero or the old owner, can transfer."""
        ownable.renounce_ownership(alice)

        for caller in (alice, bob, ZERO_ADDRESS):
            for target in (alice, bob, ZERO_ADDRESS):
                with pytest.raises(Unauthorized):
                    ownable.transfer_ownership(caller, target)

        assert ownable.owner() == ZERO_ADDRESS
        assert len(event_log) == 2

    def test_is_owner_false_for_everyone(self, ownable: Ownable, alice: Address) -> None:
        ownable.renounce_ownership(alice)
        assert not ownable.is_owner(alice)
        assert not ownable.is_owner(ZERO_ADDRESS)


class TestSupportsInterface:
    """Capability discovery through the composed tag table."""

    def test_supported_in_every_state(self, ownable: Ownable, alice: Address, bob: Address) -> None:
        assert ownable.supports_interface(OWNABLE_INTERFACE_ID)
        ownable.transfer_ownership(alice, bob)
        assert ownable.supports_interface(OWNABLE_INTERFACE_ID)
        ownable.renounce_ownership(bob)
        assert ownable.supports_interface(OWNABLE_INTERFACE_ID)
        assert ownable.supports_interface(ERC165_INTERFACE_ID)
        assert not ownable.supports_interface(INVALID_INTERFACE_ID)

    def test_custom_registry_gets_ownable_tag(self, alice: Address) -> None:
        """A supplied table is extended with the ownership tag."""
        registry = InterfaceRegistry()
        registry.register_interface(0x80AC58CD)
        entity = Ownable(alice, interfaces=registry)

        assert entity.supports_interface(0x80AC58CD)
        assert entity.supports_interface(OWNABLE_INTERFACE_ID)
        assert not entity.supports_interface("0xffffffff")


class TestSelfTransfer:
    """Transferring to the current owner is a re-assignment, not a no-op."""

    def test_self_transfer_emits(self, ownable: Ownable, event_log: EventLog, alice: Address) -> None:
        event = ownable.transfer_ownership(alice, alice)

        assert ownable.owner() == alice
        assert (event.previous_owner, event.new_owner) == (alice, alice)
        assert len(event_log) == 2

    def test_history_reconstructs_state(
        self, ownable: Ownable, event_log: EventLog, alice: Address, bob: Address
    ) -> None:
        """Notifications alone are enough to recover the current owner."""
        ownable.transfer_ownership(alice, alice)
        ownable.transfer_ownership(alice, bob)
        assert reconstruct_owner(event_log.events(), "vault") == ownable.owner() == bob

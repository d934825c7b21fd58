"""Unit tests for OwnableRegistry."""

import pytest

from src.ownership.errors import EntityCollisionError
from src.ownership.events import EventLog, ownership_history
from src.ownership.identity import ZERO_ADDRESS, Address
from src.ownership.interfaces import OWNABLE_INTERFACE_ID
from src.ownership.registry import OwnableRegistry


class TestOwnableRegistry:
    """Deploying and looking up entities."""

    def test_deploy_and_get(self, alice: Address) -> None:
        registry = OwnableRegistry()
        vault = registry.deploy("vault", alice)

        assert registry.get("vault") is vault
        assert registry.exists("vault")
        assert not registry.exists("treasury")
        assert registry.get("treasury") is None
        assert vault.owner() == alice
        assert vault.entity_id == "vault"

    def test_duplicate_id_rejected(self, alice: Address, bob: Address) -> None:
        registry = OwnableRegistry()
        registry.deploy("vault", alice)

        with pytest.raises(EntityCollisionError) as exc_info:
            registry.deploy("vault", bob)
        assert exc_info.value.entity_id == "vault"
        assert registry.get("vault").owner() == alice  # type: ignore[union-attr]
        assert registry.count() == 1

    def test_ids_in_deploy_order(self, alice: Address) -> None:
        registry = OwnableRegistry()
        for name in ("c", "a", "b"):
            registry.deploy(name, alice)
        assert registry.get_all_ids() == ["c", "a", "b"]

    def test_shared_log_separate_state(self, alice: Address, bob: Address, carol: Address) -> None:
        """Entities share a log but never owner state."""
        log = EventLog()
        registry = OwnableRegistry(event_log=log)
        vault = registry.deploy("vault", alice)
        treasury = registry.deploy("treasury", alice)

        vault.transfer_ownership(alice, bob)
        treasury.renounce_ownership(alice)

        assert vault.owner() == bob
        assert treasury.owner() == ZERO_ADDRESS
        assert len(log) == 4
        assert ownership_history(log.events(), "vault") == [alice, bob]
        assert ownership_history(log.events(), "treasury") == [alice, ZERO_ADDRESS]

    def test_extra_interfaces(self, alice: Address) -> None:
        registry = OwnableRegistry(extra_interfaces=("0x80ac58cd",))
        entity = registry.deploy("nft", alice)
        assert entity.supports_interface(0x80AC58CD)
        assert entity.supports_interface(OWNABLE_INTERFACE_ID)

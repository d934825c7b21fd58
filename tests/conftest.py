"""Pytest fixtures for ownable tests.

Common fixtures for exercising Ownable entities and their event logs.
"""

from __future__ import annotations

# Load environment variables from .env before any tests run
from dotenv import load_dotenv

load_dotenv()

from typing import Iterator

import pytest

from src.config import reset_config
from src.ownership.events import EventLog
from src.ownership.identity import Address
from src.ownership.ownable import Ownable


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "feature(name): mark test as belonging to a feature. "
        "Usage: @pytest.mark.feature('renunciation')"
    )


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Each test starts from the default config file."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def alice() -> Address:
    return Address.from_int(0xA11CE)


@pytest.fixture
def bob() -> Address:
    return Address.from_int(0xB0B)


@pytest.fixture
def carol() -> Address:
    return Address.from_int(0xCA201)


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture
def ownable(alice: Address, event_log: EventLog) -> Ownable:
    """An entity deployed by alice, sharing the event_log fixture."""
    return Ownable(alice, entity_id="vault", event_log=event_log)

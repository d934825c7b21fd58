"""OwnershipTransferred notifications - append-only log of ownership changes

Every successful transfer (and every construction) appends exactly one
event. Observers can subscribe for live delivery, filter on the indexed
owner fields, or replay the log to rebuild ownership history from
notifications alone.

When an output file is configured, each event is also appended as one
JSON line:
    {"timestamp": ..., "sequence": 3, "event_type": "OwnershipTransferred",
     "previous_owner": "0x...", "new_owner": "0x...", "entity_id": "vault"}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable

from ..config import get
from .identity import ZERO_ADDRESS, Address, AddressLike, to_address

logger = logging.getLogger(__name__)

EVENT_TYPE: str = "OwnershipTransferred"


@dataclass(frozen=True)
class OwnershipTransferred:
    """A single ownership change notification."""

    previous_owner: Address
    new_owner: Address
    sequence: int
    entity_id: str | None = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "sequence": self.sequence,
            "event_type": EVENT_TYPE,
            "previous_owner": self.previous_owner.to_hex(),
            "new_owner": self.new_owner.to_hex(),
            "entity_id": self.entity_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OwnershipTransferred:
        return cls(
            previous_owner=to_address(data["previous_owner"]),
            new_owner=to_address(data["new_owner"]),
            sequence=int(data["sequence"]),
            entity_id=data.get("entity_id"),
            timestamp=data.get("timestamp", ""),
        )


Listener = Callable[[OwnershipTransferred], None]


class EventLog:
    """Ordered, append-only record of OwnershipTransferred events.

    Supports two modes:
    1. In-memory (default): events are only kept in the process
    2. Persisted (output_file): each event is also appended to a JSONL file

    Thread-safety: NOT thread-safe. Emission is expected to happen inside
    the host's serialized execution of a transfer.
    """

    output_path: Path | None
    _events: list[OwnershipTransferred]
    _listeners: list[Listener]

    def __init__(self, output_file: str | Path | None = None) -> None:
        """
        Args:
            output_file: Optional JSONL path. The file is truncated on init.
        """
        self._events = []
        self._listeners = []
        self.output_path = Path(output_file) if output_file else None
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text("")

    def emit(
        self,
        previous_owner: Address,
        new_owner: Address,
        entity_id: str | None = None,
    ) -> OwnershipTransferred:
        """Persist one event, append it, then deliver it to subscribers.

        Raises:
            OSError: If the event cannot be written. Nothing is appended.
        """
        event = OwnershipTransferred(
            previous_owner=previous_owner,
            new_owner=new_owner,
            sequence=len(self._events) + 1,
            entity_id=entity_id,
        )
        if self.output_path is not None:
            with open(self.output_path, "a") as f:
                f.write(json.dumps(event.to_dict()) + "\n")
        self._events.append(event)

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # Event stays logged; remaining listeners still run.
                logger.exception(
                    "OwnershipTransferred listener %r failed on event #%d",
                    listener, event.sequence,
                )
        return event

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for future events.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def events(self) -> list[OwnershipTransferred]:
        return list(self._events)

    def filter(
        self,
        previous_owner: AddressLike | None = None,
        new_owner: AddressLike | None = None,
        entity_id: str | None = None,
    ) -> list[OwnershipTransferred]:
        """Select events by their indexed fields. None matches anything."""
        prev = to_address(previous_owner) if previous_owner is not None else None
        new = to_address(new_owner) if new_owner is not None else None
        return [
            e for e in self._events
            if (prev is None or e.previous_owner == prev)
            and (new is None or e.new_owner == new)
            and (entity_id is None or e.entity_id == entity_id)
        ]

    def replay(self, listener: Listener, entity_id: str | None = None) -> int:
        """Deliver past events to a listener in order.

        Returns:
            Number of events delivered.
        """
        delivered = 0
        for event in self._events:
            if entity_id is not None and event.entity_id != entity_id:
                continue
            listener(event)
            delivered += 1
        return delivered

    def read_recent(self, n: int | None = None) -> list[dict[str, Any]]:
        """Read the last N persisted events from the JSONL file.

        N defaults to events.default_recent from config.
        """
        if n is None:
            default_recent = get("events.default_recent")
            n = default_recent if isinstance(default_recent, int) else 50
        if n <= 0:
            return []
        if self.output_path is None or not self.output_path.exists():
            return []
        lines = [line for line in self.output_path.read_text().split("\n") if line]
        recent = lines[-n:] if len(lines) > n else lines
        return [json.loads(line) for line in recent]

    def __len__(self) -> int:
        return len(self._events)


def ownership_history(
    events: Iterable[OwnershipTransferred],
    entity_id: str | None = None,
) -> list[Address]:
    """Rebuild the sequence of owners an entity has had, oldest first.

    The construction event contributes the initial owner; each later
    event contributes its new owner.
    """
    history: list[Address] = []
    for event in sorted(events, key=lambda e: e.sequence):
        if entity_id is not None and event.entity_id != entity_id:
            continue
        history.append(event.new_owner)
    return history


def reconstruct_owner(
    events: Iterable[OwnershipTransferred],
    entity_id: str | None = None,
) -> Address:
    """Current owner according to the notifications (zero if none)."""
    history = ownership_history(events, entity_id)
    return history[-1] if history else ZERO_ADDRESS

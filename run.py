#!/usr/bin/env python3
"""
Ownable - scenario runner

Deploys one Ownable entity and replays a YAML list of calls against it,
printing each result and the resulting OwnershipTransferred history.

Usage:
    python run.py config/scenarios/handover.yaml
    python run.py scenario.yaml --events-file logs/events.jsonl
    python run.py scenario.yaml --strict     # exit 1 if any call failed
    python run.py scenario.yaml --quiet      # JSON summary only

Scenario format:
    entity_id: vault
    initial_owner: "0x...a11ce"
    calls:
      - {caller: "0x...a11ce", method: transferOwnership, args: ["0x...b0b"]}
      - {caller: "0x...c4401", method: owner}
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, TypedDict

import yaml
from dotenv import load_dotenv

from src.config import (
    DEFAULT_CONFIG_PATH,
    configure_logging,
    get_validated_config,
    load_config,
)
from src.ownership import EventLog, OwnableArtifact, OwnableRegistry, ZERO_ADDRESS
from src.ownership.events import reconstruct_owner

# Load environment variables
load_dotenv()


class ScenarioCall(TypedDict, total=False):
    """One call in a scenario file."""

    caller: str
    method: str
    args: list[Any]


class Scenario(TypedDict, total=False):
    """Structure of a scenario file."""

    entity_id: str
    initial_owner: str
    calls: list[ScenarioCall]


class ScenarioResult(TypedDict):
    """Outcome of replaying a scenario."""

    entity_id: str
    results: list[dict[str, Any]]
    events: list[dict[str, Any]]
    final_owner: str
    failures: int


def load_scenario(path: str | Path) -> Scenario:
    """Load a scenario from YAML.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If required keys are missing.
    """
    with open(path) as f:
        loaded: Any = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Scenario {path} must be a mapping")
    if "initial_owner" not in loaded:
        raise ValueError(f"Scenario {path} is missing 'initial_owner'")
    calls = loaded.get("calls") or []
    for i, call in enumerate(calls):
        if not isinstance(call, dict) or "caller" not in call or "method" not in call:
            raise ValueError(f"Scenario {path}: call #{i + 1} needs 'caller' and 'method'")
    loaded["calls"] = calls
    result: Scenario = loaded
    return result


def run_scenario(
    scenario: Scenario,
    event_log: EventLog | None = None,
    verbose: bool = True,
) -> ScenarioResult:
    """Deploy the scenario's entity and replay its calls in order."""
    entity_id = str(scenario.get("entity_id", "ownable"))
    extra = tuple(get_validated_config().interfaces.extra)
    registry = OwnableRegistry(event_log=event_log, extra_interfaces=extra)
    entity = registry.deploy(entity_id, str(scenario["initial_owner"]))
    artifact = OwnableArtifact(entity)

    if verbose:
        print(f"=== Deployed {entity_id} owned by {entity.owner()} ===")

    results: list[dict[str, Any]] = []
    failures = 0
    for call in scenario.get("calls", []):
        method = str(call["method"])
        caller = call["caller"]
        outcome = artifact.invoke(method, call.get("args"), invoker_id=caller)
        if not outcome.get("success"):
            failures += 1
        results.append({"caller": caller, "method": method, **outcome})
        if verbose:
            status = "ok" if outcome.get("success") else f"FAILED ({outcome.get('code')})"
            print(f"{caller} -> {method}: {status}")

    events = registry.event_log.filter(entity_id=entity_id)
    final_owner = reconstruct_owner(events, entity_id)

    if verbose:
        print("=== OwnershipTransferred history ===")
        for event in events:
            print(f"#{event.sequence}: {event.previous_owner} -> {event.new_owner}")
        suffix = " (renounced)" if final_owner == ZERO_ADDRESS else ""
        print(f"Final owner: {final_owner}{suffix}")

    return {
        "entity_id": entity_id,
        "results": results,
        "events": [e.to_dict() for e in events],
        "final_owner": final_owner.to_hex(),
        "failures": failures,
    }


def main(argv: list[str] | None = None) -> int:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Replay an ownership scenario against an Ownable entity"
    )
    parser.add_argument("scenario", help="Path to scenario YAML file")
    parser.add_argument(
        "--config",
        default=os.environ.get("OWNABLE_CONFIG", str(DEFAULT_CONFIG_PATH)),
        help="Path to config file",
    )
    parser.add_argument(
        "--events-file",
        default=None,
        help="JSONL file for OwnershipTransferred events (overrides config)",
    )
    parser.add_argument("--quiet", action="store_true", help="Print only the JSON summary")
    parser.add_argument(
        "--strict", action="store_true", help="Exit with status 1 if any call failed"
    )
    args: argparse.Namespace = parser.parse_args(argv)

    load_config(args.config)
    configure_logging()

    events_file = args.events_file or get_validated_config().events.output_file
    event_log = EventLog(events_file) if events_file else EventLog()

    scenario = load_scenario(args.scenario)
    result = run_scenario(scenario, event_log=event_log, verbose=not args.quiet)

    if args.quiet:
        print(json.dumps(result, indent=2))

    if args.strict and result["failures"]:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

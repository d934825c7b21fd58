"""Invocation surface for Ownable entities.

Hosts dispatch calls to an entity by method name or by 4-byte selector.
Arguments arrive either as a positional list or a dict, are mapped onto
the method's input schema, and validated with JSON Schema before the
handler runs. Handlers never raise to the host: every outcome is a dict
with a "success" flag, and failures use the standard error response
format from errors.py.

Usage:
    artifact = OwnableArtifact(Ownable(alice))
    artifact.invoke("transferOwnership", [bob_hex], invoker_id=alice_hex)
    # {"success": True, "previous_owner": "0x...", "new_owner": "0x...", ...}

    artifact.invoke_selector(0x8DA5CB5B, [], invoker_id=carol_hex)
    # {"success": True, "owner": "0x..."}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import jsonschema

from .errors import (
    ErrorCode,
    OwnershipError,
    resource_error,
    validation_error,
)
from .events import OwnershipTransferred
from .identity import AddressLike
from .interfaces import (
    OWNER_SELECTOR,
    RENOUNCE_OWNERSHIP_SELECTOR,
    SUPPORTS_INTERFACE_SELECTOR,
    TRANSFER_OWNERSHIP_SELECTOR,
    format_interface_id,
    normalize_interface_id,
)
from .ownable import Ownable

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any], AddressLike], dict[str, Any]]

_ADDRESS_SCHEMA: dict[str, Any] = {
    "type": ["string", "integer"],
    "description": "20-byte address as 0x-prefixed hex or integer",
}


@dataclass
class OwnableMethod:
    """A method exposed by an ownable artifact"""
    name: str
    handler: Handler
    selector: int
    description: str
    input_schema: dict[str, Any]


def _object_schema(properties: dict[str, Any] | None = None) -> dict[str, Any]:
    properties = properties or {}
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


def convert_positional_to_named_args(
    schema: dict[str, Any], args: list[Any]
) -> dict[str, Any]:
    """Map positional args onto the schema's properties, in declaration order.

    Raises:
        ValueError: If more args are given than the schema declares.
    """
    names = list(schema.get("properties", {}))
    if len(args) > len(names):
        raise ValueError(f"expected at most {len(names)} argument(s), got {len(args)}")
    return dict(zip(names, args))


class OwnableArtifact:
    """Method-dispatch wrapper around one Ownable entity."""

    ownable: Ownable
    description: str
    methods: dict[str, OwnableMethod]

    def __init__(self, ownable: Ownable, description: str = "") -> None:
        self.ownable = ownable
        self.description = description or "Single-owner entity with transferable ownership"
        self.methods = {}

        self.register_method(
            name="owner",
            handler=self._owner,
            selector=OWNER_SELECTOR,
            description="Return the current owner (zero address if renounced)",
            input_schema=_object_schema(),
        )
        self.register_method(
            name="transferOwnership",
            handler=self._transfer_ownership,
            selector=TRANSFER_OWNERSHIP_SELECTOR,
            description="Transfer ownership to new_owner. Owner only; zero address renounces.",
            input_schema=_object_schema({"new_owner": _ADDRESS_SCHEMA}),
        )
        self.register_method(
            name="renounceOwnership",
            handler=self._renounce_ownership,
            selector=RENOUNCE_OWNERSHIP_SELECTOR,
            description="Leave the entity without an owner. Owner only; irreversible.",
            input_schema=_object_schema(),
        )
        self.register_method(
            name="supportsInterface",
            handler=self._supports_interface,
            selector=SUPPORTS_INTERFACE_SELECTOR,
            description="Whether the entity implements the given 4-byte interface id",
            input_schema=_object_schema({
                "interface_id": {
                    "type": ["string", "integer"],
                    "description": "4-byte interface id as 0x-prefixed hex or integer",
                },
            }),
        )

    def register_method(
        self,
        name: str,
        handler: Handler,
        selector: int,
        description: str,
        input_schema: dict[str, Any],
    ) -> None:
        """Register a callable method on this artifact"""
        self.methods[name] = OwnableMethod(
            name=name,
            handler=handler,
            selector=selector,
            description=description,
            input_schema=input_schema,
        )

    def get_method(self, method_name: str) -> OwnableMethod | None:
        return self.methods.get(method_name)

    def method_for_selector(self, selector: int) -> OwnableMethod | None:
        for method in self.methods.values():
            if method.selector == selector:
                return method
        return None

    def invoke(
        self,
        method_name: str,
        args: list[Any] | dict[str, Any] | None,
        invoker_id: AddressLike,
    ) -> dict[str, Any]:
        """Invoke a method by name on behalf of invoker_id.

        Returns:
            {"success": True, ...} on success, or an error response dict.
        """
        method = self.get_method(method_name)
        if method is None:
            return resource_error(
                f"Unknown method '{method_name}'",
                code=ErrorCode.NOT_FOUND,
                available=sorted(self.methods),
            )

        if args is None:
            named: dict[str, Any] = {}
        elif isinstance(args, dict):
            named = dict(args)
        elif isinstance(args, (list, tuple)):
            try:
                named = convert_positional_to_named_args(method.input_schema, list(args))
            except ValueError as e:
                return validation_error(
                    f"{method_name}: {e}", code=ErrorCode.INVALID_ARGUMENT
                )
        else:
            return validation_error(
                f"{method_name}: args must be a list or an object, got {type(args).__name__}",
                code=ErrorCode.INVALID_ARGUMENT,
            )

        try:
            jsonschema.validate(instance=named, schema=method.input_schema)
        except jsonschema.ValidationError as e:
            code = ErrorCode.MISSING_ARGUMENT if e.validator == "required" else ErrorCode.INVALID_ARGUMENT
            return validation_error(f"{method_name}: {e.message}", code=code)

        try:
            return method.handler(named, invoker_id)
        except OwnershipError as e:
            logger.debug("%s failed for %s: %s", method_name, invoker_id, e)
            return e.to_response()

    def invoke_selector(
        self,
        selector: int | bytes | str,
        args: list[Any] | dict[str, Any] | None,
        invoker_id: AddressLike,
    ) -> dict[str, Any]:
        """Invoke a method by its 4-byte function selector."""
        try:
            value = normalize_interface_id(selector)
        except OwnershipError as e:
            return e.to_response()
        method = self.method_for_selector(value)
        if method is None:
            return resource_error(
                f"Unknown selector {format_interface_id(value)}",
                code=ErrorCode.NOT_FOUND,
            )
        return self.invoke(method.name, args, invoker_id)

    def get_interface(self) -> dict[str, Any]:
        """Describe the artifact's tools in an MCP-compatible format."""
        return {
            "description": self.description,
            "dataType": "service",
            "interfaceIds": [
                format_interface_id(i) for i in self.ownable.interfaces.supported_ids()
            ],
            "tools": [
                {
                    "name": m.name,
                    "description": m.description,
                    "selector": format_interface_id(m.selector),
                    "inputSchema": m.input_schema,
                }
                for m in self.methods.values()
            ],
        }

    # Handlers

    def _owner(self, args: dict[str, Any], invoker_id: AddressLike) -> dict[str, Any]:
        return {"success": True, "owner": self.ownable.owner().to_hex()}

    def _transfer_ownership(
        self, args: dict[str, Any], invoker_id: AddressLike
    ) -> dict[str, Any]:
        event = self.ownable.transfer_ownership(invoker_id, args["new_owner"])
        return _transfer_result(event)

    def _renounce_ownership(
        self, args: dict[str, Any], invoker_id: AddressLike
    ) -> dict[str, Any]:
        event = self.ownable.renounce_ownership(invoker_id)
        return _transfer_result(event)

    def _supports_interface(
        self, args: dict[str, Any], invoker_id: AddressLike
    ) -> dict[str, Any]:
        value = normalize_interface_id(args["interface_id"])
        return {
            "success": True,
            "interface_id": format_interface_id(value),
            "supported": self.ownable.supports_interface(value),
        }


def _transfer_result(event: OwnershipTransferred) -> dict[str, Any]:
    return {
        "success": True,
        "previous_owner": event.previous_owner.to_hex(),
        "new_owner": event.new_owner.to_hex(),
        "sequence": event.sequence,
    }

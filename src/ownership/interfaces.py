"""Capability discovery via 4-byte interface identifiers.

An interface identifier is the XOR of the 4-byte selectors of the
functions that make up the interface. The selectors are fixed constants
(keccak-256 prefixes of the canonical signatures), so no hashing happens
at runtime.

Usage:
    registry = InterfaceRegistry.for_ownable()
    registry.supports_interface(OWNABLE_INTERFACE_ID)  # True
    registry.supports_interface("0xffffffff")  # False
"""

from __future__ import annotations

from functools import reduce
from typing import Iterable, Union

from .errors import InvalidInterfaceIdError


# Function selectors
OWNER_SELECTOR: int = 0x8DA5CB5B  # owner()
TRANSFER_OWNERSHIP_SELECTOR: int = 0xF2FDE38B  # transferOwnership(address)
SUPPORTS_INTERFACE_SELECTOR: int = 0x01FFC9A7  # supportsInterface(bytes4)
# renounceOwnership(); a convenience, not part of the ownership interface id
RENOUNCE_OWNERSHIP_SELECTOR: int = 0x715018A6

INVALID_INTERFACE_ID: int = 0xFFFFFFFF

InterfaceIdLike = Union[int, bytes, str]


def normalize_interface_id(value: InterfaceIdLike) -> int:
    """Coerce an interface id given as int, 4 bytes, or hex string to int.

    Raises:
        InvalidInterfaceIdError: If the value is not a 4-byte identifier.
    """
    if isinstance(value, bool):
        raise InvalidInterfaceIdError(value, "booleans are not interface ids")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise InvalidInterfaceIdError(value, "out of 4-byte range")
        return value
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 4:
            raise InvalidInterfaceIdError(value, "must be exactly 4 bytes")
        return int.from_bytes(value, "big")
    if isinstance(value, str):
        text = value.strip()
        digits = text[2:] if text[:2].lower() == "0x" else text
        if len(digits) != 8:
            raise InvalidInterfaceIdError(value, "expected 8 hex digits")
        try:
            return int(digits, 16)
        except ValueError:
            raise InvalidInterfaceIdError(value, "not a hex string") from None
    raise InvalidInterfaceIdError(value, f"unsupported type {type(value).__name__}")


def interface_id(*selectors: int) -> int:
    """Compute an interface identifier as the XOR of its function selectors."""
    return reduce(lambda acc, sel: acc ^ sel, selectors, 0)


def format_interface_id(value: int) -> str:
    return f"0x{value:08x}"


ERC165_INTERFACE_ID: int = interface_id(SUPPORTS_INTERFACE_SELECTOR)
OWNABLE_INTERFACE_ID: int = interface_id(OWNER_SELECTOR, TRANSFER_OWNERSHIP_SELECTOR)


class InterfaceRegistry:
    """Table of capability tags an entity answers true for.

    The discovery interface itself is always registered. The reserved
    all-ones identifier can never be registered, so lookups for it are
    always false.
    """

    _supported: dict[int, bool]

    def __init__(self) -> None:
        self._supported = {}
        self.register_interface(ERC165_INTERFACE_ID)

    @classmethod
    def for_ownable(cls, extra: Iterable[InterfaceIdLike] = ()) -> InterfaceRegistry:
        """Build a table for an ownable entity, plus any extra tags."""
        registry = cls()
        registry.register_interface(OWNABLE_INTERFACE_ID)
        for tag in extra:
            registry.register_interface(tag)
        return registry

    def register_interface(self, tag: InterfaceIdLike) -> None:
        """Mark a capability tag as supported.

        Raises:
            InvalidInterfaceIdError: If the tag is malformed or 0xffffffff.
        """
        value = normalize_interface_id(tag)
        if value == INVALID_INTERFACE_ID:
            raise InvalidInterfaceIdError(tag, "0xffffffff is reserved")
        self._supported[value] = True

    def supports_interface(self, tag: InterfaceIdLike) -> bool:
        return self._supported.get(normalize_interface_id(tag), False)

    def supported_ids(self) -> list[int]:
        return sorted(self._supported)

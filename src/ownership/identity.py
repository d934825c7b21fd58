"""Address identities for owners and callers.

An identity is an opaque 20-byte value compared by equality. The all-zero
address is the distinguished "no one" value used to signal renunciation.

Usage:
    from src.ownership.identity import Address, ZERO_ADDRESS, to_address

    alice = to_address("0x00000000000000000000000000000000000a11ce")
    alice == Address.from_int(0xa11ce)  # True
    ZERO_ADDRESS.is_zero  # True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import InvalidAddressError


ADDRESS_LENGTH: int = 20
_MAX_ADDRESS_INT: int = 2 ** (ADDRESS_LENGTH * 8)


@dataclass(frozen=True)
class Address:
    """A fixed-width account identity."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytes) or len(self.value) != ADDRESS_LENGTH:
            raise InvalidAddressError(
                self.value, f"address must be exactly {ADDRESS_LENGTH} bytes"
            )

    @classmethod
    def from_hex(cls, text: str) -> Address:
        """Parse a hex address, with or without the 0x prefix, in any case."""
        digits = text[2:] if text[:2].lower() == "0x" else text
        if len(digits) != ADDRESS_LENGTH * 2:
            raise InvalidAddressError(
                text, f"expected {ADDRESS_LENGTH * 2} hex digits, got {len(digits)}"
            )
        try:
            return cls(bytes.fromhex(digits))
        except ValueError:
            raise InvalidAddressError(text, "not a hex string") from None

    @classmethod
    def from_int(cls, number: int) -> Address:
        """Build an address from its big-endian integer value."""
        if number < 0 or number >= _MAX_ADDRESS_INT:
            raise InvalidAddressError(number, "integer out of address range")
        return cls(number.to_bytes(ADDRESS_LENGTH, "big"))

    @property
    def is_zero(self) -> bool:
        return self.value == bytes(ADDRESS_LENGTH)

    def to_hex(self) -> str:
        return "0x" + self.value.hex()

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"Address({self.to_hex()})"


AddressLike = Union[Address, str, bytes, int]

ZERO_ADDRESS: Address = Address(bytes(ADDRESS_LENGTH))


def to_address(value: AddressLike) -> Address:
    """Coerce any accepted identity representation to an Address.

    Accepts an Address, a hex string, 20 raw bytes, or a non-negative int.

    Raises:
        InvalidAddressError: If the value cannot denote an address.
    """
    if isinstance(value, Address):
        return value
    # bool is an int subclass; True is not an account.
    if isinstance(value, bool):
        raise InvalidAddressError(value, "booleans are not addresses")
    if isinstance(value, int):
        return Address.from_int(value)
    if isinstance(value, str):
        return Address.from_hex(value.strip())
    if isinstance(value, (bytes, bytearray)):
        return Address(bytes(value))
    raise InvalidAddressError(value, f"unsupported type {type(value).__name__}")

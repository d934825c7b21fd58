# Ownership package
from .identity import Address, ZERO_ADDRESS, ADDRESS_LENGTH, to_address
from .errors import (
    ErrorCategory, ErrorCode, ErrorResponse,
    OwnershipError, Unauthorized, InvalidAddressError, InvalidInterfaceIdError,
    EntityCollisionError,
)
from .interfaces import (
    InterfaceRegistry, interface_id,
    OWNER_SELECTOR, TRANSFER_OWNERSHIP_SELECTOR, SUPPORTS_INTERFACE_SELECTOR,
    RENOUNCE_OWNERSHIP_SELECTOR,
    ERC165_INTERFACE_ID, OWNABLE_INTERFACE_ID, INVALID_INTERFACE_ID,
)
from .events import EventLog, OwnershipTransferred, ownership_history, reconstruct_owner
from .ownable import Ownable
from .registry import OwnableRegistry
from .service import OwnableArtifact

__all__ = [
    "Address", "ZERO_ADDRESS", "ADDRESS_LENGTH", "to_address",
    "ErrorCategory", "ErrorCode", "ErrorResponse",
    "OwnershipError", "Unauthorized", "InvalidAddressError", "InvalidInterfaceIdError",
    "EntityCollisionError",
    "InterfaceRegistry", "interface_id",
    "OWNER_SELECTOR", "TRANSFER_OWNERSHIP_SELECTOR", "SUPPORTS_INTERFACE_SELECTOR",
    "RENOUNCE_OWNERSHIP_SELECTOR",
    "ERC165_INTERFACE_ID", "OWNABLE_INTERFACE_ID", "INVALID_INTERFACE_ID",
    "EventLog", "OwnershipTransferred", "ownership_history", "reconstruct_owner",
    "Ownable",
    "OwnableRegistry",
    "OwnableArtifact",
]

"""Errors and standardized error responses for ownership operations.

The core raises exceptions derived from OwnershipError. The invocation
surface converts them into structured response dicts so that callers can
switch on error codes and categories instead of parsing messages.

Usage:
    from src.ownership.errors import Unauthorized, permission_error, ErrorCode

    # In core code:
    raise Unauthorized(caller, owner)

    # In invocation handlers:
    return permission_error(
        "caller is not the owner",
        code=ErrorCode.NOT_OWNER,
        caller=str(caller),
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error classification.

    - VALIDATION: Caller provided bad input
    - PERMISSION: Caller not authorized
    - RESOURCE: Unknown method or entity, duplicate entity
    - SYSTEM: Internal error
    """

    VALIDATION = "validation"
    PERMISSION = "permission"
    RESOURCE = "resource"
    SYSTEM = "system"


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    # Validation errors
    MISSING_ARGUMENT = "missing_argument"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_ADDRESS = "invalid_address"
    INVALID_INTERFACE_ID = "invalid_interface_id"

    # Permission errors
    NOT_OWNER = "not_owner"

    # Resource errors
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"

    # System errors
    INTERNAL_ERROR = "internal_error"


@dataclass
class ErrorResponse:
    """Standardized error response.

    All error responses include:
    - success: Always False
    - error: Human-readable message
    - code: Machine-readable error code
    - category: Error category (validation, permission, etc.)
    - retriable: Whether the operation should be retried
    - details: Optional additional context
    """

    success: bool = False
    error: str = ""
    code: str = ""
    category: str = ""
    retriable: bool = False
    details: dict[str, object] | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        result: dict[str, object] = {
            "success": self.success,
            "error": self.error,
            "code": self.code,
            "category": self.category,
            "retriable": self.retriable,
        }
        if self.details:
            result["details"] = self.details
        return result


def validation_error(
    message: str,
    code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
    **details: object,
) -> dict[str, object]:
    """Create a validation error response.

    Use when the caller provided invalid input.
    """
    return ErrorResponse(
        error=message,
        code=code.value,
        category=ErrorCategory.VALIDATION.value,
        retriable=False,
        details=dict(details) if details else None,
    ).to_dict()


def permission_error(
    message: str,
    code: ErrorCode = ErrorCode.NOT_OWNER,
    **details: object,
) -> dict[str, object]:
    """Create a permission error response.

    Use when the caller is not authorized for the operation. Permission
    errors are never retriable: the caller must re-invoke with the
    correct identity or abandon the action.
    """
    return ErrorResponse(
        error=message,
        code=code.value,
        category=ErrorCategory.PERMISSION.value,
        retriable=False,
        details=dict(details) if details else None,
    ).to_dict()


def resource_error(
    message: str,
    code: ErrorCode = ErrorCode.NOT_FOUND,
    **details: object,
) -> dict[str, object]:
    """Create a resource error response (unknown method, duplicate entity)."""
    return ErrorResponse(
        error=message,
        code=code.value,
        category=ErrorCategory.RESOURCE.value,
        retriable=False,
        details=dict(details) if details else None,
    ).to_dict()


# Exceptions raised by the core


class OwnershipError(Exception):
    """Base class for all ownership errors."""

    def to_response(self) -> dict[str, object]:
        return ErrorResponse(
            error=str(self),
            code=ErrorCode.INTERNAL_ERROR.value,
            category=ErrorCategory.SYSTEM.value,
        ).to_dict()


class Unauthorized(OwnershipError):
    """Raised when the caller of a restricted operation is not the owner."""

    def __init__(self, caller: object, owner: object) -> None:
        self.caller = caller
        self.owner = owner
        super().__init__(f"caller {caller} is not the owner")

    def to_response(self) -> dict[str, object]:
        return permission_error(
            str(self),
            code=ErrorCode.NOT_OWNER,
            caller=str(self.caller),
            owner=str(self.owner),
        )


class InvalidAddressError(OwnershipError, ValueError):
    """Raised when a value cannot be interpreted as an address."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"invalid address {value!r}: {reason}")

    def to_response(self) -> dict[str, object]:
        return validation_error(
            str(self), code=ErrorCode.INVALID_ADDRESS, value=repr(self.value)
        )


class InvalidInterfaceIdError(OwnershipError, ValueError):
    """Raised when a value is not a usable 4-byte interface identifier."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"invalid interface id {value!r}: {reason}")

    def to_response(self) -> dict[str, object]:
        return validation_error(
            str(self), code=ErrorCode.INVALID_INTERFACE_ID, value=repr(self.value)
        )


class EntityCollisionError(OwnershipError):
    """Raised when deploying an entity under an ID that is already taken."""

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"entity '{entity_id}' is already deployed")

    def to_response(self) -> dict[str, object]:
        return resource_error(
            str(self), code=ErrorCode.ALREADY_EXISTS, entity_id=self.entity_id
        )

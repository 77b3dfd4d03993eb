"""Errors raised by the project registry."""

from enum import Enum


class RegistryErrorCode(str, Enum):
    """Reason a registry operation was rejected."""

    NOT_FOUND = "NOT_FOUND"
    NAME_CONFLICT = "NAME_CONFLICT"
    DUPLICATE_ID = "DUPLICATE_ID"
    SECURED_ENTITY = "SECURED_ENTITY"


class RegistryError(Exception):
    """A registry rule was violated.

    Raised before the aggregate is touched, so the registry is unchanged and the
    caller may retry with corrected input.

    Attributes:
        code: Reason code
        message: Human-readable explanation
    """

    def __init__(self, code: RegistryErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class StorageCorruptionError(Exception):
    """The persisted registry document exists but cannot be used.

    Fatal: propagates to whoever initializes the registry.
    """

"""Domain-level error types for storage and adapter mapping.

Shared errors that must cross layer boundaries without leaking
transport-specific exception details live here.
"""

from __future__ import annotations

from enum import Enum


class StorageError(RuntimeError):
    """Configuration or local data failure raised by storage adapters."""


class RemoteErrorKind(str, Enum):
    """Closed set of remote failure classes the storage adapter reacts to."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    OTHER = "other"

    @classmethod
    def from_status(cls, status: int | None) -> "RemoteErrorKind":
        if status == 404:
            return cls.NOT_FOUND
        if status == 409:
            return cls.CONFLICT
        return cls.OTHER


__all__ = ["RemoteErrorKind", "StorageError"]

"""Structured exceptions used across the client sync layer."""

from __future__ import annotations

from typing import Any


class ViewSyncError(Exception):
    """Base class for client-side sync exceptions."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"type": self.__class__.__name__, "message": str(self)}


class MalformedSnapshotError(ViewSyncError):
    """Raised when an inbound snapshot violates the wire contract."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed snapshot field {field!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["field"] = self.field
        return payload


class CommandRejectedError(ViewSyncError):
    """Raised (or recorded) when the authority answers `success: false`."""

    def __init__(self, event: str, message: str):
        self.event = event
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["event"] = self.event
        return payload


class InvalidCommandError(ViewSyncError, ValueError):
    """Raised when an outbound command payload cannot be built."""


class TransportError(ViewSyncError):
    """Raised when the message channel cannot be used."""

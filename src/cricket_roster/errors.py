"""Typed failures raised by the roster core and translated by the HTTP layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from cricket_roster.models import Player


class RosterError(Exception):
    """Base class for every failure the API reports to callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"message": self.message}


class StoreLoadError(RosterError):
    """Raised when the backing player file cannot be loaded at startup."""


class ValidationError(RosterError):
    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        missing_fields: Sequence[str] = (),
        invalid_fields: Sequence[str] = (),
    ):
        super().__init__(message)
        self.missing_fields = list(missing_fields)
        self.invalid_fields = list(invalid_fields)

    @classmethod
    def missing(cls, fields: Sequence[str]) -> "ValidationError":
        return cls(f"Missing required fields: {', '.join(fields)}", missing_fields=fields)

    @classmethod
    def invalid(cls, fields: Sequence[str]) -> "ValidationError":
        return cls(f"Invalid values for fields: {', '.join(fields)}", invalid_fields=fields)

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.missing_fields:
            payload["missingFields"] = self.missing_fields
        if self.invalid_fields:
            payload["invalidFields"] = self.invalid_fields
        return payload


class NotFoundError(RosterError):
    status_code = 404


class ConflictError(RosterError):
    """Raised when a submission reuses an existing player id or name."""

    status_code = 400


class ImageError(RosterError):
    """Raised when a player image cannot be decoded or written."""

    def to_payload(self) -> dict:
        cause = self.__cause__
        return {
            "message": "Failed to add player",
            "error": str(cause) if cause is not None else self.message,
        }


class DecodeError(ImageError):
    """Raised when an image payload is not valid base64."""


class PersistenceError(RosterError):
    """Raised when the player collection cannot be written back to disk.

    The in-memory collection already holds ``player`` when this is raised.
    """

    def __init__(self, message: str, player: "Player | None" = None):
        super().__init__(message)
        self.player = player

    def to_payload(self) -> dict:
        return {"message": "Failed to add player", "error": self.message}


class PayloadTooLargeError(RosterError):
    status_code = 413

"""Write path for new player submissions."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError as ModelValidationError

from cricket_roster.errors import ConflictError, ImageError, PersistenceError, ValidationError
from cricket_roster.media import ImagePersister
from cricket_roster.models import LEGACY_FIELD_ALIASES, REQUIRED_FIELDS, Player
from cricket_roster.persistence import PlayerStore

_LEGACY_TO_FIELD = {
    alias: name for name, aliases in LEGACY_FIELD_ALIASES.items() for alias in aliases
}


def _collect_fields(payload: Mapping[str, Any]) -> tuple[dict[str, Any], list[str]]:
    fields: dict[str, Any] = {}
    missing: list[str] = []
    for name in REQUIRED_FIELDS:
        for key in (name, *LEGACY_FIELD_ALIASES.get(name, ())):
            if key in payload:
                fields[name] = payload[key]
                break
        else:
            missing.append(name)
    return fields, missing


def _invalid_fields(exc: ModelValidationError) -> list[str]:
    names: list[str] = []
    for error in exc.errors():
        loc = error.get("loc")
        if not loc:
            continue
        name = _LEGACY_TO_FIELD.get(str(loc[0]), str(loc[0]))
        if name not in names:
            names.append(name)
    return names


class PlayerCreationService:
    """Validates a submission, stores its image and appends the player.

    A failed persist leaves the new player in memory; the raised
    :class:`~cricket_roster.errors.PersistenceError` carries it.
    """

    def __init__(self, store: PlayerStore, images: ImagePersister):
        self._store = store
        self._images = images

    def validate(self, payload: Any) -> dict[str, Any]:
        """Return the required fields of ``payload`` keyed by their JSON names.

        Every missing field is reported at once; a null value counts as present
        but then fails type validation.
        Values are validated strictly, without coercion.
        """

        if not isinstance(payload, Mapping):
            raise ValidationError.missing(REQUIRED_FIELDS)
        fields, missing = _collect_fields(payload)
        if missing:
            raise ValidationError.missing(missing)
        if not isinstance(fields["image"], str):
            raise ValidationError.invalid(["image"])
        try:
            # The stored image path is only known after the payload is written.
            Player.model_validate({**fields, "image": ""}, strict=True)
        except ModelValidationError as exc:
            raise ValidationError.invalid(_invalid_fields(exc)) from exc
        return fields

    def create(self, payload: Any) -> Player:
        fields = self.validate(payload)
        with self._store.lock:
            if self._store.exists_conflicting(fields["uniquePlayerId"], fields["playerName"]):
                raise ConflictError("Player already exists")
            try:
                image_path = self._images.save(fields["playerName"], fields["image"])
            except ImageError as exc:
                raise ImageError("Failed to store player image") from exc
            player = Player.model_validate({**fields, "image": image_path}, strict=True)
            self._store.append(player)
            try:
                self._store.persist()
            except PersistenceError as exc:
                exc.player = player
                raise
        return player

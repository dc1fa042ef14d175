"""Domain models for the roster service."""

from .player import LEGACY_FIELD_ALIASES, REQUIRED_FIELDS, Player

__all__ = ["LEGACY_FIELD_ALIASES", "REQUIRED_FIELDS", "Player"]

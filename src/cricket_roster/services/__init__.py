"""Query and creation services over the player store."""

from .creation import PlayerCreationService
from .queries import PlayerQueryService, PlayerSummary, TeamGroup, TeamRoster

__all__ = [
    "PlayerCreationService",
    "PlayerQueryService",
    "PlayerSummary",
    "TeamGroup",
    "TeamRoster",
]

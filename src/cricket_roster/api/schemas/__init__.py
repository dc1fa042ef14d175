"""Pydantic models for API I/O."""

from .player import (
    ErrorResponse,
    HealthResponse,
    PlayerSummaryResponse,
    PlayersResponse,
    TeamGroupResponse,
    TeamRosterResponse,
    TeamsResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "PlayerSummaryResponse",
    "PlayersResponse",
    "TeamGroupResponse",
    "TeamRosterResponse",
    "TeamsResponse",
]

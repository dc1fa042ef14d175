from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from cricket_roster.models import Player

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    info: str
    datetime: str


class TeamsResponse(BaseModel):
    teams: list[Any]


class PlayersResponse(BaseModel):
    players: list[Player]


class TeamGroupResponse(BaseModel):
    team_name: str
    members: list[Player]

    model_config = _CAMEL


class PlayerSummaryResponse(BaseModel):
    player_name: str
    image: str
    role: str
    unique_player_id: str

    model_config = _CAMEL


class TeamRosterResponse(BaseModel):
    team_name: str
    players: list[PlayerSummaryResponse]

    model_config = _CAMEL


class ErrorResponse(BaseModel):
    message: str
    missing_fields: list[str] = Field(default_factory=list)
    invalid_fields: list[str] = Field(default_factory=list)
    error: str | None = None

    model_config = _CAMEL

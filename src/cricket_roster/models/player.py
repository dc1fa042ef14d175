"""Canonical player model shared by the store, services and API layers."""

from __future__ import annotations

from typing import Union

from pydantic import AliasChoices, BaseModel, Field, FiniteFloat
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

Number = Union[int, FiniteFloat]

REQUIRED_FIELDS: tuple[str, ...] = (
    "playerName",
    "role",
    "teamName",
    "countryName",
    "age",
    "battingStyle",
    "uniquePlayerId",
    "runsScored",
    "centuriesScored",
    "wicketsTaken",
    "image",
)

# Older backing files spell the batting style key without the "t".
LEGACY_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "battingStyle": ("battingSyle",),
}


class Player(BaseModel):
    """A player record as stored in the backing file and returned by the API.

    Attributes are snake_case; the JSON representation is camelCase. Unknown
    keys read from the backing file are kept so a rewrite never drops data.
    """

    player_name: str = Field(..., min_length=1)
    role: str
    team_name: str
    country_name: str
    age: Number
    batting_style: str = Field(
        validation_alias=AliasChoices("battingStyle", "batting_style", "battingSyle"),
        serialization_alias="battingStyle",
    )
    unique_player_id: str = Field(..., min_length=1)
    runs_scored: Number
    centuries_scored: Number
    wickets_taken: Number
    image: str

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def matches_id(self, player_id: str) -> bool:
        return self.unique_player_id.lower() == player_id.lower()

    def matches_name(self, player_name: str) -> bool:
        return self.player_name.lower() == player_name.lower()

    def matches_team(self, team_name: str) -> bool:
        return self.team_name.lower() == team_name.lower()

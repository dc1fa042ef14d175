"""Read-only views over the player collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from cricket_roster.errors import NotFoundError, ValidationError
from cricket_roster.models import Player
from cricket_roster.persistence import PlayerStore


@dataclass(frozen=True)
class TeamGroup:
    team_name: str
    members: List[Player] = field(default_factory=list)


@dataclass(frozen=True)
class PlayerSummary:
    player_name: str
    image: str
    role: str
    unique_player_id: str

    @classmethod
    def from_player(cls, player: Player) -> "PlayerSummary":
        return cls(
            player_name=player.player_name,
            image=player.image,
            role=player.role,
            unique_player_id=player.unique_player_id,
        )


@dataclass(frozen=True)
class TeamRoster:
    team_name: str
    players: List[PlayerSummary]


class PlayerQueryService:
    def __init__(self, store: PlayerStore):
        self._store = store

    def all(self) -> List[Player]:
        return list(self._store.all())

    def grouped(self) -> List[TeamGroup]:
        """Group players by the exact stored team name, in first-seen order.

        Unlike :meth:`by_team` the key is case-sensitive, so "RCB" and "rcb"
        form separate groups.
        """

        groups: dict[str, List[Player]] = {}
        for player in self._store.all():
            groups.setdefault(player.team_name, []).append(player)
        return [TeamGroup(team_name=name, members=members) for name, members in groups.items()]

    def by_team(self, team_name: str | None) -> TeamRoster:
        if not isinstance(team_name, str) or not team_name.strip():
            raise ValidationError("teamName query parameter is required", missing_fields=["teamName"])
        roster = self._store.find_by_team(team_name.strip())
        if not roster:
            raise NotFoundError(f"No players found for team {team_name}")
        return TeamRoster(
            team_name=roster[0].team_name,
            players=[PlayerSummary.from_player(player) for player in roster],
        )

    def by_id(self, player_id: str) -> Player:
        player = self._store.find_by_id(player_id)
        if player is None:
            raise NotFoundError(f"Player with id {player_id} not found")
        return player

import pytest

from cricket_roster.errors import NotFoundError, ValidationError
from cricket_roster.models import Player
from cricket_roster.persistence import PlayerStore
from cricket_roster.services import PlayerQueryService, PlayerSummary


def _player(player_id: str, name: str, team: str, role: str = "Batsman") -> Player:
    return Player.model_validate(
        {
            "playerName": name,
            "image": f"/players/{player_id.lower()}.png",
            "role": role,
            "teamName": team,
            "countryName": "India",
            "age": 30,
            "battingStyle": "Right-handed",
            "uniquePlayerId": player_id,
            "runsScored": 1000,
            "centuriesScored": 1,
            "wicketsTaken": 2,
        }
    )


@pytest.fixture
def queries(tmp_path) -> PlayerQueryService:
    store = PlayerStore(
        tmp_path / "players.json",
        [
            _player("MI-001", "Rohit Sharma", "Mumbai Indians"),
            _player("CSK-001", "MS Dhoni", "Chennai Super Kings", role="Wicketkeeper"),
            _player("MI-002", "Jasprit Bumrah", "Mumbai Indians", role="Bowler"),
            _player("MI-003", "Tilak Varma", "mumbai indians"),
        ],
    )
    return PlayerQueryService(store)


def test_all_returns_every_player(queries: PlayerQueryService):
    assert [p.unique_player_id for p in queries.all()] == ["MI-001", "CSK-001", "MI-002", "MI-003"]


def test_grouped_uses_exact_team_names_in_first_seen_order(queries: PlayerQueryService):
    groups = queries.grouped()

    assert [group.team_name for group in groups] == ["Mumbai Indians", "Chennai Super Kings", "mumbai indians"]
    assert [p.player_name for p in groups[0].members] == ["Rohit Sharma", "Jasprit Bumrah"]
    assert queries.grouped() == groups


def test_by_team_matches_case_insensitively_and_projects_summaries(queries: PlayerQueryService):
    roster = queries.by_team("  MUMBAI INDIANS ")

    assert roster.team_name == "Mumbai Indians"
    assert roster.players == [
        PlayerSummary("Rohit Sharma", "/players/mi-001.png", "Batsman", "MI-001"),
        PlayerSummary("Jasprit Bumrah", "/players/mi-002.png", "Bowler", "MI-002"),
        PlayerSummary("Tilak Varma", "/players/mi-003.png", "Batsman", "MI-003"),
    ]


@pytest.mark.parametrize("team_name", [None, "", "   "])
def test_by_team_requires_a_name(queries: PlayerQueryService, team_name):
    with pytest.raises(ValidationError):
        queries.by_team(team_name)


def test_by_team_not_found_names_the_team(queries: PlayerQueryService):
    with pytest.raises(NotFoundError, match="mumbai-indians"):
        queries.by_team("mumbai-indians")


def test_by_id(queries: PlayerQueryService):
    assert queries.by_id("csk-001").player_name == "MS Dhoni"
    with pytest.raises(NotFoundError, match="Player with id XYZ not found"):
        queries.by_id("XYZ")

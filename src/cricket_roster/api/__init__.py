"""REST API for the cricket roster service."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Query, Request
from fastapi.responses import FileResponse, JSONResponse

from cricket_roster.api.schemas import (
    ErrorResponse,
    HealthResponse,
    PlayerSummaryResponse,
    PlayersResponse,
    TeamGroupResponse,
    TeamRosterResponse,
    TeamsResponse,
)
from cricket_roster.config import Settings, load_settings
from cricket_roster.errors import PayloadTooLargeError, RosterError, ValidationError
from cricket_roster.media import ImagePersister
from cricket_roster.models import Player
from cricket_roster.persistence import PlayerStore, TeamCatalog, loads_finite
from cricket_roster.services import PlayerCreationService, PlayerQueryService, TeamRoster

logger = logging.getLogger("uvicorn.error")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _resolve_public_file(root: Path, url_path: str) -> Path | None:
    try:
        candidate = (root / url_path.lstrip("/")).resolve()
        if not candidate.is_relative_to(root):
            return None
        if candidate.is_dir():
            candidate = candidate / "index.html"
        return candidate if candidate.is_file() else None
    except (OSError, ValueError):
        return None


def _declared_length_exceeds(declared: str | None, limit: int) -> bool:
    return declared is not None and declared.isdigit() and int(declared) > limit


def _roster_to_response(roster: TeamRoster) -> TeamRosterResponse:
    return TeamRosterResponse(
        team_name=roster.team_name,
        players=[
            PlayerSummaryResponse(
                player_name=summary.player_name,
                image=summary.image,
                role=summary.role,
                unique_player_id=summary.unique_player_id,
            )
            for summary in roster.players
        ],
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application, loading the team and player datasets once.

    A missing or malformed dataset raises
    :class:`~cricket_roster.errors.StoreLoadError` so the service never starts
    with an empty roster.
    """

    settings = settings or load_settings()
    store = PlayerStore.load(settings.players_path)
    catalog = TeamCatalog.load(settings.teams_path)
    public_root = settings.public_dir.resolve()

    queries = PlayerQueryService(store)
    creation = PlayerCreationService(store, ImagePersister(settings.public_dir))

    app = FastAPI(title="Cricket roster API")
    app.state.settings = settings
    app.state.player_store = store
    app.state.team_catalog = catalog

    @app.exception_handler(RosterError)
    async def roster_error(request: Request, exc: RosterError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Failed to handle %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.middleware("http")
    async def serve_public_files(request: Request, call_next):
        # Files under the public directory win over API routes.
        if request.method in {"GET", "HEAD"}:
            asset = _resolve_public_file(public_root, request.url.path)
            if asset is not None:
                return FileResponse(asset)
        return await call_next(request)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(
            info="Cricket Roster Application",
            datetime=datetime.now(timezone.utc).isoformat(),
        )

    @app.get("/teams", response_model=TeamsResponse)
    async def list_teams() -> TeamsResponse:
        return TeamsResponse(teams=catalog.to_list())

    @app.get("/players/all", response_model=PlayersResponse)
    async def list_players() -> PlayersResponse:
        return PlayersResponse(players=queries.all())

    @app.get("/players/grouped", response_model=list[TeamGroupResponse])
    async def grouped_players() -> list[TeamGroupResponse]:
        return [
            TeamGroupResponse(team_name=group.team_name, members=group.members)
            for group in queries.grouped()
        ]

    @app.get("/players", response_model=TeamRosterResponse, responses=_ERROR_RESPONSES)
    async def team_roster(team_name: str | None = Query(None, alias="teamName")) -> TeamRosterResponse:
        return _roster_to_response(queries.by_team(team_name))

    @app.get("/players/{player_id}", response_model=Player, responses=_ERROR_RESPONSES)
    async def get_player(player_id: str) -> Player:
        return queries.by_id(player_id)

    @app.post("/players", status_code=201, response_model=Player, responses=_ERROR_RESPONSES)
    async def create_player(request: Request) -> Player:
        limit = settings.max_body_bytes
        if _declared_length_exceeds(request.headers.get("content-length"), limit):
            raise PayloadTooLargeError(f"Request body exceeds {limit} bytes")
        chunks: list[bytes] = []
        size = 0
        async for chunk in request.stream():
            size += len(chunk)
            if size > limit:
                raise PayloadTooLargeError(f"Request body exceeds {limit} bytes")
            chunks.append(chunk)
        body = b"".join(chunks)
        try:
            payload = loads_finite(body) if body else None
        except ValueError as exc:
            raise ValidationError(f"Invalid JSON body: {exc}") from exc
        player = creation.create(payload)
        logger.info("Added player %s (%s) to %s", player.player_name, player.unique_player_id, player.team_name)
        return player

    return app

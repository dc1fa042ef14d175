"""Command-line entrypoint that serves the roster API with uvicorn."""

from __future__ import annotations

import argparse
import logging
import logging.config
import sys
from pathlib import Path

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from cricket_roster.api import create_app
from cricket_roster.config import Settings, load_settings, pick_port
from cricket_roster.errors import StoreLoadError

logger = logging.getLogger("uvicorn.error")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the cricket roster API")
    parser.add_argument("port", nargs="?", default=None, help="Port to listen on (falls back to $PORT, then 9000)")
    parser.add_argument("--host", default=None, help="Bind address (default: $ROSTER_HOST or 0.0.0.0)")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding players.json and teams.json")
    parser.add_argument("--public-dir", type=Path, default=None, help="Directory served as static assets")
    parser.add_argument("--log-level", default="info", help="uvicorn log level")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings()
    changes: dict = {"port": pick_port([args.port] if args.port else [])}
    if args.host:
        changes["host"] = args.host
    if args.data_dir:
        changes["players_path"] = args.data_dir / "players.json"
        changes["teams_path"] = args.data_dir / "teams.json"
    if args.public_dir:
        changes["public_dir"] = args.public_dir
    return settings.with_overrides(**changes)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.config.dictConfig(LOGGING_CONFIG)
    logger.setLevel(args.log_level.upper())
    settings = resolve_settings(args)

    try:
        app = create_app(settings)
    except StoreLoadError as exc:
        print(f"Unable to start roster API: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    store = app.state.player_store
    logger.info(
        "Loaded %d players from %s and %d teams from %s",
        len(store),
        settings.players_path,
        len(app.state.team_catalog.teams),
        settings.teams_path,
    )
    logger.info("Cricket roster API listening on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=args.log_level)


if __name__ == "__main__":
    main()

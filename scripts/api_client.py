"""Lightweight REST client for the cricket roster API."""

from __future__ import annotations

import argparse
import base64
import json
import mimetypes
from pathlib import Path

import httpx


def build_image_payload(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    if mime and mime.startswith("image/"):
        return f"data:{mime};base64,{encoded}"
    return encoded


def load_player(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid player JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the cricket roster REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:9000")
    parser.add_argument("--teams", action="store_true", help="List teams and exit")
    parser.add_argument("--all", action="store_true", help="List every player and exit")
    parser.add_argument("--grouped", action="store_true", help="List players grouped by team and exit")
    parser.add_argument("--team", metavar="TEAM_NAME", help="List the roster of one team")
    parser.add_argument("--get-player", metavar="PLAYER_ID", help="Fetch a player by id")
    parser.add_argument("--add-player", type=Path, metavar="PLAYER_JSON", help="Submit a player from a JSON file")
    parser.add_argument("--image", type=Path, help="Image file to embed with --add-player")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.teams:
            resp = client.get("/teams")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.all:
            resp = client.get("/players/all")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.grouped:
            resp = client.get("/players/grouped")
            resp.raise_for_status()
            for group in resp.json():
                print(f"{group['teamName']}: {len(group['members'])} players")
        if args.team:
            resp = client.get("/players", params={"teamName": args.team})
            if resp.status_code == 404:
                raise SystemExit(resp.json()["message"])
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.get_player:
            resp = client.get(f"/players/{args.get_player}")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.get_player} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.add_player:
            player = load_player(args.add_player)
            if args.image:
                player["image"] = build_image_payload(args.image)
            resp = client.post("/players", json=player)
            if resp.status_code >= 400:
                raise SystemExit(f"{resp.status_code}: {resp.json().get('message')}")
            created = resp.json()
            print(f"Created {created['playerName']} with image {created['image']}")


if __name__ == "__main__":
    main()

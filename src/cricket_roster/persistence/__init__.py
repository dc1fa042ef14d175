"""Persistence layer for the player collection and the static team dataset."""

from __future__ import annotations

import json
import math
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError as ModelValidationError

from cricket_roster.errors import PersistenceError, StoreLoadError
from cricket_roster.models import Player


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Non-standard JSON number {token} is not allowed")


def _finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"JSON number {token} is out of range")
    return value


def loads_finite(text: str | bytes) -> Any:
    """Parse standard JSON, rejecting NaN, Infinity and overflowing numbers."""

    return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise StoreLoadError(f"Data file not found: {path}") from exc
    except OSError as exc:
        raise StoreLoadError(f"Unable to read {path}: {exc}") from exc
    try:
        return loads_finite(text)
    except ValueError as exc:
        raise StoreLoadError(f"Invalid JSON in {path}: {exc}") from exc


def atomic_write_bytes(path: Path, contents: bytes) -> None:
    """Replace ``path`` with ``contents`` so readers never see a partial file."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        delete=False, dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    tmp_path = Path(tmp.name)
    try:
        try:
            tmp.write(contents)
            tmp.flush()
            os.fsync(tmp.fileno())
        finally:
            tmp.close()
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


@dataclass(frozen=True)
class TeamCatalog:
    """Read-only team dataset, passed through to callers untouched."""

    teams: tuple[Any, ...]

    @classmethod
    def load(cls, path: Path) -> "TeamCatalog":
        data = _read_json(path)
        if isinstance(data, dict):
            data = data.get("teams")
        if not isinstance(data, list):
            raise StoreLoadError(f"Expected a list of teams in {path}")
        return cls(teams=tuple(data))

    def to_list(self) -> List[Any]:
        return list(self.teams)


class PlayerStore:
    """Ordered in-memory player collection backed by a JSON file.

    The store owns the collection: callers read snapshots and write through
    :meth:`append`. ``lock`` serializes check-append-persist sequences.
    """

    def __init__(self, path: Path | str, players: Iterable[Player] = ()):
        self.path = Path(path)
        self._players: List[Player] = list(players)
        self.lock = threading.RLock()

    @classmethod
    def load(cls, path: Path | str) -> "PlayerStore":
        path = Path(path)
        data = _read_json(path)
        if not isinstance(data, list):
            raise StoreLoadError(f"Expected a list of players in {path}")
        players: List[Player] = []
        for index, entry in enumerate(data):
            try:
                players.append(Player.model_validate(entry))
            except ModelValidationError as exc:
                raise StoreLoadError(f"Invalid player record at index {index} in {path}: {exc}") from exc
        return cls(path, players)

    def __len__(self) -> int:
        return len(self._players)

    def all(self) -> tuple[Player, ...]:
        return tuple(self._players)

    def find_by_id(self, player_id: str) -> Optional[Player]:
        for player in self._players:
            if player.matches_id(player_id):
                return player
        return None

    def find_by_team(self, team_name: str) -> List[Player]:
        return [player for player in self._players if player.matches_team(team_name)]

    def exists_conflicting(self, player_id: str, player_name: str) -> bool:
        return any(
            player.matches_id(player_id) or player.matches_name(player_name)
            for player in self._players
        )

    def append(self, player: Player) -> None:
        with self.lock:
            self._players.append(player)

    def persist(self) -> None:
        with self.lock:
            payload = [player.to_json() for player in self._players]
            try:
                contents = json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)
                atomic_write_bytes(self.path, contents.encode("utf-8"))
            except (OSError, ValueError) as exc:
                raise PersistenceError(f"Unable to write {self.path}: {exc}") from exc

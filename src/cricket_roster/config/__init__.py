"""Runtime settings resolved from the environment and command line.

Default data and public directories live next to the project checkout. When
the package is installed from a wheel there is no checkout, so the defaults
are taken relative to the working directory instead; set ``ROSTER_DATA_DIR``
and ``ROSTER_PUBLIC_DIR`` to point anywhere else.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger("uvicorn.error")

PROJECT_ROOT = Path(__file__).resolve().parents[3]

_DATA_DIR_ENV = "ROSTER_DATA_DIR"
_PLAYERS_PATH_ENV = "ROSTER_PLAYERS_PATH"
_TEAMS_PATH_ENV = "ROSTER_TEAMS_PATH"
_PUBLIC_DIR_ENV = "ROSTER_PUBLIC_DIR"
_HOST_ENV = "ROSTER_HOST"
_PORT_ENV = "PORT"
_MAX_BODY_ENV = "ROSTER_MAX_BODY_BYTES"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9000
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


def _default_root() -> Path:
    if (PROJECT_ROOT / "pyproject.toml").is_file():
        return PROJECT_ROOT
    return Path.cwd()


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if not raw:
        return default
    return Path(raw).expanduser()


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value for %s below %d: %s; using default %d", name, min_value, raw, default)
        return default
    return value


def _positive_port(raw: str | None) -> Optional[int]:
    if not raw or not raw.isdigit():
        return None
    value = int(raw)
    return value if value > 0 else None


def pick_port(argv: Sequence[str] = (), environ: Optional[dict] = None) -> int:
    """Return the first numeric argument, else ``$PORT``, else the default."""

    environ = os.environ if environ is None else environ
    for arg in argv:
        port = _positive_port(arg)
        if port is not None:
            return port
    port = _positive_port(environ.get(_PORT_ENV))
    if port is not None:
        return port
    return DEFAULT_PORT


@dataclass(frozen=True)
class Settings:
    players_path: Path
    teams_path: Path
    public_dir: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    @classmethod
    def for_data_dir(cls, data_dir: Path, public_dir: Path, **overrides) -> "Settings":
        return cls(
            players_path=data_dir / "players.json",
            teams_path=data_dir / "teams.json",
            public_dir=public_dir,
            **overrides,
        )

    def with_overrides(self, **changes) -> "Settings":
        return replace(self, **changes)


def load_settings(argv: Sequence[str] = ()) -> Settings:
    root = _default_root()
    data_dir = _env_path(_DATA_DIR_ENV, root / "data")
    return Settings(
        players_path=_env_path(_PLAYERS_PATH_ENV, data_dir / "players.json"),
        teams_path=_env_path(_TEAMS_PATH_ENV, data_dir / "teams.json"),
        public_dir=_env_path(_PUBLIC_DIR_ENV, root / "public"),
        host=os.getenv(_HOST_ENV) or DEFAULT_HOST,
        port=pick_port(argv),
        max_body_bytes=_env_int(_MAX_BODY_ENV, DEFAULT_MAX_BODY_BYTES, min_value=1),
    )


__all__ = ["DEFAULT_PORT", "PROJECT_ROOT", "Settings", "load_settings", "pick_port"]

"""Player image storage: payload decoding, file naming and asset writes."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from pathlib import Path

from cricket_roster.errors import DecodeError, ImageError
from cricket_roster.persistence import atomic_write_bytes

ASSET_URL_PREFIX = "/players"
DEFAULT_EXTENSION = ".png"

_DATA_URL_RE = re.compile(r"^data:(image/[a-zA-Z0-9+.-]+);base64,(.+)$", re.DOTALL)
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")

_MIME_EXTENSIONS = {
    "image/svg+xml": ".svg",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
}


def slugify(value: str) -> str:
    slug = _NON_SLUG_RE.sub("-", value.lower()).strip("-")
    return slug or "player"


def extension_for_mime(mime: str | None) -> str:
    return _MIME_EXTENSIONS.get(mime or "", DEFAULT_EXTENSION)


@dataclass(frozen=True)
class ImagePayload:
    mime: str | None
    data: str

    @property
    def extension(self) -> str:
        return extension_for_mime(self.mime)

    @classmethod
    def parse(cls, raw: str) -> "ImagePayload":
        match = _DATA_URL_RE.match(raw)
        if match:
            return cls(mime=match.group(1), data=match.group(2))
        return cls(mime=None, data=raw)

    def decode(self) -> bytes:
        data = _WHITESPACE_RE.sub("", self.data)
        data += "=" * (-len(data) % 4)
        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"Image payload is not valid base64: {exc}") from exc


class ImagePersister:
    """Writes decoded player images under ``<public_dir>/players``."""

    def __init__(self, public_dir: Path | str):
        self.asset_dir = Path(public_dir) / ASSET_URL_PREFIX.strip("/")

    def save(self, player_name: str, payload: str) -> str:
        """Store ``payload`` for ``player_name`` and return its server-relative URL.

        An existing image with the same slug is overwritten.
        """

        image = ImagePayload.parse(payload)
        contents = image.decode()
        filename = f"{slugify(player_name)}{image.extension}"
        try:
            self.asset_dir.mkdir(parents=True, exist_ok=True)
            atomic_write_bytes(self.asset_dir / filename, contents)
        except OSError as exc:
            raise ImageError(f"Unable to store image {filename}: {exc}") from exc
        return f"{ASSET_URL_PREFIX}/{filename}"

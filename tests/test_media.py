import base64

import pytest

from cricket_roster.errors import DecodeError, ImageError
from cricket_roster.media import ImagePayload, ImagePersister, extension_for_mime, slugify

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Virat Kohli", "virat-kohli"),
        ("!!!", "player"),
        ("MS Dhoni 07", "ms-dhoni-07"),
        ("  A.B. de Villiers  ", "a-b-de-villiers"),
        ("", "player"),
    ],
)
def test_slugify(name: str, expected: str):
    assert slugify(name) == expected


@pytest.mark.parametrize(
    ("mime", "expected"),
    [
        ("image/svg+xml", ".svg"),
        ("image/jpeg", ".jpg"),
        ("image/jpg", ".jpg"),
        ("image/png", ".png"),
        ("image/gif", ".png"),
        (None, ".png"),
    ],
)
def test_extension_for_mime(mime, expected: str):
    assert extension_for_mime(mime) == expected


def test_parse_data_url_extracts_mime_and_payload():
    payload = ImagePayload.parse(f"data:image/svg+xml;base64,{PNG_BASE64}")

    assert payload.mime == "image/svg+xml"
    assert payload.extension == ".svg"
    assert payload.decode() == PNG_BYTES


def test_parse_plain_base64_defaults_to_png():
    payload = ImagePayload.parse(PNG_BASE64)

    assert payload.mime is None
    assert payload.extension == ".png"
    assert payload.decode() == PNG_BYTES


def test_parse_non_image_data_url_is_treated_as_base64():
    payload = ImagePayload.parse(f"data:text/plain;base64,{PNG_BASE64}")

    assert payload.mime is None
    with pytest.raises(DecodeError):
        payload.decode()


def test_decode_tolerates_whitespace_and_missing_padding():
    raw = base64.b64encode(b"ab").decode("ascii")
    assert raw.endswith("=")
    wrapped = raw.rstrip("=")[:2] + "\n" + raw.rstrip("=")[2:]

    assert ImagePayload.parse(wrapped).decode() == b"ab"


def test_decode_rejects_invalid_base64():
    with pytest.raises(DecodeError):
        ImagePayload.parse("not*base64!").decode()


def test_save_writes_file_and_returns_relative_path(tmp_path):
    persister = ImagePersister(tmp_path / "public")

    path = persister.save("Virat Kohli", f"data:image/jpeg;base64,{PNG_BASE64}")

    assert path == "/players/virat-kohli.jpg"
    assert (tmp_path / "public" / "players" / "virat-kohli.jpg").read_bytes() == PNG_BYTES


def test_save_overwrites_images_with_the_same_slug(tmp_path):
    persister = ImagePersister(tmp_path)
    persister.save("Virat Kohli", base64.b64encode(b"first").decode("ascii"))

    path = persister.save("virat  kohli", base64.b64encode(b"second").decode("ascii"))

    assert path == "/players/virat-kohli.png"
    assert (tmp_path / "players" / "virat-kohli.png").read_bytes() == b"second"


def test_save_reports_write_failures_as_image_error(tmp_path):
    (tmp_path / "players").write_text("not a directory", encoding="utf-8")
    persister = ImagePersister(tmp_path)

    with pytest.raises(ImageError) as excinfo:
        persister.save("Virat Kohli", PNG_BASE64)

    assert not isinstance(excinfo.value, DecodeError)
    assert isinstance(excinfo.value.__cause__, OSError)

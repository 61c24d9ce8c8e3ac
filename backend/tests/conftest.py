"""Test fixtures: a throwaway media root and a FastAPI test client bound to it."""

import os
import zipfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image

from folderview.config import Settings
from folderview.main import create_app

AUDIO_BYTES = bytes(range(256)) * 4  # 1024 bytes
VIDEO_BYTES = bytes(1000)


def _image(path, size=(64, 48), color=(200, 30, 30), fmt=None):
    Image.new("RGB", size, color).save(path, format=fmt)


@pytest.fixture
def media_root(tmp_path):
    """Root folder layout used across the suite.

    media/
      photos/      a.jpg b.png c.gif d.jpg big.jpg readme.txt empty/
      music/       song.mp3
      videos/      clip.mp4
      notes.txt  archive.zip  PHOTO.JPG
    """
    root = tmp_path / "media"
    photos = root / "photos"
    photos.mkdir(parents=True)
    _image(photos / "a.jpg")
    _image(photos / "b.png")
    _image(photos / "c.gif")
    _image(photos / "d.jpg")
    _image(photos / "big.jpg", size=(800, 600))
    (photos / "readme.txt").write_text("not an image")
    (photos / "empty").mkdir()

    (root / "music").mkdir()
    (root / "music" / "song.mp3").write_bytes(AUDIO_BYTES)
    (root / "videos").mkdir()
    (root / "videos" / "clip.mp4").write_bytes(VIDEO_BYTES)

    (root / "notes.txt").write_text("hello")
    _image(root / "PHOTO.JPG", fmt="JPEG")
    with zipfile.ZipFile(root / "archive.zip", "w") as zf:
        zf.writestr("inside.txt", "zipped")
        zf.writestr("nested/deep.txt", "deeper")

    # Stable, distinct mtimes: older entries first in the layout above
    for i, name in enumerate(["photos", "music", "videos", "notes.txt", "PHOTO.JPG", "archive.zip"]):
        ts = 1_700_000_000 + i * 60
        os.utime(root / name, (ts, ts))

    # Siblings that must stay unreachable
    (tmp_path / "secret.txt").write_text("top secret")
    (tmp_path / "media2").mkdir()
    (tmp_path / "media2" / "x.txt").write_text("neighbour")
    return root


@pytest.fixture
def settings(media_root):
    return Settings(root_folder=str(media_root), _env_file=None)


@pytest_asyncio.fixture
async def client(settings):
    """Async test client for an app serving ``media_root``."""
    app = create_app(settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

"""Reduced-size image variants generated on demand with Pillow."""

from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Extension -> Pillow encoder. Anything else is served unmodified.
PILLOW_FORMATS: dict[str, str] = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "gif": "GIF",
    "webp": "WEBP",
}


def can_thumbnail(extension: str) -> bool:
    return extension.lower() in PILLOW_FORMATS


def make_thumbnail(path: str, extension: str, max_size: int) -> bytes | None:
    """Shrink the image at *path* to fit a ``max_size`` square.

    The source format is kept so the Content-Type stays truthful. Returns None
    when the file cannot be decoded; callers fall back to the original bytes.
    Blocking, run it in a worker thread.
    """
    fmt = PILLOW_FORMATS.get(extension.lower())
    if fmt is None:
        return None

    try:
        with Image.open(path) as img:
            img.thumbnail((max_size, max_size))
            if fmt == "JPEG" and img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            buffer = BytesIO()
            img.save(buffer, format=fmt)
            return buffer.getvalue()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.warning("Thumbnail generation failed for %s: %s", path, e)
        return None

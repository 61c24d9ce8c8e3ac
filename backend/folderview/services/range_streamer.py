"""HTTP Range handling for media playback.

Only a single ``bytes=`` range is honored. Multi-range requests and ranges
that do not fit the file fall back to a plain 200 with the whole body.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import AsyncIterator, NamedTuple

import aiofiles

from folderview.exceptions import NotFound, ReadFailed

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024  # 64 KB

_DIGITS_RE = re.compile(r"[0-9]+")


class ByteRange(NamedTuple):
    """Inclusive, 0-indexed byte span."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class RangeResponse:
    status: int
    byte_range: ByteRange | None  # None means an empty body
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_partial(self) -> bool:
        return self.status == 206


def _parse_sub_range(sub_range: str, size: int) -> ByteRange | None:
    start_str, sep, end_str = sub_range.strip().partition("-")
    if not sep:
        return None
    start_str, end_str = start_str.strip(), end_str.strip()
    if not (start_str or end_str):
        return None
    if any(s and not _DIGITS_RE.fullmatch(s) for s in (start_str, end_str)):
        return None

    if not start_str:
        # Suffix form: the last N bytes
        start, end = size - int(end_str), size - 1
    else:
        start = int(start_str)
        end = int(end_str) if end_str else size - 1

    if 0 <= start <= end < size:
        return ByteRange(start, end)
    return None


def parse_range_header(header: str | None, size: int) -> ByteRange | None:
    """Parse a ``Range`` header against *size*. None means "serve everything"."""
    if not header:
        return None
    unit, sep, range_set = header.strip().partition("=")
    if not sep or unit.strip().lower() != "bytes":
        return None

    parts = range_set.split(",")
    if len(parts) != 1:
        logger.debug("Multi-range request ignored: %r", header)
        return None
    return _parse_sub_range(parts[0], size)


def respond(size: int, range_header: str | None, content_type: str) -> RangeResponse:
    """Decide between a full (200) and a partial (206) response."""
    byte_range = parse_range_header(range_header, size)
    headers = {
        "Content-Type": content_type,
        "Accept-Ranges": "bytes",
    }

    if byte_range is None:
        headers["Content-Length"] = str(size)
        full = ByteRange(0, size - 1) if size > 0 else None
        return RangeResponse(status=200, byte_range=full, headers=headers)

    headers["Content-Length"] = str(byte_range.length)
    headers["Content-Range"] = f"bytes {byte_range.start}-{byte_range.end}/{size}"
    return RangeResponse(status=206, byte_range=byte_range, headers=headers)


async def open_range_stream(
    path: str,
    byte_range: ByteRange | None,
    chunk_size: int = CHUNK_SIZE,
) -> AsyncIterator[bytes]:
    """Open *path* now and return an iterator over *byte_range*.

    Open failures surface here as NotFound or ReadFailed, before any status
    line or headers have been sent.
    """
    try:
        f = await aiofiles.open(path, "rb")
    except FileNotFoundError as e:
        logger.warning("File vanished before streaming: %s", path)
        raise NotFound("File not found") from e
    except OSError as e:
        logger.error("Cannot open %s for streaming: %s", path, e)
        raise ReadFailed() from e
    return _read_range(f, path, byte_range, chunk_size)


async def _read_range(f, path: str, byte_range: ByteRange | None, chunk_size: int) -> AsyncIterator[bytes]:
    try:
        if byte_range is None:
            return
        await f.seek(byte_range.start)
        remaining = byte_range.length
        while remaining > 0:
            chunk = await f.read(min(chunk_size, remaining))
            if not chunk:
                # File shrank underneath us
                logger.warning("Short read on %s, %d bytes missing", path, remaining)
                break
            remaining -= len(chunk)
            yield chunk
    finally:
        await f.close()


"""File lookup for the serving endpoints: validation and allow-lists."""

from __future__ import annotations

import logging
import os
import stat as stat_mod
from dataclasses import dataclass
from typing import Collection

from folderview.exceptions import MissingParameter, NotAFile, NotFound, UnsupportedExtension
from folderview.utils.media_types import content_type_for, file_extension
from folderview.utils.paths import PathResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServedFile:
    absolute_path: str
    name: str
    extension: str
    size: int
    content_type: str


class FileServer:
    """Turns a requested relative path into a file that may be streamed."""

    def __init__(self, resolver: PathResolver):
        self._resolver = resolver

    def open_file(
        self,
        requested: str | None,
        allowed_extensions: Collection[str] | None = None,
    ) -> ServedFile:
        """Validate *requested* and describe the file behind it.

        ``allowed_extensions`` of None accepts any extension.
        """
        if not requested:
            raise MissingParameter("path")

        absolute = self._resolver.resolve(requested)
        try:
            st = os.stat(absolute)
        except (OSError, ValueError) as e:
            logger.debug("stat failed for %s: %s", absolute, e)
            raise NotFound("File not found") from e
        if not stat_mod.S_ISREG(st.st_mode):
            raise NotAFile()

        name = os.path.basename(absolute)
        ext = file_extension(name)
        if allowed_extensions is not None and ext not in allowed_extensions:
            logger.info("Rejected extension %r for %s", ext, requested)
            raise UnsupportedExtension()

        return ServedFile(
            absolute_path=absolute,
            name=name,
            extension=ext,
            size=st.st_size,
            content_type=content_type_for(ext),
        )

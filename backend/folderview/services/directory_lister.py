"""One-level directory reader producing classified file and folder entries."""

from __future__ import annotations

import logging
import os
import stat as stat_mod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from folderview.exceptions import NotADirectory, NotFound
from folderview.utils.media_types import AUDIO, IMAGE, VIDEO, ZIP, categories_of, is_category
from folderview.utils.paths import PathResolver

logger = logging.getLogger(__name__)

MAX_PREVIEW_IMAGES = 4


@dataclass(frozen=True)
class FileEntry:
    name: str
    relative_path: str
    absolute_path: str
    is_image: bool
    is_video: bool
    is_audio: bool
    is_zip: bool
    modified: float  # st_mtime

    @property
    def modified_date(self) -> datetime:
        return datetime.fromtimestamp(self.modified, tz=timezone.utc)


@dataclass(frozen=True)
class FolderEntry:
    name: str
    relative_path: str
    absolute_path: str
    preview_images: tuple[str, ...]
    modified: float

    @property
    def modified_date(self) -> datetime:
        return datetime.fromtimestamp(self.modified, tz=timezone.utc)


DirectoryEntry = Union[FileEntry, FolderEntry]


class DirectoryLister:
    """Reads the direct children of a directory under the resolver's root."""

    def __init__(self, resolver: PathResolver):
        self._resolver = resolver

    def list_entries(self, absolute_dir: str) -> list[DirectoryEntry]:
        """Return entries in enumeration order (unsorted).

        Raises NotFound if the path cannot be stat'ed and NotADirectory if it
        is something other than a directory.
        """
        try:
            st = os.stat(absolute_dir)
        except (OSError, ValueError) as e:
            logger.debug("stat failed for %s: %s", absolute_dir, e)
            raise NotFound() from e
        if not stat_mod.S_ISDIR(st.st_mode):
            raise NotADirectory()

        entries: list[DirectoryEntry] = []
        try:
            with os.scandir(absolute_dir) as it:
                for child in it:
                    entry = self._build_entry(child)
                    if entry is not None:
                        entries.append(entry)
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", absolute_dir, e)
            raise NotFound() from e
        return entries

    def _build_entry(self, child: os.DirEntry) -> DirectoryEntry | None:
        try:
            mtime = child.stat().st_mtime
            is_dir = child.is_dir()
        except OSError as e:
            # Dangling symlinks and entries removed mid-scan
            logger.warning("Skipping unreadable entry %s: %s", child.path, e)
            return None

        relative = self._resolver.to_relative(child.path)
        if is_dir:
            return FolderEntry(
                name=child.name,
                relative_path=relative,
                absolute_path=child.path,
                preview_images=tuple(
                    self._resolver.to_relative(p) for p in self.preview_images(child.path)
                ),
                modified=mtime,
            )

        categories = categories_of(child.name)
        return FileEntry(
            name=child.name,
            relative_path=relative,
            absolute_path=child.path,
            is_image=IMAGE in categories,
            is_video=VIDEO in categories,
            is_audio=AUDIO in categories,
            is_zip=ZIP in categories,
            modified=mtime,
        )

    @staticmethod
    def preview_images(folder: str, limit: int = MAX_PREVIEW_IMAGES) -> list[str]:
        """Absolute paths of up to *limit* image files directly inside *folder*."""
        found: list[str] = []
        try:
            with os.scandir(folder) as it:
                for child in it:
                    if len(found) >= limit:
                        break
                    if is_category(child.name, IMAGE) and child.is_file():
                        found.append(child.path)
        except OSError as e:
            logger.debug("No previews for %s: %s", folder, e)
            return []
        return found

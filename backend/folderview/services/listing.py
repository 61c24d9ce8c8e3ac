"""Directory listing pipeline: resolve, read, sort and paginate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from folderview.exceptions import NotFound
from folderview.services.directory_lister import DirectoryEntry, DirectoryLister, FileEntry, FolderEntry
from folderview.utils.media_types import file_extension
from folderview.utils.natural_sort import collation_key
from folderview.utils.paths import PathResolver

logger = logging.getLogger(__name__)


class SortBy(str, Enum):
    NAME = "name"
    TYPE = "type"
    DATE = "date"
    MODIFIED = "modified"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ListingPage:
    items: list[DirectoryEntry]
    total: int
    offset: int
    limit: int
    has_more: bool
    sort_by: SortBy
    sort_order: SortOrder
    can_go_up: bool
    current_path: str
    parent_path: str


def _name_key(entry: DirectoryEntry) -> tuple[int, ...]:
    # Whole-name collation; digit runs are not compared numerically here.
    return collation_key(entry.name)


def _file_type_key(entry: DirectoryEntry) -> tuple:
    return collation_key(file_extension(entry.name)), collation_key(entry.name)


def sort_entries(
    items: Sequence[DirectoryEntry],
    sort_by: SortBy | str = SortBy.NAME,
    sort_order: SortOrder | str = SortOrder.ASC,
) -> list[DirectoryEntry]:
    """Return *items* ordered by *sort_by*; stable for equal keys."""
    sort_by = SortBy(sort_by)
    reverse = SortOrder(sort_order) is SortOrder.DESC

    if sort_by is SortBy.NAME:
        return sorted(items, key=_name_key, reverse=reverse)

    if sort_by in (SortBy.DATE, SortBy.MODIFIED):
        return sorted(items, key=lambda e: e.modified, reverse=reverse)

    if sort_by is SortBy.TYPE:
        folders: list[DirectoryEntry] = []
        files: list[DirectoryEntry] = []
        for entry in items:
            if isinstance(entry, FolderEntry):
                folders.append(entry)
            elif isinstance(entry, FileEntry):
                files.append(entry)
            else:
                raise TypeError(f"Unknown directory entry: {entry!r}")
        # Folders lead in both directions; the order only flips each group.
        return (
            sorted(folders, key=_name_key, reverse=reverse)
            + sorted(files, key=_file_type_key, reverse=reverse)
        )

    raise ValueError(f"Unsupported sort key: {sort_by}")


def paginate(items: Sequence[DirectoryEntry], offset: int, limit: int) -> tuple[list[DirectoryEntry], bool]:
    """Slice ``[offset, offset + limit)``; returns the page and ``has_more``."""
    if offset < 0 or limit < 0:
        return [], False
    page = list(items[offset:offset + limit])
    return page, offset + limit < len(items)


class DirectoryService:
    """Builds listing pages for root-relative directory paths."""

    def __init__(self, resolver: PathResolver, lister: DirectoryLister | None = None):
        self._resolver = resolver
        self._lister = lister or DirectoryLister(resolver)

    def get_page(
        self,
        requested_path: str | None,
        offset: int = 0,
        limit: int = 50,
        sort_by: SortBy | str = SortBy.NAME,
        sort_order: SortOrder | str = SortOrder.ASC,
    ) -> ListingPage:
        """Full pipeline for one request.

        AccessDenied propagates unchanged; NotFound and NotADirectory are
        folded into a single "Directory not found".
        """
        current = self._resolver.resolve(requested_path)
        try:
            entries = self._lister.list_entries(current)
        except NotFound as e:
            logger.info("Directory listing failed for %r: %s", requested_path, e)
            raise NotFound("Directory not found") from e

        sort_by = SortBy(sort_by)
        sort_order = SortOrder(sort_order)
        ordered = sort_entries(entries, sort_by, sort_order)
        page, has_more = paginate(ordered, offset, limit)

        return ListingPage(
            items=page,
            total=len(ordered),
            offset=offset,
            limit=limit,
            has_more=has_more,
            sort_by=sort_by,
            sort_order=sort_order,
            can_go_up=self._resolver.can_go_up(current),
            current_path=self._resolver.to_relative(current),
            parent_path=self._resolver.parent_relative(current),
        )

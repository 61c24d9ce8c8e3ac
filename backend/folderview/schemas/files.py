"""File browser schemas: camelCase JSON for the web client."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from folderview.services.directory_lister import DirectoryEntry, FileEntry, FolderEntry
from folderview.services.listing import ListingPage, SortBy, SortOrder


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileItem(_CamelModel):
    """File row: never carries the absolute path."""
    type: Literal["file"] = "file"
    name: str
    path: str
    is_image: bool = False
    is_video: bool = False
    is_audio: bool = False
    is_zip: bool = False
    modified_date: datetime


class FolderItem(_CamelModel):
    type: Literal["folder"] = "folder"
    name: str
    path: str
    preview_images: list[str] = []
    modified_date: datetime


DirectoryItem = Annotated[Union[FileItem, FolderItem], Field(discriminator="type")]


class DirectoryListing(_CamelModel):
    """One page of a directory listing."""
    current_path: str
    parent_path: str
    can_go_up: bool
    items: list[DirectoryItem]
    has_more: bool
    total: int
    offset: int
    limit: int
    sort_by: SortBy
    sort_order: SortOrder

    @classmethod
    def from_page(cls, page: ListingPage) -> "DirectoryListing":
        return cls(
            current_path=page.current_path,
            parent_path=page.parent_path,
            can_go_up=page.can_go_up,
            items=[to_item(entry) for entry in page.items],
            has_more=page.has_more,
            total=page.total,
            offset=page.offset,
            limit=page.limit,
            sort_by=page.sort_by,
            sort_order=page.sort_order,
        )


def to_item(entry: DirectoryEntry) -> FileItem | FolderItem:
    if isinstance(entry, FileEntry):
        return FileItem(
            name=entry.name,
            path=entry.relative_path,
            is_image=entry.is_image,
            is_video=entry.is_video,
            is_audio=entry.is_audio,
            is_zip=entry.is_zip,
            modified_date=entry.modified_date,
        )
    if isinstance(entry, FolderEntry):
        return FolderItem(
            name=entry.name,
            path=entry.relative_path,
            preview_images=list(entry.preview_images),
            modified_date=entry.modified_date,
        )
    raise TypeError(f"Unknown directory entry: {entry!r}")


class ExtractResponse(_CamelModel):
    success: bool
    message: str
    extracted_to: str | None = None

"""File browser routes: directory pages, media streaming, downloads, ZIP extraction."""

from __future__ import annotations

import asyncio
import logging
from typing import Collection
from urllib.parse import quote

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import JSONResponse, Response, StreamingResponse

from folderview.api.deps import get_directory_service, get_file_server, get_path_resolver
from folderview.config import Settings, get_settings
from folderview.exceptions import ExtractionFailed
from folderview.schemas.files import DirectoryListing, ExtractResponse
from folderview.services.file_server import FileServer, ServedFile
from folderview.services.listing import DirectoryService, SortBy, SortOrder
from folderview.services.range_streamer import open_range_stream, respond
from folderview.services.thumbnails import can_thumbnail, make_thumbnail
from folderview.services.zip_extractor import extract_zip
from folderview.utils.media_types import AUDIO, EXTENSION_CATEGORIES, IMAGE, VIDEO, ZIP
from folderview.utils.paths import PathResolver

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/directory-pagination", response_model=DirectoryListing)
async def directory_pagination(
    path: str | None = None,
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
    sort_by: SortBy = Query(SortBy.NAME, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.ASC, alias="sortOrder"),
    service: DirectoryService = Depends(get_directory_service),
    settings: Settings = Depends(get_settings),
):
    """One sorted page of a directory below the root."""
    page = await asyncio.to_thread(
        service.get_page,
        path,
        offset,
        limit or settings.default_page_size,
        sort_by,
        sort_order,
    )
    return DirectoryListing.from_page(page)


def _content_disposition(kind: str, filename: str) -> str:
    encoded = quote(filename)
    return f"{kind}; filename=\"{encoded}\"; filename*=UTF-8''{encoded}"


async def _stream(
    served: ServedFile,
    range_header: str | None,
    settings: Settings,
    *,
    cache_control: str,
    disposition: str,
) -> StreamingResponse:
    plan = respond(served.size, range_header, served.content_type)
    headers = dict(plan.headers)
    headers["Cache-Control"] = cache_control
    headers["Content-Disposition"] = _content_disposition(disposition, served.name)

    if plan.is_partial:
        logger.debug("Range %s of %s", headers["Content-Range"], served.name)

    body = await open_range_stream(served.absolute_path, plan.byte_range, settings.stream_chunk_size)
    return StreamingResponse(
        body,
        status_code=plan.status,
        headers=headers,
        media_type=served.content_type,
    )


async def _serve_media(
    path: str | None,
    allowed: Collection[str],
    range_header: str | None,
    server: FileServer,
    settings: Settings,
) -> StreamingResponse:
    served = await asyncio.to_thread(server.open_file, path, allowed)
    return await _stream(
        served,
        range_header,
        settings,
        cache_control=f"public, max-age={settings.media_cache_seconds}",
        disposition="inline",
    )


@router.get("/image")
async def serve_image(
    path: str | None = None,
    thumbnail: bool = False,
    range_header: str | None = Header(None, alias="Range"),
    server: FileServer = Depends(get_file_server),
    settings: Settings = Depends(get_settings),
):
    """Image bytes, or a reduced variant when ``thumbnail=true``."""
    if not thumbnail:
        return await _serve_media(path, EXTENSION_CATEGORIES[IMAGE], range_header, server, settings)

    served = await asyncio.to_thread(server.open_file, path, EXTENSION_CATEGORIES[IMAGE])
    if can_thumbnail(served.extension):
        data = await asyncio.to_thread(
            make_thumbnail, served.absolute_path, served.extension, settings.thumbnail_size
        )
        if data is not None:
            return Response(
                content=data,
                media_type=served.content_type,
                headers={
                    "Cache-Control": f"public, max-age={settings.media_cache_seconds}",
                    "Content-Disposition": _content_disposition("inline", served.name),
                },
            )
    # SVG and undecodable images go out as-is
    return await _stream(
        served,
        range_header,
        settings,
        cache_control=f"public, max-age={settings.media_cache_seconds}",
        disposition="inline",
    )


@router.get("/audio")
async def serve_audio(
    path: str | None = None,
    range_header: str | None = Header(None, alias="Range"),
    server: FileServer = Depends(get_file_server),
    settings: Settings = Depends(get_settings),
):
    return await _serve_media(path, EXTENSION_CATEGORIES[AUDIO], range_header, server, settings)


@router.get("/video")
async def serve_video(
    path: str | None = None,
    range_header: str | None = Header(None, alias="Range"),
    server: FileServer = Depends(get_file_server),
    settings: Settings = Depends(get_settings),
):
    return await _serve_media(path, EXTENSION_CATEGORIES[VIDEO], range_header, server, settings)


@router.get("/file")
async def download_file(
    path: str | None = None,
    range_header: str | None = Header(None, alias="Range"),
    server: FileServer = Depends(get_file_server),
    settings: Settings = Depends(get_settings),
):
    """Any file under the root as an attachment download."""
    served = await asyncio.to_thread(server.open_file, path, None)
    return await _stream(
        served,
        range_header,
        settings,
        cache_control="no-cache",
        disposition="attachment",
    )


@router.post("/extract-zip", response_model=ExtractResponse, response_model_exclude_none=True)
async def extract_zip_archive(
    path: str | None = None,
    server: FileServer = Depends(get_file_server),
    resolver: PathResolver = Depends(get_path_resolver),
):
    """Extract a ZIP archive into a sibling folder named after it."""
    served = await asyncio.to_thread(server.open_file, path, EXTENSION_CATEGORIES[ZIP])
    try:
        target = await asyncio.to_thread(extract_zip, served.absolute_path)
    except ExtractionFailed as e:
        body = ExtractResponse(success=False, message=e.message)
        return JSONResponse(
            status_code=e.status_code,
            content=body.model_dump(by_alias=True, exclude_none=True),
        )

    return ExtractResponse(
        success=True,
        message="ZIP file extracted successfully",
        extracted_to=resolver.to_relative(target),
    )

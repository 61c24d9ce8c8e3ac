"""FastAPI dependency injection: request-scoped services bound to the root."""

from __future__ import annotations

from fastapi import Depends

from folderview.config import Settings, get_settings
from folderview.services.file_server import FileServer
from folderview.services.listing import DirectoryService
from folderview.utils.paths import PathResolver


def get_path_resolver(settings: Settings = Depends(get_settings)) -> PathResolver:
    return PathResolver(settings.root_folder)


def get_directory_service(
    resolver: PathResolver = Depends(get_path_resolver),
) -> DirectoryService:
    return DirectoryService(resolver)


def get_file_server(resolver: PathResolver = Depends(get_path_resolver)) -> FileServer:
    return FileServer(resolver)

"""System status: storage of the browsed volume."""

import logging

import psutil
from fastapi import APIRouter, Depends, HTTPException

from folderview.config import Settings, get_settings
from folderview.schemas.system import StorageStatus

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/storage", response_model=StorageStatus)
async def storage_status(settings: Settings = Depends(get_settings)):
    """Disk usage of the filesystem the root folder lives on."""
    try:
        usage = psutil.disk_usage(settings.root_folder)
    except OSError as e:
        logger.error("Disk usage unavailable for %s: %s", settings.root_folder, e)
        raise HTTPException(500, "Storage status unavailable")

    return StorageStatus(
        total_bytes=usage.total,
        used_bytes=usage.used,
        free_bytes=usage.free,
        percent=usage.percent,
    )

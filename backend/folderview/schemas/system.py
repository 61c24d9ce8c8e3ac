"""System status schemas."""

from pydantic import BaseModel


class StorageStatus(BaseModel):
    """Disk usage of the volume holding the root folder."""
    total_bytes: int
    used_bytes: int
    free_bytes: int
    percent: float


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    service: str = "folderview"

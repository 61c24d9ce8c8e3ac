"""API route registration."""

from fastapi import APIRouter

from folderview.api.routes import files, health, system

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(system.router, prefix="/system", tags=["system"])
api_router.include_router(files.router, tags=["files"])

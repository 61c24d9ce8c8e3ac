"""FolderView FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from folderview import __version__
from folderview.config import Settings, get_settings
from folderview.exceptions import FolderViewError

logger = logging.getLogger(__name__)


def _setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Noisy third-party loggers
    for noisy in ("PIL", "multipart"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


async def _folderview_error_handler(request: Request, exc: FolderViewError) -> JSONResponse:
    """Generic message + status only; details stay in the log."""
    logger.debug("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, type(exc).__name__)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory."""
    from folderview.api.routes import api_router

    settings = settings or get_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        _setup_logging(settings)
        if not Path(settings.root_folder).is_dir():
            logger.warning("Root folder %s is not a directory", settings.root_folder)
        logger.info(
            "FolderView v%s started: serving %s on %s:%s",
            __version__, settings.root_folder, settings.host, settings.port,
        )
        yield
        logger.info("FolderView shutting down")

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes receive this exact instance instead of re-reading the environment
    app.dependency_overrides[get_settings] = lambda: settings
    app.add_exception_handler(FolderViewError, _folderview_error_handler)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "folderview.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.uvicorn_workers,
        log_level=settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()

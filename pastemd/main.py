import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pastemd import __version__
from pastemd.api.router import build_api_router
from pastemd.cache import build_cache
from pastemd.core.config import Settings, settings as default_settings
from pastemd.core.db import build_engine, build_sessionmaker, init_models
from pastemd.core.errors import PasteError

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings.database_url, echo=settings.sql_echo)
        await init_models(engine)
        app.state.engine = engine
        app.state.sessionmaker = build_sessionmaker(engine)
        app.state.cache = build_cache(settings)
        logger.info("pastemd %s ready (views: %s)", __version__, settings.view_mode)
        try:
            yield
        finally:
            await app.state.cache.close()
            await engine.dispose()

    app = FastAPI(
        title="pastemd",
        description="Pluggable pastebin backend",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PasteError)
    async def paste_error_handler(request: Request, exc: PasteError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message, "payload": None},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": "Invalid request body", "payload": None},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail), "payload": exc.status_code},
        )

    app.include_router(build_api_router(settings))

    @app.get("/")
    async def root():
        return {
            "success": True,
            "message": "pastemd API",
            "payload": {"version": __version__, "docs": "/docs"},
        }

    return app

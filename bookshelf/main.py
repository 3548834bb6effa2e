"""
FastAPI application entry point.

Run with: bookshelf-api
or: uvicorn --factory bookshelf.main:create_app
"""
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.core.logging import configure_logging
from bookshelf.core.settings import ServerSettings, get_server_settings
from bookshelf.routers.books import INVALID_BODY_MESSAGES
from bookshelf.routers.books import router as books_router
from bookshelf.schemas.book import FailResponse
from bookshelf.services.book_store import BookStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.book_store = BookStore()
    logger.info("Server berjalan di %s", app.state.settings.base_url)
    yield


def _fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=FailResponse(message=message).model_dump())


def create_app(settings: Optional[ServerSettings] = None) -> FastAPI:
    if settings is None:
        settings = get_server_settings()
    app = FastAPI(title="Bookshelf API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _fail(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Invalid request to %s %s: %s", request.method, request.url.path, exc.errors())
        message = INVALID_BODY_MESSAGES.get(request.method, "Permintaan tidak valid")
        return _fail(status.HTTP_400_BAD_REQUEST, message)

    app.include_router(books_router)
    return app


def run() -> None:
    """Serve the API with uvicorn; any startup fault terminates the process."""
    configure_logging()
    try:
        settings = get_server_settings()
        configure_logging(settings.log_level)
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    except Exception:
        logger.exception("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    run()

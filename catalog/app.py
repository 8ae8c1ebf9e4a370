"""FastAPI application factory for the catalog service."""
from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from catalog.core.config import Settings, get_settings
from catalog.core.logging_config import setup_logging
from catalog.repositories import CollectionStore, StorageError, create_store
from catalog.repositories.feedback import FeedbackRepository
from catalog.repositories.ratings import RatingRepository
from catalog.repositories.resources import ResourceRepository
from catalog.routers import resources as resources_router

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("catalog.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status code and duration."""

    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        request_logger.info("%s %s", request.method, request.url.path)
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        request_logger.info(
            "%s %s - status %s - %.2fms", request.method, request.url.path, response.status_code, elapsed_ms
        )
        return response


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "An internal server error occurred."}, status_code=500)


async def _invalid_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"error": "Malformed request."}, status_code=400)


def create_app(settings: Optional[Settings] = None, store: Optional[CollectionStore] = None) -> FastAPI:
    """Factory compatible with uvicorn (``--factory``); tests inject a store."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    store = store or create_store(settings)
    ratings = RatingRepository(store)

    app = FastAPI(title="Resource Catalog API")
    app.state.settings = settings
    app.state.store = store
    app.state.ratings = ratings
    app.state.resources = ResourceRepository(store, ratings)
    app.state.feedback = FeedbackRepository(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(RequestValidationError, _invalid_request_handler)

    app.include_router(resources_router.router)
    logger.debug("App created with %s storage backend", settings.storage_backend)
    return app

"""FastAPI application factory.

Routers
-------
    /          — service banner and health check
    /preview   — SSRF-guarded link preview (rate limited per client)

Errors
------
Every :class:`~linkpreview.scraper.errors.PreviewError` becomes ``400
{"error": <message>}``; an over-budget client gets ``429``; anything
unexpected is logged with its traceback and answered with a generic ``500``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from linkpreview.api.ratelimit import (
    InMemoryRateLimiter,
    RateLimitExceeded,
    rate_limit_handler,
)
from linkpreview.api.routers import health as health_router
from linkpreview.api.routers import preview as preview_router
from linkpreview.config import Settings, settings as default_settings
from linkpreview.scraper.errors import PreviewError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


async def _preview_error_handler(request: Request, exc: PreviewError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.message})


async def _bad_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def _internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while serving %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error while processing preview"},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Link Preview API",
        description=(
            "Fetches a public web page under strict size, time and redirect "
            "bounds and returns normalized preview metadata (title, image, "
            "price, currency, site name)."
        ),
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.rate_limiter = InMemoryRateLimiter(
        limit=settings.rate_limit_requests,
        period_seconds=settings.rate_limit_window,
    )

    # The mobile client calls from arbitrary origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PreviewError, _preview_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(RequestValidationError, _bad_request_handler)
    app.add_exception_handler(Exception, _internal_error_handler)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(preview_router.router, prefix="/preview", tags=["preview"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn linkpreview.api.app:app --reload
app = create_app()

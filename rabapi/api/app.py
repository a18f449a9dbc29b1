"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single ``httpx.AsyncClient`` and builds the page
cache and the :class:`RegistryFetcher`, shared across requests via
``request.app.state.fetcher``.  On shutdown it closes the client.  The rate
limiter lives on ``app.state.rate_limiter`` from creation on.

Routers
-------
    /api     — registry lookup as JSON or ``.xlsx``
    /health  — liveness check

When ``settings.static_dir`` exists it is served at ``/`` as the frontend.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from rabapi.cache import PageCache
from rabapi.config import Settings, settings as default_settings
from rabapi.log import configure_logging
from rabapi.ratelimit import FixedWindowRateLimiter
from rabapi.scraper.fetcher import RegistryFetcher, build_client

from rabapi.api.routers import aeronave as aeronave_router
from rabapi.api.routers import health as health_router

logger = logging.getLogger("rabapi.access")

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


def client_address(request: Request) -> str:
    """Best guess at the caller's IP, honouring a reverse proxy's header."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Open the upstream client on startup and close it on shutdown."""
        client = build_client(settings)
        cache: PageCache[str] = PageCache(
            max_entries=settings.cache_max_entries, ttl=settings.cache_ttl
        )
        app.state.fetcher = RegistryFetcher(client, cache, url=settings.rab_url)
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="Consulta RAB",
        description=(
            "Proxy for the ANAC aircraft registry (RAB). Looks up a tail "
            "number and returns the scraped registry fields as JSON or as "
            "an Excel workbook."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_limiter = FixedWindowRateLimiter(
        max_requests=settings.rate_limit_max, window=settings.rate_limit_window
    )

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if not request.url.path.startswith("/api"):
            return await call_next(request)
        limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
        decision = limiter.hit(client_address(request))
        headers = limiter.headers(decision)
        if not decision.allowed:
            return JSONResponse(
                status_code=429,
                content={"error": "Muitas requisições, tente novamente mais tarde."},
                headers=headers,
            )
        response = await call_next(request)
        response.headers.update(headers)
        return response

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s %s %d %.1fms",
            client_address(request),
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    app.add_middleware(GZipMiddleware)
    # Browser frontends on any origin call the API directly.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    app.include_router(aeronave_router.router, prefix="/api", tags=["aeronave"])
    app.include_router(health_router.router, tags=["health"])

    if settings.static_dir.is_dir():
        app.mount(
            "/", StaticFiles(directory=settings.static_dir, html=True), name="static"
        )

    return app


# Module-level instance used by uvicorn:
#   uvicorn rabapi.api.app:app --reload
app = create_app()

"""FastAPI application factory."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from vixsrc_addon.infrastructure.config import AppConfig
from vixsrc_addon.interfaces.api.stremio.router import ADDON_VERSION
from vixsrc_addon.interfaces.api.stremio.router import router as stremio_router
from vixsrc_addon.interfaces.app_state import AppState
from vixsrc_addon.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


async def _log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """One ``http_request`` event per request, including failed ones."""
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        log.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round((time.perf_counter() - started) * 1000.0, 2),
        )


async def _healthz() -> dict[str, str]:
    return {"status": "ok"}


def create_app(config: AppConfig) -> FastAPI:
    """Build the addon app around an already loaded config.

    No resources are created here; lifespan() wires the HTTP client, the
    TMDB client and the use cases. Stremio routes live at the root because
    clients install the addon from ``<base>/manifest.json``.
    """
    app = FastAPI(
        title="VixSrc Stremio addon",
        description="Stremio addon serving VixSrc streams for TMDB catalogs",
        version=ADDON_VERSION,
        lifespan=lifespan,
    )
    app.state = AppState()
    app.state.config = config

    app.include_router(stremio_router)
    app.add_api_route("/healthz", _healthz, methods=["GET"], include_in_schema=False)
    app.middleware("http")(_log_requests)

    return app

"""Composition root: wires clients and use cases in the FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from vixsrc_addon.application.use_cases import (
    StremioCatalogUseCase,
    StremioMetaUseCase,
    StremioStreamUseCase,
)
from vixsrc_addon.infrastructure.tmdb.catalogs import CATALOGS, SEARCH_PATHS
from vixsrc_addon.infrastructure.tmdb.client import HttpxTmdbClient
from vixsrc_addon.infrastructure.tmdb.mappers import TmdbMetaMapper
from vixsrc_addon.infrastructure.vixsrc.urls import build_provider_url, build_proxy_url
from vixsrc_addon.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the addon's resources on startup and release them on shutdown.

    Startup order:
        1. Addon settings (fail fast before any resource is created)
        2. HTTP Client
        3. TMDB client (uses HTTP client)
        4. Use cases (use TMDB client + settings)
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Required settings; raises MissingSettingsError and aborts startup
    settings = config.addon_settings()
    state.settings = settings

    # 2) HTTP client (no retry transport: one attempt per lookup)
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 3) TMDB client
    state.tmdb_client = HttpxTmdbClient(
        api_key=settings.tmdb_api_key,
        http_client=state.http_client,
        language=settings.tmdb_language,
        base_url=settings.tmdb_base_url,
    )
    log.info("tmdb_client_initialized", language=settings.tmdb_language)

    # 4) Stremio use cases
    mapper = TmdbMetaMapper(settings.tmdb_image_base_url)
    state.stremio_catalog_uc = StremioCatalogUseCase(
        tmdb=state.tmdb_client,
        catalogs=CATALOGS,
        search_paths=SEARCH_PATHS,
        preview_fn=mapper.preview,
        page_size=config.catalog.page_size,
    )
    state.stremio_meta_uc = StremioMetaUseCase(tmdb=state.tmdb_client, mapper=mapper)
    state.stremio_stream_uc = StremioStreamUseCase(
        tmdb=state.tmdb_client,
        settings=settings,
        provider_url_fn=build_provider_url,
        proxy_url_fn=build_proxy_url,
    )

    log.info(
        "app_startup_complete",
        provider=settings.provider_base_url,
        proxy_enabled=settings.proxy_enabled,
    )

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")

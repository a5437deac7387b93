"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from vixsrc_addon.infrastructure.config import AddonSettings, AppConfig

if TYPE_CHECKING:
    from vixsrc_addon.application.use_cases import (
        StremioCatalogUseCase,
        StremioMetaUseCase,
        StremioStreamUseCase,
    )
    from vixsrc_addon.domain.ports.tmdb import TmdbClientPort


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig
    settings: AddonSettings

    # Infrastructure
    http_client: httpx.AsyncClient
    tmdb_client: TmdbClientPort

    # Application Services
    stremio_catalog_uc: StremioCatalogUseCase
    stremio_meta_uc: StremioMetaUseCase
    stremio_stream_uc: StremioStreamUseCase

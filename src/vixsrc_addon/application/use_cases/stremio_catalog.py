"""Stremio catalog use case: TMDB list endpoints and search."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import structlog

from vixsrc_addon.domain.entities.stremio import (
    CatalogDefinition,
    CatalogPage,
    StremioContentType,
    StremioMetaPreview,
)
from vixsrc_addon.domain.ports.tmdb import TmdbClientPort

log = structlog.get_logger(__name__)

_PreviewFn = Callable[[dict[str, Any], StremioContentType], StremioMetaPreview]


def page_for_skip(skip: int, page_size: int) -> int:
    """TMDB page (1-based) holding the item at offset ``skip``."""
    return max(skip, 0) // page_size + 1


class StremioCatalogUseCase:
    """Provides Stremio catalog pages backed by TMDB.

    Delegates HTTP to the injected TmdbClientPort. The use case owns
    catalog lookup, search dispatch, paging and error handling.
    """

    def __init__(
        self,
        *,
        tmdb: TmdbClientPort,
        catalogs: Sequence[CatalogDefinition],
        search_paths: Mapping[StremioContentType, str],
        preview_fn: _PreviewFn,
        page_size: int = 20,
    ) -> None:
        self._tmdb = tmdb
        self._catalogs = catalogs
        self._search_paths = search_paths
        self._to_preview = preview_fn
        self._page_size = page_size

    def _find(self, content_type: str, catalog_id: str) -> CatalogDefinition | None:
        for catalog in self._catalogs:
            if catalog.type == content_type and catalog.id == catalog_id:
                return catalog
        return None

    async def catalog(
        self,
        content_type: str,
        catalog_id: str,
        *,
        skip: int = 0,
        search: str | None = None,
    ) -> CatalogPage:
        """Fetch one catalog page.

        Args:
            content_type: ``"movie"`` or ``"series"``.
            catalog_id: Catalog id from the manifest.
            skip: Number of items Stremio already shows.
            search: Optional free-text query; replaces the catalog filters.

        Returns:
            The page (empty with ``has_more=False`` on unknown catalogs or
            TMDB errors).
        """
        catalog = self._find(content_type, catalog_id)
        if catalog is None:
            log.warning(
                "catalog_unknown", content_type=content_type, catalog_id=catalog_id
            )
            return CatalogPage()

        page = page_for_skip(skip, self._page_size)
        query = (search or "").strip()

        if query:
            if not catalog.searchable:
                return CatalogPage()
            path = self._search_paths[catalog.type]
            params: dict[str, Any] = {"query": query}
        else:
            path = catalog.path
            params = dict(catalog.params)

        log.info(
            "catalog_request",
            catalog_id=catalog_id,
            skip=skip,
            page=page,
            search=query or None,
        )

        try:
            result = await self._tmdb.fetch_page(path, params, page=page)
        except Exception:
            log.warning(
                "catalog_fetch_error",
                catalog_id=catalog_id,
                page=page,
                exc_info=True,
            )
            return CatalogPage()

        if result is None:
            return CatalogPage()

        metas = [
            self._to_preview(item, catalog.type)
            for item in result.results
            if item.get("id") is not None
        ]
        has_more = result.page < result.total_pages
        log.debug(
            "catalog_page",
            catalog_id=catalog_id,
            page=result.page,
            total_pages=result.total_pages,
            has_more=has_more,
        )
        return CatalogPage(metas=metas, has_more=has_more)

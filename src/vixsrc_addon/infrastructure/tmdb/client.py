"""TMDB API client: async httpx implementation."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from vixsrc_addon.domain.entities.stremio import StremioContentType, TmdbPage

log = structlog.get_logger(__name__)

_FIND_RESULT_KEYS: dict[StremioContentType, str] = {
    "movie": "movie_results",
    "series": "tv_results",
}


class HttpxTmdbClient:
    """Async TMDB client using httpx.

    Implements ``TmdbClientPort`` from domain.ports.tmdb. Every request
    carries the API key and the configured locale; failures are logged
    and mapped to ``None``. No caching, no retries.
    """

    def __init__(
        self,
        *,
        api_key: str,
        http_client: httpx.AsyncClient,
        language: str = "it-IT",
        base_url: str = "https://api.themoviedb.org/3",
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._language = language
        self._base_url = base_url

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _params(self, **extra: Any) -> dict[str, Any]:
        """Build query params with api_key and locale."""
        return {"api_key": self._api_key, "language": self._language, **extra}

    async def _get(self, path: str, **extra: Any) -> dict[str, Any] | None:
        """GET request with error handling. Returns parsed JSON or None."""
        url = f"{self._base_url}{path}"
        try:
            resp = await self._http.get(url, params=self._params(**extra))
            if resp.status_code == 401:
                log.error("tmdb_api_key_invalid", status=401)
                return None
            if resp.status_code == 404:
                log.debug("tmdb_resource_not_found", path=path)
                return None
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            log.warning(
                "tmdb_http_error",
                path=path,
                status=exc.response.status_code,
                body=exc.response.text[:200],
            )
            return None
        except httpx.HTTPError:
            log.warning("tmdb_network_error", path=path, exc_info=True)
            return None
        except ValueError:
            log.warning("tmdb_invalid_json", path=path)
            return None

        if not isinstance(data, dict):
            log.warning("tmdb_unexpected_payload", path=path)
            return None
        return data

    # ------------------------------------------------------------------
    # Public API (TmdbClientPort)
    # ------------------------------------------------------------------

    async def find_by_imdb_id(
        self, imdb_id: str, content_type: StremioContentType
    ) -> list[int] | None:
        """Translate an IMDb ID to TMDB IDs via ``/find``.

        Returns ``None`` if the request failed, ``[]`` if TMDB knows no
        title of that content type for the IMDb ID.
        """
        data = await self._get(f"/find/{imdb_id}", external_source="imdb_id")
        if data is None:
            return None

        results = data.get(_FIND_RESULT_KEYS[content_type]) or []
        return [item["id"] for item in results if isinstance(item.get("id"), int)]

    async def fetch_page(
        self, path: str, params: dict[str, Any], page: int = 1
    ) -> TmdbPage | None:
        """Fetch one page of a TMDB list endpoint."""
        data = await self._get(path, **params, page=page)
        if data is None:
            return None
        return TmdbPage(
            results=data.get("results") or [],
            page=data.get("page") or page,
            total_pages=data.get("total_pages") or 0,
        )

    async def get_movie(self, tmdb_id: str) -> dict[str, Any] | None:
        return await self._get(f"/movie/{tmdb_id}")

    async def get_tv(self, tmdb_id: str) -> dict[str, Any] | None:
        return await self._get(f"/tv/{tmdb_id}", append_to_response="external_ids")

    async def get_season(
        self, tmdb_id: str, season_number: int
    ) -> dict[str, Any] | None:
        return await self._get(f"/tv/{tmdb_id}/season/{season_number}")

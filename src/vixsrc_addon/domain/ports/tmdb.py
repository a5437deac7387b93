"""Port for TMDB API operations."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from vixsrc_addon.domain.entities.stremio import StremioContentType, TmdbPage


@runtime_checkable
class TmdbClientPort(Protocol):
    """Async interface for TMDB API lookups."""

    async def find_by_imdb_id(
        self, imdb_id: str, content_type: StremioContentType
    ) -> list[int] | None:
        """Translate an IMDb ID into TMDB IDs of the given content type.

        Returns the ordered matches (possibly empty), or None if the
        lookup itself failed.
        """
        ...

    async def fetch_page(
        self, path: str, params: dict[str, Any], page: int = 1
    ) -> TmdbPage | None:
        """Fetch one page of a TMDB list endpoint (discover/trending/search)."""
        ...

    async def get_movie(self, tmdb_id: str) -> dict[str, Any] | None:
        """Movie details."""
        ...

    async def get_tv(self, tmdb_id: str) -> dict[str, Any] | None:
        """TV show details including its season list."""
        ...

    async def get_season(
        self, tmdb_id: str, season_number: int
    ) -> dict[str, Any] | None:
        """Season details including its episodes."""
        ...

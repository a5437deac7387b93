"""Stremio meta use case: movie/series details and episode lists via TMDB."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

import structlog

from vixsrc_addon.domain.entities.media_id import is_numeral
from vixsrc_addon.domain.entities.stremio import (
    StremioContentType,
    StremioMeta,
    StremioVideo,
)
from vixsrc_addon.domain.ports.tmdb import TmdbClientPort

log = structlog.get_logger(__name__)


class _MetaMapper(Protocol):
    """Maps TMDB payloads to Stremio entities."""

    def meta(
        self,
        item: dict[str, Any],
        content_type: StremioContentType,
        videos: list[StremioVideo] | None = None,
    ) -> StremioMeta: ...

    def episode(self, series_id: Any, episode: dict[str, Any]) -> StremioVideo: ...


def _parse_tmdb_id(raw_id: str) -> str | None:
    """``tmdb:<n>`` -> ``<n>``; anything else -> None."""
    parts = raw_id.split(":")
    if len(parts) != 2 or parts[0] != "tmdb" or not is_numeral(parts[1]):
        return None
    return parts[1]


def _seasons_to_fetch(series: dict[str, Any]) -> list[int]:
    numbers: list[int] = []
    for season in series.get("seasons") or []:
        number = season.get("season_number")
        if number is None:
            continue
        # Season 0 holds specials; an empty one is noise in the episode list
        if number == 0 and not season.get("episode_count"):
            continue
        numbers.append(number)
    return numbers


class StremioMetaUseCase:
    """Builds Stremio meta objects for ``tmdb:`` ids."""

    def __init__(self, *, tmdb: TmdbClientPort, mapper: _MetaMapper) -> None:
        self._tmdb = tmdb
        self._mapper = mapper

    async def meta(self, content_type: str, raw_id: str) -> StremioMeta | None:
        """Return the meta for an id, or None if unsupported or unavailable."""
        tmdb_id = _parse_tmdb_id(raw_id)
        if tmdb_id is None or content_type not in ("movie", "series"):
            log.warning("meta_id_unsupported", content_type=content_type, id=raw_id)
            return None

        try:
            if content_type == "movie":
                return await self._movie(tmdb_id)
            return await self._series(tmdb_id)
        except Exception:
            log.error(
                "meta_build_error",
                content_type=content_type,
                id=raw_id,
                exc_info=True,
            )
            return None

    async def _movie(self, tmdb_id: str) -> StremioMeta | None:
        movie = await self._tmdb.get_movie(tmdb_id)
        if movie is None:
            return None
        return self._mapper.meta(movie, "movie")

    async def _series(self, tmdb_id: str) -> StremioMeta | None:
        series = await self._tmdb.get_tv(tmdb_id)
        if series is None:
            return None

        numbers = _seasons_to_fetch(series)
        seasons = await asyncio.gather(
            *(self._tmdb.get_season(tmdb_id, n) for n in numbers)
        )

        videos: list[StremioVideo] = []
        for number, season in zip(numbers, seasons):
            if season is None:
                log.warning("meta_season_unavailable", tmdb_id=tmdb_id, season=number)
                return None
            videos.extend(
                self._mapper.episode(series["id"], episode)
                for episode in season.get("episodes") or []
            )

        log.debug(
            "meta_series_built",
            tmdb_id=tmdb_id,
            seasons=len(numbers),
            episodes=len(videos),
        )
        return self._mapper.meta(series, "series", videos=videos)
